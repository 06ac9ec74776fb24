"""Seed the closed set of member types

Member types are not creatable through the API, so every deployment gets
them from this migration.

Revision ID: 20231101_000100_seed_member_types
Revises: 20231101_000000_initial_schema
Create Date: 2023-11-01 00:01:00

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20231101_000100_seed_member_types"
down_revision: str | Sequence[str] | None = "20231101_000000_initial_schema"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

MEMBER_TYPES = [
    {"id": "basic", "discount": 2.3, "posts_limit_per_month": 20},
    {"id": "business", "discount": 7.7, "posts_limit_per_month": 100},
]


def upgrade() -> None:
    """Insert member types that are not present yet."""
    connection = op.get_bind()
    existing = {
        row[0] for row in connection.execute(sa.text("SELECT id FROM member_types")).fetchall()
    }

    member_types = sa.table(
        "member_types",
        sa.column("id", sa.String),
        sa.column("discount", sa.Float),
        sa.column("posts_limit_per_month", sa.Integer),
    )
    missing = [row for row in MEMBER_TYPES if row["id"] not in existing]
    if missing:
        op.bulk_insert(member_types, missing)


def downgrade() -> None:
    op.execute(
        sa.text("DELETE FROM member_types WHERE id IN ('basic', 'business')")
    )
