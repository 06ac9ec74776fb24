"""
Tests that the Alembic migrations build the same schema as the models
"""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect, text

from alembic import command
from alembic.config import Config

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


@pytest.fixture
def alembic_config(tmp_path):
    db_path = tmp_path / "migrations.db"
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")
    return config, f"sqlite:///{db_path}"


@pytest.mark.integration
class TestMigrations:
    def test_upgrade_creates_tables_and_member_types(self, alembic_config):
        config, url = alembic_config

        command.upgrade(config, "head")

        engine = create_engine(url)
        try:
            tables = set(inspect(engine).get_table_names())
            with engine.connect() as conn:
                member_types = conn.execute(
                    text("SELECT id, discount, posts_limit_per_month FROM member_types ORDER BY id")
                ).fetchall()
        finally:
            engine.dispose()

        assert {
            "member_types",
            "users",
            "profiles",
            "posts",
            "subscribers_on_authors",
        } <= tables
        assert [tuple(row) for row in member_types] == [
            ("basic", 2.3, 20),
            ("business", 7.7, 100),
        ]

    def test_downgrade_to_base_removes_tables(self, alembic_config):
        config, url = alembic_config

        command.upgrade(config, "head")
        command.downgrade(config, "base")

        engine = create_engine(url)
        try:
            tables = set(inspect(engine).get_table_names())
        finally:
            engine.dispose()

        assert tables <= {"alembic_version"}
