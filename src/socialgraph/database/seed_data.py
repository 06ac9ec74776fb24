"""
Reusable seed data functions for database initialization.

Member types form a closed set known when the schema is defined; they are
inserted here (and by the initial migration) rather than through the API.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import MemberTypes
from ..logging import get_logger

logger = get_logger(__name__)

BASIC = "basic"
BUSINESS = "business"

MEMBER_TYPE_SEED: dict[str, dict[str, float | int]] = {
    BASIC: {"discount": 2.3, "posts_limit_per_month": 20},
    BUSINESS: {"discount": 7.7, "posts_limit_per_month": 100},
}


async def ensure_member_types(db: AsyncSession) -> list[str]:
    """
    Ensure every member type in the closed set exists.

    Existing rows are left as they are.

    Args:
        db: Database session

    Returns:
        Ids of the member types that were created
    """
    result = await db.execute(select(MemberTypes.id))
    existing = set(result.scalars().all())

    created = []
    for member_type_id, values in MEMBER_TYPE_SEED.items():
        if member_type_id in existing:
            logger.debug("Member type already exists", member_type_id=member_type_id)
            continue
        db.add(MemberTypes(id=member_type_id, **values))
        created.append(member_type_id)

    if created:
        await db.commit()
        logger.info("Seeded member types", member_type_ids=created)

    return created
