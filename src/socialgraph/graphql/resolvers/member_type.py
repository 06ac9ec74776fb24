import strawberry

from ...logging import get_logger
from ..context import get_db_from_info
from ..types.member_type import MemberType
from ..types.profile import Profile

logger = get_logger(__name__)


async def resolve_member_types(info: strawberry.Info) -> list[MemberType]:
    db = get_db_from_info(info)
    rows = await db.member_type.find_many()
    return [MemberType.from_model(row) for row in rows]


async def resolve_member_type_by_id(info: strawberry.Info, id: str) -> MemberType | None:
    """Resolve a member type by id; unknown ids resolve to None."""
    db = get_db_from_info(info)
    row = await db.member_type.find_unique(id)
    if row is None:
        logger.debug("Member type not found", member_type_id=id)
        return None
    return MemberType.from_model(row)


async def resolve_member_type_profiles(
    member_type: MemberType, info: strawberry.Info
) -> list[Profile]:
    db = get_db_from_info(info)
    rows = await db.profile.find_many(member_type_id=member_type.id)
    return [Profile.from_model(row) for row in rows]
