from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ..context import get_db_from_info
from ..types.member_type import MemberType
from ..types.profile import Profile
from ..types.user import User

if TYPE_CHECKING:
    from ..mutations.root import ChangeProfileInput, CreateProfileInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_profiles(info: strawberry.Info) -> list[Profile]:
    db = get_db_from_info(info)
    rows = await db.profile.find_many()
    return [Profile.from_model(row) for row in rows]


async def resolve_profile_by_id(info: strawberry.Info, id: str) -> Profile | None:
    db = get_db_from_info(info)
    row = await db.profile.find_unique(id)
    if row is None:
        logger.debug("Profile not found", profile_id=id)
        return None
    return Profile.from_model(row)


# Field resolvers
async def resolve_profile_user(profile: Profile, info: strawberry.Info) -> User | None:
    db = get_db_from_info(info)
    row = await db.user.find_unique(profile.user_id)
    return User.from_model(row) if row else None


async def resolve_profile_member_type(
    profile: Profile, info: strawberry.Info
) -> MemberType | None:
    db = get_db_from_info(info)
    row = await db.member_type.find_unique(profile.member_type_id)
    return MemberType.from_model(row) if row else None


# Mutation resolvers
async def create_profile(info: strawberry.Info, dto: CreateProfileInput) -> Profile:
    """
    Create a profile for an existing user.

    Unknown user or member type ids are rejected by the persistence layer.
    """
    db = get_db_from_info(info)
    row = await db.profile.create(
        {
            "is_male": dto.is_male,
            "year_of_birth": dto.year_of_birth,
            "user_id": dto.user_id,
            "member_type_id": dto.member_type_id,
        }
    )
    return Profile.from_model(row)


async def change_profile(info: strawberry.Info, id: str, dto: ChangeProfileInput) -> Profile:
    db = get_db_from_info(info)
    row = await db.profile.update(id, dto.to_update_data())
    return Profile.from_model(row)
