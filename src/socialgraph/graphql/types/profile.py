"""
Profile GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

from ..scalars import UUID, MemberTypeId

if TYPE_CHECKING:
    from ...dbmodels import Profiles
    from .member_type import MemberType
    from .user import User


@strawberry.type
class Profile:
    """Profile type for GraphQL API."""

    id: UUID
    is_male: bool
    year_of_birth: int
    user_id: UUID
    member_type_id: MemberTypeId

    @strawberry.field
    async def user(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")] | None:  # noqa: E501
        """Get the user owning this profile."""
        from ..resolvers.profile import resolve_profile_user

        return await resolve_profile_user(self, info)

    @strawberry.field
    async def member_type(
        self, info: strawberry.Info
    ) -> Annotated["MemberType", strawberry.lazy(".member_type")] | None:  # noqa: E501
        """Get the member type of this profile."""
        from ..resolvers.profile import resolve_profile_member_type

        return await resolve_profile_member_type(self, info)

    @classmethod
    def from_model(cls, row: "Profiles") -> "Profile":
        return cls(
            id=UUID(row.id),
            is_male=row.is_male,
            year_of_birth=row.year_of_birth,
            user_id=UUID(row.user_id),
            member_type_id=MemberTypeId(row.member_type_id),
        )
