"""
MemberType GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

from ..scalars import MemberTypeId

if TYPE_CHECKING:
    from ...dbmodels import MemberTypes
    from .profile import Profile


@strawberry.type
class MemberType:
    """Member type (subscription tier) for GraphQL API."""

    id: MemberTypeId
    discount: float
    posts_limit_per_month: int

    @strawberry.field
    async def profiles(
        self, info: strawberry.Info
    ) -> list[Annotated["Profile", strawberry.lazy(".profile")]]:  # noqa: E501
        """Get profiles on this member type."""
        from ..resolvers.member_type import resolve_member_type_profiles

        return await resolve_member_type_profiles(self, info)

    @classmethod
    def from_model(cls, row: "MemberTypes") -> "MemberType":
        return cls(
            id=MemberTypeId(row.id),
            discount=row.discount,
            posts_limit_per_month=row.posts_limit_per_month,
        )
