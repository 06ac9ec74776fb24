"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

from ..scalars import UUID

if TYPE_CHECKING:
    from ...dbmodels import Users
    from .post import Post
    from .profile import Profile


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: UUID
    name: str
    balance: float

    @strawberry.field
    async def profile(
        self, info: strawberry.Info
    ) -> Annotated["Profile", strawberry.lazy(".profile")] | None:  # noqa: E501
        """Get the profile of this user, if one was created."""
        from ..resolvers.user import resolve_user_profile

        return await resolve_user_profile(self, info)

    @strawberry.field
    async def posts(
        self, info: strawberry.Info
    ) -> list[Annotated["Post", strawberry.lazy(".post")]]:  # noqa: E501
        """Get posts written by this user."""
        from ..resolvers.user import resolve_user_posts

        return await resolve_user_posts(self, info)

    @strawberry.field
    async def user_subscribed_to(self, info: strawberry.Info) -> list["User"]:
        """Get the users this user subscribes to."""
        from ..resolvers.user import resolve_user_subscribed_to

        return await resolve_user_subscribed_to(self, info)

    @strawberry.field
    async def subscribed_to_user(self, info: strawberry.Info) -> list["User"]:
        """Get the users subscribing to this user."""
        from ..resolvers.user import resolve_subscribed_to_user

        return await resolve_subscribed_to_user(self, info)

    @classmethod
    def from_model(cls, row: "Users") -> "User":
        return cls(id=UUID(row.id), name=row.name, balance=row.balance)
