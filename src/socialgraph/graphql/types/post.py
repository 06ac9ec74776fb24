"""
Post GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

from ..scalars import UUID

if TYPE_CHECKING:
    from ...dbmodels import Posts
    from .user import User


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: UUID
    title: str
    content: str
    author_id: UUID

    @strawberry.field
    async def author(
        self, info: strawberry.Info
    ) -> Annotated["User", strawberry.lazy(".user")] | None:  # noqa: E501
        """Get the author of this post."""
        from ..resolvers.post import resolve_post_author

        return await resolve_post_author(self, info)

    @classmethod
    def from_model(cls, row: "Posts") -> "Post":
        return cls(
            id=UUID(row.id),
            title=row.title,
            content=row.content,
            author_id=UUID(row.author_id),
        )
