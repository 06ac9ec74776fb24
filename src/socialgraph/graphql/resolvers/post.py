from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ..context import get_db_from_info
from ..types.post import Post
from ..types.user import User

if TYPE_CHECKING:
    from ..mutations.root import ChangePostInput, CreatePostInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_posts(info: strawberry.Info) -> list[Post]:
    db = get_db_from_info(info)
    rows = await db.post.find_many()
    return [Post.from_model(row) for row in rows]


async def resolve_post_by_id(info: strawberry.Info, id: str) -> Post | None:
    db = get_db_from_info(info)
    row = await db.post.find_unique(id)
    if row is None:
        logger.debug("Post not found", post_id=id)
        return None
    return Post.from_model(row)


# Field resolvers
async def resolve_post_author(post: Post, info: strawberry.Info) -> User | None:
    db = get_db_from_info(info)
    row = await db.user.find_unique(post.author_id)
    return User.from_model(row) if row else None


# Mutation resolvers
async def create_post(info: strawberry.Info, dto: CreatePostInput) -> Post:
    db = get_db_from_info(info)
    row = await db.post.create(
        {"title": dto.title, "content": dto.content, "author_id": dto.author_id}
    )
    return Post.from_model(row)


async def change_post(info: strawberry.Info, id: str, dto: ChangePostInput) -> Post:
    """Update only the post fields present in ``dto``; the author never changes."""
    db = get_db_from_info(info)
    row = await db.post.update(id, dto.to_update_data())
    return Post.from_model(row)
