from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ..context import get_db_from_info
from ..types.post import Post
from ..types.profile import Profile
from ..types.user import User

if TYPE_CHECKING:
    from ..mutations.root import ChangeUserInput, CreateUserInput

logger = get_logger(__name__)


# Query resolvers
async def resolve_users(info: strawberry.Info) -> list[User]:
    db = get_db_from_info(info)
    rows = await db.user.find_many()
    return [User.from_model(row) for row in rows]


async def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    db = get_db_from_info(info)
    row = await db.user.find_unique(id)
    if row is None:
        logger.debug("User not found", user_id=id)
        return None
    return User.from_model(row)


# Field resolvers
async def resolve_user_profile(user: User, info: strawberry.Info) -> Profile | None:
    db = get_db_from_info(info)
    row = await db.profile.find_first(user_id=user.id)
    return Profile.from_model(row) if row else None


async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    db = get_db_from_info(info)
    rows = await db.post.find_many(author_id=user.id)
    return [Post.from_model(row) for row in rows]


async def resolve_user_subscribed_to(user: User, info: strawberry.Info) -> list[User]:
    """Users that ``user`` subscribes to: edges where ``user`` is the subscriber."""
    db = get_db_from_info(info)
    rows = await db.user.find_many(subscribed_by=user.id)
    return [User.from_model(row) for row in rows]


async def resolve_subscribed_to_user(user: User, info: strawberry.Info) -> list[User]:
    """Users subscribing to ``user``: edges where ``user`` is the author."""
    db = get_db_from_info(info)
    rows = await db.user.find_many(subscribers_of=user.id)
    return [User.from_model(row) for row in rows]


# Mutation resolvers
async def create_user(info: strawberry.Info, dto: CreateUserInput) -> User:
    db = get_db_from_info(info)
    row = await db.user.create({"name": dto.name, "balance": dto.balance})
    return User.from_model(row)


async def change_user(info: strawberry.Info, id: str, dto: ChangeUserInput) -> User:
    db = get_db_from_info(info)
    row = await db.user.update(id, dto.to_update_data())
    return User.from_model(row)


async def subscribe_to(info: strawberry.Info, user_id: str, author_id: str) -> User:
    """
    Subscribe ``user_id`` to ``author_id``.

    Self-subscriptions and repeated subscriptions are not filtered here; the
    join table's constraints decide.
    """
    db = get_db_from_info(info)
    row = await db.user.subscribe(user_id, author_id)
    return User.from_model(row)
