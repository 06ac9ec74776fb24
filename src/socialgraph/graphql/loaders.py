"""
Optional batched loaders.

The core relation resolvers deliberately issue one persistence call per field
invocation. These loaders are a separate collaborator for callers that want
sibling lookups within one request collapsed into a single query; they are
request-scoped and must not be shared across requests.
"""

from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from strawberry.dataloader import DataLoader

from ..dbmodels import MemberTypes, Posts, Profiles, Users


class Loaders:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self.user_loader = DataLoader(load_fn=self.load_users)
        self.member_type_loader = DataLoader(load_fn=self.load_member_types)
        self.profile_by_user_loader = DataLoader(load_fn=self.load_profiles_by_user)
        self.posts_by_author_loader = DataLoader(load_fn=self.load_posts_by_author)

    async def load_users(self, keys: list[str]) -> list[Users | None]:
        """Batch load users by ID."""
        async with self._session_factory() as session:
            result = await session.execute(select(Users).where(Users.id.in_(keys)))
            users_map = {user.id: user for user in result.scalars().all()}
            return [users_map.get(key) for key in keys]

    async def load_member_types(self, keys: list[str]) -> list[MemberTypes | None]:
        """Batch load member types by ID."""
        async with self._session_factory() as session:
            result = await session.execute(select(MemberTypes).where(MemberTypes.id.in_(keys)))
            member_types_map = {row.id: row for row in result.scalars().all()}
            return [member_types_map.get(key) for key in keys]

    async def load_profiles_by_user(self, keys: list[str]) -> list[Profiles | None]:
        """Batch load profiles by owning user ID."""
        async with self._session_factory() as session:
            result = await session.execute(select(Profiles).where(Profiles.user_id.in_(keys)))
            profiles_map = {row.user_id: row for row in result.scalars().all()}
            return [profiles_map.get(key) for key in keys]

    async def load_posts_by_author(self, keys: list[str]) -> list[list[Posts]]:
        """Batch load posts by author ID, each list in creation order."""
        async with self._session_factory() as session:
            stmt = (
                select(Posts)
                .where(Posts.author_id.in_(keys))
                .order_by(Posts.created_at, Posts.id)
            )
            result = await session.execute(stmt)
            posts_by_author: dict[str, list[Posts]] = defaultdict(list)
            for post in result.scalars().all():
                posts_by_author[post.author_id].append(post)
            return [posts_by_author.get(key, []) for key in keys]
