"""
Repository-style persistence client used by the GraphQL resolvers.

Every repository call opens its own session, issues its statements and
commits, so each call is one self-contained round-trip. Nothing is cached
between calls.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..dbmodels import Base, MemberTypes, Posts, Profiles, SubscribersOnAuthors, Users
from ..logging import get_logger
from .connection import get_session_factory

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class PersistenceError(RuntimeError):
    """Base class for failures reported by the persistence layer."""


class RecordNotFoundError(PersistenceError):
    """Raised when a write addresses a record that does not exist."""


class ConstraintViolationError(PersistenceError):
    """Raised when a write breaks a foreign key, unique or primary key constraint."""


class Repository(Generic[ModelT]):
    """Generic find/create/update access to one table."""

    model: type[ModelT]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @property
    def name(self) -> str:
        return self.model.__name__

    def _order_by(self) -> tuple[Any, ...]:
        # Creation order, id as tie-breaker
        return (self.model.created_at, self.model.id)  # type: ignore[attr-defined]

    def _select(self, filters: Mapping[str, Any]) -> Select[tuple[ModelT]]:
        stmt = select(self.model)
        for key, value in filters.items():
            stmt = stmt.where(self._column(key) == value)
        return stmt.order_by(*self._order_by())

    def _column(self, key: str) -> Any:
        if key not in self.model.__table__.columns:
            raise ValueError(f"{self.name} has no column '{key}'")
        return getattr(self.model, key)

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.warning("Constraint violation", model=self.name, error=str(e.orig))
                raise ConstraintViolationError(
                    f"{self.name} write violates a database constraint: {e.orig}"
                ) from e
            except SQLAlchemyError as e:
                await session.rollback()
                # Statement text and driver details stay in the server log
                logger.error("Database error", model=self.name, error=str(e))
                raise PersistenceError(f"{self.name} could not be read or written") from e
            except Exception:
                await session.rollback()
                raise

    async def find_many(self, **filters: Any) -> list[ModelT]:
        """Return all rows matching the equality filters, in creation order."""
        async with self._session() as session:
            result = await session.execute(self._select(filters))
            return list(result.scalars().all())

    async def find_first(self, **filters: Any) -> ModelT | None:
        async with self._session() as session:
            result = await session.execute(self._select(filters).limit(1))
            return result.scalar_one_or_none()

    async def find_unique(self, id: str) -> ModelT | None:
        async with self._session() as session:
            return await session.get(self.model, id)

    async def create(self, data: Mapping[str, Any]) -> ModelT:
        for key in data:
            self._column(key)
        async with self._session() as session:
            row = self.model(**data)
            session.add(row)
            await session.flush()
        logger.info("Record created", model=self.name, id=row.id)  # type: ignore[attr-defined]
        return row

    async def update(self, id: str, data: Mapping[str, Any]) -> ModelT:
        """Apply ``data`` to the row with the given id; keys not in ``data`` are untouched."""
        for key in data:
            self._column(key)
        async with self._session() as session:
            row = await session.get(self.model, id)
            if row is None:
                raise RecordNotFoundError(f"{self.name} '{id}' does not exist")
            for key, value in data.items():
                setattr(row, key, value)
            await session.flush()
        logger.info("Record updated", model=self.name, id=id, updated_fields=list(data))
        return row


class MemberTypeRepository(Repository[MemberTypes]):
    model = MemberTypes

    def _order_by(self) -> tuple[Any, ...]:
        return (MemberTypes.id,)


class UserRepository(Repository[Users]):
    model = Users

    async def find_many(
        self,
        *,
        subscribed_by: str | None = None,
        subscribers_of: str | None = None,
        **filters: Any,
    ) -> list[Users]:
        """Return users, optionally narrowed through the subscription relation.

        Args:
            subscribed_by: only users that this user id subscribes to (its authors)
            subscribers_of: only users subscribing to this user id (its subscribers)
        """
        stmt = self._select(filters)
        if subscribed_by is not None:
            stmt = stmt.where(
                Users.id.in_(
                    select(SubscribersOnAuthors.author_id).where(
                        SubscribersOnAuthors.subscriber_id == subscribed_by
                    )
                )
            )
        if subscribers_of is not None:
            stmt = stmt.where(
                Users.id.in_(
                    select(SubscribersOnAuthors.subscriber_id).where(
                        SubscribersOnAuthors.author_id == subscribers_of
                    )
                )
            )
        async with self._session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def subscribe(self, user_id: str, author_id: str) -> Users:
        """Update the subscriber by creating one subscription edge to ``author_id``.

        Duplicate edges and self-subscriptions are not checked here; the
        primary key and foreign keys of the join table decide.
        """
        async with self._session() as session:
            user = await session.get(Users, user_id)
            if user is None:
                raise RecordNotFoundError(f"Users '{user_id}' does not exist")
            session.add(SubscribersOnAuthors(subscriber_id=user_id, author_id=author_id))
            await session.flush()
        logger.info("Subscription created", subscriber_id=user_id, author_id=author_id)
        return user


class ProfileRepository(Repository[Profiles]):
    model = Profiles


class PostRepository(Repository[Posts]):
    model = Posts


class DataClient:
    """One repository per entity, sharing a session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.member_type = MemberTypeRepository(session_factory)
        self.user = UserRepository(session_factory)
        self.profile = ProfileRepository(session_factory)
        self.post = PostRepository(session_factory)


def get_data_client() -> DataClient:
    """Build a client on the shared session factory."""
    return DataClient(get_session_factory())
