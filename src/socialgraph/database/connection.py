"""
Database connection management
"""

import os
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)

# Global shared connection pool
_async_engine: AsyncEngine | None = None
_async_session_local: async_sessionmaker[AsyncSession] | None = None
_initialized = False
_init_lock = threading.Lock()  # Protect initialization from race conditions


def get_database_url() -> str:
    """Get database URL, checking environment variables first for test compatibility."""
    return os.getenv("SOCIALGRAPH_DATABASE_URL") or settings.database_url


def to_async_url(database_url: str) -> str:
    """Map a plain database URL onto the async driver used for it."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    _ = connection_record
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for_url(database_url: str, echo: bool | None = None) -> AsyncEngine:
    """Create an async engine for the given URL.

    SQLite connections get foreign key enforcement switched on, and in-memory
    SQLite databases share a single connection so every session sees the same data.
    """
    async_url = to_async_url(database_url)
    echo = settings.sql_echo if echo is None else echo

    if async_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"echo": echo}
        if ":memory:" in async_url or async_url.rstrip("/").endswith("aiosqlite:"):
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(async_url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        async_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=echo,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory whose objects stay readable after commit."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


def reset_database() -> None:
    """Reset database connections (for tests)."""
    global _async_engine, _async_session_local, _initialized
    _async_engine = None
    _async_session_local = None
    _initialized = False


def init_database(database_url: str | None = None, force_reinit: bool = False) -> None:
    """Initialize the shared database connection pool.

    Thread-safe initialization using a lock to prevent race conditions
    when multiple threads attempt to initialize simultaneously.
    """
    global _async_engine, _async_session_local, _initialized

    if _initialized and not force_reinit and database_url is None:
        return

    with _init_lock:
        if _initialized and not force_reinit and database_url is None:
            return

        db_url = database_url or get_database_url()

        _async_engine = create_engine_for_url(db_url)
        _async_session_local = create_session_factory(_async_engine)

        _initialized = True
        logger.info("Database initialized", database_url=_redact_url(db_url))


def _redact_url(database_url: str) -> str:
    """Hide the password portion of a database URL."""
    scheme, sep, rest = database_url.partition("://")
    if "@" not in rest:
        return database_url
    credentials, _, host = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}{sep}{user}:***@{host}"


def get_async_engine() -> AsyncEngine:
    """Get the shared async SQLAlchemy engine."""
    if _async_engine is None:
        init_database()
    if _async_engine is None:
        raise RuntimeError("Database not initialized")
    return _async_engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session factory."""
    if _async_session_local is None:
        init_database()
    if _async_session_local is None:
        raise RuntimeError("Database not initialized")
    return _async_session_local


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session (async) from shared pool."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def check_database_connection() -> tuple[bool, str | None]:
    """
    Test the database connection and return a helpful error message.

    Returns:
        tuple: (success: bool, error_message: str | None)
    """
    if _async_engine is None:
        return False, "Database engine not initialized"

    try:
        async with _async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True, None
    except Exception as e:
        error_str = str(e)
        if "Connection refused" in error_str or "could not connect" in error_str:
            return False, (
                f"Cannot connect to database server: {error_str}\n"
                f"The database server appears to be down or unreachable."
            )
        if "password authentication failed" in error_str:
            return False, f"Database authentication failed: {error_str}"
        return False, f"Database connection error ({type(e).__name__}): {error_str}"
