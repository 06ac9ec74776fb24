"""
Shared pytest fixtures and configuration for all tests.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
import strawberry
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from strawberry.types import ExecutionResult

from socialgraph.database.client import DataClient
from socialgraph.database.connection import create_engine_for_url, create_session_factory
from socialgraph.database.seed_data import ensure_member_types
from socialgraph.dbmodels import target_metadata
from socialgraph.graphql.context import build_context
from socialgraph.graphql.schema import build_schema, execute

GraphQLRunner = Callable[..., Awaitable[ExecutionResult]]


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """URL of a throwaway SQLite database file for one test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'socialgraph-test.db'}"


@pytest_asyncio.fixture
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine with all tables created."""
    engine = create_engine_for_url(database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(target_metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory over a database seeded with the member types."""
    factory = create_session_factory(engine)
    async with factory() as session:
        await ensure_member_types(session)
    return factory


@pytest.fixture
def db(session_factory: async_sessionmaker[AsyncSession]) -> DataClient:
    return DataClient(session_factory)


@pytest.fixture(scope="session")
def schema() -> strawberry.Schema:
    return build_schema()


@pytest.fixture
def gql(schema: strawberry.Schema, db: DataClient) -> GraphQLRunner:
    """Execute a document against the schema with the test persistence client."""

    async def run(query: str, variables: dict[str, Any] | None = None) -> ExecutionResult:
        return await execute(schema, query, build_context(db), variables)

    return run


@pytest.fixture
def create_user(gql: GraphQLRunner) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Create a user through the API and return the selected fields."""

    async def _create(name: str = "Ann", balance: float = 0.0) -> dict[str, Any]:
        result = await gql(
            """
            mutation CreateUser($dto: CreateUserInput!) {
                createUser(dto: $dto) { id name balance }
            }
            """,
            {"dto": {"name": name, "balance": balance}},
        )
        assert result.errors is None
        return result.data["createUser"]

    return _create


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
