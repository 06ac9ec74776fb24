"""
GraphQL schema assembly using Strawberry
"""

from functools import partial
from typing import Any

import strawberry
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import QueryDepthLimiter
from strawberry.schema.config import StrawberryConfig
from strawberry.types import ExecutionResult

from ..config import settings
from ..logging import get_logger
from .mutations.root import Mutation
from .queries.root import Query
from .scalars import SCALAR_MAP

logger = get_logger(__name__)


def build_schema(max_depth: int | None = None) -> strawberry.Schema:
    """Build the executable schema.

    Called once per process; the result is passed explicitly to whoever
    executes queries against it.

    Args:
        max_depth: Maximum query depth accepted before any resolver runs.
            Defaults to ``settings.graphql_max_depth``.
    """
    depth = settings.graphql_max_depth if max_depth is None else max_depth
    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
        config=StrawberryConfig(scalar_map=SCALAR_MAP),
        # One limiter instance per operation
        extensions=[partial(QueryDepthLimiter, max_depth=depth)],
    )


def validate_schema(schema: strawberry.Schema) -> None:
    """Validate the GraphQL schema at startup.

    This ensures that all lazy type references can be resolved, causing the
    server to fail fast rather than erroring on the first request.

    Raises:
        RuntimeError: If the schema is invalid or introspection fails
    """
    graphql_schema = schema._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        error_messages = "; ".join(str(e) for e in errors)
        logger.error("GraphQL schema validation failed", error=error_messages)
        raise RuntimeError(f"GraphQL schema validation failed: {error_messages}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        error_messages = "; ".join(str(e) for e in result.errors)
        logger.error("GraphQL introspection failed", error=error_messages)
        raise RuntimeError(f"GraphQL introspection failed: {error_messages}")

    logger.info("GraphQL schema validation successful")


async def execute(
    schema: strawberry.Schema,
    query: str,
    context_value: dict[str, Any],
    variables: dict[str, Any] | None = None,
    operation_name: str | None = None,
) -> ExecutionResult:
    """Execute one query or mutation.

    ``context_value`` is handed unchanged to every resolver of this execution;
    it must carry the persistence client under ``"db"``.
    """
    return await schema.execute(
        query,
        variable_values=variables,
        context_value=context_value,
        operation_name=operation_name,
    )


def format_result(result: ExecutionResult) -> dict[str, Any]:
    """Shape an execution result as the ``{data, errors}`` response envelope.

    ``data`` is left out when nothing was executed, e.g. after a validation error.
    Once execution has started it is always present, and is ``null`` when an
    error propagated up through a non-null root field.
    """
    envelope: dict[str, Any] = {}
    # Only errors raised while resolving a field carry a path
    executed = result.data is not None or any(
        error.path is not None for error in result.errors or []
    )
    if executed:
        envelope["data"] = result.data
    if result.errors:
        envelope["errors"] = [error.formatted for error in result.errors]
    return envelope
