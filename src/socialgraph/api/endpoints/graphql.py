"""
GraphQL HTTP endpoint.

One POST route: the body carries the query text and an optional variables
map; unknown body fields are rejected. Query-level errors are reported inside
the ``{data, errors}`` envelope, always with HTTP 200.
"""

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ...graphql.context import get_context
from ...graphql.schema import execute, format_result
from ...logging import get_logger, operation_ctx

logger = get_logger(__name__)

router = APIRouter()


class GraphQLRequest(BaseModel):
    """Request body for the GraphQL endpoint."""

    model_config = ConfigDict(extra="forbid")

    query: str = Field(..., description="GraphQL query or mutation document")
    variables: dict[str, Any] | None = Field(
        default=None, description="Values for the variables declared by the document"
    )


@router.post("", response_class=JSONResponse)
async def graphql_endpoint(body: GraphQLRequest, request: Request) -> JSONResponse:
    """Execute a GraphQL document against the application's schema."""
    schema = request.app.state.schema
    context = await get_context(request)

    result = await execute(schema, body.query, context, body.variables)

    if result.errors:
        logger.info(
            "GraphQL execution returned errors",
            graphql_operation=operation_ctx.get(),
            error_count=len(result.errors),
            messages=[error.message for error in result.errors],
        )

    return JSONResponse(status_code=200, content=format_result(result))
