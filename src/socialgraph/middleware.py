"""
Middleware for request context and logging
"""

import json
import re
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import (
    clear_request_context,
    generate_request_id,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

SENSITIVE_KEYS = {
    "password",
    "token",
    "api_key",
    "secret",
    "auth",
    "authorization",
    "access_token",
    "refresh_token",
    "key",
    "session",
    "cookie",
    "credentials",
}


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Remove sensitive query parameters from logging.

    Args:
        params: Dictionary of query parameters

    Returns:
        Dictionary with sensitive parameters redacted
    """
    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "[REDACTED]"
        else:
            sanitized[key] = value
    return sanitized


def operation_name_from_query(query: str) -> str:
    """Derive a loggable operation name from a GraphQL document."""
    if "__schema" in query or "IntrospectionQuery" in query:
        return "__introspection"

    match = re.search(r"\bquery\s+(\w+)", query) or re.search(r"\bmutation\s+(\w+)", query)
    if match:
        kind = "mutation:" if query.lstrip().startswith("mutation") else ""
        return f"{kind}{match.group(1)}"
    if query.lstrip().startswith("mutation"):
        return "mutation:unnamed_operation"
    return "unnamed_operation"


async def extract_graphql_operation_name(request: Request) -> str | None:
    if request.url.path.rstrip("/") != "/graphql" or request.method != "POST":
        return None

    try:
        body = await request.body()
        if not body:
            return None
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None

    if not isinstance(data, dict):
        return None
    query = data.get("query")
    if not isinstance(query, str) or not query:
        return None
    return operation_name_from_query(query)


def incoming_request_id(request: Request) -> str | None:
    """Return the caller's request id if it is safe to log, else None."""
    value = request.headers.get(REQUEST_ID_HEADER)
    if value and _REQUEST_ID_PATTERN.fullmatch(value):
        return value
    return None


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set logging context for each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and set logging context."""
        graphql_operation = await extract_graphql_operation_name(request)
        request_id = incoming_request_id(request) or generate_request_id()
        set_request_context(request_id=request_id, operation=graphql_operation)

        try:
            sanitized_params = None
            if request.query_params:
                sanitized_params = sanitize_query_params(dict(request.query_params))

            logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                query_params=sanitized_params,
                user_agent=request.headers.get("user-agent"),
                remote_addr=request.client.host if request.client else None,
            )

            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id

            logger.info(
                "Request completed",
                status_code=response.status_code,
                method=request.method,
                path=request.url.path,
            )

            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        finally:
            clear_request_context()
