"""
Centralized logging configuration using structlog
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

# Context variables for request tracking
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
operation_ctx: ContextVar[str | None] = ContextVar("graphql_operation", default=None)


class RequestContextFilter:
    """Add request context to log records."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """Add request context to the event dict."""
        _ = logger, method_name

        request_id = request_id_ctx.get()
        operation = operation_ctx.get()

        if request_id:
            event_dict["request_id"] = request_id

        if operation:
            event_dict["graphql_operation"] = operation

        return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog with appropriate processors and formatters.

    Args:
        debug: If True, use human-readable console output. If False, use JSON.
    """
    log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        RequestContextFilter(),
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def generate_request_id() -> str:
    return uuid.uuid4().hex


def set_request_context(request_id: str | None = None, operation: str | None = None) -> None:
    """Set request context variables.

    Args:
        request_id: Request ID to set (generates one if None)
        operation: GraphQL operation name, if known
    """
    if request_id is None:
        request_id = generate_request_id()

    request_id_ctx.set(request_id)
    if operation is not None:
        operation_ctx.set(operation)


def clear_request_context() -> None:
    """Clear request context variables."""
    request_id_ctx.set(None)
    operation_ctx.set(None)
