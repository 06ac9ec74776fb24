"""
Request context shared by every resolver of one GraphQL execution
"""

from typing import Any

import strawberry
from fastapi import Request

from ..database.client import DataClient, get_data_client


def build_context(db: DataClient, request: Request | None = None) -> dict[str, Any]:
    """Build the context value threaded unchanged through one execution."""
    return {"request": request, "db": db}


async def get_context(request: Request) -> dict[str, Any]:
    """Get the context for GraphQL resolvers of an HTTP request."""
    return build_context(get_data_client(), request)


def get_db_from_info(info: strawberry.Info) -> DataClient:
    """Get the persistence client from the resolver info."""
    context = info.context
    db = context.get("db") if isinstance(context, dict) else getattr(context, "db", None)
    if db is None:
        raise RuntimeError("Persistence client missing from GraphQL context")
    return db
