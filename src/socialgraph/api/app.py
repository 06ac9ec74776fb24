"""
Main FastAPI application for the socialgraph API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from ..database import init_database
from ..database.connection import check_database_connection
from ..graphql.schema import build_schema, validate_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting socialgraph API...")
    init_database()

    ok, error = await check_database_connection()
    if ok:
        logger.info("Database connection verified")
    else:
        logger.error("Database connection check failed", error=error)

    yield

    logger.info("Shutting down socialgraph API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="socialgraph API",
        description="GraphQL API over members, users, profiles, posts and subscriptions",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        db_ok, db_error = await check_database_connection()
        return {
            "status": "healthy" if db_ok else "degraded",
            "version": "0.1.0",
            "database": "ok" if db_ok else db_error,
        }

    # The schema is built once here and handed to the endpoint via app.state
    logger.info("Validating GraphQL schema...")
    schema = build_schema()
    validate_schema(schema)
    app.state.schema = schema

    from .endpoints import graphql

    app.include_router(graphql.router, prefix="/graphql", tags=["GraphQL"])
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "socialgraph.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
