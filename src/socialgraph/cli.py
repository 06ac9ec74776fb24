#!/usr/bin/env python3
"""
Main CLI entry point for the socialgraph server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from socialgraph import __version__
from socialgraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="socialgraph")
def cli() -> None:
    """socialgraph CLI - run the API server and manage the database."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the socialgraph API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting socialgraph API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Settings are read at import time by every worker process
    if log_level == "debug":
        os.environ["SOCIALGRAPH_DEBUG"] = "true"
        os.environ["SOCIALGRAPH_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("SOCIALGRAPH_DEBUG", "false")
        os.environ.setdefault("SOCIALGRAPH_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "socialgraph.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=(workers if not reload else 1),  # reload doesn't work with multiple workers
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
def seed() -> None:
    """Seed the closed set of member types."""
    from socialgraph.database.connection import get_async_session
    from socialgraph.database.seed_data import ensure_member_types

    configure_logging()

    async def do_seed():
        async with get_async_session() as db:
            try:
                created = await ensure_member_types(db)
            except Exception as e:
                logger.error("Failed to seed database", error=str(e))
                click.echo(f"✗ Error seeding database: {e}", err=True)
                sys.exit(1)
        if created:
            click.echo(f"✓ Member types created: {', '.join(created)}")
        else:
            click.echo("✓ Member types already present")

    asyncio.run(do_seed())


@cli.command("print-schema")
def print_schema() -> None:
    """Print the GraphQL schema in SDL form."""
    from socialgraph.graphql.schema import build_schema

    click.echo(build_schema().as_str())


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
