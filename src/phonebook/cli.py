#!/usr/bin/env python3
"""
Main CLI entry point for the phonebook backend.
"""

import asyncio
import os
import sys
from pathlib import Path

import click
import uvicorn

from phonebook import __version__
from phonebook.config import settings
from phonebook.logging import configure_logging, get_logger

logger = get_logger(__name__)


MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def get_alembic_config():
    """Alembic configuration pointing at the migrations shipped inside the package."""
    from alembic.config import Config

    if not (MIGRATIONS_DIR / "env.py").exists():
        raise FileNotFoundError(f"Migration scripts not found at {MIGRATIONS_DIR}")
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config


@click.group()
@click.version_option(version=__version__, prog_name="phonebook")
def cli() -> None:
    """Phonebook CLI - run the API server and manage the database."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, default=settings.api_reload, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the phonebook API server."""
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info("Starting phonebook API server", host=host, port=port, reload=reload)

    # Settings are read at import time by the reloaded worker process
    if log_level == "debug":
        os.environ["PHONEBOOK_DEBUG"] = "true"
    else:
        os.environ.setdefault("PHONEBOOK_DEBUG", "false")
    os.environ.setdefault("PHONEBOOK_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "phonebook.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.group()
def db() -> None:
    """Manage the database schema."""
    pass


@db.command("init")
def init_db() -> None:
    """Create any missing tables directly from the ORM models."""
    from phonebook.database import create_schema, dispose_database, init_database

    configure_logging(level=settings.log_level)

    async def do_init():
        init_database()
        try:
            await create_schema()
        finally:
            await dispose_database()

    asyncio.run(do_init())
    click.echo("✓ Database schema created")


@db.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    from alembic import command

    configure_logging(level=settings.log_level)
    try:
        logger.info("Upgrading database", revision=revision)
        command.upgrade(get_alembic_config(), revision)
        logger.info("Database upgrade completed successfully")
    except Exception as e:
        logger.error("Database upgrade failed", error=str(e))
        sys.exit(1)


@db.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    from alembic import command

    configure_logging(level=settings.log_level)
    try:
        logger.info("Downgrading database", revision=revision)
        command.downgrade(get_alembic_config(), revision)
        logger.info("Database downgrade completed successfully")
    except Exception as e:
        logger.error("Database downgrade failed", error=str(e))
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
