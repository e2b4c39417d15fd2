"""Alembic environment for the phonebook schema (async engines only)."""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context  # type: ignore[reportMissingImports]
from phonebook.database.connection import get_database_url, to_async_url
from phonebook.dbmodels import target_metadata

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# PHONEBOOK_DATABASE_URL / settings win over sqlalchemy.url in alembic.ini
DATABASE_URL = get_database_url()


def _migrate(**options) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **options)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit SQL for the configured URL without connecting to it."""
    _migrate(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})


def _migrate_connection(connection: Connection) -> None:
    # SQLite cannot ALTER most constraints in place
    _migrate(connection=connection, render_as_batch=connection.dialect.name == "sqlite")


async def run_migrations_online() -> None:
    engine = create_async_engine(to_async_url(DATABASE_URL), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
