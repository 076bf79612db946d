"""
Alembic Migration Environment
===============================

What:  Runs migrations against whichever async backend DATABASE_URL names
       (PostgreSQL via asyncpg in production, SQLite via aiosqlite locally).
How:   The URL comes from application settings and the metadata from the ORM
       Base; online runs go through an async engine and `run_sync()`.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from diary_notes.config import settings
from diary_notes.database import Base

# Registers the notes table on Base.metadata for --autogenerate
from diary_notes.models.note import Note  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

if not settings.database_url:
    raise RuntimeError("DATABASE_URL must be set to run migrations")
config.set_main_option("sqlalchemy.url", settings.database_url)


def configure(**kwargs) -> None:
    url = make_url(config.get_main_option("sqlalchemy.url"))
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        # SQLite cannot ALTER most columns in place
        render_as_batch=url.get_backend_name() == "sqlite",
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout without connecting to the database."""
    configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
