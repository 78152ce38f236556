"""
Alembic Migration Environment
===============================

What:  Applies the note-table migrations with the service's own settings.
How:   DATABASE_URL comes from ournotes.config, never from alembic.ini.
       Online runs open an unpooled async engine and hand the sync migration
       steps to connection.run_sync(). On SQLite (the test database) ALTERs
       go through batch mode, which rebuilds the table.
Who:   `alembic upgrade head` / `alembic revision --autogenerate`.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from ournotes.config import settings
from ournotes.database import Base

# Registers ShoppingNote, MapNote and CalendarNote on Base.metadata
from ournotes.models import note  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        # date/person columns: detect type changes on autogenerate
        compare_type=True,
        render_as_batch=settings.database_url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Print the migration SQL instead of executing it (`alembic upgrade --sql`)."""
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
