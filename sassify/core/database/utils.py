"""
Engine and session factory helpers.

Sassify runs on SQLite locally and in tests, and on Postgres (asyncpg) in
production. These helpers hide the driver differences from the rest of the
database layer.
"""

from __future__ import annotations

import re

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .base import Base


def normalize_database_url(db_url: str) -> str:
    """Rewrite ``postgres://`` style URLs to the ``asyncpg`` driver; leave others untouched.

    >>> normalize_database_url("postgres://app@db/sassify")
    'postgresql+asyncpg://app@db/sassify'
    """
    return re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://", db_url, count=1)


def create_engine(db_url: str) -> AsyncEngine:
    """Async engine for ``db_url``.

    SQLite connections may be shared across threads by aiosqlite; Postgres
    connections are pinged before reuse.
    """
    url = normalize_database_url(db_url)
    if url.startswith("sqlite"):
        return create_async_engine(url, connect_args={"check_same_thread": False})
    return create_async_engine(url, pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Routers read attributes after commit, so rows must not expire.
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create every table missing from the database (SQLite and tests; Postgres uses Alembic)."""
    from . import entities  # noqa: F401  register every table on the metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
