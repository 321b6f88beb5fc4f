"""
Process-wide engine and session factory.

The engine is built once from ``DATABASE_URL``; request handlers get their
session through the ``get_session`` dependency.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from sassify.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

engine = create_engine(settings.database.url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Create missing tables for local SQLite deployments.

    Postgres deployments are migrated by Alembic before the application
    starts, so nothing is done for them here.
    """
    if engine.url.get_backend_name() == "sqlite":
        await create_all(engine)
