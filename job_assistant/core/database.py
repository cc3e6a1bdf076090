"""Async database engine and session management.

Engines are created lazily per URL: the service must import and run with
no DATABASE_URL at all (cache-only mode), so nothing connects at import
time.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from job_assistant.core.config import settings

_engines: dict[str, AsyncEngine] = {}


def get_engine(database_url: str) -> AsyncEngine:
    """Return the shared engine for a database URL, creating it on first use."""
    engine = _engines.get(database_url)
    if engine is None:
        engine = create_async_engine(
            database_url,
            echo=settings.database_echo,
            pool_pre_ping=True,
        )
        _engines[database_url] = engine
    return engine


def get_session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to the engine for database_url."""
    return async_sessionmaker(
        get_engine(database_url),
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Provide a session that commits on success and rolls back on error."""
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engines() -> None:
    """Dispose every engine created so far (app shutdown)."""
    while _engines:
        _, engine = _engines.popitem()
        await engine.dispose()
