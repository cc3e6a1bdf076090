"""Fixtures for tests that need a real PostgreSQL database.

Set TEST_DATABASE_URL (postgresql+asyncpg://...) to run them; otherwise
every test using these fixtures is skipped.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from job_assistant.models import Base

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "")


def skip_if_no_postgres() -> None:
    """Skip the test when no test database is configured."""
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set; PostgreSQL tests skipped")


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Engine on a freshly created schema, dropped after the test."""
    skip_if_no_postgres()

    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session rolled back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()
