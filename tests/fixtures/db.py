# tests/fixtures/db.py
"""
DB fixtures for tests (async, SQLite in memory):
- A brand-new database per test (nothing leaks between tests)
- StaticPool so every session in a test sees the same in-memory database
- Foreign keys switched on so ON DELETE CASCADE behaves like PostgreSQL
"""

from typing import AsyncGenerator

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db import base

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


def _enable_sqlite_fks(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture()
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_fks)
    async with engine.begin() as conn:
        await conn.run_sync(base.Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=db_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture()
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Fresh session per test (used directly by service-level tests)."""
    async with session_factory() as session:
        yield session


def get_override_get_db(session_factory):
    """FastAPI dependency override: one session per request, like production."""
    async def _override() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session
    return _override


__all__ = [
    "anyio_backend",
    "db_engine",
    "session_factory",
    "db_session",
    "get_override_get_db",
    "TEST_DATABASE_URL",
]
