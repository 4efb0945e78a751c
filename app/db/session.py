# app/db/session.py
from __future__ import annotations

"""
MovieReview — Database Engine & Session Dependencies

- Async engine/session builders. `create_app` builds one engine per app from
  its `Settings` and keeps it on `app.state`.
- Pool knobs only apply to server databases; SQLite (tests, local runs)
  gets the driver defaults.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

logger = logging.getLogger(__name__)

# Pool knobs
_POOL_PRE_PING = True
_POOL_RECYCLE = 1800
_POOL_TIMEOUT = 30
_POOL_SIZE = 10
_MAX_OVERFLOW = 20

# ───────────────────────────────────────────────────────────────
# Helpers
# ───────────────────────────────────────────────────────────────

def _engine_kwargs(url: str, echo: bool) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {"echo": echo, "future": True}
    if url.startswith("sqlite"):
        return kwargs
    kwargs.update(
        pool_pre_ping=_POOL_PRE_PING,
        pool_recycle=_POOL_RECYCLE,
        pool_size=_POOL_SIZE,
        max_overflow=_MAX_OVERFLOW,
        pool_timeout=_POOL_TIMEOUT,
    )
    return kwargs


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for `url` with the pool settings it supports."""
    return create_async_engine(url, **_engine_kwargs(url, echo))


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# ───────────────────────────────────────────────────────────────
# ⚡ Per-app engine (built by `create_app`, disposed on shutdown)
# ───────────────────────────────────────────────────────────────

async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a session from the app's sessionmaker."""
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def db_healthcheck(engine: AsyncEngine) -> bool:
    """Quick SELECT 1 to verify DB connectivity (used by /readyz)."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("DB healthcheck failed")
        return False


__all__ = [
    "build_engine",
    "build_session_maker",
    "get_async_db",
    "db_healthcheck",
]
