# app/db/init_db.py
from __future__ import annotations

"""
MovieReview — Schema bootstrap & seed data
==========================================

Creates the tables on startup when `DB_AUTO_CREATE` is on and seeds the
catalog with a few well-known movies when it is empty. Idempotent: running
it twice never duplicates the seed rows.
"""

from typing import Sequence, Tuple
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, AsyncSession

import app.db.base  # noqa: F401  (registers every model on Base.metadata)
from app.db.base_class import Base
from app.db.models.movie import Movie

logger = logging.getLogger(__name__)

# (title, description, release_year)
SEED_MOVIES: Sequence[Tuple[str, str, int]] = (
    ("Inception", "A thief who steals corporate secrets through dream-sharing technology.", 2010),
    ("The Matrix", "A computer hacker learns the true nature of his reality.", 1999),
    ("Interstellar", "A team of explorers travel through a wormhole in space.", 2014),
)


async def create_all(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_movies(session: AsyncSession) -> int:
    """Insert the seed catalog if the movies table is empty. Returns rows added."""
    existing = (await session.execute(select(func.count(Movie.id)))).scalar_one()
    if existing:
        return 0
    session.add_all(
        Movie(title=title, description=description, release_year=year)
        for title, description, year in SEED_MOVIES
    )
    await session.commit()
    logger.info("Seeded %d movies", len(SEED_MOVIES))
    return len(SEED_MOVIES)


async def init_db(engine: AsyncEngine, session_maker: async_sessionmaker[AsyncSession]) -> None:
    """Create the schema and seed the catalog."""
    await create_all(engine)
    async with session_maker() as session:
        await seed_movies(session)


__all__ = ["SEED_MOVIES", "create_all", "seed_movies", "init_db"]
