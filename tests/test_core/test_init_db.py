import pytest
from sqlalchemy import func, select

from app.db.init_db import SEED_MOVIES, init_db, seed_movies
from app.db.models.movie import Movie


@pytest.mark.anyio
async def test_init_db_seeds_empty_catalog_once(db_engine, session_factory):
    await init_db(db_engine, session_factory)
    await init_db(db_engine, session_factory)

    async with session_factory() as session:
        titles = (await session.execute(select(Movie.title).order_by(Movie.id))).scalars().all()

    assert titles == [title for title, _, _ in SEED_MOVIES]


@pytest.mark.anyio
async def test_seed_skips_non_empty_catalog(db_session, create_test_movie):
    await create_test_movie(title="Already Here")

    added = await seed_movies(db_session)

    count = (await db_session.execute(select(func.count(Movie.id)))).scalar_one()
    assert added == 0
    assert count == 1
