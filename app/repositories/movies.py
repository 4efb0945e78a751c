# app/repositories/movies.py
from __future__ import annotations

"""Movie repository.

All reads return `Movie` rows with their `reviews` collection loaded so the
service can aggregate without further I/O. Reads use `populate_existing` so a
movie already in the session picks up reviews written after it was loaded.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.movie import Movie
from app.db.models.review import Review

logger = logging.getLogger(__name__)

# Lower-cased `sort_by` value -> column. Anything else leaves id order.
SORT_COLUMNS = {
    "name": Movie.title,
    "releaseyear": Movie.release_year,
}


class MovieRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # Helpers
    @staticmethod
    def _select() -> Select:
        return select(Movie).execution_options(populate_existing=True)

    async def _all(self, stmt: Select) -> List[Movie]:
        result = await self.db.execute(stmt)
        return list(result.scalars().unique().all())

    # Reads
    async def list_all(self) -> List[Movie]:
        return await self._all(self._select().order_by(Movie.id))

    async def query(
        self,
        *,
        name: Optional[str],
        sort_by: Optional[str],
        descending: bool,
        skip: int,
        take: int,
    ) -> List[Movie]:
        """Filter by title substring, sort, then page.

        `name` matches case-insensitively anywhere in the title; `sort_by` is
        looked up in `SORT_COLUMNS` ignoring case. Ties always break on id so
        pages are stable.
        """
        stmt = self._select()
        if name:
            stmt = stmt.where(func.lower(Movie.title).contains(name.lower(), autoescape=True))

        column = SORT_COLUMNS.get((sort_by or "").strip().lower())
        if column is not None:
            stmt = stmt.order_by(column.desc() if descending else column.asc(), Movie.id)
        else:
            stmt = stmt.order_by(Movie.id)

        return await self._all(stmt.offset(skip).limit(take))

    async def get_by_id(self, movie_id: int) -> Optional[Movie]:
        result = await self.db.execute(self._select().where(Movie.id == movie_id))
        return result.scalars().first()

    async def top_rated(self, count: int) -> List[Movie]:
        """Highest mean review rating first; movies without reviews rank as 0."""
        if count <= 0:
            return []
        mean = func.coalesce(func.avg(Review.rating), 0)
        stmt = (
            self._select()
            .outerjoin(Review, Review.movie_id == Movie.id)
            .group_by(Movie.id)
            .order_by(mean.desc(), Movie.id)
            .limit(count)
        )
        return await self._all(stmt)

    async def by_year(self, year: int) -> List[Movie]:
        return await self._all(self._select().where(Movie.release_year == year).order_by(Movie.id))

    # Writes
    async def create(self, *, title: str, description: Optional[str], release_year: int) -> Movie:
        movie = Movie(title=title, description=description, release_year=release_year)
        self.db.add(movie)
        await self.db.commit()
        await self.db.refresh(movie, attribute_names=["reviews"])
        return movie

    async def update(
        self, movie_id: int, *, title: str, description: Optional[str], release_year: int
    ) -> bool:
        movie = await self.get_by_id(movie_id)
        if movie is None:
            return False
        movie.title = title
        movie.description = description
        movie.release_year = release_year
        await self.db.commit()
        return True

    async def delete(self, movie_id: int) -> bool:
        movie = await self.get_by_id(movie_id)
        if movie is None:
            return False
        await self.db.delete(movie)
        await self.db.commit()
        logger.info("Deleted movie %s and %d review(s)", movie_id, len(movie.reviews))
        return True

    async def exists(self, movie_id: int) -> bool:
        result = await self.db.execute(select(Movie.id).where(Movie.id == movie_id))
        return result.scalar_one_or_none() is not None


__all__ = ["MovieRepository", "SORT_COLUMNS"]
