# app/services/movie_service.py
from __future__ import annotations

"""
MovieReview — Movie query & aggregation service
===============================================

Turns `Movie` rows into `MovieRead` views:

- **Aggregation at read time**: `reviewCount` and `averageRating` come from
  the movie's current reviews on every read (0 with no reviews, never NaN).
- **Enrichment**: each result gets an `imdbRating` from the rating gateway.
  Lookups run concurrently, at most `fanout_limit` at a time; each one
  settles on its own, so one failing lookup yields "N/A" for that movie
  only and the request still succeeds.
- **Querying**: title filter, sort, then page (see `page_window`).

Absence is not an error here: `get_by_id` returns None and `update`/`delete`
return False; the HTTP layer decides what that means.
"""

from typing import List, Optional, Protocol, Sequence, Tuple
import asyncio
import logging

from app.db.models.movie import Movie
from app.repositories.movies import MovieRepository
from app.schemas.movies import IMDB_RATING_UNAVAILABLE, MovieCreate, MovieQuery, MovieRead, MovieUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_FANOUT_LIMIT = 8


class RatingGateway(Protocol):
    async def get_imdb_rating(self, title: str) -> str: ...


def page_window(
    page_number: int,
    page_size: int,
    *,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> Tuple[int, int]:
    """Return `(skip, take)` for a 1-based page request.

    Page numbers below 1 mean the first page; a non-positive page size falls
    back to the default, and sizes are capped at `max_page_size`.
    """
    page = page_number if page_number > 0 else 1
    size = page_size if page_size > 0 else default_page_size
    size = min(size, max_page_size)
    return (page - 1) * size, size


class MovieService:
    def __init__(
        self,
        movies: MovieRepository,
        ratings: RatingGateway,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        fanout_limit: int = DEFAULT_FANOUT_LIMIT,
    ) -> None:
        self.movies = movies
        self.ratings = ratings
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.fanout_limit = max(1, fanout_limit)

    # ─────────────────────────────────────────────────────────────
    # 🔧 Helpers
    # ─────────────────────────────────────────────────────────────
    @staticmethod
    def to_read(movie: Movie, imdb_rating: Optional[str] = None) -> MovieRead:
        return MovieRead(
            id=movie.id,
            title=movie.title,
            description=movie.description,
            release_year=movie.release_year,
            review_count=movie.review_count,
            average_rating=movie.average_rating,
            imdb_rating=imdb_rating,
        )

    async def _rating_for(self, title: str, gate: asyncio.Semaphore) -> str:
        async with gate:
            try:
                return await self.ratings.get_imdb_rating(title)
            except Exception:
                logger.exception("Rating lookup failed for %r", title)
                return IMDB_RATING_UNAVAILABLE

    async def _enrich(self, movies: Sequence[Movie]) -> List[MovieRead]:
        """Aggregate and enrich, preserving the input order."""
        if not movies:
            return []
        gate = asyncio.Semaphore(self.fanout_limit)
        ratings = await asyncio.gather(*(self._rating_for(m.title, gate) for m in movies))
        return [self.to_read(m, r) for m, r in zip(movies, ratings)]

    # ─────────────────────────────────────────────────────────────
    # 📚 Reads
    # ─────────────────────────────────────────────────────────────
    async def get_all(self, query: Optional[MovieQuery] = None) -> List[MovieRead]:
        """All movies, or the filtered/sorted page described by `query`."""
        if query is None:
            return await self._enrich(await self.movies.list_all())

        skip, take = page_window(
            query.page_number,
            query.page_size,
            default_page_size=self.default_page_size,
            max_page_size=self.max_page_size,
        )
        name = (query.name or "").strip() or None
        rows = await self.movies.query(
            name=name,
            sort_by=query.sort_by,
            descending=query.is_descending,
            skip=skip,
            take=take,
        )
        return await self._enrich(rows)

    async def get_by_id(self, movie_id: int) -> Optional[MovieRead]:
        movie = await self.movies.get_by_id(movie_id)
        if movie is None:
            return None
        return (await self._enrich([movie]))[0]

    async def get_top_rated(self, count: int) -> List[MovieRead]:
        if count <= 0:
            return []
        return await self._enrich(await self.movies.top_rated(count))

    async def get_by_year(self, year: int) -> List[MovieRead]:
        return await self._enrich(await self.movies.by_year(year))

    # ─────────────────────────────────────────────────────────────
    # ✏️ Writes
    # ─────────────────────────────────────────────────────────────
    async def create(self, dto: MovieCreate) -> MovieRead:
        movie = await self.movies.create(
            title=dto.title, description=dto.description, release_year=dto.release_year
        )
        logger.info("Created movie id=%s", movie.id)
        return (await self._enrich([movie]))[0]

    async def update(self, movie_id: int, dto: MovieUpdate) -> bool:
        updated = await self.movies.update(
            movie_id, title=dto.title, description=dto.description, release_year=dto.release_year
        )
        if not updated:
            logger.info("Update skipped: movie %s does not exist", movie_id)
        return updated

    async def delete(self, movie_id: int) -> bool:
        return await self.movies.delete(movie_id)


__all__ = ["MovieService", "RatingGateway", "page_window", "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE"]
