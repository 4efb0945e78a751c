# app/services/review_service.py
from __future__ import annotations

"""
MovieReview — Review service (ownership)
========================================

Only a review's author may change or remove it. Ownership is checked here
as an explicit branch and reported as a `ReviewAccess` value; the HTTP
layer turns `DENIED` into a 403.

A review that does not exist and a review owned by someone else both give
`DENIED`, so callers cannot probe which review ids exist.
"""

from enum import Enum
from typing import List, Optional
import logging

from app.core.exceptions import NotFoundError
from app.db.models.review import Review
from app.repositories.movies import MovieRepository
from app.repositories.reviews import ReviewRepository
from app.schemas.reviews import ReviewCreate, ReviewRead, ReviewUpdate

logger = logging.getLogger(__name__)

MOVIE_NOT_FOUND_MESSAGE = "No such movie."


class ReviewAccess(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"


def to_read(review: Review) -> ReviewRead:
    return ReviewRead(
        id=review.id,
        content=review.content,
        rating=review.rating,
        movie_id=review.movie_id,
        user_id=review.user_id,
        user_name=review.user_name,
    )


class ReviewService:
    def __init__(self, reviews: ReviewRepository, movies: MovieRepository) -> None:
        self.reviews = reviews
        self.movies = movies

    async def _owned(self, review_id: int, caller_user_id: int) -> Optional[Review]:
        review = await self.reviews.get_by_id(review_id)
        if review is None or review.user_id != caller_user_id:
            return None
        return review

    # Reads
    async def get_by_id(self, review_id: int) -> Optional[ReviewRead]:
        review = await self.reviews.get_by_id(review_id)
        return to_read(review) if review is not None else None

    async def get_by_movie_id(self, movie_id: int) -> List[ReviewRead]:
        return [to_read(r) for r in await self.reviews.list_by_movie(movie_id)]

    async def get_by_user_id(self, user_id: int) -> List[ReviewRead]:
        return [to_read(r) for r in await self.reviews.list_by_user(user_id)]

    # Writes
    async def add(self, dto: ReviewCreate, author_user_id: int) -> ReviewRead:
        """Create a review authored by `author_user_id`.

        Raises
        ------
        NotFoundError
            When `dto.movie_id` does not refer to an existing movie.
        """
        if not await self.movies.exists(dto.movie_id):
            raise NotFoundError(MOVIE_NOT_FOUND_MESSAGE)
        review = await self.reviews.add(
            movie_id=dto.movie_id,
            user_id=author_user_id,
            content=dto.content,
            rating=dto.rating,
        )
        logger.info("User %s reviewed movie %s (review %s)", author_user_id, dto.movie_id, review.id)
        return to_read(review)

    async def update(self, review_id: int, dto: ReviewUpdate, caller_user_id: int) -> ReviewAccess:
        review = await self._owned(review_id, caller_user_id)
        if review is None:
            logger.warning("User %s denied edit of review %s", caller_user_id, review_id)
            return ReviewAccess.DENIED
        await self.reviews.update(review, content=dto.content, rating=dto.rating)
        return ReviewAccess.GRANTED

    async def delete(self, review_id: int, caller_user_id: int) -> ReviewAccess:
        review = await self._owned(review_id, caller_user_id)
        if review is None:
            logger.warning("User %s denied delete of review %s", caller_user_id, review_id)
            return ReviewAccess.DENIED
        await self.reviews.delete(review)
        return ReviewAccess.GRANTED


__all__ = ["ReviewAccess", "ReviewService", "to_read", "MOVIE_NOT_FOUND_MESSAGE"]
