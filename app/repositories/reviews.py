# app/repositories/reviews.py
from __future__ import annotations

"""Review repository. Every returned review has its author (`user`) loaded."""

from typing import List, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.review import Review


class ReviewRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def _select() -> Select:
        return select(Review).execution_options(populate_existing=True)

    async def get_by_id(self, review_id: int) -> Optional[Review]:
        result = await self.db.execute(self._select().where(Review.id == review_id))
        return result.scalars().first()

    async def list_by_movie(self, movie_id: int) -> List[Review]:
        result = await self.db.execute(
            self._select().where(Review.movie_id == movie_id).order_by(Review.id)
        )
        return list(result.scalars().all())

    async def list_by_user(self, user_id: int) -> List[Review]:
        result = await self.db.execute(
            self._select().where(Review.user_id == user_id).order_by(Review.id)
        )
        return list(result.scalars().all())

    async def add(self, *, movie_id: int, user_id: int, content: str, rating: int) -> Review:
        review = Review(movie_id=movie_id, user_id=user_id, content=content, rating=rating)
        self.db.add(review)
        await self.db.commit()
        await self.db.refresh(review, attribute_names=["user"])
        return review

    async def update(self, review: Review, *, content: str, rating: int) -> Review:
        # `user_id` is never touched here.
        review.content = content
        review.rating = rating
        await self.db.commit()
        return review

    async def delete(self, review: Review) -> None:
        await self.db.delete(review)
        await self.db.commit()


__all__ = ["ReviewRepository"]
