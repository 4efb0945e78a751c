# app/db/models/review.py
from __future__ import annotations

"""
⭐ MovieReview — Review (user ratings & comments)
================================================

A user's rating (integer 1..10) and text for a `Movie`.

Conventions
-----------
• `user_id` is set once at creation and is the **only** authorization key for
  edits and deletes; nothing in the service layer reassigns it.
• `rating` range is enforced both by the request schema and a check
  constraint.

Relationships
-------------
• `Review.user`  ↔ `User.reviews` (author; loaded for the `userName` field)
• `Review.movie` ↔ `Movie.reviews`
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base, BigIntPK, PKMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from app.db.models.movie import Movie
    from app.db.models.user import User


class Review(PKMixin, TimestampMixin, Base):
    __tablename__ = "reviews"

    content: Mapped[str] = mapped_column(String(2000), nullable=False)
    rating: Mapped[int] = mapped_column(SmallInteger().with_variant(Integer(), "sqlite"), nullable=False)

    movie_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        BigIntPK, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
        doc="Author of the review.",
    )

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 10", name="rating_range"),
        Index("ix_reviews_movie_user", "movie_id", "user_id"),
    )

    user: Mapped["User"] = relationship("User", back_populates="reviews", lazy="selectin")
    movie: Mapped["Movie"] = relationship("Movie", back_populates="reviews", lazy="raise")

    @property
    def user_name(self) -> str:
        return self.user.username if self.user is not None else ""

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Review id={self.id} movie={self.movie_id} user={self.user_id} rating={self.rating}>"
