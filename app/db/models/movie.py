# app/db/models/movie.py
from __future__ import annotations

"""
🎬 MovieReview — Movie
=====================

Catalog entry that reviews attach to. Aggregates (review count, average
rating) are **never stored** here; they are derived from `reviews` at read
time by the movie service.

Relationships
-------------
• `Movie.reviews` ↔ `Review.movie`: loaded with `selectin`; every
  read path aggregates over it. Deleting a movie deletes its reviews
  (ORM `delete-orphan` cascade, mirrored by `ON DELETE CASCADE`).
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base, PKMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from app.db.models.review import Review


class Movie(PKMixin, TimestampMixin, Base):
    __tablename__ = "movies"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    release_year: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("length(trim(title)) > 0", name="title_not_blank"),
        Index("ix_movies_release_year", "release_year"),
        Index("ix_movies_title", "title"),
    )

    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="movie",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Review.id",
    )

    @property
    def review_count(self) -> int:
        return len(self.reviews)

    @property
    def average_rating(self) -> float:
        """Arithmetic mean of the current review ratings; 0 when there are none."""
        if not self.reviews:
            return 0.0
        return sum(r.rating for r in self.reviews) / len(self.reviews)
