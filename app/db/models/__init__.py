# app/db/models/__init__.py
"""
MovieReview — ORM models
========================

Re-exports every mapped class so `from app.db.models import Movie` works and
all tables land on `Base.metadata` together.
"""

from app.db.base_class import Base

from .user import User
from .movie import Movie
from .review import Review

__all__ = ["Base", "User", "Movie", "Review"]
