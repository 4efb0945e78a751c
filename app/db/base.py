# app/db/base.py
"""
MovieReview — SQLAlchemy Base registry
======================================

Import all ORM models so their tables are registered on `Base.metadata`.
`init_db.create_all()` and the test fixtures rely on this to build the
schema, and relationship targets resolve at import time.

Tip: Keep this file import-only; no runtime logic.
"""

from app.db.base_class import Base

# ───────────────────────────────────────────────────────────────
# Accounts
# ───────────────────────────────────────────────────────────────
from app.db.models.user import User

# ───────────────────────────────────────────────────────────────
# Catalog & engagement
# ───────────────────────────────────────────────────────────────
from app.db.models.movie import Movie
from app.db.models.review import Review

__all__ = [
    "Base",
    "User",
    "Movie",
    "Review",
]
