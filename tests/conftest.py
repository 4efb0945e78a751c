# tests/conftest.py
"""
Global test bootstrap
- Points the app at an in-memory SQLite database and a test signing key
  BEFORE anything from `app` is imported (settings and the engine are built
  at import time)
- Pulls in the shared fixtures (db, app, users, movies)
"""

from __future__ import annotations

import os
import warnings

from sqlalchemy.exc import SAWarning

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (set before importing the app/fixtures so it takes effect)
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("ENV", "development")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-pytest-only-0123456789")
os.environ.setdefault("OMDB_API_KEY", "")
os.environ.setdefault("DB_AUTO_CREATE", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")

warnings.filterwarnings("ignore", category=SAWarning)

# ──────────────────────────────────────────────────────────────────────────────
# 📦 Fixtures
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.db import *          # noqa: F401,F403,E402
from tests.fixtures.app import *         # noqa: F401,F403,E402
from tests.fixtures.users import *       # noqa: F401,F403,E402
from tests.fixtures.movies import *      # noqa: F401,F403,E402
