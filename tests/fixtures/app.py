# tests/fixtures/app.py

"""
🧩 App Fixture:
- Builds the real app via `create_app()` with test settings
- Routes every request to the per-test in-memory database
- Swaps the OMDb gateway for an in-memory fake (no network in tests)
- Returns HTTP client fixture for integration tests
"""

from typing import AsyncGenerator, Dict, List, Optional

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.core.dependencies import get_rating_gateway
from app.db.session import get_async_db
from app.main import create_app
from app.schemas.movies import IMDB_RATING_UNAVAILABLE
from tests.fixtures.db import get_override_get_db
from tests.fixtures.settings import build_test_settings


class FakeRatingGateway:
    """Returns canned ratings; titles listed in `failing` raise instead."""

    def __init__(self, ratings: Optional[Dict[str, str]] = None, failing: Optional[List[str]] = None) -> None:
        self.ratings: Dict[str, str] = dict(ratings or {})
        self.failing = set(failing or [])
        self.calls: List[str] = []

    async def get_imdb_rating(self, title: str) -> str:
        self.calls.append(title)
        if title in self.failing:
            raise RuntimeError(f"lookup failed for {title}")
        return self.ratings.get(title, IMDB_RATING_UNAVAILABLE)


@pytest.fixture()
def test_settings() -> Settings:
    return build_test_settings()


@pytest.fixture()
def fake_ratings() -> FakeRatingGateway:
    return FakeRatingGateway()


@pytest.fixture()
async def app(test_settings: Settings, session_factory, fake_ratings: FakeRatingGateway) -> FastAPI:
    """
    🧪 Creates an instance of the FastAPI app bound to the test database.
    """
    app = create_app(test_settings)

    # 🔁 Override DB + gateway dependencies
    app.dependency_overrides[get_async_db] = get_override_get_db(session_factory)
    app.dependency_overrides[get_rating_gateway] = lambda: fake_ratings

    return app


@pytest.fixture()
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    🌐 Provides an HTTP client for sending requests to the test app.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


__all__ = ["FakeRatingGateway", "test_settings", "fake_ratings", "app", "async_client"]
