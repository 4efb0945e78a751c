# app/core/dependencies.py
from __future__ import annotations

"""
Request dependencies — MovieReview
==================================

Everything a route needs is built here from two request-scoped inputs: the
`Settings` stored on `app.state` at startup and the per-request
`AsyncSession`. Services never reach for globals.

Highlights
----------
- `get_current_user_id` parses the **Bearer** header and validates the token
  through `TokenIssuer`; no database round-trip is made.
- Missing/invalid credentials raise `UnauthenticatedError` (mapped to 401 by
  `app.core.exception_handlers`).
"""

from typing import Optional

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.core.exceptions import UnauthenticatedError
from app.db.session import get_async_db
from app.repositories.movies import MovieRepository
from app.repositories.reviews import ReviewRepository
from app.repositories.users import UserRepository
from app.services.external_rating_service import OmdbRatingGateway
from app.services.movie_service import MovieService, RatingGateway
from app.services.review_service import ReviewService
from app.services.token_service import TokenIssuer

__all__ = [
    "bearer_scheme",
    "get_app_settings",
    "get_token_issuer",
    "get_current_user_id",
    "get_user_repository",
    "get_rating_gateway",
    "get_movie_service",
    "get_review_service",
]

bearer_scheme = HTTPBearer(auto_error=False)


# ──────────────────────────────────────────────────────────────
# ⚙️ Configuration
# ──────────────────────────────────────────────────────────────
def get_app_settings(request: Request) -> Settings:
    """Settings built at startup (falls back to the process-wide instance)."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_token_issuer(settings: Settings = Depends(get_app_settings)) -> TokenIssuer:
    return TokenIssuer.from_settings(settings)


# ──────────────────────────────────────────────────────────────
# 👤 Current user
# ──────────────────────────────────────────────────────────────
async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> int:
    """Authenticated caller's user id, taken from a valid bearer token."""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Missing bearer token.")
    return tokens.decode(credentials.credentials).user_id


# ──────────────────────────────────────────────────────────────
# 🗃️ Repositories & services
# ──────────────────────────────────────────────────────────────
def get_user_repository(db: AsyncSession = Depends(get_async_db)) -> UserRepository:
    return UserRepository(db)


def get_rating_gateway(
    request: Request, settings: Settings = Depends(get_app_settings)
) -> RatingGateway:
    """OMDb gateway sharing the app's HTTP client (see `app.main.lifespan`)."""
    client: Optional[httpx.AsyncClient] = getattr(request.app.state, "http_client", None)
    return OmdbRatingGateway.from_settings(settings, client=client)


def get_movie_service(
    db: AsyncSession = Depends(get_async_db),
    ratings: RatingGateway = Depends(get_rating_gateway),
    settings: Settings = Depends(get_app_settings),
) -> MovieService:
    return MovieService(
        MovieRepository(db),
        ratings,
        default_page_size=settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_PAGE_SIZE,
        fanout_limit=settings.RATING_FANOUT_LIMIT,
    )


def get_review_service(db: AsyncSession = Depends(get_async_db)) -> ReviewService:
    return ReviewService(ReviewRepository(db), MovieRepository(db))
