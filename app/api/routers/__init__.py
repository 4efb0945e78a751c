"""
🧭 MovieReview • API Router Aggregator
=====================================

Exports the combined `router` and each sub-router. Mounted by
`app.main.create_app` under `API_PREFIX` (default `/api`):

    /api/Auth/*     registration & login (public)
    /api/Movies/*   catalog (bearer token)
    /api/Reviews/*  reviews (bearer token, author-only writes)
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .movies import router as movies_router
from .reviews import router as reviews_router


def build_router() -> APIRouter:
    """Compose the API surface into a single `APIRouter`."""
    router = APIRouter()
    router.include_router(auth_router)
    router.include_router(movies_router)
    router.include_router(reviews_router)
    return router


router = build_router()

__all__ = ["router", "build_router", "auth_router", "movies_router", "reviews_router"]
