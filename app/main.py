# app/main.py
from __future__ import annotations

"""
# MovieReview API — Application Entrypoint (FastAPI)

ASGI application factory and lifecycle for the MovieReview catalog service.

## Design Goals
- Deterministic, testable **app factory** (`create_app`) with explicit lifespan.
- Configuration built **once** and stored on `app.state.settings`; the DB
  engine is built from it and kept on `app.state.db_engine`. Every
  dependency reads them from there.
- Explicit **middleware order** (outermost first):
  1) request id → 2) error mapper.
- One error envelope for every failure (`app.core.exception_handlers`).

## Probes
- `/healthz`: liveness (process up).
- `/readyz`: readiness (quick DB check).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import logging
import os

import httpx
from fastapi import FastAPI
from starlette.responses import JSONResponse

# -- Logging bootstrap (Loguru + stdlib intercept) ----------------------------
# Importing sets up handlers/format.
from app.core import logger as _logsetup  # noqa: F401

from app.api.routers import router as api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import ErrorMapperMiddleware, register_exception_handlers
from app.db.init_db import init_db
from app.db.session import build_engine, build_session_maker, db_healthcheck
from app.middleware.request_id import RequestIDMiddleware

logger = logging.getLogger("app.main")


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifecycle manager.

    Startup:
        - Open the shared outbound HTTP client (OMDb lookups).
        - Create tables and seed movies when `DB_AUTO_CREATE` is on.

    Shutdown:
        - Close the HTTP client and dispose the DB engine.
    """
    settings: Settings = app.state.settings
    logger.info("✅ %s starting up (env=%s)", settings.PROJECT_NAME, settings.ENV)
    if settings.is_development:
        logger.warning("ENV=development: error responses include tracebacks; set ENV=production when deployed")

    app.state.http_client = httpx.AsyncClient(timeout=settings.OMDB_TIMEOUT_SECONDS)
    if settings.DB_AUTO_CREATE:
        await init_db(app.state.db_engine, app.state.session_maker)
        logger.info("🗃️ Database schema ensured")

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        await app.state.db_engine.dispose()
        logger.info("🛑 %s shutting down", settings.PROJECT_NAME)


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    Args:
        settings: configuration to use; defaults to `get_settings()`.

    Returns:
        FastAPI: fully wired application with middleware, exception handlers,
        routers, and health/readiness endpoints.
    """
    settings = settings or get_settings()
    docs_url = "/docs" if settings.ENABLE_DOCS else None
    openapi_url = "/openapi.json" if settings.ENABLE_DOCS else None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=docs_url,
        redoc_url=None,
        openapi_url=openapi_url,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── Database (engine connects lazily) ───────────────────────────────────
    app.state.db_engine = build_engine(settings.async_database_url, echo=settings.DB_ECHO)
    app.state.session_maker = build_session_maker(app.state.db_engine)

    # ── Middlewares (last added runs first) ─────────────────────────────────
    app.add_middleware(ErrorMapperMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Exception handlers ──────────────────────────────────────────────────
    register_exception_handlers(app)

    # ── Routers ─────────────────────────────────────────────────────────────
    app.include_router(api_router, prefix=settings.API_PREFIX)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, bool]:
        """Liveness probe: `{"ok": True}` when the process is responsive."""
        return {"ok": True}

    @app.get("/readyz", tags=["meta"])
    async def readyz() -> JSONResponse:
        """Readiness probe: 200 when the database answers, 503 otherwise."""
        db_ok = await db_healthcheck(app.state.db_engine)
        return JSONResponse(
            {"ready": db_ok, "checks": {"db": db_ok}},
            status_code=200 if db_ok else 503,
        )

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Minimal root that points to docs (when enabled)."""
        return JSONResponse(
            {"name": settings.PROJECT_NAME, "docs": app.docs_url or "", "version": settings.VERSION}
        )

    return app


# ─────────────────────────────────────────────────────────────────────────────
# 🚀 Module-level ASGI app for Uvicorn
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()
__all__ = ["create_app", "app", "lifespan"]


# Local dev runner (prefer: `uvicorn app.main:app --reload`)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "1") == "1",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
