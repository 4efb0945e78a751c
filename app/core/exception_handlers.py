# app/core/exception_handlers.py
from __future__ import annotations

"""
MovieReview — Error-to-HTTP mapping
===================================

One table (`resolve_status`) decides the status code for every exception that
reaches the HTTP boundary, and one envelope is rendered for all of them:

    {"statusCode": 404, "message": "No such movie found.", "details": null}

`details` (validation errors, or the traceback for unexpected failures) is
only filled in when `ENV=development`.

Wiring (see `app.main.create_app`):
- FastAPI exception handlers for `AppError`, Starlette `HTTPException` and
  `RequestValidationError`
- `ErrorMapperMiddleware` for everything else. Starlette's own catch-all
  handler re-raises after responding, so unexpected errors are mapped here
  instead and never escape the app.
"""

import traceback
from typing import Any, Dict, Optional, Tuple

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.config import get_settings
from app.core.exceptions import AppError, ErrorKind
from app.schemas.errors import ErrorResponse

INTERNAL_ERROR_MESSAGE = "Internal server error."
VALIDATION_ERROR_MESSAGE = "One or more validation errors occurred."

_KIND_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.BAD_INPUT: status.HTTP_400_BAD_REQUEST,
}


# ─────────────────────────────────────────────────────────────
# 🗺️ Mapping table
# ─────────────────────────────────────────────────────────────
def resolve_status(exc: BaseException) -> Tuple[int, str]:
    """Status code and client-facing message for `exc`."""
    if isinstance(exc, AppError):
        return _KIND_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST), exc.message
    if isinstance(exc, RequestValidationError):
        return status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR_MESSAGE
    if isinstance(exc, StarletteHTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return exc.status_code, detail
    if isinstance(exc, ValueError):
        return status.HTTP_400_BAD_REQUEST, str(exc) or "Bad request."
    return status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE


def _details_for(exc: BaseException) -> Any:
    if isinstance(exc, AppError):
        return exc.details
    if isinstance(exc, RequestValidationError):
        return jsonable_encoder(exc.errors())
    if isinstance(exc, StarletteHTTPException):
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _is_development(app: Any) -> bool:
    settings = getattr(getattr(app, "state", None), "settings", None) or get_settings()
    return settings.is_development


def build_error_response(exc: BaseException, *, app: Any, method: str, path: str) -> JSONResponse:
    """Log `exc` and render the error envelope for it."""
    status_code, message = resolve_status(exc)
    if status_code >= 500:
        logger.opt(exception=exc).error("Unhandled error on {} {}", method, path)
    else:
        logger.warning("{} {} -> {}: {}", method, path, status_code, message)

    body = ErrorResponse(
        status_code=status_code,
        message=message,
        details=_details_for(exc) if _is_development(app) else None,
    )
    headers: Optional[Dict[str, str]] = getattr(exc, "headers", None)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=headers,
    )


# ─────────────────────────────────────────────────────────────
# 🎯 FastAPI exception handlers
# ─────────────────────────────────────────────────────────────
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:  # type: ignore
    return build_error_response(exc, app=request.app, method=request.method, path=request.url.path)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore
    return build_error_response(exc, app=request.app, method=request.method, path=request.url.path)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore
    return build_error_response(exc, app=request.app, method=request.method, path=request.url.path)


# ─────────────────────────────────────────────────────────────
# 🧯 Catch-all (pure ASGI)
# ─────────────────────────────────────────────────────────────
class ErrorMapperMiddleware:
    """Map any exception the handlers above did not claim to the envelope.

    If the response has already started there is nothing safe to send, so
    the exception is logged and re-raised for the server to handle.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        response_started = False

        async def _send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message.get("type") == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, _send_wrapper)
        except Exception as exc:
            if response_started:
                logger.opt(exception=exc).error("Error after response started")
                raise
            response = build_error_response(
                exc,
                app=scope.get("app"),
                method=scope.get("method", ""),
                path=scope.get("path", ""),
            )
            await response(scope, receive, send)


def register_exception_handlers(app) -> None:
    """Attach the handlers above to a FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "VALIDATION_ERROR_MESSAGE",
    "resolve_status",
    "build_error_response",
    "app_error_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "ErrorMapperMiddleware",
    "register_exception_handlers",
]
