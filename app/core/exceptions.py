# app/core/exceptions.py
from __future__ import annotations

"""
MovieReview — Application Exceptions
====================================
A small, transport-agnostic exception taxonomy. Services raise these; only
`app.core.exception_handlers` turns them into HTTP responses.

Key ideas
---------
- One base `AppError` carrying an `ErrorKind`, a human-readable `message`
  and optional machine-readable `details`.
- Domain exceptions inherit from it and fix the kind.
- `ConfigurationError` is deliberately **not** an `AppError`: a missing
  secret is an operator problem and surfaces as a generic 500.

Usage
-----
    raise NotFoundError("No such movie found.")
    raise AuthorizationDeniedError("You cannot edit this review.")
"""

from enum import Enum
from typing import Any, Dict, Optional

__all__ = [
    "ErrorKind",
    "AppError",
    "NotFoundError",
    "UnauthenticatedError",
    "AuthorizationDeniedError",
    "BadInputError",
    "ConfigurationError",
]


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    BAD_INPUT = "bad_input"


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppError
# ──────────────────────────────────────────────────────────────
class AppError(Exception):
    """Base application-level error.

    Attributes
    ----------
    kind : ErrorKind
        Category used by the error mapper to pick a status code.
    message : str
        Safe, user-facing message.
    details : Any
        Optional structured context (validation errors, ids).
    headers : dict | None
        Optional response headers (e.g. `WWW-Authenticate`).
    """

    kind: ErrorKind = ErrorKind.BAD_INPUT
    default_message: str = "Bad request."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.message: str = message or self.default_message
        self.details: Optional[Any] = details
        self.headers: Optional[Dict[str, str]] = headers
        super().__init__(self.message)


class NotFoundError(AppError):
    """A requested resource does not exist (404)."""

    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found."


class UnauthenticatedError(AppError):
    """Bad credentials or a missing/invalid bearer token (401)."""

    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Unauthorized."

    def __init__(self, message: Optional[str] = None, **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class AuthorizationDeniedError(AppError):
    """Caller is authenticated but does not own the resource (403)."""

    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden."


class BadInputError(AppError):
    """Malformed argument or an operation that cannot be performed (400)."""

    kind = ErrorKind.BAD_INPUT


class ConfigurationError(RuntimeError):
    """Required configuration is missing or invalid."""
