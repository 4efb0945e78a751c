# app/services/auth/signup_service.py
from __future__ import annotations

"""
Signup service — MovieReview
============================

Core implementation for **new user registration**.

Key behaviors
-------------
- Duplicate usernames are a business outcome (`success=False`), not an error.
- Password policy failures are reported together, joined by ", ".
- On success a bearer token is issued immediately so the client is logged in.
- Server-side hashing only; the plaintext password is never logged or stored.

A missing signing key surfaces as `ConfigurationError` (HTTP 500) after the
account was created; registering again then reports the duplicate.
"""

import logging

from app.repositories.users import DUPLICATE_USERNAME_MESSAGE, UserRepository
from app.schemas.auth import AuthResult, RegisterRequest
from app.services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

REGISTRATION_SUCCESS_MESSAGE = "Registration successful"


async def register(
    payload: RegisterRequest,
    *,
    users: UserRepository,
    tokens: TokenIssuer,
) -> AuthResult:
    """Create an account and return a token for it."""
    if await users.find_by_username(payload.username) is not None:
        logger.info("Registration rejected: username taken (%s)", payload.username)
        return AuthResult(success=False, message=DUPLICATE_USERNAME_MESSAGE)

    user, errors = await users.create_with_password(
        payload.username, str(payload.email), payload.password
    )
    if user is None:
        logger.info("Registration rejected for %s: %d problem(s)", payload.username, len(errors))
        return AuthResult(success=False, message=", ".join(errors))

    token = tokens.issue(user)
    logger.info("Registered user id=%s", user.id)
    return AuthResult(success=True, token=token, message=REGISTRATION_SUCCESS_MESSAGE)


__all__ = ["register", "REGISTRATION_SUCCESS_MESSAGE"]
