# app/services/auth/login_service.py
from __future__ import annotations

"""
Login service — MovieReview
===========================

Username + password login.

- **Neutral errors**: an unknown username and a wrong password produce the
  same result, so callers cannot probe which accounts exist.
- The password hash is always verified through Passlib (constant time).
"""

import logging

from app.repositories.users import UserRepository
from app.schemas.auth import AuthResult, LoginRequest
from app.services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"
LOGIN_SUCCESS_MESSAGE = "Login successful"


async def login(
    payload: LoginRequest,
    *,
    users: UserRepository,
    tokens: TokenIssuer,
) -> AuthResult:
    user = await users.find_by_username(payload.username)
    if user is None or not users.verify_password(user, payload.password):
        logger.info("Failed login attempt")
        return AuthResult(success=False, message=INVALID_CREDENTIALS_MESSAGE)

    token = tokens.issue(user)
    logger.info("User id=%s logged in", user.id)
    return AuthResult(success=True, token=token, message=LOGIN_SUCCESS_MESSAGE)


__all__ = ["login", "INVALID_CREDENTIALS_MESSAGE", "LOGIN_SUCCESS_MESSAGE"]
