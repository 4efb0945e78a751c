# app/api/routers/auth.py
from __future__ import annotations

"""
Authentication API — MovieReview
================================

Endpoints
---------
POST /Auth/Register
    Create an account; returns an `AuthResult` with a bearer token.
POST /Auth/Login
    Username + password sign-in; returns an `AuthResult` with a bearer token.

Failures use the error envelope: 400 for a rejected registration (taken
username, weak password), 401 for bad credentials. Token-bearing responses
are marked `no-store`.
"""

from fastapi import APIRouter, Body, Depends, Response

from app.api.http_utils import set_sensitive_cache
from app.core.dependencies import get_token_issuer, get_user_repository
from app.core.exceptions import BadInputError, UnauthenticatedError
from app.repositories.users import UserRepository
from app.schemas.auth import AuthResult, LoginRequest, RegisterRequest
from app.services.auth.login_service import login as login_user
from app.services.auth.signup_service import register as register_user
from app.services.token_service import TokenIssuer

router = APIRouter(prefix="/Auth", tags=["Auth"])


# ──────────────────────────────────────────────────────────────
# 📝 POST /Auth/Register
# ──────────────────────────────────────────────────────────────
@router.post("/Register", response_model=AuthResult, summary="Register a new account")
async def register(
    response: Response,
    payload: RegisterRequest = Body(...),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthResult:
    result = await register_user(payload, users=users, tokens=tokens)
    if not result.success:
        raise BadInputError(result.message)
    set_sensitive_cache(response)
    return result


# ──────────────────────────────────────────────────────────────
# 🔐 POST /Auth/Login
# ──────────────────────────────────────────────────────────────
@router.post("/Login", response_model=AuthResult, summary="Username + password login")
async def login(
    response: Response,
    payload: LoginRequest = Body(...),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthResult:
    result = await login_user(payload, users=users, tokens=tokens)
    if not result.success:
        raise UnauthenticatedError(result.message)
    set_sensitive_cache(response)
    return result


__all__ = ["router", "register", "login"]
