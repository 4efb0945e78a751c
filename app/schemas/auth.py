# app/schemas/auth.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.common import INT64_MAX


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ──────────────── Register ────────────────
class RegisterRequest(_CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    # Strength rules: app.core.security.PASSWORD_RULES
    password: str = Field(..., min_length=1)


# ──────────────── Login ────────────────
class LoginRequest(_CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResult(_CamelModel):
    """Outcome of register/login. Never persisted."""

    success: bool
    token: Optional[str] = None
    message: str


# ──────────────── Token claims ────────────────
class TokenPayload(BaseModel):
    """Validated bearer token claims."""

    sub: str
    jti: str
    exp: int
    iat: Optional[int] = None
    iss: Optional[str] = None
    aud: Optional[str] = None

    @field_validator("sub")
    @classmethod
    def sub_is_user_id(cls, v: str) -> str:
        # ASCII digits only ("²" is a digit to str.isdigit()).
        if not (v.isascii() and v.isdecimal()) or int(v) > INT64_MAX:
            raise ValueError("subject is not a user id")
        return v

    @property
    def user_id(self) -> int:
        return int(self.sub)


__all__ = ["RegisterRequest", "LoginRequest", "AuthResult", "TokenPayload"]
