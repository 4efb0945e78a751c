# app/core/security.py
from __future__ import annotations

"""
MovieReview — Password Hashing & Policy
=======================================
- bcrypt hashing through Passlib's `CryptContext`
- Constant-time verification
- The account password policy (checked before anything is persisted)

Token creation/validation lives in `app.services.token_service`; the bearer
dependency lives in `app.core.dependencies`.
"""

from typing import Callable, List, Tuple

from passlib.context import CryptContext

# ───────────────────────────────────────────────
# 🔐 Password Hashing Utilities
# ───────────────────────────────────────────────
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Return a salted hash using Passlib's bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time verify of a plaintext password against a stored hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unparseable stored hash.
        return False


# ───────────────────────────────────────────────
# 📏 Password Policy
# ───────────────────────────────────────────────
MIN_PASSWORD_LENGTH = 6


def _is_ascii_alnum(c: str) -> bool:
    return "0" <= c <= "9" or "a" <= c <= "z" or "A" <= c <= "Z"


PASSWORD_RULES: Tuple[Tuple[Callable[[str], bool], str], ...] = (
    (
        lambda p: len(p) >= MIN_PASSWORD_LENGTH,
        f"Passwords must be at least {MIN_PASSWORD_LENGTH} characters.",
    ),
    (
        lambda p: any(not _is_ascii_alnum(c) for c in p),
        "Passwords must have at least one non alphanumeric character.",
    ),
    (
        lambda p: any("0" <= c <= "9" for c in p),
        "Passwords must have at least one digit ('0'-'9').",
    ),
    (
        lambda p: any("a" <= c <= "z" for c in p),
        "Passwords must have at least one lowercase ('a'-'z').",
    ),
)


def password_policy_errors(password: str) -> List[str]:
    """Every rule the password breaks, in rule order (empty when acceptable)."""
    return [message for check, message in PASSWORD_RULES if not check(password or "")]


__all__ = [
    "pwd_context",
    "get_password_hash",
    "verify_password",
    "MIN_PASSWORD_LENGTH",
    "PASSWORD_RULES",
    "password_policy_errors",
]
