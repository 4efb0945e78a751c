# app/services/token_service.py
from __future__ import annotations

"""
MovieReview — Access Token Service
==================================
- Issues HS256 bearer tokens (sub/jti/nameid/iat/nbf/exp/iss/aud)
- Validates signature, expiry, issuer, audience and required claims
- A missing signing key is a configuration failure, raised loudly at the
  point of use rather than producing unsigned/weak tokens

The issuer is a plain object built from `Settings`; there is no module-level
secret lookup, so tests can construct one with any configuration.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4
import logging

from jose import JWTError, jwt
from pydantic import ValidationError

from app.core.config import Settings
from app.core.exceptions import ConfigurationError, UnauthenticatedError
from app.db.models.user import User
from app.schemas.auth import TokenPayload

logger = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ("sub", "jti", "exp", "iss", "aud")


class TokenIssuer:
    """Mint and validate access tokens for a given configuration."""

    def __init__(
        self,
        *,
        secret: Optional[str],
        issuer: str,
        audience: str,
        expires_in: timedelta,
        algorithm: str = "HS256",
    ) -> None:
        self._secret = secret
        self.issuer = issuer
        self.audience = audience
        self.expires_in = expires_in
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            expires_in=timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
            algorithm=settings.JWT_ALGORITHM,
        )

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigurationError("JWT_SECRET_KEY is not configured")
        return self._secret

    # ─────────────────────────────────────────────────────────────
    # 🪪 Issue
    # ─────────────────────────────────────────────────────────────
    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        """Return a signed token identifying `user`.

        Raises
        ------
        ConfigurationError
            When no signing key is configured.
        """
        secret = self._require_secret()
        now = now or datetime.now(timezone.utc)
        user_id = str(user.id)
        payload: Dict[str, Any] = {
            "sub": user_id,
            "jti": str(uuid4()),
            "nameid": user_id,
            "iat": now,
            "nbf": now,
            "exp": now + self.expires_in,
            "iss": self.issuer,
            "aud": self.audience,
        }
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    # ─────────────────────────────────────────────────────────────
    # 🔓 Decode
    # ─────────────────────────────────────────────────────────────
    def decode(self, token: str) -> TokenPayload:
        """Validate `token` and return its claims.

        Any defect (bad signature, expired, wrong issuer/audience, missing
        `sub`/`jti`, non-numeric subject) raises `UnauthenticatedError`.
        """
        secret = self._require_secret()
        options = {f"require_{claim}": True for claim in _REQUIRED_CLAIMS}
        try:
            raw = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )
            payload = TokenPayload.model_validate(raw)
        except (JWTError, ValidationError) as exc:
            logger.info("Rejected bearer token: %s", exc.__class__.__name__)
            raise UnauthenticatedError("Invalid or expired token.") from exc
        return payload


__all__ = ["TokenIssuer"]
