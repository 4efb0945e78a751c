# app/core/config.py
from __future__ import annotations

"""
# MovieReview — Centralized Configuration (Pydantic v2)

Single `Settings` object with strongly-typed, environment-driven config.

## Goals
- Safe defaults for local/dev; explicit where prod needs secrets.
- Built **once** at startup (`get_settings()`), stored on `app.state` and
  handed to services through FastAPI dependencies.
- The JWT signing key is optional at load time so the app can boot without
  it; token issuance fails loudly instead (see `app.services.token_service`).

## Usage
    from app.core.config import get_settings
    settings = get_settings()
"""

import logging
from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)
load_dotenv()  # harmless in prod; convenient in dev


# ─────────────────────────────────────────────────────────────
# Small helpers
# ─────────────────────────────────────────────────────────────
def _normalize_url_like(v: str | None, *, require_scheme: bool = True) -> str:
    """Normalize to a string URL (scheme added when missing)."""
    s = (v or "").strip()
    if not s:
        return ""
    if require_scheme and not (s.startswith("http://") or s.startswith("https://")):
        s = "https://" + s
    return s


# ─────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────
class Settings(BaseSettings):
    """
    Global application settings sourced from environment.

    Security:
        - `JWT_SECRET_KEY` signs bearer tokens (HS256); issuer/audience are
          validated on every authenticated request.

    Persistence:
        - `DATABASE_URL` wins when set; otherwise an asyncpg DSN is assembled
          from the `POSTGRES_*` parts.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # don't crash on unknown keys
    )

    # ── App meta ──────────────────────────────────────────────
    PROJECT_NAME: str = "MovieReview API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    ENV: Literal["development", "staging", "production"] = "development"
    ENABLE_DOCS: bool = True

    # ── Security / JWT ────────────────────────────────────────
    JWT_SECRET_KEY: Optional[SecretStr] = None
    JWT_ALGORITHM: Literal["HS256"] = "HS256"
    JWT_ISSUER: str = "MovieReview"
    JWT_AUDIENCE: str = "MovieReviewUsers"
    ACCESS_TOKEN_EXPIRE_HOURS: int = Field(24, ge=1, le=24 * 30)

    # ── External ratings (OMDb) ───────────────────────────────
    OMDB_BASE_URL: str = "https://www.omdbapi.com/"
    OMDB_API_KEY: Optional[SecretStr] = None
    OMDB_TIMEOUT_SECONDS: float = Field(5.0, gt=0, le=60)
    RATING_FANOUT_LIMIT: int = Field(8, ge=1, le=64)

    # ── Movie queries ─────────────────────────────────────────
    DEFAULT_PAGE_SIZE: int = Field(10, ge=1)
    MAX_PAGE_SIZE: int = Field(100, ge=1)

    # ── Database ──────────────────────────────────────────────
    DATABASE_URL: Optional[str] = None
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: SecretStr = SecretStr("postgres")
    POSTGRES_DB: str = "moviereview"
    DB_AUTO_CREATE: bool = False
    DB_ECHO: bool = False

    # ── Validators / normalizers ──────────────────────────────
    @field_validator("OMDB_BASE_URL", mode="before")
    @classmethod
    def _normalize_omdb_base(cls, v) -> str:
        return _normalize_url_like(str(v or "https://www.omdbapi.com/"))

    @field_validator("API_PREFIX", mode="before")
    @classmethod
    def _normalize_prefix(cls, v) -> str:
        s = "/" + str(v or "").strip().strip("/")
        return "" if s == "/" else s

    # ── Derived / convenience properties ─────────────────────
    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENV.lower() == "development"

    @property
    def async_database_url(self) -> str:
        """Async SQLAlchemy DSN."""
        if self.DATABASE_URL:
            url = self.DATABASE_URL.strip()
            if url.startswith("postgresql://"):
                return url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return url
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def jwt_secret(self) -> Optional[str]:
        """Plain signing key, or None when not configured (blank counts as missing)."""
        if self.JWT_SECRET_KEY is None:
            return None
        value = self.JWT_SECRET_KEY.get_secret_value().strip()
        return value or None

    @property
    def omdb_api_key(self) -> Optional[str]:
        if self.OMDB_API_KEY is None:
            return None
        value = self.OMDB_API_KEY.get_secret_value().strip()
        return value or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build the settings object once per process."""
    s = Settings()
    if s.jwt_secret is None:
        log.warning("JWT_SECRET_KEY is not configured; token issuance will fail")
    return s


__all__ = ["Settings", "get_settings"]
