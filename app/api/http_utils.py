# app/api/http_utils.py
from __future__ import annotations

"""Small HTTP helpers shared by routers."""

from fastapi import Response


def set_sensitive_cache(response: Response) -> None:
    """Mark a response carrying credentials as non-cacheable (idempotent)."""
    response.headers.setdefault("Cache-Control", "no-store")
    response.headers.setdefault("Pragma", "no-cache")
    response.headers.setdefault("Expires", "0")


__all__ = ["set_sensitive_cache"]
