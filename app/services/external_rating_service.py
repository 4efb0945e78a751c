# app/services/external_rating_service.py
from __future__ import annotations

"""
MovieReview — External (IMDb) rating lookup via OMDb
====================================================
Best-effort enrichment: `get_imdb_rating()` never raises. Every failure mode
(blank title, no API key, transport error/timeout, non-2xx, malformed body,
"not found" response, missing rating) collapses to the `"N/A"` sentinel.

Request shape: ``GET {OMDB_BASE_URL}?t=<title>&apikey=<key>``, one attempt,
bounded by `OMDB_TIMEOUT_SECONDS`.
"""

from typing import Any, Optional
import logging

import httpx

from app.core.config import Settings
from app.schemas.movies import IMDB_RATING_UNAVAILABLE

logger = logging.getLogger(__name__)


class OmdbRatingGateway:
    """Client for the OMDb API.

    Pass a shared `httpx.AsyncClient` to reuse connections (the app does this
    from its lifespan); without one a short-lived client is opened per call.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str],
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_settings(
        cls, settings: Settings, client: Optional[httpx.AsyncClient] = None
    ) -> "OmdbRatingGateway":
        return cls(
            base_url=settings.OMDB_BASE_URL,
            api_key=settings.omdb_api_key,
            timeout=settings.OMDB_TIMEOUT_SECONDS,
            client=client,
        )

    async def _fetch(self, title: str) -> httpx.Response:
        params = {"t": title, "apikey": self.api_key}
        if self._client is not None:
            return await self._client.get(self.base_url, params=params, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(self.base_url, params=params)

    async def get_imdb_rating(self, title: str) -> str:
        """IMDb rating for `title` as reported by OMDb, or "N/A"."""
        if not title or not title.strip():
            return IMDB_RATING_UNAVAILABLE
        if not self.api_key:
            return IMDB_RATING_UNAVAILABLE

        try:
            response = await self._fetch(title.strip())
            response.raise_for_status()
            data: Any = response.json()
        except httpx.HTTPError as e:
            logger.warning("OMDb request failed for %r: %s", title, e)
            return IMDB_RATING_UNAVAILABLE
        except ValueError:
            logger.warning("OMDb returned a non-JSON body for %r", title)
            return IMDB_RATING_UNAVAILABLE

        if not isinstance(data, dict) or str(data.get("Response", "")).lower() == "false":
            return IMDB_RATING_UNAVAILABLE

        rating = data.get("imdbRating")
        if not isinstance(rating, str) or not rating.strip():
            return IMDB_RATING_UNAVAILABLE
        return rating.strip()


__all__ = ["OmdbRatingGateway"]
