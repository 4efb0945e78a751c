# app/schemas/movies.py
from __future__ import annotations

"""Movie DTOs: write models, the query model and the aggregated read model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.common import INT32_MAX, INT32_MIN

IMDB_RATING_UNAVAILABLE = "N/A"

MIN_RELEASE_YEAR = 1800
MAX_RELEASE_YEAR = 2025


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MovieCreate(_CamelModel):
    title: str = Field(..., max_length=100)
    description: str = Field("", max_length=500)
    release_year: int = Field(..., ge=INT32_MIN, le=INT32_MAX)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class MovieUpdate(_CamelModel):
    """Full replacement of the editable fields; nothing is optional."""

    title: str = Field(..., max_length=100)
    description: str = Field(..., max_length=500)
    release_year: int = Field(..., ge=MIN_RELEASE_YEAR, le=MAX_RELEASE_YEAR)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class MovieQuery(BaseModel):
    """Filter/sort/paginate request. Values are normalized by the movie service."""

    name: Optional[str] = None
    sort_by: Optional[str] = None
    is_descending: bool = False
    page_number: int = 1
    page_size: int = 10


class MovieRead(_CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    release_year: int
    review_count: int = 0
    average_rating: float = 0.0
    imdb_rating: Optional[str] = None


__all__ = [
    "IMDB_RATING_UNAVAILABLE",
    "MIN_RELEASE_YEAR",
    "MAX_RELEASE_YEAR",
    "MovieCreate",
    "MovieUpdate",
    "MovieQuery",
    "MovieRead",
]
