# app/schemas/reviews.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.common import INT64_MAX, INT64_MIN

MIN_RATING = 1
MAX_RATING = 10


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class _ReviewBody(_CamelModel):
    content: str = Field(..., max_length=2000)
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class ReviewCreate(_ReviewBody):
    # The author is taken from the bearer token, never from the body.
    movie_id: int = Field(..., ge=INT64_MIN, le=INT64_MAX)


class ReviewUpdate(_ReviewBody):
    pass


class ReviewRead(_CamelModel):
    id: int
    content: str
    rating: int
    movie_id: int
    user_id: int
    user_name: str = ""


__all__ = ["MIN_RATING", "MAX_RATING", "ReviewCreate", "ReviewUpdate", "ReviewRead"]
