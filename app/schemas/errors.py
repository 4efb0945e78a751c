# app/schemas/errors.py
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorResponse(BaseModel):
    """Uniform error envelope. `details` is only filled in development."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    message: str
    details: Optional[Any] = None


__all__ = ["ErrorResponse"]
