"""Query-string schemas shared across domains."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


def blank_to_none(value):
    """Empty form/query values mean "not supplied"."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class MonthQuery(BaseModel):
    year: Optional[int] = Field(default=None, ge=1, le=9999)
    month: Optional[int] = Field(default=None, ge=1, le=12)

    @field_validator("*", mode="before")
    @classmethod
    def blank_params(cls, v):
        return blank_to_none(v)
