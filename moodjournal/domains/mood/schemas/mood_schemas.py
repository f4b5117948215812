"""Mood request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from moodjournal.core.utils.query_schemas import blank_to_none
from moodjournal.domains.mood.models.mood_entry import INTENSITY_MAX, INTENSITY_MIN

MOOD_MAX = 50
NOTES_MAX = 500


class MoodEntryWrite(BaseModel):
    id: Optional[int] = None
    entry_date: Optional[date] = None
    mood: str = Field(min_length=1, max_length=MOOD_MAX)
    notes: Optional[str] = Field(default=None, max_length=NOTES_MAX)
    intensity: Optional[int] = Field(default=None, ge=INTENSITY_MIN, le=INTENSITY_MAX)

    @field_validator("mood")
    @classmethod
    def mood_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please select a mood")
        return v.strip()

    @field_validator("id", "entry_date", "notes", "intensity", mode="before")
    @classmethod
    def blank_optional(cls, v):
        return blank_to_none(v)


class MoodFormQuery(BaseModel):
    entry_date: Optional[date] = Field(default=None, alias="date")

    @field_validator("*", mode="before")
    @classmethod
    def blank_params(cls, v):
        return blank_to_none(v)


class StatisticsQuery(BaseModel):
    window_days: int = Field(default=30, ge=1, le=3650)

    @field_validator("window_days", mode="before")
    @classmethod
    def default_window(cls, v):
        return 30 if blank_to_none(v) is None else v


class MoodEntryResponse(BaseModel):
    id: int
    entry_date: date
    mood: str
    notes: Optional[str]
    intensity: Optional[int]
    created_at: Optional[datetime]


class MoodCount(BaseModel):
    mood: str
    count: int


class MoodStatisticsResponse(BaseModel):
    window_days: int
    mood_counts: List[MoodCount]
    total_entries: int
    average_intensity: float
