"""Journal request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from moodjournal.core.utils.query_schemas import blank_to_none

TITLE_MAX = 200
PIN_MIN = 4
PIN_MAX = 20


class JournalEntryWrite(BaseModel):
    """Payload for both create and full update."""

    entry_date: Optional[date] = None
    content: str = Field(min_length=1)
    title: Optional[str] = Field(default=None, max_length=TITLE_MAX)
    tags: Optional[str] = None
    is_protected: bool = False
    pin: Optional[str] = Field(default=None, min_length=PIN_MIN, max_length=PIN_MAX)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v

    @field_validator("title", "tags", "pin", "entry_date", mode="before")
    @classmethod
    def blank_optional(cls, v):
        return blank_to_none(v)


class JournalEntryUpdate(JournalEntryWrite):
    """Full overwrite: the entry date is always resubmitted."""

    entry_date: date


class JournalEntryListFilter(BaseModel):
    search: Optional[str] = None
    tag: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    page: int = Field(default=1, ge=1)
    per_page: Optional[int] = Field(default=None, ge=1, le=100)

    @field_validator("*", mode="before")
    @classmethod
    def blank_params(cls, v):
        return blank_to_none(v)

    @field_validator("page", mode="before")
    @classmethod
    def default_page(cls, v):
        return 1 if blank_to_none(v) is None else v


class EntryLookupQuery(BaseModel):
    entry_id: Optional[int] = Field(default=None, alias="id")
    entry_date: Optional[date] = Field(default=None, alias="date")

    @field_validator("*", mode="before")
    @classmethod
    def blank_params(cls, v):
        return blank_to_none(v)


class PinVerifyRequest(BaseModel):
    pin: str = ""


class JournalEntryResponse(BaseModel):
    id: int
    entry_date: date
    title: Optional[str]
    content: str
    tags: Optional[str]
    tag_list: List[str]
    is_protected: bool
    has_pin: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class JournalEntrySummary(BaseModel):
    id: int
    entry_date: date
    title: Optional[str]
    content: str
    tags: Optional[str]
    tag_list: List[str]
    is_protected: bool


class JournalExportRecord(BaseModel):
    id: int
    user_id: int
    entry_date: date
    title: Optional[str]
    content: str
    tags: Optional[str]
    is_protected: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
