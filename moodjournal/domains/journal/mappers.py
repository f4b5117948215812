"""Journal mappers for DTO responses."""

from __future__ import annotations

from moodjournal.domains.journal.models import JournalEntry
from moodjournal.domains.journal.schemas.journal_schemas import (
    JournalEntryResponse,
    JournalEntrySummary,
    JournalExportRecord,
)

ELLIPSIS = "..."


def truncate(text: str, length: int = 200) -> str:
    if len(text) <= length:
        return text
    return text[:length] + ELLIPSIS


def map_entry(entry: JournalEntry) -> dict:
    return JournalEntryResponse(
        id=entry.id,
        entry_date=entry.entry_date,
        title=entry.title,
        content=entry.content,
        tags=entry.tags,
        tag_list=entry.tag_list,
        is_protected=entry.is_protected,
        has_pin=bool(entry.pin_hash),
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    ).model_dump(mode="json")


def map_entry_summary(entry: JournalEntry, content_length: int = 200) -> dict:
    return JournalEntrySummary(
        id=entry.id,
        entry_date=entry.entry_date,
        title=entry.title,
        content=truncate(entry.content, content_length),
        tags=entry.tags,
        tag_list=entry.tag_list,
        is_protected=entry.is_protected,
    ).model_dump(mode="json")


def map_export_record(entry: JournalEntry) -> dict:
    return JournalExportRecord(
        id=entry.id,
        user_id=entry.user_id,
        entry_date=entry.entry_date,
        title=entry.title,
        content=entry.content,
        tags=entry.tags,
        is_protected=entry.is_protected,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    ).model_dump(mode="json")
