"""Mood mappers for DTO responses."""

from __future__ import annotations

from moodjournal.domains.mood.models import MoodEntry
from moodjournal.domains.mood.schemas.mood_schemas import MoodEntryResponse


def map_mood(entry: MoodEntry) -> dict:
    return MoodEntryResponse(
        id=entry.id,
        entry_date=entry.entry_date,
        mood=entry.mood,
        notes=entry.notes,
        intensity=entry.intensity,
        created_at=entry.created_at,
    ).model_dump(mode="json")
