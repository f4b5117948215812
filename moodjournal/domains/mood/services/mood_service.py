"""Mood services: save/delete, calendar month and aggregate statistics."""

from __future__ import annotations

import logging
from collections import Counter, OrderedDict
from datetime import date, datetime
from typing import Dict, List, Optional

from moodjournal.core.utils.dates import month_window, rolling_window_start, window_start
from moodjournal.domains.mood.models import MoodEntry
from moodjournal.domains.mood.models.mood_entry import INTENSITY_MAX, INTENSITY_MIN
from moodjournal.extensions import db

logger = logging.getLogger(__name__)

MOOD_MAX = 50
NOTES_MAX = 500
DEFAULT_TREND_INTENSITY = 5


def save_entry(
    user_id: int,
    *,
    mood: str,
    entry_date: Optional[date] = None,
    notes: Optional[str] = None,
    intensity: Optional[int] = None,
    entry_id: Optional[int] = None,
) -> MoodEntry:
    """Overwrite the owned entry ``entry_id`` or insert a new one.

    Inserts do not look for an existing entry on the same date.
    """
    mood_label = _validate_mood(mood)
    notes_text = _validate_notes(notes)
    intensity_val = _validate_intensity(intensity)

    if entry_id is not None:
        entry = get_entry(user_id, entry_id)
        if not entry:
            raise ValueError("not_found")
        entry.mood = mood_label
        entry.notes = notes_text
        entry.intensity = intensity_val
        entry.entry_date = entry_date or entry.entry_date
    else:
        entry = MoodEntry(
            user_id=user_id,
            entry_date=entry_date or date.today(),
            mood=mood_label,
            notes=notes_text,
            intensity=intensity_val,
            created_at=datetime.utcnow(),
        )
        db.session.add(entry)
    db.session.commit()
    logger.info("Mood entry %s saved for user %s", entry.id, user_id)
    return entry


def delete_entry(user_id: int, entry_id: int) -> bool:
    entry = get_entry(user_id, entry_id)
    if not entry:
        return False
    db.session.delete(entry)
    db.session.commit()
    logger.info("Mood entry %s deleted for user %s", entry_id, user_id)
    return True


def get_entry(user_id: int, entry_id: int) -> Optional[MoodEntry]:
    return MoodEntry.query.filter_by(id=entry_id, user_id=user_id).first()


def find_entry_for_date(user_id: int, entry_date: date) -> Optional[MoodEntry]:
    return (
        MoodEntry.query.filter_by(user_id=user_id, entry_date=entry_date)
        .order_by(MoodEntry.created_at.desc(), MoodEntry.id.desc())
        .first()
    )


def get_month(
    user_id: int,
    year: Optional[int] = None,
    month: Optional[int] = None,
    today: Optional[date] = None,
) -> dict:
    window = month_window(year, month, today=today)
    entries = (
        MoodEntry.query.filter_by(user_id=user_id)
        .filter(MoodEntry.entry_date >= window.start, MoodEntry.entry_date <= window.end)
        .order_by(MoodEntry.entry_date.desc(), MoodEntry.created_at.desc(), MoodEntry.id.desc())
        .all()
    )
    # Duplicate rows for one date are possible; the newest one wins.
    moods_by_date: Dict[date, str] = OrderedDict()
    for entry in entries:
        moods_by_date.setdefault(entry.entry_date, entry.mood)
    return {"window": window, "entries": entries, "moods_by_date": moods_by_date}


def entries_between(user_id: int, since: date, until: date) -> List[MoodEntry]:
    """Entries dated within ``since``..``until`` inclusive, oldest first."""
    return (
        MoodEntry.query.filter_by(user_id=user_id)
        .filter(MoodEntry.entry_date >= since, MoodEntry.entry_date <= until)
        .order_by(MoodEntry.entry_date, MoodEntry.id)
        .all()
    )


def compute_statistics(
    user_id: int,
    window_days: int = 30,
    today: Optional[date] = None,
    rolling: bool = False,
) -> dict:
    """Mood counts and mean intensity over a trailing window ending today.

    By default the window starts ``window_days`` before today, both ends
    included. ``rolling`` narrows it to exactly ``window_days`` dates.
    """
    today = today or date.today()
    start = rolling_window_start(window_days, today) if rolling else window_start(window_days, today)
    entries = entries_between(user_id, start, today)
    counts = Counter(entry.mood for entry in entries)
    intensities = [entry.intensity for entry in entries if entry.intensity is not None]
    average = sum(intensities) / len(intensities) if intensities else 0
    return {
        "window_days": window_days,
        "mood_counts": [{"mood": mood, "count": count} for mood, count in counts.most_common()],
        "total_entries": len(entries),
        "average_intensity": float(average),
    }


def mood_trend(user_id: int, days: int = 7, today: Optional[date] = None) -> List[dict]:
    """One point per entry over the last ``days`` dates, oldest first."""
    today = today or date.today()
    return [
        {
            "date": entry.entry_date,
            "mood": entry.mood,
            "intensity": entry.intensity if entry.intensity is not None else DEFAULT_TREND_INTENSITY,
        }
        for entry in entries_between(user_id, rolling_window_start(days, today), today)
    ]


def _validate_mood(mood: Optional[str]) -> str:
    label = (mood or "").strip()
    if not label or len(label) > MOOD_MAX:
        raise ValueError("validation_error")
    return label


def _validate_notes(notes: Optional[str]) -> Optional[str]:
    text = (notes or "").strip() or None
    if text and len(text) > NOTES_MAX:
        raise ValueError("validation_error")
    return text


def _validate_intensity(intensity: Optional[int]) -> Optional[int]:
    if intensity is None:
        return None
    try:
        value = int(intensity)
    except (TypeError, ValueError):
        raise ValueError("validation_error")
    if value < INTENSITY_MIN or value > INTENSITY_MAX:
        raise ValueError("validation_error")
    return value
