"""Writing streaks: consecutive days with at least one journal entry."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from moodjournal.domains.journal.models import JournalEntry
from moodjournal.extensions import db


def compute_streak(entry_dates: Iterable[date], today: Optional[date] = None) -> int:
    """Count consecutive entry days ending today, or yesterday when today is empty.

    A missing entry for today does not break the streak yet, so the walk
    always continues from yesterday. Dates after the cursor (today once
    consumed, or future-dated entries) are skipped; the first date before the
    cursor is a gap and ends the walk.
    """
    today = today or date.today()
    dates = sorted(set(entry_dates), reverse=True)
    if not dates:
        return 0

    streak = 1 if today in dates else 0
    cursor = today - timedelta(days=1)

    for entry_date in dates:
        if entry_date == cursor:
            streak += 1
            cursor -= timedelta(days=1)
        elif entry_date < cursor:
            break
    return streak


def entry_dates(user_id: int) -> List[date]:
    """Distinct entry dates for a user, newest first."""
    rows = (
        db.session.query(JournalEntry.entry_date)
        .filter(JournalEntry.user_id == user_id)
        .distinct()
        .order_by(JournalEntry.entry_date.desc())
        .all()
    )
    return [row[0] for row in rows]


def current_streak(user_id: int, today: Optional[date] = None) -> int:
    return compute_streak(entry_dates(user_id), today=today)
