"""Dashboard aggregations over journal and mood data."""

from __future__ import annotations

from datetime import date
from typing import Optional

from moodjournal.core.utils.dates import rolling_window_start
from moodjournal.domains.journal.mappers import map_entry_summary
from moodjournal.domains.journal.services import journal_service, streak_service
from moodjournal.domains.mood.services import mood_service

STATS_WINDOW_DAYS = 30
WEEK_DAYS = 7
RECENT_LIMIT = 5


def get_dashboard(user_id: int, today: Optional[date] = None, summary_length: int = 200) -> dict:
    # Windows cover exactly N dates ending today: "last 7 days" is today and the 6 before it.
    today = today or date.today()

    # Journal counts
    total_entries = journal_service.count_entries(user_id)
    entries_last_30 = journal_service.count_entries(
        user_id, since=rolling_window_start(STATS_WINDOW_DAYS, today), until=today
    )
    entries_last_7 = journal_service.count_entries(
        user_id, since=rolling_window_start(WEEK_DAYS, today), until=today
    )

    # Mood breakdown
    stats = mood_service.compute_statistics(user_id, window_days=STATS_WINDOW_DAYS, today=today, rolling=True)

    recent = journal_service.recent_entries(user_id, limit=RECENT_LIMIT)
    trend = mood_service.mood_trend(user_id, days=WEEK_DAYS, today=today)

    return {
        "total_entries": total_entries,
        "entries_last_30_days": entries_last_30,
        "entries_last_7_days": entries_last_7,
        "current_streak": streak_service.current_streak(user_id, today=today),
        "mood_counts": stats["mood_counts"],
        "mood_entries_last_30_days": stats["total_entries"],
        "average_intensity": round(stats["average_intensity"], 1),
        "recent_entries": [map_entry_summary(e, summary_length) for e in recent],
        "mood_trend": [
            {"date": point["date"].isoformat(), "mood": point["mood"], "intensity": point["intensity"]}
            for point in trend
        ],
    }
