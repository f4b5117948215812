"""Calendar helpers shared by the journal and mood domains."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple


@dataclass(frozen=True)
class MonthWindow:
    year: int
    month: int
    start: date
    end: date

    @property
    def name(self) -> str:
        return self.start.strftime("%B %Y")

    @property
    def prev(self) -> Tuple[int, int]:
        return (self.year - 1, 12) if self.month == 1 else (self.year, self.month - 1)

    @property
    def next(self) -> Tuple[int, int]:
        return (self.year + 1, 1) if self.month == 12 else (self.year, self.month + 1)

    def as_dict(self) -> dict:
        prev_year, prev_month = self.prev
        next_year, next_month = self.next
        return {
            "year": self.year,
            "month": self.month,
            "month_name": self.name,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "prev": {"year": prev_year, "month": prev_month},
            "next": {"year": next_year, "month": next_month},
        }


def month_window(
    year: Optional[int] = None,
    month: Optional[int] = None,
    today: Optional[date] = None,
) -> MonthWindow:
    """Inclusive first/last day of a month.

    The current month is used unless both ``year`` and ``month`` are given.
    """
    if year is None or month is None:
        ref = today or date.today()
        year, month = ref.year, ref.month
    if not 1 <= month <= 12:
        raise ValueError("validation_error")
    last_day = calendar.monthrange(year, month)[1]
    return MonthWindow(year=year, month=month, start=date(year, month, 1), end=date(year, month, last_day))


def window_start(days: int, today: Optional[date] = None) -> date:
    """First date of a trailing window of ``days`` days ending today."""
    return (today or date.today()) - timedelta(days=max(days, 0))


def rolling_window_start(days: int, today: Optional[date] = None) -> date:
    """First date of a window of exactly ``days`` calendar days ending today."""
    return (today or date.today()) - timedelta(days=max(days - 1, 0))
