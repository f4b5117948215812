"""Daily mood rating."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column

from moodjournal.extensions import db

# Labels offered by the UI; storage accepts any label up to 50 chars.
MOOD_PALETTE = ("Happy", "Sad", "Anxious", "Calm", "Excited", "Tired", "Energetic")
INTENSITY_MIN = 1
INTENSITY_MAX = 10


class MoodEntry(db.Model):
    __tablename__ = "mood_entry"
    __table_args__ = (
        db.Index("ix_mood_entry_user_entry_date", "user_id", "entry_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id", ondelete="CASCADE"), index=True, nullable=False)
    entry_date: Mapped[date] = mapped_column(default=date.today, nullable=False)
    mood: Mapped[str] = mapped_column(db.String(50), nullable=False)
    notes: Mapped[str | None] = mapped_column(db.String(500))
    intensity: Mapped[int | None] = mapped_column(db.Integer)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
