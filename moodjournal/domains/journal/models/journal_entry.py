"""Personal journal entry."""

from __future__ import annotations

from datetime import date, datetime
from typing import List

from sqlalchemy.orm import Mapped, mapped_column

from moodjournal.extensions import db


def split_tags(raw: str | None) -> List[str]:
    """Split a comma-separated tag string, dropping blanks after trimming."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


class JournalEntry(db.Model):
    __tablename__ = "journal_entry"
    __table_args__ = (
        db.Index("ix_journal_entry_user_entry_date", "user_id", "entry_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id", ondelete="CASCADE"), index=True, nullable=False)
    entry_date: Mapped[date] = mapped_column(default=date.today, nullable=False)
    content: Mapped[str] = mapped_column(db.Text, nullable=False)
    title: Mapped[str | None] = mapped_column(db.String(200))
    # Free-form comma-separated text; filtered by substring, split at read time.
    tags: Mapped[str | None] = mapped_column(db.Text)
    is_protected: Mapped[bool] = mapped_column(default=False, nullable=False)
    pin_hash: Mapped[str | None] = mapped_column(db.String(128))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(nullable=True)

    @property
    def tag_list(self) -> List[str]:
        return split_tags(self.tags)

    @property
    def requires_pin(self) -> bool:
        return bool(self.is_protected and self.pin_hash)
