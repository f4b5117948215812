"""User model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from moodjournal.extensions import db

THEME_LIGHT = "light"
THEME_DARK = "dark"
THEME_CUSTOM = "custom"
THEMES = (THEME_LIGHT, THEME_DARK, THEME_CUSTOM)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class User(db.Model, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    full_name: Mapped[str | None] = mapped_column(db.String(255))
    theme_preference: Mapped[str] = mapped_column(db.String(16), default=THEME_LIGHT, nullable=False)
    # JSON object of CSS colour overrides, only meaningful for the custom theme.
    custom_theme_colors: Mapped[str | None] = mapped_column(db.Text)
    is_active: Mapped[bool] = mapped_column(default=True)
