"""Typed schemas for user IO."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, field_validator

from moodjournal.core.users.models import THEMES

if TYPE_CHECKING:
    from moodjournal.core.users.models import User


class ThemeUpdateRequest(BaseModel):
    theme_preference: str
    custom_theme_colors: Optional[Dict[str, str]] = None

    @field_validator("theme_preference")
    @classmethod
    def validate_theme(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in THEMES:
            raise ValueError("invalid theme")
        return v


class UserResponse(BaseModel):
    # Response should not re-validate persisted emails.
    id: int
    email: str
    full_name: Optional[str] = None
    is_active: bool
    theme_preference: str
    custom_theme_colors: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(from_attributes=True)


def serialize_user(user: "User") -> UserResponse:
    colors = None
    if user.custom_theme_colors:
        try:
            colors = json.loads(user.custom_theme_colors)
        except ValueError:
            colors = None
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        is_active=user.is_active,
        theme_preference=user.theme_preference,
        custom_theme_colors=colors,
    )
