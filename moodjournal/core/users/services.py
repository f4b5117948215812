"""User service layer."""

from __future__ import annotations

import json
from typing import Optional

from moodjournal.core.users.models import THEME_CUSTOM, User
from moodjournal.core.users.schemas import ThemeUpdateRequest
from moodjournal.extensions import db


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def update_theme(user: User, payload: ThemeUpdateRequest) -> User:
    user.theme_preference = payload.theme_preference
    if payload.theme_preference == THEME_CUSTOM and payload.custom_theme_colors is not None:
        user.custom_theme_colors = json.dumps(payload.custom_theme_colors)
    db.session.commit()
    return user
