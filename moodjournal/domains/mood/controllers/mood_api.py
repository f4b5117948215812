"""Mood JSON API."""

from __future__ import annotations

from datetime import date

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from moodjournal.core.utils.decorators import csrf_protected, jsonable_errors
from moodjournal.core.utils.query_schemas import MonthQuery
from moodjournal.domains.mood.mappers import map_mood
from moodjournal.domains.mood.models.mood_entry import MOOD_PALETTE
from moodjournal.domains.mood.schemas.mood_schemas import (
    MoodEntryWrite,
    MoodFormQuery,
    MoodStatisticsResponse,
    StatisticsQuery,
)
from moodjournal.domains.mood.services import mood_service

mood_api_bp = Blueprint("mood_api", __name__)


def _validation_error(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400


@mood_api_bp.get("")
@jwt_required()
def mood_calendar():
    user_id = int(get_jwt_identity())
    try:
        query = MonthQuery.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc)
    month = mood_service.get_month(user_id, query.year, query.month)
    return jsonify(
        {
            "ok": True,
            **month["window"].as_dict(),
            "entries": [map_mood(e) for e in month["entries"]],
            "moods_by_date": {day.isoformat(): mood for day, mood in month["moods_by_date"].items()},
        }
    )


@mood_api_bp.get("/new")
@jwt_required()
def mood_form():
    """Load the form for a date: the existing entry when there is one."""
    user_id = int(get_jwt_identity())
    try:
        query = MoodFormQuery.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc)
    entry_date = query.entry_date or date.today()
    existing = mood_service.find_entry_for_date(user_id, entry_date)
    if existing:
        draft = map_mood(existing)
    else:
        draft = {"id": None, "entry_date": entry_date.isoformat(), "mood": "", "notes": None, "intensity": None}
    return jsonify({"ok": True, "entry": draft, "palette": list(MOOD_PALETTE)})


@mood_api_bp.post("")
@jwt_required()
@csrf_protected
def save_mood():
    payload = request.get_json(silent=True) or {}
    try:
        data = MoodEntryWrite.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    user_id = int(get_jwt_identity())
    try:
        entry = mood_service.save_entry(
            user_id,
            entry_id=data.id,
            entry_date=data.entry_date or date.today(),
            mood=data.mood,
            notes=data.notes,
            intensity=data.intensity,
        )
    except ValueError as exc:
        if str(exc) == "not_found":
            return jsonify({"ok": False, "error": "not_found"}), 404
        return jsonify({"ok": False, "error": "validation_error"}), 400
    status = 200 if data.id is not None else 201
    return (
        jsonify(
            {
                "ok": True,
                "id": entry.id,
                "entry": map_mood(entry),
                "year": entry.entry_date.year,
                "month": entry.entry_date.month,
            }
        ),
        status,
    )


@mood_api_bp.delete("/<int:entry_id>")
@jwt_required()
@csrf_protected
def delete_mood(entry_id: int):
    user_id = int(get_jwt_identity())
    deleted = mood_service.delete_entry(user_id, entry_id)
    return jsonify({"ok": True, "deleted": deleted})


@mood_api_bp.get("/statistics")
@jwt_required()
def mood_statistics():
    user_id = int(get_jwt_identity())
    try:
        query = StatisticsQuery.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc)
    stats = mood_service.compute_statistics(user_id, window_days=query.window_days)
    return jsonify({"ok": True, **MoodStatisticsResponse(**stats).model_dump()})
