"""Dashboard API."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required

from moodjournal.domains.dashboard.services.dashboard_service import get_dashboard
from moodjournal.domains.journal.services import streak_service

dashboard_api_bp = Blueprint("dashboard_api", __name__)


@dashboard_api_bp.get("")
@jwt_required()
def dashboard():
    user_id = int(get_jwt_identity())
    data = get_dashboard(user_id, summary_length=current_app.config.get("SUMMARY_CONTENT_LENGTH", 200))
    return jsonify({"ok": True, **data})


@dashboard_api_bp.get("/streak")
@jwt_required()
def streak():
    user_id = int(get_jwt_identity())
    return jsonify({"streak": streak_service.current_streak(user_id)})
