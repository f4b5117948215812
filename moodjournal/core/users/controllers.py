"""User controllers (API)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from moodjournal.core.users.schemas import ThemeUpdateRequest, serialize_user
from moodjournal.core.users.services import get_user, update_theme
from moodjournal.core.utils.decorators import csrf_protected, jsonable_errors

user_api_bp = Blueprint("user_api", __name__)


@user_api_bp.get("/me")
@jwt_required()
def api_me():
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "user": serialize_user(user).model_dump()})


@user_api_bp.patch("/me/theme")
@jwt_required()
@csrf_protected
def api_update_theme():
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    try:
        data = ThemeUpdateRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    user = update_theme(user, data)
    return jsonify({"ok": True, "user": serialize_user(user).model_dump()})
