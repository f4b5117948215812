"""Journal JSON API."""

from __future__ import annotations

from datetime import date, timedelta

from flask import Blueprint, Response, current_app, jsonify, redirect, request, session, url_for
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from moodjournal.core.utils.decorators import csrf_protected, jsonable_errors
from moodjournal.core.utils.query_schemas import MonthQuery
from moodjournal.domains.journal.mappers import map_entry, map_entry_summary
from moodjournal.domains.journal.schemas.journal_schemas import (
    EntryLookupQuery,
    JournalEntryListFilter,
    JournalEntryUpdate,
    JournalEntryWrite,
    PinVerifyRequest,
)
from moodjournal.domains.journal.services import export_service, journal_service, streak_service
from moodjournal.domains.journal.services.pin_service import PinVerificationStore

journal_api_bp = Blueprint("journal_api", __name__)

INVALID_PIN_MESSAGE = "Invalid PIN. Please try again."


def _pin_store() -> PinVerificationStore:
    idle = timedelta(minutes=current_app.config.get("PIN_SESSION_IDLE_MINUTES", 30))
    return PinVerificationStore(session, idle_timeout=idle)


def _validation_error(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400


def _pin_required(entry_id: int):
    return jsonify({"ok": False, "error": "pin_required", "entry_id": entry_id}), 403


@journal_api_bp.get("")
@jwt_required()
def list_journal():
    user_id = int(get_jwt_identity())
    try:
        filters = JournalEntryListFilter.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc)
    per_page = filters.per_page or current_app.config.get("JOURNAL_PAGE_SIZE", journal_service.DEFAULT_PAGE_SIZE)
    result = journal_service.list_entries(
        user_id,
        search=filters.search,
        tag=filters.tag,
        date_from=filters.date_from,
        date_to=filters.date_to,
        page=filters.page,
        per_page=per_page,
    )
    summary_length = current_app.config.get("SUMMARY_CONTENT_LENGTH", 200)
    return jsonify(
        {
            "ok": True,
            "items": [map_entry_summary(e, summary_length) for e in result["items"]],
            "page": result["page"],
            "per_page": result["per_page"],
            "pages": result["pages"],
            "total": result["total"],
            "tags": result["tags"],
            "filters": filters.model_dump(mode="json"),
        }
    )


@journal_api_bp.get("/calendar")
@jwt_required()
def journal_calendar():
    user_id = int(get_jwt_identity())
    try:
        query = MonthQuery.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc)
    month = journal_service.get_month(user_id, query.year, query.month)
    summary_length = current_app.config.get("SUMMARY_CONTENT_LENGTH", 200)
    return jsonify(
        {
            "ok": True,
            **month["window"].as_dict(),
            "entries": [map_entry_summary(e, summary_length) for e in month["entries"]],
            "entries_by_date": {
                day.isoformat(): [e.id for e in entries]
                for day, entries in month["entries_by_date"].items()
            },
        }
    )


@journal_api_bp.get("/view")
@jwt_required()
def view_entry():
    user_id = int(get_jwt_identity())
    try:
        query = EntryLookupQuery.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc)
    lookup = journal_service.resolve_entry(
        user_id,
        _pin_store(),
        entry_id=query.entry_id,
        entry_date=query.entry_date,
    )
    if lookup.status == journal_service.LOOKUP_CREATE:
        return redirect(url_for("journal_api.new_entry", date=lookup.entry_date.isoformat()))
    if lookup.status == journal_service.LOOKUP_LIST:
        return redirect(url_for("journal_api.list_journal"))
    if lookup.status == journal_service.LOOKUP_PIN_REQUIRED:
        return _pin_required(lookup.entry.id)
    return jsonify({"ok": True, "entry": map_entry(lookup.entry)})


@journal_api_bp.get("/new")
@jwt_required()
def new_entry():
    try:
        query = EntryLookupQuery.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_error(exc)
    draft = {
        "entry_date": (query.entry_date or date.today()).isoformat(),
        "title": None,
        "content": "",
        "tags": None,
        "is_protected": False,
    }
    return jsonify({"ok": True, "draft": draft})


@journal_api_bp.get("/<int:entry_id>")
@jwt_required()
def get_entry(entry_id: int):
    user_id = int(get_jwt_identity())
    entry = journal_service.get_entry(user_id, entry_id)
    if not entry:
        return jsonify({"ok": False, "error": "not_found"}), 404
    lookup = journal_service.gate_entry(entry, _pin_store())
    if lookup.status == journal_service.LOOKUP_PIN_REQUIRED:
        return _pin_required(entry.id)
    return jsonify({"ok": True, "entry": map_entry(entry)})


@journal_api_bp.post("/<int:entry_id>/verify-pin")
@jwt_required()
@csrf_protected
def verify_pin(entry_id: int):
    user_id = int(get_jwt_identity())
    try:
        data = PinVerifyRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return _validation_error(exc)
    try:
        result = journal_service.verify_pin(user_id, entry_id, data.pin, _pin_store())
    except ValueError:
        return jsonify({"ok": False, "error": "not_found"}), 404
    if not result.verified:
        return (
            jsonify(
                {
                    "ok": False,
                    "error": "invalid_pin",
                    "message": INVALID_PIN_MESSAGE,
                    "entry_id": entry_id,
                }
            ),
            400,
        )
    return jsonify({"ok": True, "entry": map_entry(result.entry)})


@journal_api_bp.post("")
@jwt_required()
@csrf_protected
def create_journal_entry():
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryWrite.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    user_id = int(get_jwt_identity())
    try:
        entry = journal_service.create_entry(
            user_id,
            content=data.content,
            entry_date=data.entry_date or date.today(),
            title=data.title,
            tags=data.tags,
            is_protected=data.is_protected,
            pin=data.pin,
            pins=_pin_store(),
        )
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "id": entry.id, "entry": map_entry(entry)}), 201


@journal_api_bp.put("/<int:entry_id>")
@jwt_required()
@csrf_protected
def update_journal_entry(entry_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryUpdate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    user_id = int(get_jwt_identity())
    try:
        entry = journal_service.update_entry(
            user_id,
            entry_id,
            content=data.content,
            entry_date=data.entry_date,
            title=data.title,
            tags=data.tags,
            is_protected=data.is_protected,
            pin=data.pin,
        )
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    if not entry:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "entry": map_entry(entry)})


@journal_api_bp.delete("/<int:entry_id>")
@jwt_required()
@csrf_protected
def delete_journal_entry(entry_id: int):
    user_id = int(get_jwt_identity())
    deleted = journal_service.delete_entry(user_id, entry_id)
    return jsonify({"ok": True, "deleted": deleted})


@journal_api_bp.get("/export")
@jwt_required()
def export_journal():
    user_id = int(get_jwt_identity())
    export = export_service.export_entries(user_id, request.args.get("format", "json"))
    if export is None:
        return redirect(url_for("journal_api.list_journal"))
    return Response(
        export.data,
        mimetype=export.mimetype,
        headers={"Content-Disposition": f"attachment; filename={export.filename}"},
    )


@journal_api_bp.get("/streak")
@jwt_required()
def journal_streak():
    user_id = int(get_jwt_identity())
    return jsonify({"streak": streak_service.current_streak(user_id)})
