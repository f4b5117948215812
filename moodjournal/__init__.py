"""MoodJournal application factory and bootstrap."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask, redirect, url_for

from moodjournal.config import config_by_name
from moodjournal.extensions import init_extensions, jwt


def create_app(
    config_name: Optional[str] = None,
    config_overrides: Optional[Mapping[str, Any]] = None,
) -> Flask:
    """Create and configure the MoodJournal Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    if config_overrides:
        app.config.update(config_overrides)

    instance_root.mkdir(parents=True, exist_ok=True)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    is_sqlite = db_uri.startswith("sqlite:")
    if is_sqlite and db_uri.startswith("sqlite:///"):
        db_path = db_uri.replace("sqlite:///", "", 1)
        abs_path = project_root / db_path
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{abs_path}"

    if not is_sqlite:
        # Drop the sqlite busy timeout; postgres understands connect_timeout instead.
        engine_opts = app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {})
        connect_args = dict(engine_opts.get("connect_args") or {})
        if "timeout" in connect_args:
            timeout_val = connect_args.pop("timeout")
            if db_uri.startswith("postgresql"):
                connect_args.setdefault("connect_timeout", timeout_val)
        if connect_args:
            engine_opts["connect_args"] = connect_args
        else:
            engine_opts.pop("connect_args", None)

    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    @app.get("/")
    def index():
        return redirect(url_for("dashboard_api.dashboard"))

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from moodjournal.scripts.seed_demo import register_commands

    register_commands(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from moodjournal.core.auth.controllers import auth_bp  # local import to avoid circulars
    from moodjournal.core.users.controllers import user_api_bp
    from moodjournal.domains.dashboard.controllers.dashboard_api import dashboard_api_bp
    from moodjournal.domains.journal.controllers.journal_api import journal_api_bp
    from moodjournal.domains.mood.controllers.mood_api import mood_api_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(user_api_bp, url_prefix="/api/users")
    app.register_blueprint(journal_api_bp, url_prefix="/api/journal")
    app.register_blueprint(mood_api_bp, url_prefix="/api/mood")
    app.register_blueprint(dashboard_api_bp, url_prefix="/api/dashboard")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """JWT callbacks: blocklist lookups and JSON error envelopes."""

    @jwt.token_in_blocklist_loader
    def _token_revoked(_jwt_header, jwt_payload: dict) -> bool:
        from moodjournal.core.auth.auth_service import is_token_revoked

        return is_token_revoked(jwt_payload.get("jti"))

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return {"ok": False, "error": "unauthorized", "details": reason}, 401

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return {"ok": False, "error": "unauthorized", "details": reason}, 401

    @jwt.expired_token_loader
    def _expired_token(_jwt_header, _jwt_payload):
        return {"ok": False, "error": "token_expired"}, 401

    @jwt.revoked_token_loader
    def _revoked_token(_jwt_header, _jwt_payload):
        return {"ok": False, "error": "token_revoked"}, 401
