import sys
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config as AlembicConfig

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from moodjournal import create_app
from moodjournal.core.auth.auth_service import issue_tokens
from moodjournal.core.auth.password import hash_password
from moodjournal.core.users.models import User
from moodjournal.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


def _alembic_config(db_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "moodjournal" / "migrations"))
    cfg.set_main_option("moodjournal_env", "testing")
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


@pytest.fixture()
def db_url(tmp_path):
    """A throwaway SQLite file migrated to head, one per test."""
    url = f"sqlite:///{tmp_path / 'test.db'}"
    command.upgrade(_alembic_config(url), "head")
    return url


@pytest.fixture()
def app(db_url):
    app = create_app("testing", {"SQLALCHEMY_DATABASE_URI": db_url})
    ctx = app.app_context()
    ctx.push()
    try:
        yield app
    finally:
        db.session.remove()
        db.engine.dispose()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def create_user(app):
    """Factory for persisted users."""

    def _create(email: str = "writer@moodjournal.io", password: str = "secret123", full_name: str = "Test Writer"):
        user = User(email=email, password_hash=hash_password(password), full_name=full_name)
        db.session.add(user)
        db.session.commit()
        return user

    return _create


@pytest.fixture()
def user(create_user):
    return create_user()


@pytest.fixture()
def other_user(create_user):
    return create_user(email="intruder@moodjournal.io", full_name="Other Writer")


def _prime_csrf(client) -> str:
    """Insert CSRF token into client session."""
    token = "test-csrf-token"
    with client.session_transaction() as sess:
        sess["_csrf_token"] = token
    return token


def _auth_headers(access_token: str, csrf_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}", "X-CSRF-Token": csrf_token}


@pytest.fixture()
def auth_headers(client, user):
    tokens = issue_tokens(user)
    return _auth_headers(tokens["access_token"], _prime_csrf(client))


@pytest.fixture()
def other_headers(app, other_user):
    """Headers for a second user, used with a separate test client."""
    tokens = issue_tokens(other_user)
    return {"Authorization": f"Bearer {tokens['access_token']}"}
