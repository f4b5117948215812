import pytest
import sqlalchemy as sa

pytestmark = pytest.mark.integration


def test_head_creates_expected_tables(db_url):
    engine = sa.create_engine(db_url)
    try:
        inspector = sa.inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"user", "session_token", "jwt_blocklist", "journal_entry", "mood_entry"} <= tables

        journal_cols = {c["name"] for c in inspector.get_columns("journal_entry")}
        assert {"entry_date", "content", "title", "tags", "is_protected", "pin_hash", "updated_at"} <= journal_cols

        index_names = {ix["name"] for ix in inspector.get_indexes("mood_entry")}
        assert "ix_mood_entry_user_entry_date" in index_names
    finally:
        engine.dispose()


def test_models_match_migrated_schema(app):
    from moodjournal.extensions import db

    inspector = sa.inspect(db.engine)
    for table in db.metadata.sorted_tables:
        migrated = {c["name"] for c in inspector.get_columns(table.name)}
        assert {c.name for c in table.columns} == migrated, table.name
