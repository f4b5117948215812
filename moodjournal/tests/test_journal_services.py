"""Journal service tests: CRUD, protection, listing and calendar grouping."""

from datetime import date, timedelta
from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration

from moodjournal.domains.journal.models import JournalEntry
from moodjournal.domains.journal.services import journal_service
from moodjournal.domains.journal.services.pin_service import PinVerificationStore, hash_pin
from moodjournal.extensions import db

TODAY = date(2026, 10, 19)


def _entry(user_id, **kwargs):
    kwargs.setdefault("content", "Some thoughts")
    kwargs.setdefault("entry_date", TODAY)
    return journal_service.create_entry(user_id, **kwargs)


# ==================== Create / Update / Delete ====================


def test_create_entry_sets_created_not_updated(app, user):
    entry = _entry(user.id, title="  Morning  ", tags="work, ideas")

    assert entry.id is not None
    assert entry.title == "Morning"
    assert entry.created_at is not None
    assert entry.updated_at is None
    assert entry.tag_list == ["work", "ideas"]


def test_create_entry_blank_content_fails(app, user):
    with pytest.raises(ValueError, match="validation_error"):
        _entry(user.id, content="   \n ")


def test_create_entry_title_too_long_fails(app, user):
    with pytest.raises(ValueError, match="validation_error"):
        _entry(user.id, title="x" * 201)


def test_protected_with_pin_stores_hash(app, user):
    entry = _entry(user.id, is_protected=True, pin="2468")

    assert entry.pin_hash == hash_pin("2468")
    assert entry.requires_pin


def test_protected_without_pin_is_never_gated(app, user):
    entry = _entry(user.id, is_protected=True)

    assert entry.is_protected is True
    assert entry.pin_hash is None
    lookup = journal_service.gate_entry(entry, PinVerificationStore({}))
    assert lookup.status == journal_service.LOOKUP_FOUND


def test_pin_ignored_when_not_protected(app, user):
    entry = _entry(user.id, is_protected=False, pin="2468")

    assert entry.pin_hash is None


def test_create_clears_stale_marker_for_new_id(app, user):
    session = {"JournalPin_1": "verified"}
    entry = _entry(user.id, is_protected=True, pin="2468", pins=PinVerificationStore(session))

    assert entry.id == 1
    assert "JournalPin_1" not in session


def test_update_overwrites_fields_and_stamps(app, user):
    entry = _entry(user.id, title="Old", tags="a")
    updated = journal_service.update_entry(
        user.id,
        entry.id,
        content="New body",
        entry_date=TODAY - timedelta(days=1),
        title=None,
        tags=None,
    )

    assert updated.content == "New body"
    assert updated.title is None
    assert updated.tags is None
    assert updated.entry_date == TODAY - timedelta(days=1)
    assert updated.updated_at is not None


def test_update_keeps_hash_unless_new_pin(app, user):
    entry = _entry(user.id, is_protected=True, pin="1111")
    journal_service.update_entry(user.id, entry.id, content="edit", entry_date=TODAY, is_protected=True)
    assert entry.pin_hash == hash_pin("1111")

    journal_service.update_entry(
        user.id, entry.id, content="edit", entry_date=TODAY, is_protected=True, pin="2222"
    )
    assert entry.pin_hash == hash_pin("2222")


def test_unprotecting_clears_hash_even_with_pin(app, user):
    entry = _entry(user.id, is_protected=True, pin="1111")
    updated = journal_service.update_entry(
        user.id, entry.id, content="edit", entry_date=TODAY, is_protected=False, pin="9999"
    )

    assert updated.is_protected is False
    assert updated.pin_hash is None


def test_delete_entry_and_noop(app, user):
    entry = _entry(user.id)

    assert journal_service.delete_entry(user.id, entry.id) is True
    assert journal_service.delete_entry(user.id, entry.id) is False
    assert db.session.get(JournalEntry, entry.id) is None


# ==================== Ownership ====================


def test_foreign_entries_behave_as_missing(app, user, other_user):
    entry = _entry(user.id, is_protected=True, pin="1234")

    assert journal_service.get_entry(other_user.id, entry.id) is None
    assert journal_service.update_entry(other_user.id, entry.id, content="hijack", entry_date=TODAY) is None
    assert journal_service.delete_entry(other_user.id, entry.id) is False
    with pytest.raises(ValueError, match="not_found"):
        journal_service.verify_pin(other_user.id, entry.id, "1234", PinVerificationStore({}))
    assert db.session.get(JournalEntry, entry.id).content == "Some thoughts"


# ==================== Lookup & PIN ====================


def test_resolve_entry_by_date_and_fallbacks(app, user):
    first = _entry(user.id, content="first")
    _entry(user.id, content="second")
    pins = PinVerificationStore({})

    found = journal_service.resolve_entry(user.id, pins, entry_date=TODAY)
    assert found.status == journal_service.LOOKUP_FOUND
    assert found.entry.id == first.id

    missing_day = TODAY - timedelta(days=5)
    create = journal_service.resolve_entry(user.id, pins, entry_date=missing_day)
    assert create.status == journal_service.LOOKUP_CREATE
    assert create.entry_date == missing_day

    listing = journal_service.resolve_entry(user.id, pins, entry_id=999)
    assert listing.status == journal_service.LOOKUP_LIST


def test_verify_pin_marks_session(app, user):
    entry = _entry(user.id, is_protected=True, pin="1234")
    session = {}
    pins = PinVerificationStore(session)

    assert journal_service.resolve_entry(user.id, pins, entry_id=entry.id).status == "pin_required"

    wrong = journal_service.verify_pin(user.id, entry.id, "0000", pins)
    assert wrong.verified is False
    assert "JournalPin_%d" % entry.id not in session

    ok = journal_service.verify_pin(user.id, entry.id, "1234", pins)
    assert ok.verified is True
    assert journal_service.resolve_entry(user.id, pins, entry_id=entry.id).status == "found"


def test_verify_pin_on_unprotected_entry_is_not_found(app, user):
    entry = _entry(user.id)
    with pytest.raises(ValueError, match="not_found"):
        journal_service.verify_pin(user.id, entry.id, "1234", PinVerificationStore({}))


# ==================== Listing ====================


def test_pagination_past_the_end(app, user):
    for i in range(25):
        _entry(user.id, content=f"entry {i}", entry_date=TODAY - timedelta(days=i))

    first = journal_service.list_entries(user.id, page=1, per_page=10)
    assert first["total"] == 25
    assert first["pages"] == 3
    assert len(first["items"]) == 10
    assert first["items"][0].entry_date == TODAY

    last = journal_service.list_entries(user.id, page=3, per_page=10)
    assert len(last["items"]) == 5

    beyond = journal_service.list_entries(user.id, page=4, per_page=10)
    assert beyond["items"] == []
    assert beyond["pages"] == 3


def test_tags_are_trimmed_not_case_folded(app, user):
    _entry(user.id, tags="Work, personal")
    _entry(user.id, tags="work")
    _entry(user.id, tags="")
    _entry(user.id, tags=" , personal ,")

    assert journal_service.all_tags(user.id) == ["Work", "personal", "work"]


def test_tag_filter_is_substring_match(app, user):
    _entry(user.id, content="shopping", tags="cart")
    _entry(user.id, content="painting", tags="art, hobby")
    _entry(user.id, content="other", tags="sport")

    result = journal_service.list_entries(user.id, tag="art")
    assert sorted(e.content for e in result["items"]) == ["painting", "shopping"]


def test_search_matches_title_or_content(app, user):
    _entry(user.id, title="Garden plans", content="tomatoes")
    _entry(user.id, title=None, content="walked in the garden")
    _entry(user.id, title="Work", content="meetings 100%")

    assert journal_service.list_entries(user.id, search="garden")["total"] == 2
    # LIKE wildcards in the term are literal
    assert journal_service.list_entries(user.id, search="0%")["total"] == 1
    assert journal_service.list_entries(user.id, search="%")["total"] == 1


def test_date_range_is_inclusive(app, user):
    for offset in range(5):
        _entry(user.id, entry_date=TODAY - timedelta(days=offset))

    result = journal_service.list_entries(
        user.id,
        date_from=TODAY - timedelta(days=3),
        date_to=TODAY - timedelta(days=1),
    )
    assert [e.entry_date for e in result["items"]] == [TODAY - timedelta(days=n) for n in (1, 2, 3)]


def test_listing_is_scoped_to_user(app, user, other_user):
    _entry(user.id, tags="mine")
    _entry(other_user.id, tags="theirs")

    result = journal_service.list_entries(user.id)
    assert result["total"] == 1
    assert result["tags"] == ["mine"]


# ==================== Calendar ====================


def test_get_month_groups_by_date(app, user):
    _entry(user.id, entry_date=date(2026, 2, 1), content="a")
    _entry(user.id, entry_date=date(2026, 2, 1), content="b")
    _entry(user.id, entry_date=date(2026, 2, 28), content="c")
    _entry(user.id, entry_date=date(2026, 3, 1), content="outside")

    month = journal_service.get_month(user.id, 2026, 2)
    assert month["window"].start == date(2026, 2, 1)
    assert month["window"].end == date(2026, 2, 28)
    assert len(month["entries"]) == 3
    assert [len(v) for v in month["entries_by_date"].values()] == [1, 2]
    assert month["window"].prev == (2026, 1)
    assert month["window"].next == (2026, 3)


def test_get_month_defaults_to_current(app, user):
    month = journal_service.get_month(user.id, 2026, None, today=TODAY)
    assert (month["window"].year, month["window"].month) == (2026, 10)


def test_count_entries_since(app, user):
    for offset in (0, 6, 7, 8, 40):
        _entry(user.id, entry_date=TODAY - timedelta(days=offset))

    assert journal_service.count_entries(user.id) == 5
    assert journal_service.count_entries(user.id, since=TODAY - timedelta(days=7)) == 3


# ==================== Logging ====================


def test_wrong_pin_is_logged_without_secrets(app, user):
    entry = _entry(user.id, is_protected=True, pin="1234")

    with patch("moodjournal.domains.journal.services.journal_service.logger") as mock_logger:
        journal_service.verify_pin(user.id, entry.id, "9999", PinVerificationStore({}))

    mock_logger.warning.assert_called_once()
    logged = " ".join(str(arg) for arg in mock_logger.warning.call_args[0])
    assert "9999" not in logged
    assert "1234" not in logged
