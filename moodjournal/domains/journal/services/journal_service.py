"""Journal services: CRUD, listing, calendar grouping and the PIN gate."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional

from moodjournal.core.utils.dates import month_window
from moodjournal.core.utils.pagination import paginate
from moodjournal.domains.journal.models import JournalEntry
from moodjournal.domains.journal.models.journal_entry import split_tags
from moodjournal.domains.journal.services.pin_service import (
    PinVerificationStore,
    hash_pin,
    pin_matches,
)
from moodjournal.extensions import db

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
TITLE_MAX = 200

LOOKUP_FOUND = "found"
LOOKUP_PIN_REQUIRED = "pin_required"
LOOKUP_CREATE = "create"
LOOKUP_LIST = "list"


@dataclass
class EntryLookup:
    """Outcome of resolving an entry for display."""

    status: str
    entry: Optional[JournalEntry] = None
    entry_date: Optional[date] = None


@dataclass
class PinVerification:
    verified: bool
    entry: JournalEntry


def create_entry(
    user_id: int,
    *,
    content: str,
    entry_date: Optional[date] = None,
    title: Optional[str] = None,
    tags: Optional[str] = None,
    is_protected: bool = False,
    pin: Optional[str] = None,
    pins: Optional[PinVerificationStore] = None,
) -> JournalEntry:
    content_text = _validate_content(content)
    entry = JournalEntry(
        user_id=user_id,
        entry_date=entry_date or date.today(),
        content=content_text,
        title=_normalize_title(title),
        tags=(tags or "").strip() or None,
        is_protected=bool(is_protected),
        # Protection without a PIN stores no hash; such entries are never gated.
        pin_hash=hash_pin(pin) if is_protected and pin else None,
        created_at=datetime.utcnow(),
        updated_at=None,
    )
    db.session.add(entry)
    db.session.commit()
    if pins is not None:
        pins.clear(entry.id)
    logger.info("Journal entry %s created for user %s", entry.id, user_id)
    return entry


def update_entry(
    user_id: int,
    entry_id: int,
    *,
    content: str,
    entry_date: date,
    title: Optional[str] = None,
    tags: Optional[str] = None,
    is_protected: bool = False,
    pin: Optional[str] = None,
) -> Optional[JournalEntry]:
    """Overwrite every editable field of an owned entry, date included."""
    entry = get_entry(user_id, entry_id)
    if not entry:
        return None
    entry.content = _validate_content(content)
    entry.title = _normalize_title(title)
    entry.tags = (tags or "").strip() or None
    entry.entry_date = entry_date
    entry.updated_at = datetime.utcnow()

    if is_protected:
        entry.is_protected = True
        if pin:
            entry.pin_hash = hash_pin(pin)
    else:
        entry.is_protected = False
        entry.pin_hash = None

    db.session.commit()
    logger.info("Journal entry %s updated for user %s", entry.id, user_id)
    return entry


def delete_entry(user_id: int, entry_id: int) -> bool:
    entry = get_entry(user_id, entry_id)
    if not entry:
        return False
    db.session.delete(entry)
    db.session.commit()
    logger.info("Journal entry %s deleted for user %s", entry_id, user_id)
    return True


def get_entry(user_id: int, entry_id: int) -> Optional[JournalEntry]:
    return JournalEntry.query.filter_by(id=entry_id, user_id=user_id).first()


def find_entry_for_date(user_id: int, entry_date: date) -> Optional[JournalEntry]:
    return (
        JournalEntry.query.filter_by(user_id=user_id, entry_date=entry_date)
        .order_by(JournalEntry.created_at, JournalEntry.id)
        .first()
    )


def resolve_entry(
    user_id: int,
    pins: PinVerificationStore,
    *,
    entry_id: Optional[int] = None,
    entry_date: Optional[date] = None,
) -> EntryLookup:
    """Find an entry by id (preferred) or date and apply the PIN gate.

    When nothing matches, a supplied date sends the caller to the create flow
    for that date; otherwise back to the list.
    """
    entry = None
    if entry_id is not None:
        entry = get_entry(user_id, entry_id)
    elif entry_date is not None:
        entry = find_entry_for_date(user_id, entry_date)

    if entry is None:
        if entry_date is not None:
            return EntryLookup(status=LOOKUP_CREATE, entry_date=entry_date)
        return EntryLookup(status=LOOKUP_LIST)

    return gate_entry(entry, pins)


def gate_entry(entry: JournalEntry, pins: PinVerificationStore) -> EntryLookup:
    if entry.requires_pin and not pins.is_verified(entry.id):
        return EntryLookup(status=LOOKUP_PIN_REQUIRED, entry=entry)
    return EntryLookup(status=LOOKUP_FOUND, entry=entry)


def verify_pin(
    user_id: int,
    entry_id: int,
    pin: str,
    pins: PinVerificationStore,
) -> PinVerification:
    entry = get_entry(user_id, entry_id)
    if not entry or not entry.is_protected or not entry.pin_hash:
        raise ValueError("not_found")
    if not pin_matches(pin, entry.pin_hash):
        logger.warning("Invalid PIN attempt for journal entry %s", entry_id)
        return PinVerification(verified=False, entry=entry)
    pins.mark_verified(entry.id)
    return PinVerification(verified=True, entry=entry)


def list_entries(
    user_id: int,
    *,
    search: Optional[str] = None,
    tag: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    page: int = 1,
    per_page: int = DEFAULT_PAGE_SIZE,
) -> dict:
    """Filtered, newest-first page of entries plus the user's full tag list."""
    query = JournalEntry.query.filter_by(user_id=user_id)
    if search:
        query = query.filter(
            db.or_(
                JournalEntry.title.contains(search, autoescape=True),
                JournalEntry.content.contains(search, autoescape=True),
            )
        )
    if tag:
        # Substring match on the raw string: "art" also matches "cart".
        query = query.filter(JournalEntry.tags.contains(tag, autoescape=True))
    if date_from:
        query = query.filter(JournalEntry.entry_date >= date_from)
    if date_to:
        query = query.filter(JournalEntry.entry_date <= date_to)

    query = query.order_by(JournalEntry.entry_date.desc(), JournalEntry.id.desc())
    result = paginate(query, page=page, per_page=per_page)
    result["tags"] = all_tags(user_id)
    return result


def all_tags(user_id: int) -> List[str]:
    """Distinct trimmed tags across every entry of the user, sorted."""
    rows = (
        db.session.query(JournalEntry.tags)
        .filter(JournalEntry.user_id == user_id)
        .filter(JournalEntry.tags.isnot(None), JournalEntry.tags != "")
        .all()
    )
    tags = set()
    for (raw,) in rows:
        tags.update(split_tags(raw))
    return sorted(tags)


def get_month(
    user_id: int,
    year: Optional[int] = None,
    month: Optional[int] = None,
    today: Optional[date] = None,
) -> dict:
    window = month_window(year, month, today=today)
    entries = (
        JournalEntry.query.filter_by(user_id=user_id)
        .filter(JournalEntry.entry_date >= window.start, JournalEntry.entry_date <= window.end)
        .order_by(JournalEntry.entry_date.desc(), JournalEntry.id.desc())
        .all()
    )
    by_date: Dict[date, List[JournalEntry]] = OrderedDict()
    for entry in entries:
        by_date.setdefault(entry.entry_date, []).append(entry)
    return {"window": window, "entries": entries, "entries_by_date": by_date}


def all_entries(user_id: int) -> List[JournalEntry]:
    return (
        JournalEntry.query.filter_by(user_id=user_id)
        .order_by(JournalEntry.entry_date.desc(), JournalEntry.id.desc())
        .all()
    )


def recent_entries(user_id: int, limit: int = 5) -> List[JournalEntry]:
    return (
        JournalEntry.query.filter_by(user_id=user_id)
        .order_by(JournalEntry.entry_date.desc(), JournalEntry.id.desc())
        .limit(limit)
        .all()
    )


def count_entries(user_id: int, since: Optional[date] = None, until: Optional[date] = None) -> int:
    query = JournalEntry.query.filter_by(user_id=user_id)
    if since is not None:
        query = query.filter(JournalEntry.entry_date >= since)
    if until is not None:
        query = query.filter(JournalEntry.entry_date <= until)
    return query.count()


def _validate_content(content: Optional[str]) -> str:
    if not content or not content.strip():
        raise ValueError("validation_error")
    return content


def _normalize_title(title: Optional[str]) -> Optional[str]:
    title_norm = (title or "").strip() or None
    if title_norm and len(title_norm) > TITLE_MAX:
        raise ValueError("validation_error")
    return title_norm
