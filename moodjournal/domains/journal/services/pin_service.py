"""PIN hashing and per-session verification markers for protected entries."""

from __future__ import annotations

import base64
import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Callable, MutableMapping, Optional

PIN_KEY_PREFIX = "JournalPin_"
LAST_SEEN_KEY = f"{PIN_KEY_PREFIX}_last_seen"
VERIFIED = "verified"
DEFAULT_IDLE_TIMEOUT = timedelta(minutes=30)


def hash_pin(pin: str) -> str:
    """Base64 of the SHA-256 digest of the UTF-8 PIN."""
    digest = hashlib.sha256(pin.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def pin_matches(pin: str, pin_hash: Optional[str]) -> bool:
    if not pin_hash:
        return False
    return secrets.compare_digest(hash_pin(pin or ""), pin_hash)


def pin_key(entry_id: int) -> str:
    return f"{PIN_KEY_PREFIX}{entry_id}"


class PinVerificationStore:
    """Remembers which protected entries were unlocked in this session.

    Backed by any mutable mapping; in requests that is Flask's ``session``.
    All markers are dropped once the session has been idle for longer than
    ``idle_timeout``.
    """

    def __init__(
        self,
        session: MutableMapping,
        idle_timeout: timedelta = DEFAULT_IDLE_TIMEOUT,
        clock: Callable[[], datetime] = datetime.utcnow,
    ) -> None:
        self._session = session
        self._idle_timeout = idle_timeout
        self._clock = clock

    def is_verified(self, entry_id: int) -> bool:
        self._expire_if_idle()
        verified = self._session.get(pin_key(entry_id)) == VERIFIED
        if verified:
            self._touch()
        return verified

    def mark_verified(self, entry_id: int) -> None:
        self._expire_if_idle()
        self._session[pin_key(entry_id)] = VERIFIED
        self._touch()

    def clear(self, entry_id: int) -> None:
        self._session.pop(pin_key(entry_id), None)

    def clear_all(self) -> None:
        for key in [k for k in self._session.keys() if k.startswith(PIN_KEY_PREFIX)]:
            self._session.pop(key, None)

    def _touch(self) -> None:
        self._session[LAST_SEEN_KEY] = self._clock().isoformat()

    def _expire_if_idle(self) -> None:
        last_seen = self._session.get(LAST_SEEN_KEY)
        if not last_seen:
            return
        try:
            idle = self._clock() - datetime.fromisoformat(last_seen)
        except (TypeError, ValueError):
            self.clear_all()
            return
        if idle > self._idle_timeout:
            self.clear_all()
