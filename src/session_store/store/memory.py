"""In-memory session store.

Keeps sessions in a plain dict guarded by a lock.  All data is lost when
the process exits.  Useful for tests, local development, and
single-process deployments.

Classes
-------
- MemoryStore  — dict-backed ephemeral implementation of ``Store``
"""
from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable

from session_store.store.base import Store
from session_store.timeutil import to_unix_millis


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore(Store):
    """Ephemeral, in-process session store.

    Expired records are dropped lazily when ``find`` touches them, or in
    bulk by ``purge_expired``.  No background sweeper runs.

    Parameters
    ----------
    clock:
        Zero-argument callable returning the current time.  Defaults to
        ``datetime.now(timezone.utc)``; tests inject a fake clock.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utcnow
        self._items: dict[str, tuple[bytes, int]] = {}
        self._lock = threading.Lock()

    def _now_ms(self) -> int:
        return to_unix_millis(self._clock())

    # ------------------------------------------------------------------
    # Store interface
    # ------------------------------------------------------------------

    def find(self, token: str) -> tuple[bytes | None, bool]:
        """Return the live payload for ``token``, dropping it if expired."""
        now = self._now_ms()
        with self._lock:
            item = self._items.get(token)
            if item is None:
                return None, False
            payload, expires_at = item
            if now > expires_at:
                del self._items[token]
                return None, False
            return payload, True

    def save(self, token: str, payload: bytes, expiry: datetime) -> None:
        """Store ``payload`` with ``expiry``, replacing any previous record."""
        record = (bytes(payload), to_unix_millis(expiry))
        with self._lock:
            self._items[token] = record

    def delete(self, token: str) -> None:
        with self._lock:
            self._items.pop(token, None)

    def delete_by_pattern(self, pattern: str) -> None:
        """Remove every record whose token starts with ``pattern``."""
        with self._lock:
            doomed = [token for token in self._items if token.startswith(pattern)]
            for token in doomed:
                del self._items[token]

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    def purge_expired(self) -> int:
        """Drop every expired record and return how many were removed."""
        now = self._now_ms()
        with self._lock:
            expired = [t for t, (_, expires_at) in self._items.items() if now > expires_at]
            for token in expired:
                del self._items[token]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        return f"MemoryStore(sessions={len(self)})"
