"""Absolute-expiry timestamp conversion."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def to_unix_millis(expiry: datetime) -> int:
    """Return ``expiry`` as whole milliseconds since the Unix epoch.

    Naive datetimes are taken as local wall-clock time, the same rule
    ``datetime.timestamp()`` applies.  Sub-millisecond precision is
    truncated.
    """
    if expiry.tzinfo is None:
        expiry = expiry.astimezone()
    return (expiry - _EPOCH) // _ONE_MS
