"""Cursor-based key enumeration.

``iter_matching_keys`` drives the ``SCAN`` protocol lazily: each step asks
the backend for the next batch and yields it, stopping once the cursor
comes back to the start sentinel.  The scan function is injected, so any
callable speaking the ``(cursor, match, count) -> (cursor, keys)`` shape
can stand in for a server.

The traversal is not a snapshot.  Keys created or removed while it runs
may or may not be reported, and a key may be reported more than once.
"""
from __future__ import annotations

import re
from typing import Callable, Iterator, Optional, Sequence, Tuple, Union

SCAN_START = 0

KeyT = Union[bytes, str]
ScanFn = Callable[[int, str, Optional[int]], Tuple[int, Sequence[KeyT]]]

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_glob(text: str) -> str:
    """Escape Redis glob metacharacters so ``text`` matches literally."""
    return _GLOB_SPECIAL.sub(r"\\\1", text)


def build_match(prefix: str, pattern: str) -> str:
    """Return the ``MATCH`` expression for keys starting with ``prefix + pattern``."""
    return escape_glob(prefix + pattern) + "*"


def has_prefix(key: KeyT, prefix: str) -> bool:
    """Return True if ``key`` (bytes or text) starts with ``prefix``."""
    if isinstance(key, bytes):
        return key.startswith(prefix.encode("utf-8"))
    return key.startswith(prefix)


def iter_matching_keys(
    scan: ScanFn,
    match: str,
    count: int | None = None,
) -> Iterator[list[KeyT]]:
    """Yield batches of keys matching ``match`` until the scan completes.

    Each call starts a fresh pass from ``SCAN_START``.  Empty batches are
    skipped.  Exceptions raised by ``scan`` propagate unchanged.

    Parameters
    ----------
    scan:
        Callable issuing one scan step.
    match:
        Glob expression passed through to ``scan``.
    count:
        Optional batch-size hint passed through to ``scan``.
    """
    cursor = SCAN_START
    while True:
        cursor, keys = scan(cursor, match, count)
        if keys:
            yield list(keys)
        if int(cursor) == SCAN_START:
            return
