#!/usr/bin/env python3
"""Example: Quickstart

Saves, finds, and deletes sessions with the in-memory store.  Swap in
``RedisStore.from_url(...)`` for a shared deployment; the calls are the same.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install session-store
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import session_store
from session_store import MemoryStore


def main() -> None:
    print(f"session-store version: {session_store.__version__}")

    store = MemoryStore()
    expiry = datetime.now(timezone.utc) + timedelta(minutes=30)

    store.save("user_42_abc", b'{"cart": [1, 2]}', expiry)
    store.save("user_42_def", b'{"cart": []}', expiry)
    store.save("user_7_xyz", b'{"cart": [9]}', expiry)

    payload, found = store.find("user_42_abc")
    print(f"  find user_42_abc -> found={found} payload={payload!r}")

    store.delete_by_pattern("user_42_")
    for token in ("user_42_abc", "user_42_def", "user_7_xyz"):
        _, found = store.find(token)
        print(f"  after delete_by_pattern('user_42_'): {token} found={found}")


if __name__ == "__main__":
    main()
