#!/usr/bin/env python3
"""Example: Redis store

Demonstrates expiry and pattern deletion against a running Redis server.

Usage:
    REDIS_URL=redis://localhost:6379/0 python examples/02_redis_store.py

Requirements:
    pip install session-store
    A reachable Redis server (6.0 or newer for UNLINK).
"""
from __future__ import annotations

import os
import time
from datetime import datetime, timedelta, timezone

from session_store import BackendError, RedisStore


def main() -> None:
    url = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
    with RedisStore.from_url(url, prefix="example:session:") as store:
        try:
            now = datetime.now(timezone.utc)
            store.save("tok1", b"data", now + timedelta(minutes=1))
            print(f"  find tok1 -> {store.find('tok1')}")

            store.save("tok1", b"data2", now + timedelta(milliseconds=100))
            time.sleep(0.2)
            print(f"  find tok1 after expiry -> {store.find('tok1')}")

            store.save("a_1", b"x", now + timedelta(minutes=1))
            store.save("a_2", b"y", now + timedelta(minutes=1))
            store.delete_by_pattern("a_")
            print(f"  a_1 -> {store.find('a_1')}, a_2 -> {store.find('a_2')}")
        except BackendError as exc:
            print(f"  Redis unavailable: {exc}")


if __name__ == "__main__":
    main()
