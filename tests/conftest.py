"""Shared fixtures for session-store tests.

``FakeRedis`` is a small in-process double covering the commands the
Redis store issues (GET, MULTI/SET/PEXPIREAT/EXEC, DEL, UNLINK, SCAN).
Time is a plain millisecond counter advanced by the test, so expiry can
be exercised without sleeping.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError


def _glob_to_regex(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts) + r"\Z", re.DOTALL)


class FakePipeline:
    def __init__(self, owner: "FakeRedis") -> None:
        self._owner = owner
        self._ops: list[tuple[str, tuple[Any, ...]]] = []

    def __enter__(self) -> "FakePipeline":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._ops.clear()

    def set(self, key: str, value: bytes) -> None:
        self._ops.append(("set", (key, value)))

    def pexpireat(self, key: str, when: int) -> None:
        self._ops.append(("pexpireat", (key, when)))

    def execute(self) -> list[Any]:
        self._owner._check("execute")
        self._owner.transactions += 1
        results = [getattr(self._owner, f"_{name}")(*args) for name, args in self._ops]
        self._ops.clear()
        return results


class FakeRedis:
    """Single-database Redis double with a manual millisecond clock."""

    def __init__(self, now_ms: int | None = None, page_size: int = 2) -> None:
        if now_ms is None:
            now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
        self.now_ms = now_ms
        self.page_size = page_size
        self.data: dict[str, Any] = {}
        self.expires: dict[str, int] = {}
        self.fail_on: set[str] = set()
        self.unlink_budget: int | None = None
        self.transactions = 0
        self.scan_calls = 0
        self.unlinked: list[str] = []

    # -- helpers -------------------------------------------------------

    def _check(self, command: str) -> None:
        if command in self.fail_on:
            raise RedisConnectionError(f"connection lost during {command}")

    def _alive(self, key: str) -> bool:
        if key not in self.data:
            return False
        when = self.expires.get(key)
        if when is not None and self.now_ms > when:
            del self.data[key]
            del self.expires[key]
            return False
        return True

    def _set(self, key: str, value: Any) -> bool:
        self.data[key] = value
        self.expires.pop(key, None)
        return True

    def _pexpireat(self, key: str, when: int) -> int:
        if not self._alive(key):
            return 0
        if when <= self.now_ms:
            del self.data[key]
            self.expires.pop(key, None)
        else:
            self.expires[key] = when
        return 1

    @staticmethod
    def _name(key: Any) -> str:
        return key.decode("utf-8") if isinstance(key, bytes) else key

    # -- client surface ------------------------------------------------

    def advance(self, millis: int) -> None:
        self.now_ms += millis

    def get(self, key: str) -> Any:
        self._check("get")
        if not self._alive(key):
            return None
        value = self.data[key]
        if not isinstance(value, bytes):
            raise ResponseError(
                "WRONGTYPE Operation against a key holding the wrong kind of value"
            )
        return value

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        assert transaction is True
        return FakePipeline(self)

    def delete(self, *keys: Any) -> int:
        self._check("delete")
        removed = 0
        for key in keys:
            name = self._name(key)
            if self._alive(name):
                del self.data[name]
                self.expires.pop(name, None)
                removed += 1
        return removed

    def unlink(self, *keys: Any) -> int:
        self._check("unlink")
        if self.unlink_budget is not None:
            if self.unlink_budget == 0:
                raise RedisConnectionError("connection lost during unlink")
            self.unlink_budget -= 1
        self.unlinked.extend(self._name(k) for k in keys)
        return self.delete(*keys)

    def scan(self, cursor: int = 0, match: str | None = None, count: int | None = None) -> tuple[int, list[bytes]]:
        self._check("scan")
        self.scan_calls += 1
        keys = sorted(k for k in list(self.data) if self._alive(k))
        page = keys[cursor : cursor + self.page_size]
        next_cursor = cursor + self.page_size
        if next_cursor >= len(keys):
            next_cursor = 0
        if match is not None:
            regex = _glob_to_regex(match)
            page = [k for k in page if regex.match(k)]
        return next_cursor, [k.encode("utf-8") for k in page]

    def close(self) -> None:
        pass


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()
