"""Redis session store.

Each session is stored as a Redis string under ``<prefix><token>`` with an
absolute millisecond expiry, so Redis itself discards expired sessions.

Classes
-------
- RedisStore  — Redis-backed implementation of ``Store``
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Sequence

import redis as redis_module
from redis.exceptions import RedisError

from session_store.config import DEFAULT_PREFIX, StoreConfig
from session_store.errors import BackendError, ConfigError
from session_store.store.base import Store
from session_store.store.lookup import MALFORMED, Absent, classify_reply, unwrap_lookup
from session_store.store.scan import KeyT, build_match, has_prefix, iter_matching_keys
from session_store.timeutil import to_unix_millis

logger = logging.getLogger(__name__)


class RedisStore(Store):
    """Persists sessions in a Redis instance.

    The store holds no mutable state of its own.  Every command checks a
    connection out of the client's pool and returns it when the command
    (or the ``MULTI``/``EXEC`` block, for ``save``) finishes, including on
    error, so a single instance can be shared between threads.

    Parameters
    ----------
    client:
        A ``redis.Redis`` client (or anything with the same methods).  It
        should return raw bytes, i.e. ``decode_responses=False``.
    prefix:
        String prepended to every token.  Defaults to ``"scs:session:"``.
    scan_count:
        Optional ``COUNT`` hint for ``SCAN`` during ``delete_by_pattern``.
    owns_client:
        When True, ``close`` also closes ``client``.  Set by the factories.
    """

    def __init__(
        self,
        client: Any,
        prefix: str = DEFAULT_PREFIX,
        scan_count: int | None = None,
        *,
        owns_client: bool = False,
    ) -> None:
        if not prefix:
            raise ConfigError("prefix must not be empty")
        self._client = client
        self._prefix = prefix
        self._scan_count = scan_count
        self._owns_client = owns_client

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: StoreConfig) -> "RedisStore":
        """Build a store with its own connection pool from ``config``."""
        options: dict[str, Any] = {}
        if config.socket_timeout is not None:
            options["socket_timeout"] = config.socket_timeout
        client = redis_module.Redis.from_url(config.url, **options)
        return cls(
            client,
            prefix=config.prefix,
            scan_count=config.scan_count,
            owns_client=True,
        )

    @classmethod
    def from_url(cls, url: str, prefix: str = DEFAULT_PREFIX, **kwargs: Any) -> "RedisStore":
        """Shorthand for ``from_config(StoreConfig(url=url, prefix=prefix, ...))``."""
        return cls.from_config(StoreConfig(url=url, prefix=prefix, **kwargs))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @property
    def prefix(self) -> str:
        return self._prefix

    def _key(self, token: str) -> str:
        """Return the namespaced Redis key for ``token``."""
        return f"{self._prefix}{token}"

    def _scan(self, cursor: int, match: str, count: int | None) -> tuple[int, Sequence[KeyT]]:
        return self._client.scan(cursor=cursor, match=match, count=count)

    # ------------------------------------------------------------------
    # Store interface
    # ------------------------------------------------------------------

    def find(self, token: str) -> tuple[bytes | None, bool]:
        """Return ``(payload, True)`` for a live session, ``(None, False)`` otherwise."""
        key = self._key(token)
        try:
            reply = self._client.get(key)
        except RedisError as exc:
            result = classify_reply(None, exc)
        else:
            result = classify_reply(reply)

        if isinstance(result, Absent) and result.reason == MALFORMED:
            logger.warning("RedisStore: malformed value under %r treated as absent", key)
        return unwrap_lookup(result, "find")

    def save(self, token: str, payload: bytes, expiry: datetime) -> None:
        """Write ``payload`` and its absolute expiry in one ``MULTI``/``EXEC`` block.

        An expiry already in the past makes Redis drop the key on ``EXEC``.
        """
        key = self._key(token)
        expires_at = to_unix_millis(expiry)
        try:
            with self._client.pipeline(transaction=True) as pipe:
                pipe.set(key, payload)
                pipe.pexpireat(key, expires_at)
                pipe.execute()
        except RedisError as exc:
            raise BackendError("save", exc) from exc
        logger.debug("RedisStore: saved %r (expires at %d ms)", key, expires_at)

    def delete(self, token: str) -> None:
        """Remove the key for ``token``; a missing key is not an error."""
        try:
            self._client.delete(self._key(token))
        except RedisError as exc:
            raise BackendError("delete", exc) from exc

    def delete_by_pattern(self, pattern: str) -> None:
        """Unlink every key starting with ``prefix + pattern``.

        The whole namespace slice is scanned first with ``SCAN``, then each
        collected key is removed with ``UNLINK``.  A failing ``SCAN`` step
        leaves everything in place; a failing ``UNLINK`` leaves the keys
        unlinked before it removed.
        """
        namespace = self._key(pattern)
        match = build_match(self._prefix, pattern)

        # dict keeps first-seen order and drops duplicate SCAN replies
        keys: dict[KeyT, None] = {}
        try:
            for batch in iter_matching_keys(self._scan, match, self._scan_count):
                for key in batch:
                    if has_prefix(key, namespace):
                        keys[key] = None
        except RedisError as exc:
            raise BackendError("delete_by_pattern", exc) from exc

        unlinked = 0
        for key in keys:
            try:
                self._client.unlink(key)
            except RedisError as exc:
                logger.warning(
                    "RedisStore: unlink failed after %d of %d keys matching %r",
                    unlinked,
                    len(keys),
                    namespace,
                )
                raise BackendError("delete_by_pattern", exc) from exc
            unlinked += 1
        logger.info("RedisStore: unlinked %d keys matching %r", unlinked, namespace)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the connection pool if this store created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "RedisStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RedisStore(prefix={self._prefix!r}, scan_count={self._scan_count!r})"
