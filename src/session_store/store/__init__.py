"""Session store subpackage.

All stores implement the ``Store`` ABC.

Public surface
--------------
- Store        — abstract base class
- RedisStore   — Redis backend with absolute millisecond expiry
- MemoryStore  — in-process dict (useful for testing)
- Found / Absent / Failed / classify_reply — GET reply classification
- iter_matching_keys — lazy cursor-based key enumeration
"""
from __future__ import annotations

from session_store.store.base import Store
from session_store.store.lookup import Absent, Failed, Found, LookupResult, classify_reply
from session_store.store.memory import MemoryStore
from session_store.store.redis import RedisStore
from session_store.store.scan import iter_matching_keys

__all__ = [
    "Absent",
    "Failed",
    "Found",
    "LookupResult",
    "MemoryStore",
    "RedisStore",
    "Store",
    "classify_reply",
    "iter_matching_keys",
]
