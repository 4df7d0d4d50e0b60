"""session-store — Pluggable session persistence with a Redis backend.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import session_store
>>> session_store.__version__
'0.1.0'
"""
from __future__ import annotations

from session_store.config import DEFAULT_PREFIX, StoreConfig, load_config
from session_store.errors import BackendError, ConfigError, StoreError
from session_store.store.base import Store
from session_store.store.lookup import Absent, Failed, Found, LookupResult, classify_reply
from session_store.store.memory import MemoryStore
from session_store.store.redis import RedisStore
from session_store.store.scan import iter_matching_keys
from session_store.timeutil import to_unix_millis

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Stores
    "Store",
    "RedisStore",
    "MemoryStore",
    # Lookup classification
    "Found",
    "Absent",
    "Failed",
    "LookupResult",
    "classify_reply",
    # Scanning and time
    "iter_matching_keys",
    "to_unix_millis",
    # Configuration
    "DEFAULT_PREFIX",
    "StoreConfig",
    "load_config",
    # Errors
    "StoreError",
    "BackendError",
    "ConfigError",
]
