"""Exception hierarchy for session stores.

A missing, expired, or malformed session is never an exception: stores
signal absence through the ``found`` flag returned by ``find``.  The
classes below cover genuine failures only.

Classes
-------
- StoreError    — base class for every error raised by a store
- BackendError  — the backing server was unreachable or rejected a command
- ConfigError   — invalid store configuration
"""
from __future__ import annotations


class StoreError(Exception):
    """Base class for all session-store errors."""


class BackendError(StoreError):
    """Raised when a backend command fails.

    The original client exception is chained as ``__cause__`` and is also
    available as ``cause``.

    Parameters
    ----------
    operation:
        Name of the store operation that failed (``"find"``, ``"save"``...).
    cause:
        The exception raised by the backend client.
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Backend failure during {operation}: {cause}")


class ConfigError(StoreError, ValueError):
    """Raised when store configuration cannot be loaded or validated."""
