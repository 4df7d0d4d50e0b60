"""Abstract base class for session stores.

Every backend implements the same four operations.  Payloads are opaque
byte strings; expiry is an absolute point in time, never a duration.

Classes
-------
- Store  — abstract base for all session stores
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class Store(ABC):
    """Protocol for persisting opaque session payloads keyed by token.

    Implementations must be safe to call concurrently from several
    threads.  Absence is reported through return values; exceptions are
    reserved for backend failures (``BackendError``).
    """

    @abstractmethod
    def find(self, token: str) -> tuple[bytes | None, bool]:
        """Return the payload stored for ``token``.

        Parameters
        ----------
        token:
            Opaque session token supplied by the caller.

        Returns
        -------
        tuple[bytes | None, bool]
            ``(payload, True)`` when a live record exists.  ``(None, False)``
            when the record is missing, expired, or malformed.

        Raises
        ------
        BackendError
            If the backend could not be reached or rejected the command.
        """

    @abstractmethod
    def save(self, token: str, payload: bytes, expiry: datetime) -> None:
        """Insert or replace the record for ``token``.

        Payload and expiry are written together: no reader can observe
        the new payload paired with the old expiry, or the reverse.

        Parameters
        ----------
        token:
            Opaque session token.
        payload:
            Encoded session data.
        expiry:
            Absolute time after which the record no longer exists.

        Raises
        ------
        BackendError
            If the write failed.
        """

    @abstractmethod
    def delete(self, token: str) -> None:
        """Remove the record for ``token``.

        Deleting a token that does not exist is a no-op.

        Raises
        ------
        BackendError
            If the backend command failed.
        """

    @abstractmethod
    def delete_by_pattern(self, pattern: str) -> None:
        """Remove every record whose token starts with ``pattern``.

        Matching nothing is a no-op.  Removal is best effort: if a backend
        command fails part way through, records already removed stay
        removed and the error is raised.

        Raises
        ------
        BackendError
            On the first backend command that fails.
        """

    def close(self) -> None:
        """Release resources held by the store.  The default does nothing."""
