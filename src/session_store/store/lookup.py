"""Classification of raw GET replies.

The Redis client reports a missing key as ``None`` and a key holding a
non-string value as a ``WRONGTYPE`` error.  Neither is a failure from the
caller's point of view.  ``classify_reply`` is the one place where a raw
reply (or client exception) is turned into a ``LookupResult``; everything
else in the store just unwraps it.

Classes
-------
- Found   — a live payload
- Absent  — no usable record (missing, expired, or malformed)
- Failed  — the backend failed; ``cause`` holds the client exception
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from redis.exceptions import ResponseError

from session_store.errors import BackendError

MISSING = "missing"
MALFORMED = "malformed"


@dataclass(frozen=True)
class Found:
    payload: bytes


@dataclass(frozen=True)
class Absent:
    reason: str = MISSING


@dataclass(frozen=True)
class Failed:
    cause: BaseException


LookupResult = Union[Found, Absent, Failed]


def classify_reply(reply: object, error: BaseException | None = None) -> LookupResult:
    """Map a GET reply, or the exception raised instead of one, to a result.

    Parameters
    ----------
    reply:
        Value returned by the client.  Ignored when ``error`` is given.
    error:
        Exception raised by the client, if any.

    Returns
    -------
    LookupResult
        ``Found`` for a byte (or text) payload, ``Absent`` for a missing
        key or a value of the wrong type, ``Failed`` for anything else
        the client raised.
    """
    if error is not None:
        if isinstance(error, ResponseError) and str(error).startswith("WRONGTYPE"):
            return Absent(MALFORMED)
        return Failed(error)
    if reply is None:
        return Absent()
    if isinstance(reply, bytes):
        return Found(reply)
    if isinstance(reply, str):
        return Found(reply.encode("utf-8"))
    return Absent(MALFORMED)


def unwrap_lookup(result: LookupResult, operation: str = "find") -> tuple[bytes | None, bool]:
    """Convert a ``LookupResult`` to the ``(payload, found)`` pair of ``Store.find``.

    Raises
    ------
    BackendError
        If ``result`` is ``Failed``.
    """
    if isinstance(result, Found):
        return result.payload, True
    if isinstance(result, Failed):
        raise BackendError(operation, result.cause) from result.cause
    return None, False
