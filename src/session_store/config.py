"""Store configuration.

``StoreConfig`` is the single configuration value handed to a store
factory.  It replaces any process-wide prefix setting: two stores built
from different configs never share a namespace by accident.

Functions
---------
- load_config  — read a YAML file into a ``StoreConfig``
"""
from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from session_store.errors import ConfigError

DEFAULT_PREFIX = "scs:session:"


class StoreConfig(BaseModel):
    """Connection and namespacing settings for a session store.

    Attributes
    ----------
    prefix:
        String prepended to every session token to form the backend key.
        Changing it orphans keys written under the previous prefix.
    url:
        Redis connection URL used by ``RedisStore.from_config``.
    socket_timeout:
        Per-command socket timeout in seconds.  ``None`` leaves the client
        default in place.  Stores define no timeout of their own.
    scan_count:
        Optional ``COUNT`` hint passed to ``SCAN``.  ``None`` lets the
        server choose the batch size.
    """

    model_config = {"frozen": True}

    prefix: str = Field(default=DEFAULT_PREFIX)
    url: str = Field(default="redis://localhost:6379/0")
    socket_timeout: float | None = Field(default=None, gt=0)
    scan_count: int | None = Field(default=None, gt=0)

    @field_validator("prefix")
    @classmethod
    def _validate_prefix(cls, value: str) -> str:
        if not value:
            raise ValueError("prefix must not be empty")
        return value


def load_config(path: str | Path) -> StoreConfig:
    """Load a ``StoreConfig`` from a YAML mapping.

    Unknown keys are ignored.  An empty file yields the defaults.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid YAML, is not a mapping,
        or fails validation.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(raw)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read store config {str(path)!r}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Store config {str(path)!r} must be a mapping.")

    try:
        return StoreConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid store config {str(path)!r}: {exc}") from exc
