"""Unit tests for session_store.config."""
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from session_store.config import DEFAULT_PREFIX, StoreConfig, load_config
from session_store.errors import ConfigError


class TestStoreConfig:
    def test_defaults(self) -> None:
        config = StoreConfig()
        assert config.prefix == DEFAULT_PREFIX == "scs:session:"
        assert config.url == "redis://localhost:6379/0"
        assert config.socket_timeout is None
        assert config.scan_count is None

    def test_empty_prefix_rejected(self) -> None:
        with pytest.raises(ValidationError, match="prefix"):
            StoreConfig(prefix="")

    def test_non_positive_scan_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(scan_count=0)

    def test_frozen(self) -> None:
        config = StoreConfig()
        with pytest.raises(ValidationError):
            config.prefix = "other:"  # type: ignore[misc]

    def test_instances_are_independent(self) -> None:
        a = StoreConfig(prefix="a:")
        b = StoreConfig(prefix="b:")
        assert (a.prefix, b.prefix) == ("a:", "b:")


class TestLoadConfig:
    def test_loads_yaml_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "store.yaml"
        path.write_text(
            "prefix: 'myapp:session:'\nurl: redis://cache:6379/1\nsocket_timeout: 2.5\nscan_count: 100\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.prefix == "myapp:session:"
        assert config.url == "redis://cache:6379/1"
        assert config.socket_timeout == 2.5
        assert config.scan_count == 100

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == StoreConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("prefix: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "bad_values.yaml"
        path.write_text("prefix: ''\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid"):
            load_config(path)

    def test_config_error_is_value_error(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            load_config(tmp_path / "absent.yaml")
