"""Tests for tasker.config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tasker.config import (
    CONFIG_FILE,
    TASKER_DIR,
    DisplayConfig,
    IdsConfig,
    StorageConfig,
    TaskerConfig,
)


class TestStorageConfig:
    """Tests for StorageConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = StorageConfig()
        assert config.path == "tasks.json"
        assert config.strict is False


class TestIdsConfig:
    """Tests for IdsConfig model."""

    def test_defaults(self) -> None:
        """Test stable ids by default."""
        assert IdsConfig().policy == "stable"

    def test_positional(self) -> None:
        """Test positional policy."""
        assert IdsConfig(policy="positional").policy == "positional"

    def test_invalid_policy(self) -> None:
        """Test that unknown policies are rejected."""
        with pytest.raises(Exception):
            IdsConfig(policy="random")  # type: ignore[arg-type]


class TestDisplayConfig:
    """Tests for DisplayConfig model."""

    def test_defaults(self) -> None:
        """Test default timestamp format."""
        assert DisplayConfig().timestamp_format == "%Y-%m-%d %H:%M"


class TestTaskerConfig:
    """Tests for TaskerConfig."""

    def test_defaults(self) -> None:
        """Test nested defaults."""
        config = TaskerConfig()
        assert config.storage.path == "tasks.json"
        assert config.ids.policy == "stable"

    def test_load_missing(self, temp_project: Path) -> None:
        """Test loading without a file returns defaults."""
        assert TaskerConfig.load() == TaskerConfig()

    def test_load_default_location(self, temp_project: Path) -> None:
        """Test loading from .tasker/config.json."""
        TASKER_DIR.mkdir()
        CONFIG_FILE.write_text(
            json.dumps(
                {
                    "storage": {"path": "work.json", "strict": True},
                    "ids": {"policy": "positional"},
                }
            )
        )
        config = TaskerConfig.load()
        assert config.storage.path == "work.json"
        assert config.storage.strict is True
        assert config.ids.policy == "positional"
        assert config.display.timestamp_format == "%Y-%m-%d %H:%M"

    def test_load_explicit_path(self, tmp_path: Path) -> None:
        """Test loading from an explicit path."""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"display": {"timestamp_format": "%d/%m"}}))
        assert TaskerConfig.load(path).display.timestamp_format == "%d/%m"

    def test_save_and_load(self, temp_project: Path) -> None:
        """Test saving then loading."""
        config = TaskerConfig(ids=IdsConfig(policy="positional"))
        config.save()
        assert CONFIG_FILE.exists()
        assert TaskerConfig.load() == config

    def test_save_format(self, tmp_path: Path) -> None:
        """Test the saved file is readable JSON with every section."""
        path = tmp_path / "config.json"
        TaskerConfig().save(path)
        data = json.loads(path.read_text())
        assert set(data) == {"storage", "ids", "display"}
