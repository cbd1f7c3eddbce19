"""Configuration models for tasker."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field

from tasker.models import IdPolicy


class StorageConfig(BaseModel):
    """Configuration for the task file."""

    path: str = "tasks.json"
    strict: bool = False
    """Fail instead of starting empty when the task file does not parse."""


class IdsConfig(BaseModel):
    """Configuration for task identifiers."""

    policy: IdPolicy = "stable"


class DisplayConfig(BaseModel):
    """Configuration for task listings."""

    timestamp_format: str = "%Y-%m-%d %H:%M"


class TaskerConfig(BaseModel):
    """Main configuration for tasker."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    ids: IdsConfig = Field(default_factory=IdsConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> TaskerConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)


# Default config directory
TASKER_DIR = Path(".tasker")
CONFIG_FILE = TASKER_DIR / "config.json"
