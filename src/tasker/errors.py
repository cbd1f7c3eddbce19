"""Error types raised by the task store and the storage layer."""

from __future__ import annotations

from pathlib import Path


class TaskerError(Exception):
    """Base class for all tasker errors."""


class TaskNotFoundError(TaskerError):
    """No task carries the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"No task with id {task_id}")
        self.task_id = task_id


class InvalidDescriptionError(TaskerError):
    """A task description was empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("Task description must not be empty")


class StorageParseError(TaskerError):
    """The task file exists but does not hold a valid task document."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class StorageWriteError(TaskerError):
    """The task file could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class StorageReadError(TaskerError):
    """The task file exists but could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
