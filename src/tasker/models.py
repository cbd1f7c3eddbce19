"""Data models for tasker."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

IdPolicy = Literal["stable", "positional"]


def now() -> datetime:
    """Return the current local time with its UTC offset attached."""
    return datetime.now().astimezone()


class TaskStatus(str, Enum):
    """Lifecycle state of a task.

    Values are the spellings used on the command line and in the task file.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @property
    def label(self) -> str:
        """Human-readable name (Todo, InProgress, Done)."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str) -> TaskStatus:
        """Parse a status from any accepted spelling.

        Accepts the canonical values as well as ``Todo``/``InProgress``/``Done``
        and ``in_progress``.
        """
        key = value.strip().lower().replace("_", "-")
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown task status: {value!r}") from None


_LABELS = {
    TaskStatus.TODO: "Todo",
    TaskStatus.IN_PROGRESS: "InProgress",
    TaskStatus.DONE: "Done",
}

_ALIASES = {
    "todo": TaskStatus.TODO,
    "in-progress": TaskStatus.IN_PROGRESS,
    "inprogress": TaskStatus.IN_PROGRESS,
    "done": TaskStatus.DONE,
}


class Task(BaseModel):
    """A single unit of work."""

    id: int = Field(gt=0)
    description: str
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("description must not be empty")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def accept_status_aliases(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, TaskStatus):
            return TaskStatus.parse(value)
        return value

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_local_time(cls, value: datetime) -> datetime:
        # Naive timestamps are read as local time.
        if value.tzinfo is None:
            return value.astimezone()
        return value

    def touch(self) -> None:
        """Refresh ``updated_at`` after a mutation."""
        self.updated_at = now()


class TaskList(BaseModel):
    """The ordered task collection for one user.

    ``next_id`` is the identifier the next added task receives under the
    stable id policy. ``id_policy`` comes from configuration and is never
    written to the task file.
    """

    next_id: int = Field(default=1, gt=0)
    tasks: list[Task] = Field(default_factory=list)
    id_policy: IdPolicy = Field(default="stable", exclude=True)

    @model_validator(mode="after")
    def check_unique_ids(self) -> TaskList:
        seen: set[int] = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"duplicate task id {task.id}")
            seen.add(task.id)
        if seen:
            self.next_id = max(self.next_id, max(seen) + 1)
        return self

    def renumber(self) -> None:
        """Reassign ids as 1-based positions, preserving order."""
        for position, task in enumerate(self.tasks, start=1):
            task.id = position
        self.next_id = len(self.tasks) + 1
