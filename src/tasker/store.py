"""Task store - CRUD and status transitions over a TaskList.

Every operation takes the collection explicitly and mutates it in place.
Operations that address a task by id raise ``TaskNotFoundError`` and leave
the collection untouched when the id is not valid under the list's id policy:

- ``stable``: the id must be carried by a task in the list. Ids are never
  reused, so a deleted task's id stays invalid.
- ``positional``: the id must lie in ``1..len(tasks)``; deleting a task
  shifts every later task down by one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from tasker.errors import InvalidDescriptionError, TaskNotFoundError
from tasker.models import Task, TaskList, TaskStatus, now

logger = logging.getLogger(__name__)


def get_task(tasks: TaskList, task_id: int) -> Task:
    """Return the task addressed by ``task_id``."""
    if tasks.id_policy == "positional":
        if not 1 <= task_id <= len(tasks.tasks):
            raise TaskNotFoundError(task_id)
        return tasks.tasks[task_id - 1]

    for task in tasks.tasks:
        if task.id == task_id:
            return task
    raise TaskNotFoundError(task_id)


def add_task(tasks: TaskList, description: str) -> Task:
    """Append a new Todo task and return it."""
    description = _clean_description(description)

    if tasks.id_policy == "positional":
        task_id = len(tasks.tasks) + 1
    else:
        task_id = tasks.next_id

    stamp = now()
    task = Task(id=task_id, description=description, created_at=stamp, updated_at=stamp)
    tasks.tasks.append(task)
    tasks.next_id = task_id + 1

    logger.debug("Added task %d", task.id)
    return task


def update_task(tasks: TaskList, task_id: int, description: str) -> Task:
    """Replace a task's description."""
    description = _clean_description(description)
    task = get_task(tasks, task_id)
    task.description = description
    task.touch()
    logger.debug("Updated task %d", task.id)
    return task


def delete_task(tasks: TaskList, task_id: int) -> Task:
    """Remove a task and return it."""
    task = get_task(tasks, task_id)
    tasks.tasks.remove(task)

    if tasks.id_policy == "positional":
        tasks.renumber()

    logger.debug("Deleted task %d (%d remaining)", task_id, len(tasks.tasks))
    return task


def mark_in_progress(tasks: TaskList, task_id: int) -> Task:
    """Set a task's status to in-progress."""
    return _set_status(tasks, task_id, TaskStatus.IN_PROGRESS)


def mark_done(tasks: TaskList, task_id: int) -> Task:
    """Set a task's status to done.

    Marking a finished task done again succeeds and only refreshes
    ``updated_at``.
    """
    return _set_status(tasks, task_id, TaskStatus.DONE)


def list_tasks(tasks: TaskList, status: TaskStatus | None = None) -> TaskView:
    """Return a lazy view of the tasks, optionally filtered by status."""
    return TaskView(tasks, status)


class TaskView:
    """Lazy, restartable iterable over a TaskList.

    Each iteration walks the current collection again, in order.
    """

    def __init__(self, tasks: TaskList, status: TaskStatus | None = None) -> None:
        self._tasks = tasks
        self.status = status

    def __iter__(self) -> Iterator[Task]:
        for task in self._tasks.tasks:
            if self.status is None or task.status is self.status:
                yield task

    def __repr__(self) -> str:
        return f"TaskView(status={self.status!r})"


def _set_status(tasks: TaskList, task_id: int, status: TaskStatus) -> Task:
    task = get_task(tasks, task_id)
    if task.status is not status:
        logger.debug("Task %d: %s -> %s", task.id, task.status.value, status.value)
    task.status = status
    task.touch()
    return task


def _clean_description(description: str) -> str:
    description = description.strip()
    if not description:
        raise InvalidDescriptionError()
    return description
