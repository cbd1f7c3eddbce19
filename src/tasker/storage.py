"""Task file persistence.

The task file is a pretty-printed JSON document::

    {
      "next_id": 3,
      "tasks": [
        {
          "id": 1,
          "description": "buy milk",
          "status": "in-progress",
          "created_at": "2026-10-19T09:12:03.120456+02:00",
          "updated_at": "2026-10-19T09:15:44.002311+02:00"
        }
      ]
    }

A bare JSON array of tasks (optionally without ids) is also accepted when
loading and is rewritten in the form above on the next save.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from tasker.errors import StorageParseError, StorageReadError, StorageWriteError
from tasker.models import IdPolicy, TaskList

logger = logging.getLogger(__name__)

DEFAULT_TASKS_FILE = Path("tasks.json")


def load_tasks(
    path: Path = DEFAULT_TASKS_FILE,
    id_policy: IdPolicy = "stable",
    strict: bool = False,
) -> TaskList:
    """Load the task list from ``path``.

    A missing file yields an empty list. A file that does not parse also
    yields an empty list (and a warning), unless ``strict`` is set, in which
    case ``StorageParseError`` is raised. A file that exists but cannot be
    read always raises ``StorageReadError``.
    """
    if not path.exists():
        logger.debug("No task file at %s, starting empty", path)
        return TaskList(id_policy=id_policy)

    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as exc:
        raise StorageReadError(path, exc.strerror or str(exc)) from exc

    try:
        data = json.loads(raw.decode("utf-8"))
        tasks = TaskList.model_validate(_upgrade_document(data))
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        reason = _describe(exc)
        if strict:
            raise StorageParseError(path, reason) from exc
        logger.warning("Ignoring unparsable task file %s (%s); starting empty", path, reason)
        return TaskList(id_policy=id_policy)

    tasks.id_policy = id_policy
    if id_policy == "positional":
        tasks.renumber()

    logger.debug("Loaded %d task(s) from %s", len(tasks.tasks), path)
    return tasks


def save_tasks(tasks: TaskList, path: Path = DEFAULT_TASKS_FILE) -> None:
    """Write the task list to ``path``, replacing any previous content.

    The document is written to a sibling temporary file first and then moved
    over the target, so a failed write leaves the previous file intact.
    """
    text = json.dumps(tasks.model_dump(mode="json"), indent=2) + "\n"
    tmp_path = path.with_name(path.name + ".tmp")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise StorageWriteError(path, exc.strerror or str(exc)) from exc

    logger.debug("Saved %d task(s) to %s", len(tasks.tasks), path)


def _upgrade_document(data: object) -> object:
    """Convert the bare-array layout to the current document layout."""
    if not isinstance(data, list):
        return data

    tasks = []
    for position, item in enumerate(data, start=1):
        if isinstance(item, dict) and "id" not in item:
            item = {"id": position, **item}
        tasks.append(item)
    return {"tasks": tasks}


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        return f"{location}: {error['msg']}" if location else error["msg"]
    return str(exc)
