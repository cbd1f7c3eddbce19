"""Shared fixtures for tasker tests."""

from __future__ import annotations

import itertools
import json
import os
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

START = datetime(2026, 10, 19, 9, 0, tzinfo=timezone(timedelta(hours=2)))


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> Callable[[], datetime]:
    """Replace the task clock with one that advances a minute per reading."""
    ticks = itertools.count()

    def fake_now() -> datetime:
        return START + timedelta(minutes=next(ticks))

    monkeypatch.setattr("tasker.models.now", fake_now)
    monkeypatch.setattr("tasker.store.now", fake_now)
    return fake_now


@pytest.fixture
def sample_document() -> dict:
    """A task file document with one task in each status and a gap in the ids."""
    return {
        "next_id": 5,
        "tasks": [
            {
                "id": 1,
                "description": "buy milk",
                "status": "todo",
                "created_at": "2026-10-18T08:00:00+02:00",
                "updated_at": "2026-10-18T08:00:00+02:00",
            },
            {
                "id": 2,
                "description": "pay bills",
                "status": "in-progress",
                "created_at": "2026-10-18T09:00:00+02:00",
                "updated_at": "2026-10-18T10:30:00+02:00",
            },
            {
                "id": 4,
                "description": "water plants",
                "status": "done",
                "created_at": "2026-10-18T11:00:00+02:00",
                "updated_at": "2026-10-19T07:45:00+02:00",
            },
        ],
    }


@pytest.fixture
def sample_tasks_file(temp_project: Path, sample_document: dict) -> Path:
    """Write the sample document to tasks.json in the project directory."""
    path = temp_project / "tasks.json"
    path.write_text(json.dumps(sample_document, indent=2))
    return path
