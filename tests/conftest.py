"""Shared fixtures for tasktable tests."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Generator, Iterator
from datetime import date
from pathlib import Path

import pytest

from tasktable.board import Board
from tasktable.models import Status, Task
from tasktable.store import TaskStore


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
def sample_tasks() -> list[Task]:
    """A small table with every status."""
    return [
        Task(id=1, description="Buy milk", status=Status.ACTIVE, deadline=date(2024, 1, 1)),
        Task(id=2, description="Write report", status=Status.DONE, deadline=date(2024, 2, 15)),
        Task(id=5, description="Call plumber", status=Status.CANCELED, deadline=date(2024, 3, 1)),
        Task(id=7, description="Plan trip", status=Status.ACTIVE, deadline=date(2030, 6, 30)),
    ]


@pytest.fixture
def counter_ids() -> Iterator[int]:
    """Deterministic id source starting at 100."""
    return iter(range(100, 10_000))


@pytest.fixture
def store(sample_tasks: list[Task], counter_ids: Iterator[int]) -> TaskStore:
    """Store preloaded with the sample tasks and predictable new ids."""
    return TaskStore(sample_tasks, id_source=lambda: next(counter_ids))


@pytest.fixture
def board(store: TaskStore) -> Board:
    """Board over the sample store."""
    return Board(store)


@pytest.fixture
def sample_tasks_data() -> list[dict]:
    """Task records as they appear in a data file."""
    return [
        {"id": 1, "description": "Buy milk", "status": "active", "deadline": "2024-01-01"},
        {"id": 2, "description": "Write report", "status": "done", "deadline": "2024-02-15"},
        {"id": 5, "description": "Call plumber", "status": "canceled", "deadline": "2024-03-01"},
    ]


@pytest.fixture
def sample_tasks_json(temp_project: Path, sample_tasks_data: list[dict]) -> Path:
    """Create a tasks.json file in the project directory."""
    tasks_path = temp_project / "tasks.json"
    with open(tasks_path, "w") as f:
        json.dump(sample_tasks_data, f)
    return tasks_path


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Put the root logger back the way pytest left it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            if h not in handlers:
                h.close()
        for h in handlers:
            root.addHandler(h)
        root.setLevel(level)
