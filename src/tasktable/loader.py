"""Initial data loader: reads task records from a JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tasktable.models import Task


class TaskDataError(Exception):
    """The task data file could not be read."""


def load_tasks(path: Path) -> list[Task]:
    """Load tasks from a JSON file.

    Supports formats:

    1. Simple array (what the original web table ships):
    [
        {"id": 1, "description": "...", "status": "active", "deadline": "2024-01-31"}
    ]

    2. Wrapped:
    {"tasks": [...]}

    A missing file yields no tasks.

    Raises:
        TaskDataError: If the file is not JSON or a record is not a valid task.
    """
    if not path.exists():
        return []

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise TaskDataError(f"{path}: invalid JSON ({exc.msg}, line {exc.lineno})") from exc

    items: Any
    if isinstance(data, list):
        items = data
    elif isinstance(data, dict):
        items = data.get("tasks", [])
    else:
        raise TaskDataError(f"{path}: expected a list of tasks")

    if not isinstance(items, list):
        raise TaskDataError(f"{path}: expected a list of tasks")

    tasks: list[Task] = []
    seen: set[int] = set()
    for index, item in enumerate(items):
        try:
            task = Task.model_validate(item)
        except ValidationError as exc:
            problem = exc.errors()[0]
            where = ".".join(str(part) for part in problem["loc"]) or "record"
            raise TaskDataError(f"{path}: task #{index}: {where}: {problem['msg']}") from exc

        if task.id in seen:
            raise TaskDataError(f"{path}: task #{index}: duplicate id {task.id}")
        seen.add(task.id)
        tasks.append(task)

    return tasks


def dump_tasks(tasks: list[Task]) -> list[dict[str, Any]]:
    """Convert tasks to plain records with ISO date strings."""
    return [task.model_dump(mode="json") for task in tasks]
