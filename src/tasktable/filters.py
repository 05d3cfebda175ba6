"""Derived task views for the status tabs."""

from __future__ import annotations

from collections.abc import Iterable

from tasktable.models import FilterMode, Status, Task

COMPLETED_STATUSES = frozenset({Status.DONE, Status.CANCELED})


def is_completed(task: Task) -> bool:
    """Check if a task is done or canceled."""
    return task.status in COMPLETED_STATUSES


def visible(tasks: Iterable[Task], mode: FilterMode) -> list[Task]:
    """Return the tasks shown under ``mode``, keeping their relative order."""
    if mode is FilterMode.ACTIVE:
        return [task for task in tasks if task.status is Status.ACTIVE]
    if mode is FilterMode.COMPLETED:
        return [task for task in tasks if is_completed(task)]
    return list(tasks)
