"""Task store: the ordered, in-memory sequence of tasks.

The store is the only place tasks are created, changed or removed. Order is
insertion order and is never re-sorted by status or deadline.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from datetime import date

from tasktable.models import EditField, Status, Task

logger = logging.getLogger(__name__)

IdSource = Callable[[], int]


class TimestampIds:
    """Time-based id source that never repeats.

    Ids are milliseconds since the epoch, bumped past the previous id when
    two tasks land in the same millisecond.
    """

    def __init__(self, floor: int = 0, clock: Callable[[], float] = time.time) -> None:
        self._last = floor
        self._clock = clock

    def __call__(self) -> int:
        candidate = int(self._clock() * 1000)
        self._last = max(candidate, self._last + 1)
        return self._last


class TaskStore:
    """Ordered collection of tasks with add/update/remove/list."""

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        id_source: IdSource | None = None,
    ) -> None:
        self._tasks: list[Task] = []
        for task in tasks or ():
            if self.get(task.id) is not None:
                raise ValueError(f"duplicate task id {task.id}")
            self._tasks.append(task)

        if id_source is None:
            id_source = TimestampIds(floor=max((t.id for t in self._tasks), default=0))
        self._next_id = id_source

    def __len__(self) -> int:
        return len(self._tasks)

    def list(self) -> list[Task]:
        """Return the tasks in insertion order."""
        return list(self._tasks)

    def get(self, task_id: int) -> Task | None:
        """Get a task by ID."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def add(self, description: str, status: Status | str, deadline: date | str) -> Task:
        """Append a new task and return it.

        The caller is expected to have validated the form; the model still
        coerces ``status`` and ``deadline`` and trims ``description``.
        """
        task_id = self._next_id()
        while self.get(task_id) is not None:
            task_id = self._next_id()

        task = Task(id=task_id, description=description, status=status, deadline=deadline)
        self._tasks.append(task)
        logger.debug("Added task %s", task.id)
        return task

    def update(self, task_id: int, field: EditField | str, value: object) -> None:
        """Replace one field of a task, keeping its position.

        Unknown ids are ignored. A value the model cannot coerce raises
        ``pydantic.ValidationError`` and leaves the task as it was.
        """
        task = self.get(task_id)
        if task is None:
            logger.debug("Ignoring update of unknown task %s", task_id)
            return

        name = EditField(field).value
        setattr(task, name, value)
        logger.debug("Updated %s of task %s", name, task_id)

    def remove(self, task_id: int) -> None:
        """Remove a task by ID; unknown ids are ignored."""
        before = len(self._tasks)
        self._tasks = [task for task in self._tasks if task.id != task_id]
        if len(self._tasks) == before:
            logger.debug("Ignoring removal of unknown task %s", task_id)
        else:
            logger.debug("Removed task %s", task_id)
