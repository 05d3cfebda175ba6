"""Board: the one object that owns all table state.

Holds the store, the active filter tab, the inline edit controller and the
add-task form. The view reads from it and forwards user actions to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tasktable.editing import EditController
from tasktable.filters import visible
from tasktable.models import FilterMode, Status, Task
from tasktable.store import TaskStore
from tasktable.validation import validate

logger = logging.getLogger(__name__)

FORM_FIELDS = ("description", "status", "deadline")


def _blank_form() -> dict[str, str]:
    return {"description": "", "status": Status.ACTIVE.value, "deadline": ""}


@dataclass
class TaskForm:
    """State of the add-task form."""

    is_open: bool = False
    values: dict[str, str] = field(default_factory=_blank_form)
    errors: dict[str, str] = field(default_factory=dict)


class Board:
    """Controller object passed to the view."""

    def __init__(self, store: TaskStore | None = None) -> None:
        self.store = store if store is not None else TaskStore()
        self.filter_mode = FilterMode.ALL
        self.editor = EditController(self.store)
        self.form = TaskForm()

    # -------------------- filtering --------------------
    def set_filter(self, mode: FilterMode | str) -> None:
        self.filter_mode = FilterMode(mode)

    def visible_tasks(self) -> list[Task]:
        return visible(self.store.list(), self.filter_mode)

    # -------------------- add-task form --------------------
    def open_form(self) -> None:
        """Open the form with blank values and no errors."""
        self.form = TaskForm(is_open=True)

    def close_form(self) -> None:
        self.form.is_open = False

    def change_form_field(self, name: str, value: str) -> None:
        """Set a form value and clear that field's error."""
        if name not in FORM_FIELDS:
            raise KeyError(name)
        self.form.values[name] = value
        self.form.errors.pop(name, None)

    def submit_form(self) -> Task | None:
        """Validate the form and add the task.

        Returns the new task, or None when validation failed; the errors are
        kept on ``form.errors`` and the form stays open.
        """
        errors = validate(self.form.values)
        if errors:
            self.form.errors = errors
            logger.debug("Form rejected: %s", ", ".join(sorted(errors)))
            return None

        values = self.form.values
        task = self.store.add(values["description"], values["status"], values["deadline"])
        self.form.is_open = False
        return task

    # -------------------- rows --------------------
    def delete(self, task_id: int) -> None:
        """Delete a task, discarding any edit open on it."""
        if self.editor.session.task_id == task_id:
            self.editor.cancel()
        self.store.remove(task_id)
