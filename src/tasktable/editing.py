"""Inline edit controller.

Tracks the one cell being edited and its transient value. The view calls
``commit`` when the edit loses focus or the confirm key is pressed and
``cancel`` on the cancel key; ``blur`` and ``handle_key`` map those events
onto the same transitions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from tasktable.models import EditField
from tasktable.store import TaskStore

logger = logging.getLogger(__name__)

CONFIRM_KEY = "Enter"
CANCEL_KEY = "Escape"
EMPTY_VALUE_MESSAGE = "cannot save empty value"


@dataclass(frozen=True)
class EditSession:
    """The cell being edited. ``task_id`` is None while idle."""

    task_id: int | None = None
    field: EditField | None = None
    value: str = ""

    @property
    def is_idle(self) -> bool:
        return self.task_id is None or self.field is None


IDLE = EditSession()


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a commit.

    ``saved`` is True when the value was handed to the store. ``empty`` flags the
    rejected empty value so the view can tell the user.
    """

    saved: bool = False
    empty: bool = False
    message: str | None = None


class EditController:
    """State machine over the edit session: Idle <-> Editing."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._session = IDLE

    @property
    def session(self) -> EditSession:
        return self._session

    @property
    def is_editing(self) -> bool:
        return not self._session.is_idle

    def is_editing_cell(self, task_id: int, field: EditField) -> bool:
        """Check if the given cell is the one being edited."""
        return self._session.task_id == task_id and self._session.field is field

    def start_editing(self, task_id: int, field: EditField | str, current_value: str) -> None:
        """Begin editing a cell, dropping any unsaved edit of another cell."""
        if self.is_editing:
            logger.debug(
                "Discarding edit of %s on task %s",
                self._session.field.value,  # type: ignore[union-attr]
                self._session.task_id,
            )
        self._session = EditSession(task_id=task_id, field=EditField(field), value=current_value)

    def change_value(self, new_value: str) -> None:
        """Replace the in-progress value. Ignored while idle."""
        if not self.is_editing:
            return
        self._session = EditSession(
            task_id=self._session.task_id,
            field=self._session.field,
            value=new_value,
        )

    def commit(self) -> CommitResult:
        """Save the in-progress value into the store and go idle."""
        session = self._session
        self._session = IDLE
        if session.is_idle:
            return CommitResult()

        value = session.value
        if session.field is EditField.DESCRIPTION:
            value = value.strip()

        if not value:
            logger.info("Rejected empty %s for task %s", session.field.value, session.task_id)  # type: ignore[union-attr]
            return CommitResult(empty=True, message=EMPTY_VALUE_MESSAGE)

        if self._store.get(session.task_id) is None:  # type: ignore[arg-type]
            logger.debug("Dropping edit of removed task %s", session.task_id)
            return CommitResult()

        try:
            self._store.update(session.task_id, session.field, value)  # type: ignore[arg-type]
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"]
            logger.info("Rejected %s for task %s: %s", session.field.value, session.task_id, reason)  # type: ignore[union-attr]
            return CommitResult(message=reason)

        return CommitResult(saved=True)

    def cancel(self) -> None:
        """Discard the in-progress value."""
        self._session = IDLE

    def blur(self) -> CommitResult:
        """Focus left the editor: same as commit."""
        return self.commit()

    def handle_key(self, key: str) -> CommitResult | None:
        """Map confirm/cancel keys onto commit/cancel."""
        if key == CONFIRM_KEY:
            return self.commit()
        if key == CANCEL_KEY:
            self.cancel()
        return None
