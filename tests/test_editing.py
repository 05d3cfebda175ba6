"""Tests for tasktable.editing module."""

from __future__ import annotations

from datetime import date

import pytest

from tasktable.editing import (
    CANCEL_KEY,
    CONFIRM_KEY,
    EMPTY_VALUE_MESSAGE,
    IDLE,
    CommitResult,
    EditController,
)
from tasktable.models import EditField, Status
from tasktable.store import TaskStore


@pytest.fixture
def editor(store: TaskStore) -> EditController:
    """Edit controller over the sample store."""
    return EditController(store)


def _description(store: TaskStore, task_id: int) -> str:
    task = store.get(task_id)
    assert task is not None
    return task.description


class TestSession:
    """Tests for session state transitions."""

    def test_starts_idle(self, editor: EditController) -> None:
        """Test a new controller is idle."""
        assert editor.session == IDLE
        assert not editor.is_editing

    def test_start_editing(self, editor: EditController) -> None:
        """Test starting an edit records the cell and value."""
        editor.start_editing(5, "description", "old")
        assert editor.is_editing
        assert editor.session.task_id == 5
        assert editor.session.field is EditField.DESCRIPTION
        assert editor.session.value == "old"
        assert editor.is_editing_cell(5, EditField.DESCRIPTION)
        assert not editor.is_editing_cell(5, EditField.STATUS)

    def test_start_rejects_unknown_field(self, editor: EditController) -> None:
        """Test only editable fields can be edited."""
        with pytest.raises(ValueError):
            editor.start_editing(5, "id", "5")

    def test_switching_discards_previous(self, editor: EditController, store: TaskStore) -> None:
        """Test starting another edit drops the unsaved one."""
        editor.start_editing(5, EditField.DESCRIPTION, "old")
        editor.change_value("unsaved")
        editor.start_editing(1, EditField.STATUS, "active")

        assert editor.session.task_id == 1
        assert editor.session.value == "active"
        assert _description(store, 5) == "Call plumber"

    def test_change_value_while_idle_ignored(self, editor: EditController) -> None:
        """Test changing the value without an edit does nothing."""
        editor.change_value("stray")
        assert editor.session == IDLE

    def test_change_value_does_not_touch_store(self, editor: EditController, store: TaskStore) -> None:
        """Test values are only stored on commit."""
        editor.start_editing(5, EditField.DESCRIPTION, "Call plumber")
        editor.change_value("Changed")
        assert editor.session.value == "Changed"
        assert _description(store, 5) == "Call plumber"


class TestCommit:
    """Tests for EditController.commit."""

    def test_trims_description(self, editor: EditController, store: TaskStore) -> None:
        """Test a committed description is trimmed and the session reset."""
        editor.start_editing(5, "description", "old")
        editor.change_value("  new  ")
        result = editor.commit()

        assert result == CommitResult(saved=True)
        assert _description(store, 5) == "new"
        assert editor.session == IDLE

    def test_empty_description_rejected(self, editor: EditController, store: TaskStore) -> None:
        """Test a blank description is not saved and is reported."""
        editor.start_editing(5, "description", "old")
        editor.change_value("   ")
        result = editor.commit()

        assert not result.saved
        assert result.empty
        assert result.message == EMPTY_VALUE_MESSAGE
        assert _description(store, 5) == "Call plumber"
        assert editor.session == IDLE

    def test_empty_deadline_rejected(self, editor: EditController, store: TaskStore) -> None:
        """Test an empty deadline is not saved."""
        editor.start_editing(1, EditField.DEADLINE, "2024-01-01")
        editor.change_value("")
        assert editor.commit().empty
        task = store.get(1)
        assert task is not None
        assert task.deadline == date(2024, 1, 1)

    def test_status(self, editor: EditController, store: TaskStore) -> None:
        """Test committing a status."""
        editor.start_editing(1, EditField.STATUS, "active")
        editor.change_value("done")
        assert editor.commit().saved
        task = store.get(1)
        assert task is not None
        assert task.status is Status.DONE

    def test_deadline(self, editor: EditController, store: TaskStore) -> None:
        """Test committing a deadline."""
        editor.start_editing(1, EditField.DEADLINE, "2024-01-01")
        editor.change_value("2024-12-24")
        assert editor.commit().saved
        task = store.get(1)
        assert task is not None
        assert task.deadline == date(2024, 12, 24)

    def test_unparseable_value_reported(self, editor: EditController, store: TaskStore) -> None:
        """Test a value the model rejects is reported, not raised."""
        editor.start_editing(1, EditField.DEADLINE, "2024-01-01")
        editor.change_value("next week")
        result = editor.commit()

        assert not result.saved
        assert not result.empty
        assert result.message
        assert editor.session == IDLE
        task = store.get(1)
        assert task is not None
        assert task.deadline == date(2024, 1, 1)

    def test_idle_commit_is_noop(self, editor: EditController, store: TaskStore) -> None:
        """Test committing with nothing being edited does nothing."""
        before = [t.model_dump() for t in store.list()]
        assert editor.commit() == CommitResult()
        assert [t.model_dump() for t in store.list()] == before

    def test_removed_task_not_reported_saved(self, editor: EditController, store: TaskStore) -> None:
        """Test committing an edit of a task removed meanwhile saves nothing."""
        editor.start_editing(5, EditField.DESCRIPTION, "old")
        editor.change_value("new")
        store.remove(5)
        before = [t.model_dump() for t in store.list()]

        assert editor.commit() == CommitResult()
        assert editor.session == IDLE
        assert [t.model_dump() for t in store.list()] == before

    def test_only_edited_task_changes(self, editor: EditController, store: TaskStore) -> None:
        """Test other tasks are untouched by a commit."""
        others = [t.model_dump() for t in store.list() if t.id != 5]
        editor.start_editing(5, EditField.DESCRIPTION, "old")
        editor.change_value("new")
        editor.commit()
        assert [t.model_dump() for t in store.list() if t.id != 5] == others


class TestCancel:
    """Tests for cancel and key/focus events."""

    def test_cancel_discards(self, editor: EditController, store: TaskStore) -> None:
        """Test cancel drops the edit without saving."""
        editor.start_editing(5, EditField.DESCRIPTION, "old")
        editor.change_value("new")
        editor.cancel()
        assert editor.session == IDLE
        assert _description(store, 5) == "Call plumber"

    def test_blur_commits(self, editor: EditController, store: TaskStore) -> None:
        """Test losing focus saves the edit."""
        editor.start_editing(5, EditField.DESCRIPTION, "old")
        editor.change_value("Blurred")
        assert editor.blur().saved
        assert _description(store, 5) == "Blurred"

    def test_confirm_key_commits(self, editor: EditController, store: TaskStore) -> None:
        """Test the confirm key saves the edit."""
        editor.start_editing(5, EditField.DESCRIPTION, "old")
        editor.change_value("Entered")
        result = editor.handle_key(CONFIRM_KEY)
        assert result is not None and result.saved
        assert _description(store, 5) == "Entered"

    def test_cancel_key_discards(self, editor: EditController, store: TaskStore) -> None:
        """Test the cancel key drops the edit."""
        editor.start_editing(5, EditField.DESCRIPTION, "old")
        editor.change_value("Escaped")
        assert editor.handle_key(CANCEL_KEY) is None
        assert editor.session == IDLE
        assert _description(store, 5) == "Call plumber"

    def test_other_keys_ignored(self, editor: EditController) -> None:
        """Test other keys keep editing."""
        editor.start_editing(5, EditField.DESCRIPTION, "old")
        assert editor.handle_key("a") is None
        assert editor.is_editing
