"""Terminal rendering of the board."""

from __future__ import annotations

from datetime import date

from rich.table import Table
from rich.text import Text

from tasktable.board import Board
from tasktable.config import DisplayConfig
from tasktable.models import EditField, FilterMode, Status, Task

STATUS_STYLE = {
    Status.ACTIVE: "bold cyan",
    Status.DONE: "green",
    Status.CANCELED: "dim",
}

TAB_TITLES = {
    FilterMode.ALL: "All tasks",
    FilterMode.ACTIVE: "Active tasks",
    FilterMode.COMPLETED: "Completed tasks",
}

EMPTY_TEXT = "No tasks"


def format_deadline(deadline: date, date_format: str = DisplayConfig().date_format) -> str:
    """Format a deadline for display."""
    return deadline.strftime(date_format)


def render_tabs(board: Board) -> Text:
    """Render the filter tabs, highlighting the active one."""
    text = Text()
    for mode, title in TAB_TITLES.items():
        if text:
            text.append("  ")
        style = "reverse bold" if mode is board.filter_mode else "dim"
        text.append(f" {title} ", style=style)
    return text


def render_tasks(
    board: Board,
    display: DisplayConfig | None = None,
    today: date | None = None,
) -> Table:
    """Build the task table for the board's current filter."""
    if display is None:
        display = DisplayConfig()
    if today is None:
        today = date.today()

    table = Table(title=TAB_TITLES[board.filter_mode], show_header=True)
    table.add_column("Description", style="white")
    table.add_column("Status")
    table.add_column("Deadline")
    if display.show_ids:
        table.add_column("ID", style="dim", justify="right")

    tasks = board.visible_tasks()
    if not tasks:
        row = [f"[dim]{EMPTY_TEXT}[/dim]", "", ""]
        if display.show_ids:
            row.append("")
        table.add_row(*row)
        return table

    for task in tasks:
        row = [
            _description_cell(board, task),
            _status_cell(board, task),
            _deadline_cell(board, task, display, today),
        ]
        if display.show_ids:
            row.append(str(task.id))
        table.add_row(*row)

    return table


def _editing_cell(board: Board, task: Task, field: EditField) -> Text | None:
    if not board.editor.is_editing_cell(task.id, field):
        return None
    return Text(f"{board.editor.session.value}▏", style="reverse")


def _description_cell(board: Board, task: Task) -> Text:
    return _editing_cell(board, task, EditField.DESCRIPTION) or Text(task.description)


def _status_cell(board: Board, task: Task) -> Text:
    editing = _editing_cell(board, task, EditField.STATUS)
    if editing is not None:
        return editing
    return Text(task.status.label, style=STATUS_STYLE[task.status])


def _deadline_cell(board: Board, task: Task, display: DisplayConfig, today: date) -> Text:
    editing = _editing_cell(board, task, EditField.DEADLINE)
    if editing is not None:
        return editing
    style = "bold red" if task.is_overdue(today) else ""
    return Text(format_deadline(task.deadline, display.date_format), style=style)
