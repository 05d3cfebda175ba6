"""CLI interface for tasktable."""

from __future__ import annotations

import json
import logging
import shlex
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tasktable import __version__
from tasktable.board import Board
from tasktable.config import CONFIG_FILE, TasktableConfig
from tasktable.loader import TaskDataError, dump_tasks, load_tasks
from tasktable.logging_setup import setup_logging
from tasktable.models import EditField, FilterMode, Status
from tasktable.store import TaskStore
from tasktable.view import render_tabs, render_tasks

console = Console()

FILTER_CHOICES = [mode.value for mode in FilterMode]
FIELD_CHOICES = [field.value for field in EditField]
CANCEL_INPUT = ":cancel"

SESSION_HELP = """\
[bold]Commands[/bold]
  [cyan]list[/cyan]                 Show the table
  [cyan]filter MODE[/cyan]          Switch tab (all, active, completed)
  [cyan]add[/cyan]                  Add a task
  [cyan]edit ID FIELD[/cyan]        Edit description, status or deadline
  [cyan]delete ID[/cyan]            Delete a task
  [cyan]help[/cyan]                 Show this help
  [cyan]quit[/cyan]                 Leave the session

While editing, press Enter to save or type [cyan]:cancel[/cyan] to discard."""


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tasktable")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file (default: {CONFIG_FILE})",
)
@click.option(
    "--data",
    "data_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Task data file to load at startup",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    data_path: Path | None,
    verbose: bool,
) -> None:
    """tasktable - a task table you can filter and edit in place.

    \b
    Examples:
      tasktable show                  # All tasks from tasks.json
      tasktable show -f active        # Only active tasks
      tasktable --data my.json session
    """
    config = TasktableConfig.load(config_path)
    setup_logging(
        logging.DEBUG if verbose else config.log_level,
        log_file=config.log_file,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["data_path"] = data_path or Path(config.data_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _load_board(ctx: click.Context) -> Board:
    """Build a board from the data file, exiting on bad data."""
    data_path: Path = ctx.obj["data_path"]
    try:
        tasks = load_tasks(data_path)
    except TaskDataError as exc:
        console.print(f"[red]Cannot load tasks:[/red] {escape(str(exc))}")
        ctx.exit(1)
    logging.getLogger(__name__).debug("Loaded %d tasks from %s", len(tasks), data_path)
    return Board(TaskStore(tasks))


@main.command()
@click.option(
    "--filter",
    "-f",
    "filter_mode",
    type=click.Choice(FILTER_CHOICES),
    default=FilterMode.ALL.value,
    help="Which tasks to show",
)
@click.option("--json", "as_json", is_flag=True, help="Print tasks as JSON")
@click.pass_context
def show(ctx: click.Context, filter_mode: str, as_json: bool) -> None:
    """Show the task table."""
    board = _load_board(ctx)
    board.set_filter(filter_mode)

    if as_json:
        click.echo(json.dumps(dump_tasks(board.visible_tasks()), indent=2, ensure_ascii=False))
        return

    config: TasktableConfig = ctx.obj["config"]
    console.print(render_tabs(board))
    console.print(render_tasks(board, config.display))


@main.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Validate the data file and count tasks per status."""
    data_path: Path = ctx.obj["data_path"]
    if not data_path.exists():
        console.print(f"[yellow]No data file at {data_path}[/yellow]")
        return

    board = _load_board(ctx)
    tasks = board.store.list()

    table = Table(title=str(data_path), show_header=True)
    table.add_column("Status", style="cyan")
    table.add_column("Tasks", justify="right")
    for status in Status:
        count = sum(1 for task in tasks if task.status is status)
        table.add_row(status.label, str(count))
    table.add_row("[bold]Total[/bold]", f"[bold]{len(tasks)}[/bold]")

    console.print(table)
    console.print("[green]✓[/green] Data file is valid")


@main.command()
@click.pass_context
def session(ctx: click.Context) -> None:
    """Work on the table interactively.

    Changes live only for the length of the session.
    """
    board = _load_board(ctx)
    config: TasktableConfig = ctx.obj["config"]

    console.print(render_tabs(board))
    console.print(render_tasks(board, config.display))
    console.print("[dim]Type 'help' for commands.[/dim]")

    while True:
        try:
            line = click.prompt("tasktable", prompt_suffix="> ", default="", show_default=False)
        except click.Abort:
            break

        try:
            args = shlex.split(line)
        except ValueError as exc:
            console.print(f"[red]{escape(str(exc))}[/red]")
            continue
        if not args:
            continue

        command, *rest = args
        if command in ("quit", "exit", "q"):
            break
        if command == "help":
            console.print(SESSION_HELP)
        elif command == "list":
            console.print(render_tabs(board))
            console.print(render_tasks(board, config.display))
        elif command == "filter":
            _session_filter(board, rest)
        elif command == "add":
            _session_add(board)
        elif command == "edit":
            _session_edit(board, rest)
        elif command == "delete":
            _session_delete(board, rest)
        else:
            console.print(f"[red]Unknown command:[/red] {escape(command)}")


def _session_filter(board: Board, args: list[str]) -> None:
    if len(args) != 1 or args[0] not in FILTER_CHOICES:
        console.print(f"[red]Usage:[/red] filter {{{','.join(FILTER_CHOICES)}}}")
        return
    board.set_filter(args[0])
    console.print(render_tabs(board))


def _session_add(board: Board) -> None:
    """Fill in the add-task form until it validates or is cancelled."""
    board.open_form()
    pending = ["description", "status", "deadline"]

    while board.form.is_open:
        for name in pending:
            value = click.prompt(
                name.capitalize(),
                default=board.form.values[name],
                show_default=bool(board.form.values[name]),
            )
            if value == CANCEL_INPUT:
                board.close_form()
                console.print("[dim]Cancelled[/dim]")
                return
            board.change_form_field(name, value)

        task = board.submit_form()
        if task is None:
            for name, message in board.form.errors.items():
                console.print(f"[red]{name}:[/red] {message}")
            pending = list(board.form.errors)
        else:
            console.print(f"[green]✓[/green] Added task {task.id}")


def _session_edit(board: Board, args: list[str]) -> None:
    if len(args) != 2 or not args[0].isdigit() or args[1] not in FIELD_CHOICES:
        console.print(f"[red]Usage:[/red] edit ID {{{','.join(FIELD_CHOICES)}}}")
        return

    task = board.store.get(int(args[0]))
    if task is None:
        console.print(f"[red]No task with id {args[0]}[/red]")
        return

    field = EditField(args[1])
    board.editor.start_editing(task.id, field, task.field_value(field))
    value = click.prompt(field.value.capitalize(), default=board.editor.session.value)
    if value == CANCEL_INPUT:
        board.editor.handle_key("Escape")
        console.print("[dim]Cancelled[/dim]")
        return

    board.editor.change_value(value)
    result = board.editor.handle_key("Enter")
    if result is not None and result.saved:
        console.print(f"[green]✓[/green] Saved {field.value} of task {task.id}")
    elif result is not None and result.empty:
        console.print("[red]Cannot save an empty value[/red]")
    elif result is not None:
        console.print(f"[red]Not saved:[/red] {escape(result.message or '')}")


def _session_delete(board: Board, args: list[str]) -> None:
    if len(args) != 1 or not args[0].isdigit():
        console.print("[red]Usage:[/red] delete ID")
        return
    board.delete(int(args[0]))
    console.print(f"[green]✓[/green] Deleted task {args[0]}")


if __name__ == "__main__":
    main()
