"""CLI interface for tasker."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tasker import __version__
from tasker.config import CONFIG_FILE, TaskerConfig
from tasker.errors import (
    StorageParseError,
    StorageReadError,
    StorageWriteError,
    TaskNotFoundError,
)
from tasker.logging_setup import setup_logging
from tasker.models import Task, TaskList, TaskStatus
from tasker.storage import load_tasks, save_tasks
from tasker.store import (
    add_task,
    delete_task,
    list_tasks,
    mark_done,
    mark_in_progress,
    update_task,
)

console = Console()

STATUS_STYLES = {
    TaskStatus.TODO: "white",
    TaskStatus.IN_PROGRESS: "yellow",
    TaskStatus.DONE: "green",
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tasker")
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="TASKER_FILE",
    help="Task file to use (overrides config)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: .tasker/config.json)",
)
@click.option(
    "--strict",
    is_flag=True,
    envvar="TASKER_STRICT",
    help="Fail instead of starting empty when the task file does not parse",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    file_path: Path | None,
    config_path: Path | None,
    strict: bool,
    verbose: bool,
) -> None:
    """tasker - a personal task tracker.

    \b
    Examples:
      tasker add buy milk
      tasker mark-in-progress 1
      tasker list in-progress
    """
    setup_logging(verbose)

    try:
        config = TaskerConfig.load(config_path)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        ctx.exit(1)

    if file_path is not None:
        config.storage.path = str(file_path)
    if strict:
        config.storage.strict = True

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path

    # If no subcommand, show help
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _join_description(ctx: click.Context, param: click.Parameter, value: tuple[str, ...]) -> str:
    description = " ".join(value).strip()
    if not description:
        raise click.BadParameter("must not be empty")
    return description


@contextmanager
def _task_session(ctx: click.Context) -> Iterator[TaskList]:
    """Load the task file, run one operation on it, and save it back.

    A missing task id is reported and the (unchanged) list is still saved.
    A task file that cannot be read aborts before anything is written.
    """
    config: TaskerConfig = ctx.obj["config"]
    path = Path(config.storage.path)

    try:
        tasks = load_tasks(path, id_policy=config.ids.policy, strict=config.storage.strict)
    except StorageParseError as exc:
        console.print(f"[red]Cannot read task file:[/red] {escape(str(exc))}")
        console.print("[dim]Fix or remove the file, or run without --strict.[/dim]")
        ctx.exit(1)
    except StorageReadError as exc:
        console.print(f"[red]Cannot read task file:[/red] {escape(str(exc))}")
        ctx.exit(1)

    try:
        yield tasks
    except TaskNotFoundError as exc:
        console.print(f"[red]Task not found:[/red] {exc.task_id}")

    try:
        save_tasks(tasks, path)
    except StorageWriteError as exc:
        console.print(f"[red]Could not save tasks:[/red] {escape(str(exc))}")
        ctx.exit(1)


@main.command()
@click.argument("description", nargs=-1, required=True, callback=_join_description)
@click.pass_context
def add(ctx: click.Context, description: str) -> None:
    """Add a new task.

    \b
    Example:
      tasker add "pay bills"
    """
    with _task_session(ctx) as tasks:
        task = add_task(tasks, description)
        console.print(f"[green]Task added:[/green] {task.id} {escape(task.description)}")


@main.command()
@click.argument("task_id", type=int)
@click.argument("description", nargs=-1, required=True, callback=_join_description)
@click.pass_context
def update(ctx: click.Context, task_id: int, description: str) -> None:
    """Update a task's description."""
    with _task_session(ctx) as tasks:
        task = update_task(tasks, task_id, description)
        console.print(f"[green]Task updated:[/green] {task.id} {escape(task.description)}")


@main.command()
@click.argument("task_id", type=int)
@click.pass_context
def delete(ctx: click.Context, task_id: int) -> None:
    """Delete a task."""
    with _task_session(ctx) as tasks:
        task = delete_task(tasks, task_id)
        console.print(f"[green]Task deleted:[/green] {task_id} {escape(task.description)}")
        if tasks.id_policy == "positional" and task_id <= len(tasks.tasks):
            console.print("[dim]Later tasks have been renumbered.[/dim]")


@main.command("mark-in-progress")
@click.argument("task_id", type=int)
@click.pass_context
def mark_in_progress_command(ctx: click.Context, task_id: int) -> None:
    """Mark a task as in progress."""
    with _task_session(ctx) as tasks:
        task = mark_in_progress(tasks, task_id)
        console.print(f"[yellow]Task in progress:[/yellow] {task.id} {escape(task.description)}")


@main.command("mark-done")
@click.argument("task_id", type=int)
@click.pass_context
def mark_done_command(ctx: click.Context, task_id: int) -> None:
    """Mark a task as done."""
    with _task_session(ctx) as tasks:
        task = mark_done(tasks, task_id)
        console.print(f"[green]Task done:[/green] {task.id} {escape(task.description)}")


@main.command("list")
@click.argument(
    "status",
    required=False,
    type=click.Choice([status.value for status in TaskStatus]),
)
@click.pass_context
def list_command(ctx: click.Context, status: str | None) -> None:
    """List tasks, optionally only those with STATUS.

    \b
    Examples:
      tasker list
      tasker list done
    """
    config: TaskerConfig = ctx.obj["config"]
    status_filter = TaskStatus(status) if status else None

    with _task_session(ctx) as tasks:
        view = list_tasks(tasks, status_filter)

        if not any(True for _ in view):
            if status_filter is None:
                console.print("[dim]No tasks.[/dim] Add one with [cyan]tasker add[/cyan].")
            else:
                console.print(f"[dim]No {status_filter.value} tasks.[/dim]")
            return

        title = "Tasks" if status_filter is None else f"Tasks: {status_filter.label}"
        console.print(_task_table(view, title, config.display.timestamp_format))


@main.command("config")
@click.option("--save", "save_config", is_flag=True, help="Write the effective configuration")
@click.pass_context
def config_command(ctx: click.Context, save_config: bool) -> None:
    """Show the effective configuration."""
    config: TaskerConfig = ctx.obj["config"]

    table = Table(title="Configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    strict_icon = "[green]✓[/green]" if config.storage.strict else "[dim]✗[/dim]"
    table.add_row("Task file", escape(config.storage.path))
    table.add_row("Strict loading", strict_icon)
    table.add_row("Id policy", config.ids.policy)
    table.add_row("Timestamp format", escape(config.display.timestamp_format))

    console.print(table)

    if save_config:
        path = ctx.obj["config_path"] or CONFIG_FILE
        config.save(path)
        console.print(f"[green]Configuration saved:[/green] {path}")


def _task_table(tasks: Iterable[Task], title: str, timestamp_format: str) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Description", style="white")
    table.add_column("Status")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")

    for task in tasks:
        style = STATUS_STYLES[task.status]
        table.add_row(
            str(task.id),
            escape(task.description),
            f"[{style}]{task.status.label}[/{style}]",
            task.created_at.astimezone().strftime(timestamp_format),
            task.updated_at.astimezone().strftime(timestamp_format),
        )

    return table
