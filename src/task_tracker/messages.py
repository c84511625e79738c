"""User-facing text for command results, errors and warnings.

Everything returned here is rich console markup; task descriptions are escaped
so user text is never read as markup.
"""

from typing import Iterable, List

from rich.markup import escape

from .exceptions import (
    CorruptedStorageError,
    StorageError,
    TrackerError,
    UnknownArgumentsError,
)
from .task import DISPLAY_DATE_FORMAT, Task
from .task_list import CommandResult, Outcome

GREETING = "[bold]Hello! I'm your task tracker.[/bold]\nWhat can I do for you?"
FAREWELL = "Bye. Hope to see you again soon!"
EMPTY_LIST = "[yellow]Your task list is empty.[/yellow]"


def format_task(task: Task, date_format: str = DISPLAY_DATE_FORMAT) -> str:
    return escape(task.describe(date_format))


def format_task_count(size: int) -> str:
    noun = "task" if size == 1 else "tasks"
    return f"Now you have {size} {noun} in the list."


def format_listing(tasks: Iterable[Task], date_format: str = DISPLAY_DATE_FORMAT) -> str:
    """Numbered listing, 1-based, e.g. ``1.[T][ ] buy milk``."""
    lines = [f"{number}.{format_task(task, date_format)}"
             for number, task in enumerate(tasks, start=1)]
    if not lines:
        return EMPTY_LIST
    return "\n".join(["Here are the tasks in your list:"] + lines)


def format_error(error: TrackerError) -> str:
    """Describe an error in one or two lines."""
    lines = [f"[red]{escape(str(error))}[/red]"]
    if isinstance(error, UnknownArgumentsError) and error.suggestions:
        options = ", ".join(error.suggestions)
        lines.append(f"[dim]Did you mean: {escape(options)}?[/dim]")
    return "\n".join(lines)


def format_warning(warning: TrackerError) -> str:
    text = f"[yellow]Warning: {escape(str(warning))}"
    if isinstance(warning, CorruptedStorageError):
        text += "\nStarting with an empty task list."
    elif isinstance(warning, StorageError):
        text += "\nChanges may not be saved."
    return text + "[/yellow]"


def format_result(result: CommandResult, date_format: str = DISPLAY_DATE_FORMAT) -> str:
    """Turn a command result into the text shown to the user."""
    if not result.ok:
        lines: List[str] = [format_error(result.error)]
    elif result.outcome == Outcome.LISTED:
        lines = [format_listing(result.tasks, date_format)]
    elif result.outcome == Outcome.ADDED:
        lines = [
            "[green]Got it. I've added this task:[/green]",
            f"  {format_task(result.task, date_format)}",
            format_task_count(result.size),
        ]
    elif result.outcome == Outcome.DONE:
        lines = [
            "[green]Nice! I've marked this task as done:[/green]",
            f"  {format_task(result.task, date_format)}",
        ]
    else:
        lines = [
            "[green]Noted. I've removed this task:[/green]",
            f"  {format_task(result.task, date_format)}",
            format_task_count(result.size),
        ]

    lines.extend(format_warning(warning) for warning in result.warnings)
    return "\n".join(lines)
