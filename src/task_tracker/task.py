"""Task data model for the task tracker."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import ClassVar, Optional


DISPLAY_DATE_FORMAT = "%b %d %Y"


class TaskKind(Enum):
    """The three kinds of task a user can add."""
    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"


@dataclass
class Task:
    """Shared state of every task: a description and a done flag."""

    description: str
    done: bool = False

    kind: ClassVar[TaskKind]
    icon: ClassVar[str]

    def __post_init__(self):
        if not self.description or not self.description.strip():
            raise ValueError("Task description cannot be empty")

    @property
    def when(self) -> Optional[date]:
        """The calendar date attached to the task, if the kind has one."""
        return None

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def mark_done(self):
        """Mark the task as completed."""
        self.done = True

    def describe(self, date_format: str = DISPLAY_DATE_FORMAT) -> str:
        """Render the task for display, e.g. ``[T][X] buy milk``."""
        return f"[{self.icon}][{self.status_icon}] {self.description}"

    def __str__(self) -> str:
        return self.describe()


@dataclass
class Todo(Task):
    """A plain task with no date."""

    kind: ClassVar[TaskKind] = TaskKind.TODO
    icon: ClassVar[str] = "T"


@dataclass
class Deadline(Task):
    """A task that must be finished by a given date."""

    by: Optional[date] = None

    kind: ClassVar[TaskKind] = TaskKind.DEADLINE
    icon: ClassVar[str] = "D"

    def __post_init__(self):
        super().__post_init__()
        if self.by is None:
            raise ValueError("Deadline requires a due date")

    @property
    def when(self) -> Optional[date]:
        return self.by

    def describe(self, date_format: str = DISPLAY_DATE_FORMAT) -> str:
        return f"{super().describe(date_format)} (by: {self.by.strftime(date_format)})"


@dataclass
class Event(Task):
    """A task that happens on a given date."""

    at: Optional[date] = None

    kind: ClassVar[TaskKind] = TaskKind.EVENT
    icon: ClassVar[str] = "E"

    def __post_init__(self):
        super().__post_init__()
        if self.at is None:
            raise ValueError("Event requires an event date")

    @property
    def when(self) -> Optional[date]:
        return self.at

    def describe(self, date_format: str = DISPLAY_DATE_FORMAT) -> str:
        return f"{super().describe(date_format)} (at: {self.at.strftime(date_format)})"


def create_task(kind: TaskKind, description: str, when: Optional[date] = None,
                done: bool = False) -> Task:
    """Build the task variant matching ``kind``."""
    if kind == TaskKind.DEADLINE:
        return Deadline(description=description, done=done, by=when)
    if kind == TaskKind.EVENT:
        return Event(description=description, done=done, at=when)
    return Todo(description=description, done=done)
