"""In-memory task list and the results its operations report."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional

from .exceptions import (
    EmptyListError,
    IndexOutOfRangeError,
    TrackerError,
)
from .parser import DELETE_PREFIX_LENGTH, DONE_PREFIX_LENGTH, parse_add, parse_index
from .storage import Storage
from .task import Task, create_task

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """What a successful command did."""
    ADDED = "added"
    DONE = "done"
    DELETED = "deleted"
    LISTED = "listed"


@dataclass
class CommandResult:
    """Outcome of one command, handed to the presentation layer.

    Exactly one of ``outcome`` and ``error`` is set. ``warnings`` collects
    non-fatal problems, such as a failed save after a successful change.
    """
    outcome: Optional[Outcome] = None
    task: Optional[Task] = None
    size: int = 0
    tasks: List[Task] = field(default_factory=list)
    error: Optional[TrackerError] = None
    warnings: List[TrackerError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def mutated(self) -> bool:
        """True when the command changed the task list."""
        return self.outcome in (Outcome.ADDED, Outcome.DONE, Outcome.DELETED)

    @classmethod
    def failure(cls, error: TrackerError, size: int) -> "CommandResult":
        return cls(error=error, size=size)


class TaskList:
    """Ordered task collection; insertion order is display and index order."""

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[self._check_index(index)]

    @property
    def tasks(self) -> List[Task]:
        """A copy of the tasks in list order."""
        return list(self._tasks)

    def size(self) -> int:
        return len(self._tasks)

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._tasks):
            raise IndexOutOfRangeError(index, len(self._tasks))
        return index

    def add(self, line: str) -> CommandResult:
        """Build a task from an add command and append it."""
        try:
            parsed = parse_add(line)
        except TrackerError as e:
            logger.debug(f"Rejected add command {line!r}: {e}")
            return CommandResult.failure(e, self.size())

        task = create_task(parsed.kind, parsed.description, when=parsed.when)
        self._tasks.append(task)
        return CommandResult(outcome=Outcome.ADDED, task=task, size=self.size())

    def mark_done(self, line: str) -> CommandResult:
        """Mark the task named by a ``done`` command as completed."""
        try:
            index = self._check_index(parse_index(line, DONE_PREFIX_LENGTH))
        except TrackerError as e:
            logger.debug(f"Rejected done command {line!r}: {e}")
            return CommandResult.failure(e, self.size())

        task = self._tasks[index]
        task.mark_done()
        return CommandResult(outcome=Outcome.DONE, task=task, size=self.size())

    def delete(self, line: str) -> CommandResult:
        """Remove the task named by a ``delete`` command.

        An empty list is always reported as such, whatever the argument.
        """
        try:
            if not self._tasks:
                raise EmptyListError()
            index = self._check_index(parse_index(line, DELETE_PREFIX_LENGTH))
        except TrackerError as e:
            logger.debug(f"Rejected delete command {line!r}: {e}")
            return CommandResult.failure(e, self.size())

        task = self._tasks.pop(index)
        return CommandResult(outcome=Outcome.DELETED, task=task, size=self.size())

    def listing(self) -> CommandResult:
        """Report every task for display."""
        return CommandResult(outcome=Outcome.LISTED, tasks=self.tasks, size=self.size())

    def persist(self, storage: Storage):
        """Write the whole list through the storage handle."""
        storage.save(self._tasks)
