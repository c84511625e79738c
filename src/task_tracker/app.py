"""Tracker session: one task list bound to one save file."""

import logging
from typing import List, Optional

from .exceptions import SaveFileError, StorageError, TrackerError
from .parser import CommandKind, classify
from .storage import Storage
from .task_list import CommandResult, TaskList

logger = logging.getLogger(__name__)


class Tracker:
    """Runs commands against a task list and keeps the save file in step."""

    def __init__(self, storage: Storage, task_list: Optional[TaskList] = None):
        self.storage = storage
        self.task_list = task_list if task_list is not None else TaskList()
        self.startup_warnings: List[TrackerError] = []

    @classmethod
    def open(cls, storage: Storage) -> "Tracker":
        """Load the saved task list, falling back to an empty one.

        Storage problems never block startup; they are kept in
        ``startup_warnings`` for the caller to show.
        """
        tracker = cls(storage)
        try:
            storage.ensure_directory()
        except StorageError as e:
            tracker.startup_warnings.append(e)

        try:
            tracker.task_list = TaskList(storage.load())
        except StorageError as e:
            tracker.startup_warnings.append(e)

        logger.info(f"Session started with {tracker.task_list.size()} tasks")
        return tracker

    def execute(self, line: str) -> CommandResult:
        """Run one raw command line and report what happened."""
        kind = classify(line)
        logger.debug(f"Dispatching {kind.value} command: {line!r}")

        if kind == CommandKind.LIST:
            return self.task_list.listing()
        if kind == CommandKind.DONE:
            result = self.task_list.mark_done(line)
        elif kind == CommandKind.DELETE:
            result = self.task_list.delete(line)
        else:
            result = self.task_list.add(line)

        if result.ok and result.mutated:
            try:
                self.task_list.persist(self.storage)
            except SaveFileError as e:
                result.warnings.append(e)
        return result
