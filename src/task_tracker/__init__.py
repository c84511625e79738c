"""Task Tracker - a command-line tracker for todos, deadlines and events."""

__version__ = "0.1.0"

from .task import Task, Todo, Deadline, Event, TaskKind
from .task_list import TaskList, CommandResult, Outcome
from .storage import Storage, TaskLineFormat
from .app import Tracker

__all__ = [
    "Task",
    "Todo",
    "Deadline",
    "Event",
    "TaskKind",
    "TaskList",
    "CommandResult",
    "Outcome",
    "Storage",
    "TaskLineFormat",
    "Tracker",
    "__version__",
]
