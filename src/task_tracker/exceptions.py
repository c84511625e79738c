"""Error types raised by the task tracker core.

Every error here is recoverable at the command-loop level: the operation that
raised it is abandoned and the next command is accepted as usual.
"""

from pathlib import Path
from typing import List, Optional


class TrackerError(Exception):
    """Base exception for task tracker operations."""
    pass


class NoDescriptionError(TrackerError):
    """An add command is missing its free-text description."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"The description of a {command} cannot be empty.")


class MultilineDescriptionError(TrackerError):
    """A description holds a line break, which the save file cannot store."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"The description of a {command} must fit on one line.")


class UnknownArgumentsError(TrackerError):
    """The command word is not one the tracker understands."""

    def __init__(self, word: str = "", suggestions: Optional[List[str]] = None):
        self.word = word
        self.suggestions = suggestions or []
        super().__init__("I'm sorry, but I don't know what that means.")


class EmptyListError(TrackerError):
    """Delete was attempted on a list with no tasks."""

    def __init__(self):
        super().__init__("There are no tasks in your list to delete.")


class DateFormatError(TrackerError):
    """A date segment is missing or is not a YYYY-MM-DD calendar date."""

    def __init__(self, text: str = ""):
        self.text = text
        super().__init__("Date is not input correctly. Ensure input date is: YYYY-MM-DD.")


class IndexFormatError(TrackerError):
    """The task number given to done/delete is not an integer."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Please enter an integer as argument, got {text.strip()!r}.")


class IndexOutOfRangeError(TrackerError):
    """The task number resolves outside the current list."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Please enter an integer within your tasks size: {size}")


class StorageError(TrackerError):
    """Base exception for save file problems."""
    pass


class CorruptedStorageError(StorageError):
    """A persisted line does not follow the encoded record schema."""

    def __init__(self, reason: str, line_number: Optional[int] = None):
        self.reason = reason
        self.line_number = line_number
        location = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Save file is corrupted{location}: {reason}")

    def at_line(self, line_number: int) -> "CorruptedStorageError":
        """Return a copy of this error pinned to a line of the save file."""
        return CorruptedStorageError(self.reason, line_number)


class CreateDirectoryError(StorageError):
    """The data directory could not be created."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Unable to create data directory at {path}")


class CreateFileError(StorageError):
    """The save file could not be created."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Unable to create save file at {path}")


class LoadFileError(StorageError):
    """The save file exists but could not be read."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Unable to read save file at {path}")


class SaveFileError(StorageError):
    """The task list could not be written to the save file."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Unable to save tasks to {path}")
