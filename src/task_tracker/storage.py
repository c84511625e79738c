"""Storage layer for the task tracker using a line-oriented save file.

Each task is one line of ``|``-delimited fields::

    T | 1 | buy milk
    D | 0 | submit report | 2024-03-01
    E | 0 | team dinner | 2024-03-08
"""

import logging
from datetime import date
from pathlib import Path
from typing import Iterable, List, Tuple

from .exceptions import (
    CorruptedStorageError,
    CreateDirectoryError,
    CreateFileError,
    LoadFileError,
    SaveFileError,
)
from .task import Task, TaskKind, create_task
from .utils.datetime import parse_iso_date, to_iso_string

logger = logging.getLogger(__name__)


DATA_SEPARATOR = " | "
TYPE_PARAM = 0
DONE_PARAM = 1
DESCRIPTION_PARAM = 2
RECORD_SEPARATOR = "\n"
DONE_ENCODING = "1"
NOT_DONE_ENCODING = "0"

TYPE_TAGS = {
    TaskKind.TODO: "T",
    TaskKind.DEADLINE: "D",
    TaskKind.EVENT: "E",
}
TAG_TYPES = {tag: kind for kind, tag in TYPE_TAGS.items()}


class TaskLineFormat:
    """Handles conversion between Task objects and save file lines.

    A description may itself contain the separator, so only the first two
    separators (after the type tag and the done flag) and, for dated tasks,
    the last one (before the date) delimit fields.
    """

    @staticmethod
    def encode(task: Task) -> str:
        """Convert a task to one save file line."""
        fields = [
            TYPE_TAGS[task.kind],
            DONE_ENCODING if task.done else NOT_DONE_ENCODING,
            task.description,
        ]
        if task.when is not None:
            fields.append(to_iso_string(task.when))
        return DATA_SEPARATOR.join(fields)

    @staticmethod
    def encode_all(tasks: Iterable[Task]) -> str:
        """Convert a whole task list to save file content, in list order."""
        return RECORD_SEPARATOR.join(TaskLineFormat.encode(task) for task in tasks)

    @staticmethod
    def _fields(line: str) -> List[str]:
        fields = line.split(DATA_SEPARATOR, DESCRIPTION_PARAM)
        if len(fields) <= DESCRIPTION_PARAM:
            raise CorruptedStorageError(f"expected at least 3 fields, found {len(fields)}")
        return fields

    @staticmethod
    def _dated_fields(line: str) -> Tuple[str, str]:
        """Split the tail of a dated line into description and date text."""
        tail = TaskLineFormat._fields(line)[DESCRIPTION_PARAM]
        parts = tail.rsplit(DATA_SEPARATOR, 1)
        if len(parts) < 2:
            raise CorruptedStorageError("missing date")
        return parts[0], parts[1]

    @staticmethod
    def decode_type(line: str) -> TaskKind:
        """Return the task kind encoded in the type tag."""
        tag = TaskLineFormat._fields(line)[TYPE_PARAM]
        try:
            return TAG_TYPES[tag]
        except KeyError:
            raise CorruptedStorageError(f"unknown task type {tag!r}") from None

    @staticmethod
    def decode_done(line: str) -> bool:
        """Return the done flag; only ``0`` and ``1`` are accepted."""
        flag = TaskLineFormat._fields(line)[DONE_PARAM]
        if flag == DONE_ENCODING:
            return True
        if flag == NOT_DONE_ENCODING:
            return False
        raise CorruptedStorageError(f"invalid done flag {flag!r}")

    @staticmethod
    def decode_description(line: str) -> str:
        """Return the non-blank description field."""
        if TaskLineFormat.decode_type(line) == TaskKind.TODO:
            description = TaskLineFormat._fields(line)[DESCRIPTION_PARAM]
        else:
            description, _ = TaskLineFormat._dated_fields(line)

        if not description.strip():
            raise CorruptedStorageError("blank description")
        return description

    @staticmethod
    def decode_date(line: str) -> date:
        """Return the date field of a deadline or event line."""
        _, date_text = TaskLineFormat._dated_fields(line)
        try:
            return parse_iso_date(date_text)
        except ValueError:
            raise CorruptedStorageError(f"invalid date {date_text!r}") from None

    @staticmethod
    def decode(line: str) -> Task:
        """Parse one save file line back to a Task."""
        kind = TaskLineFormat.decode_type(line)
        done = TaskLineFormat.decode_done(line)
        description = TaskLineFormat.decode_description(line)
        when = None if kind == TaskKind.TODO else TaskLineFormat.decode_date(line)
        return create_task(kind, description, when=when, done=done)

    @staticmethod
    def decode_all(lines: Iterable[str]) -> List[Task]:
        """Parse save file lines into tasks.

        Blank lines are skipped. A single malformed line fails the whole
        batch; no partial list is returned.

        Raises:
            CorruptedStorageError: Pinned to the first offending line
        """
        tasks = []
        for line_number, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            try:
                tasks.append(TaskLineFormat.decode(line))
            except CorruptedStorageError as e:
                raise e.at_line(line_number) from e
        return tasks


class Storage:
    """File-based storage for the task list.

    Constructed with the save file location and handed to whoever needs it;
    there is no shared instance.
    """

    def __init__(self, save_path: Path):
        self.save_path = Path(save_path)

    @property
    def data_dir(self) -> Path:
        return self.save_path.parent

    def ensure_directory(self):
        """Ensure the data directory exists."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create data directory {self.data_dir}: {e}")
            raise CreateDirectoryError(self.data_dir) from e

    def load(self, create_missing: bool = True) -> List[Task]:
        """Load every task from the save file.

        A missing save file yields an empty list; it is created empty unless
        ``create_missing`` is False.

        Raises:
            CreateFileError: If a missing save file cannot be created
            LoadFileError: If the save file cannot be read
            CorruptedStorageError: If any line is malformed
        """
        if not self.save_path.exists():
            if not create_missing:
                return []
            try:
                self.save_path.touch()
            except OSError as e:
                logger.warning(f"Could not create save file {self.save_path}: {e}")
                raise CreateFileError(self.save_path) from e
            logger.debug(f"Created empty save file at {self.save_path}")
            return []

        try:
            with open(self.save_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read save file {self.save_path}: {e}")
            raise LoadFileError(self.save_path) from e

        try:
            # Only "\n" ends a record; other line breaks belong to descriptions
            tasks = TaskLineFormat.decode_all(content.split(RECORD_SEPARATOR))
        except CorruptedStorageError as e:
            logger.warning(f"Discarding corrupted save file {self.save_path}: {e}")
            raise

        logger.debug(f"Loaded {len(tasks)} tasks from {self.save_path}")
        return tasks

    def save(self, tasks: Iterable[Task]):
        """Replace the save file with the given tasks.

        Raises:
            SaveFileError: If the file cannot be written
        """
        tasks = list(tasks)
        content = TaskLineFormat.encode_all(tasks)
        try:
            with open(self.save_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.warning(f"Could not write save file {self.save_path}: {e}")
            raise SaveFileError(self.save_path) from e

        logger.debug(f"Saved {len(tasks)} tasks to {self.save_path}")
