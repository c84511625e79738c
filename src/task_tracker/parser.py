"""Command parser for the task tracker.

Commands follow a rigid "verb + content" grammar::

    todo <description>
    deadline <description> /by YYYY-MM-DD
    event <description> /at YYYY-MM-DD
    done <number>
    delete <number>
    list

so arguments are pulled out at fixed offsets rather than through a general
tokenizer.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

from fuzzywuzzy import fuzz, process

from .exceptions import (
    DateFormatError,
    IndexFormatError,
    MultilineDescriptionError,
    NoDescriptionError,
    UnknownArgumentsError,
)
from .task import TaskKind
from .utils.datetime import parse_iso_date

logger = logging.getLogger(__name__)


class CommandKind(Enum):
    """Top-level command categories."""
    DONE = "done"
    LIST = "list"
    DELETE = "delete"
    ADD = "add"


DONE_PREFIX_LENGTH = len("done ")
DELETE_PREFIX_LENGTH = len("delete ")
TODO_DESCRIPTION_OFFSET = len("todo ")
TODO_MIN_TOKENS = 2
DATED_MIN_TOKENS = 4
DATE_SEPARATOR = "/"
DATE_MARKER_LENGTH = len("by ")
INDEX_PADDING = 1

ADD_PREFIX_LENGTHS = {
    TaskKind.DEADLINE: len("deadline "),
    TaskKind.EVENT: len("event "),
}

COMMAND_WORDS = ["todo", "deadline", "event", "done", "list", "delete"]

INDEX_RE = re.compile(r"[+-]?[0-9]+")
# Characters that end a save file record when read back
RECORD_BREAKS = ("\n", "\r")


@dataclass
class ParsedTask:
    """The pieces of an add command needed to build a task."""
    kind: TaskKind
    description: str
    when: Optional[date] = None


def classify(line: str) -> CommandKind:
    """Return the command kind of a raw input line.

    Anything that is not done/list/delete is treated as an add command, so an
    unrecognised word is reported by ``classify_add``.
    """
    if line.startswith(CommandKind.DONE.value):
        return CommandKind.DONE
    if line.startswith(CommandKind.LIST.value):
        return CommandKind.LIST
    if line.startswith(CommandKind.DELETE.value):
        return CommandKind.DELETE
    return CommandKind.ADD


def classify_add(line: str) -> TaskKind:
    """Return which kind of task an add command creates.

    Raises:
        UnknownArgumentsError: If the line starts with no known command word
    """
    for kind in (TaskKind.TODO, TaskKind.DEADLINE, TaskKind.EVENT):
        if line.startswith(kind.value):
            return kind

    words = line.split()
    word = words[0] if words else ""
    raise UnknownArgumentsError(word, suggest_commands(word))


def suggest_commands(word: str) -> List[str]:
    """Suggest known command words close to a mistyped one."""
    if not word:
        return []
    close_matches = process.extractBests(word, COMMAND_WORDS,
                                         scorer=fuzz.ratio, score_cutoff=70, limit=2)
    return [match[0] for match in close_matches]


def parse_index(line: str, prefix_length: int) -> int:
    """Return the 0-based task index that follows a command prefix.

    Raises:
        IndexFormatError: If the remainder is not a base-10 integer
    """
    text = line[prefix_length:]
    if not INDEX_RE.fullmatch(text.strip()):
        raise IndexFormatError(text)
    return int(text.strip()) - INDEX_PADDING


def check_single_line(description: str, kind: TaskKind) -> str:
    """Reject descriptions the line-oriented save file cannot hold.

    Raises:
        MultilineDescriptionError: If the description contains a line break
    """
    if any(mark in description for mark in RECORD_BREAKS):
        raise MultilineDescriptionError(kind.value)
    return description


def parse_todo_description(line: str) -> str:
    """Return the description of a ``todo`` command.

    Raises:
        NoDescriptionError: If nothing follows the command word
        MultilineDescriptionError: If the description spans lines
    """
    description = line[TODO_DESCRIPTION_OFFSET:].strip()
    if len(line.split()) < TODO_MIN_TOKENS or not description:
        raise NoDescriptionError(TaskKind.TODO.value)
    return check_single_line(description, TaskKind.TODO)


def parse_dated(line: str, kind: TaskKind) -> Tuple[str, date]:
    """Return the description and date of a ``deadline`` or ``event`` command.

    Raises:
        NoDescriptionError: If the command has too few parts or no description
        MultilineDescriptionError: If the description spans lines
        DateFormatError: If the date segment is missing or not YYYY-MM-DD
    """
    if len(line.split()) < DATED_MIN_TOKENS:
        raise NoDescriptionError(kind.value)

    fields = line[ADD_PREFIX_LENGTHS[kind]:].split(DATE_SEPARATOR)
    description = fields[0].strip()
    if not description:
        raise NoDescriptionError(kind.value)
    check_single_line(description, kind)
    if len(fields) < 2:
        raise DateFormatError()

    date_text = fields[1][DATE_MARKER_LENGTH:]
    try:
        when = parse_iso_date(date_text)
    except ValueError:
        raise DateFormatError(date_text.strip()) from None
    return description, when


def parse_add(line: str) -> ParsedTask:
    """Parse an add command into the data needed to build a task."""
    kind = classify_add(line)
    if kind == TaskKind.TODO:
        parsed = ParsedTask(kind=kind, description=parse_todo_description(line))
    else:
        description, when = parse_dated(line, kind)
        parsed = ParsedTask(kind=kind, description=description, when=when)

    logger.debug(f"Parsed {kind.value} command: {parsed}")
    return parsed
