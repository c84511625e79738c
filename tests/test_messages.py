"""Tests for user-facing message formatting."""

from datetime import date
from pathlib import Path

from task_tracker.exceptions import (
    CorruptedStorageError,
    EmptyListError,
    IndexOutOfRangeError,
    SaveFileError,
    UnknownArgumentsError,
)
from task_tracker.messages import (
    EMPTY_LIST,
    format_error,
    format_listing,
    format_result,
    format_warning,
)
from task_tracker.task import Deadline, Todo
from task_tracker.task_list import CommandResult, Outcome


class TestListing:

    def test_numbered_from_one(self):
        listing = format_listing([Todo("buy milk"), Deadline("report", by=date(2024, 3, 1))])

        assert listing.splitlines()[1:] == [
            "1.[T][ ] buy milk",
            "2.[D][ ] report (by: Mar 01 2024)",
        ]

    def test_empty(self):
        assert format_listing([]) == EMPTY_LIST

    def test_date_format(self):
        listing = format_listing([Deadline("report", by=date(2024, 3, 1))], "%d/%m/%Y")

        assert "(by: 01/03/2024)" in listing

    def test_markup_in_description_is_escaped(self):
        listing = format_listing([Todo("read [bold]this[/bold]")])

        assert "\\[bold]" in listing


class TestResults:

    def test_added(self):
        result = CommandResult(outcome=Outcome.ADDED, task=Todo("buy milk"), size=1)
        text = format_result(result)

        assert "I've added this task" in text
        assert "[T][ ] buy milk" in text
        assert "Now you have 1 task in the list." in text

    def test_deleted_reports_new_size(self):
        result = CommandResult(outcome=Outcome.DELETED, task=Todo("buy milk"), size=3)

        assert "Now you have 3 tasks in the list." in format_result(result)

    def test_done(self):
        result = CommandResult(outcome=Outcome.DONE, task=Todo("buy milk", done=True), size=1)

        assert "[T][X] buy milk" in format_result(result)

    def test_error(self):
        result = CommandResult.failure(EmptyListError(), 0)

        assert "no tasks in your list" in format_result(result)

    def test_warnings_follow_result(self):
        result = CommandResult(outcome=Outcome.ADDED, task=Todo("a"), size=1)
        result.warnings.append(SaveFileError(Path("data/save.txt")))

        assert "Warning: Unable to save tasks" in format_result(result)


class TestErrors:

    def test_out_of_range_mentions_size(self):
        assert "tasks size: 2" in format_error(IndexOutOfRangeError(5, 2))

    def test_suggestions_listed(self):
        text = format_error(UnknownArgumentsError("lsit", ["list"]))

        assert "Did you mean: list?" in text

    def test_corrupted_storage_warning(self):
        text = format_warning(CorruptedStorageError("unknown task type 'X'", 3))

        assert "line 3" in text
        assert "Starting with an empty task list." in text
