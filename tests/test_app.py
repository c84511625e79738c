"""End-to-end tests for a tracker session."""

from datetime import date
from pathlib import Path
from unittest.mock import patch

from task_tracker.app import Tracker
from task_tracker.exceptions import (
    CorruptedStorageError,
    DateFormatError,
    MultilineDescriptionError,
    NoDescriptionError,
    SaveFileError,
    UnknownArgumentsError,
)
from task_tracker.messages import format_listing
from task_tracker.storage import Storage
from task_tracker.task import Deadline, Todo
from task_tracker.task_list import Outcome


class TestSession:
    """Drive a session through raw command lines."""

    def test_walkthrough(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))
        assert tracker.startup_warnings == []

        tracker.execute("todo buy milk")
        assert format_listing(tracker.task_list).endswith("1.[T][ ] buy milk")

        tracker.execute("done 1")
        assert "1.[T][X] buy milk" in format_listing(tracker.task_list)

        result = tracker.execute("deadline submit report /by 2024-03-01")
        assert result.size == 2
        assert "2.[D][ ] submit report (by: Mar 01 2024)" in format_listing(tracker.task_list)

        tracker.execute("delete 1")
        listing = format_listing(tracker.task_list)
        assert "1.[D][ ] submit report (by: Mar 01 2024)" in listing
        assert "buy milk" not in listing

        result = tracker.execute("deadline report /by 2024/03/01")
        assert isinstance(result.error, DateFormatError)
        assert tracker.task_list.size() == 1

    def test_todo_without_description(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))

        result = tracker.execute("todo")

        assert isinstance(result.error, NoDescriptionError)
        assert result.error.command == "todo"
        assert tracker.task_list.size() == 0

    def test_unknown_command_comes_from_add_parser(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))

        result = tracker.execute("sing")

        assert isinstance(result.error, UnknownArgumentsError)

    def test_list_command(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))
        tracker.execute("todo a")

        result = tracker.execute("list")

        assert result.outcome == Outcome.LISTED
        assert result.tasks == [Todo("a")]


class TestPersistence:
    """The save file follows every successful change."""

    def test_changes_survive_restart(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))
        tracker.execute("todo buy milk")
        tracker.execute("deadline submit report /by 2024-03-01")
        tracker.execute("done 2")

        reopened = Tracker.open(Storage(save_path))

        assert reopened.task_list.tasks == [
            Todo("buy milk"),
            Deadline("submit report", done=True, by=date(2024, 3, 1)),
        ]
        assert save_path.read_text(encoding="utf-8") == (
            "T | 0 | buy milk\nD | 1 | submit report | 2024-03-01"
        )

    def test_awkward_descriptions_survive_restart(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))
        tracker.execute("todo keep me")
        tracker.execute("deadline foo | /by 2024-03-01")
        tracker.execute("todo line\u2028separator")

        reopened = Tracker.open(Storage(save_path))

        assert reopened.startup_warnings == []
        assert reopened.task_list.tasks == [
            Todo("keep me"),
            Deadline("foo |", by=date(2024, 3, 1)),
            Todo("line\u2028separator"),
        ]

    def test_multiline_description_is_not_saved(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))
        tracker.execute("todo keep me")

        result = tracker.execute("todo two\nlines")

        assert isinstance(result.error, MultilineDescriptionError)
        assert Tracker.open(Storage(save_path)).task_list.tasks == [Todo("keep me")]

    def test_failed_command_does_not_save(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))

        with patch.object(Storage, "save") as mock_save:
            tracker.execute("todo")
            tracker.execute("list")

        mock_save.assert_not_called()

    def test_save_failure_is_a_warning(self, save_path: Path):
        tracker = Tracker.open(Storage(save_path))

        with patch.object(Storage, "save", side_effect=SaveFileError(save_path)):
            result = tracker.execute("todo buy milk")

        assert result.ok
        assert len(result.warnings) == 1
        assert isinstance(result.warnings[0], SaveFileError)
        assert tracker.task_list.size() == 1


class TestStartup:
    """Loading falls back to an empty list on storage problems."""

    def test_creates_directory_and_file(self, save_path: Path):
        Tracker.open(Storage(save_path))

        assert save_path.parent.is_dir()
        assert save_path.exists()

    def test_corrupted_file_starts_empty(self, save_path: Path):
        save_path.parent.mkdir(parents=True)
        save_path.write_text("T | 0 | fine\nT | 2 | broken\n", encoding="utf-8")

        tracker = Tracker.open(Storage(save_path))

        assert tracker.task_list.size() == 0
        assert len(tracker.startup_warnings) == 1
        assert isinstance(tracker.startup_warnings[0], CorruptedStorageError)

    def test_unusable_directory(self, tmp_path: Path):
        """A file where the data directory should be blocks directory and file creation."""
        blocker = tmp_path / "data"
        blocker.write_text("not a directory", encoding="utf-8")

        tracker = Tracker.open(Storage(blocker / "save.txt"))

        assert tracker.task_list.size() == 0
        assert len(tracker.startup_warnings) == 2
