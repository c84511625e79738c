"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from task_tracker.storage import Storage  # noqa: E402


@pytest.fixture
def save_path(tmp_path: Path) -> Path:
    """Save file location inside a not-yet-created data directory."""
    return tmp_path / "data" / "save.txt"


@pytest.fixture
def storage(save_path: Path) -> Storage:
    storage = Storage(save_path)
    storage.ensure_directory()
    return storage
