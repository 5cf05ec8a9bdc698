# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.config import Settings
from tasklist.tasks.task_store import JsonTaskStore


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def store(tasks_file: Path) -> JsonTaskStore:
    return JsonTaskStore(tasks_file)


@pytest.fixture()
def settings(tasks_file: Path) -> Settings:
    """
    Settings pointing at a per-test task file.

    Built directly rather than via get_settings() so tests never read the
    developer's environment or .env.
    """
    return Settings(
        app_name="tasklist",
        log_level="WARNING",
        tasks_file=tasks_file,
        log_file=None,
    )
