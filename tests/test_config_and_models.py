# tests/test_config_and_models.py

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

import pytest

from tasklist.config import DEFAULT_TASKS_FILE, Settings
from tasklist.logging_setup import setup_logging
from tasklist.tasks.task_models import Task, TaskStatus, format_timestamp, utc_now

from .fakes import make_task


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TASKLIST_TASKS_FILE", "TASKLIST_LOG_LEVEL", "TASKLIST_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.tasks_file == DEFAULT_TASKS_FILE
    assert s.tasks_file.name == "tasks.json"
    assert s.log_level == "WARNING"
    assert s.log_file is None


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_TASKS_FILE", str(tmp_path / "mine.json"))
    monkeypatch.setenv("TASKLIST_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKLIST_LOG_FILE", str(tmp_path / "logs" / "tasklist.log"))

    s = Settings.from_env()

    assert s.tasks_file == tmp_path / "mine.json"
    assert s.log_level == "DEBUG"
    assert s.log_file == tmp_path / "logs" / "tasklist.log"


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "tasklist.log"
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        setup_logging(log_file=log_file)
        logging.getLogger("tasklist.test").debug("hello file")
        for h in root.handlers:
            h.flush()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
        logging.captureWarnings(False)

    assert "DEBUG tasklist.test: hello file" in log_file.read_text("utf-8")


def test_status_from_json() -> None:
    assert TaskStatus.from_json("in-progress") is TaskStatus.IN_PROGRESS
    with pytest.raises(ValueError, match="unknown status"):
        TaskStatus.from_json("in_progress")
    with pytest.raises(ValueError, match="must be a string"):
        TaskStatus.from_json(None)


def test_timestamps_use_utc_millis() -> None:
    now = utc_now()
    assert now.tzinfo is not None
    assert now.microsecond % 1000 == 0
    assert format_timestamp(datetime(2024, 2, 9, 3, 20, tzinfo=UTC)) == "2024-02-09T03:20:00.000Z"


def test_from_dict_accepts_iso_offsets() -> None:
    raw = dict(make_task("1").to_dict(), createdAt="2024-02-09T04:20:00.123+01:00")

    task = Task.from_dict(raw)

    assert task.created_at == make_task("1").created_at


@pytest.mark.parametrize(
    "patch",
    [{"id": 5}, {"title": "  "}, {"status": "DONE"}, {"updatedAt": "yesterday"}, {"createdAt": None}],
)
def test_from_dict_rejects_malformed_fields(patch) -> None:
    raw = dict(make_task("1").to_dict(), **patch)
    with pytest.raises(ValueError):
        Task.from_dict(raw)
