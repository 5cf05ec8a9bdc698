# tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The persisted task file exists but could not be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def generate_id(existing: Iterable[str] = ()) -> str:
    """
    Time-based task id: Unix time in milliseconds, as a string.

    If the candidate is already taken (two adds inside the same millisecond),
    the value is bumped until it is free.
    """
    taken = set(existing)
    candidate = time.time_ns() // 1_000_000
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


class JsonTaskStore:
    """
    JSON file task store.

    The whole collection is one JSON array, read and written in full:
    - load() never raises; a missing file is an empty store, a broken one is
      logged and treated as empty
    - save() writes a temp file next to the target and renames it over
    - records skipped on read are written back unchanged by the next save,
      after the task they followed (or at the end if that task is gone)
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        # (id of the preceding loaded task or None, raw record)
        self._skipped: list[tuple[str | None, Any]] = []

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def read_tasks(self) -> list[Task]:
        """
        Strict read. Raises StoreError if the file exists but is unusable.

        Individual malformed records (and duplicate ids) are skipped with a
        warning rather than failing the whole file; they are kept aside so
        save() does not drop them.
        """
        self._skipped = []
        if not self._path.exists():
            return []

        try:
            raw = self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(self._path, f"cannot read file ({e})") from e

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(self._path, f"invalid JSON ({e})") from e

        if not isinstance(data, list):
            raise StoreError(self._path, f"expected a JSON array, got {type(data).__name__}")

        tasks: list[Task] = []
        seen: set[str] = set()
        for idx, item in enumerate(data):
            anchor = tasks[-1].id if tasks else None
            try:
                task = Task.from_dict(item)
            except ValueError as e:
                logger.warning("Skipping task record #%d in %s: %s", idx, self._path, e)
                self._skipped.append((anchor, item))
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate task id=%s in %s", task.id, self._path)
                self._skipped.append((anchor, item))
                continue
            seen.add(task.id)
            tasks.append(task)

        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def _merge_skipped(self, tasks: Iterable[Task]) -> list[Any]:
        by_anchor: dict[str | None, list[Any]] = {}
        for anchor, raw in self._skipped:
            by_anchor.setdefault(anchor, []).append(raw)

        records: list[Any] = list(by_anchor.pop(None, []))
        for task in tasks:
            records.append(task.to_dict())
            records.extend(by_anchor.pop(task.id, []))
        for rest in by_anchor.values():
            records.extend(rest)
        return records

    # ---- public API ----

    def load(self) -> list[Task]:
        try:
            return self.read_tasks()
        except StoreError:
            logger.exception("Failed to load tasks; continuing with an empty list.")
            return []

    def save(self, tasks: Iterable[Task]) -> bool:
        """Overwrite the file with `tasks`. Returns False (and logs) on failure."""
        payload = json.dumps(self._merge_skipped(tasks), ensure_ascii=False, indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, self._path)
        except OSError:
            logger.exception("Failed to save tasks to %s", self._path)
            with contextlib.suppress(OSError):
                tmp.unlink()
            return False

        logger.debug("Saved tasks to %s", self._path)
        return True
