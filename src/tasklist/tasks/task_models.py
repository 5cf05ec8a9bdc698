# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Task lifecycle status. Transitions are plain sets, no guards."""

    NOT_DONE = "not-done"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def from_json(cls, raw: Any) -> TaskStatus:
        if not isinstance(raw, str):
            raise ValueError(f"status must be a string, got {type(raw).__name__}")
        try:
            return cls(raw)
        except ValueError:
            raise ValueError(f"unknown status {raw!r}") from None


def truncate_ms(ts: datetime) -> datetime:
    # Millisecond precision: matches what the JSON file can hold.
    return ts.replace(microsecond=ts.microsecond // 1000 * 1000)


def utc_now() -> datetime:
    return truncate_ms(datetime.now(UTC))


def format_timestamp(ts: datetime) -> str:
    return ts.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"timestamp must be a non-empty string, got {raw!r}")
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return truncate_ms(ts)


@dataclass(slots=True)
class Task:
    id: str
    title: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        self.created_at = truncate_ms(self.created_at)
        self.updated_at = truncate_ms(self.updated_at)

    def touch(self, now: datetime | None = None) -> None:
        self.updated_at = truncate_ms(now or utc_now())

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from one persisted record.

        Raises ValueError when the record is not an object or any field is
        missing or malformed.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError(f"task id must be a non-empty string, got {task_id!r}")

        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"task {task_id}: title must be a non-empty string")

        return cls(
            id=task_id,
            title=title,
            status=TaskStatus.from_json(raw.get("status")),
            created_at=parse_timestamp(raw.get("createdAt")),
            updated_at=parse_timestamp(raw.get("updatedAt")),
        )
