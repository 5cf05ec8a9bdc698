# src/tasklist/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.ports import TaskRepo
from .task_models import Task, TaskStatus, utc_now
from .task_store import generate_id

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Base class for user-facing task operation errors."""


class TaskValidationError(TaskError):
    pass


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f'Task with ID "{task_id}" not found')
        self.task_id = task_id


def _require(value: str | None, message: str) -> str:
    if value is None or not value.strip():
        raise TaskValidationError(message)
    return value


def _find(tasks: list[Task], task_id: str) -> Task:
    for task in tasks:
        if task.id == task_id:
            return task
    raise TaskNotFoundError(task_id)


def _save(store: TaskRepo, tasks: list[Task]) -> None:
    # Save failures are already logged by the store; the command still succeeds.
    if not store.save(tasks):
        logger.warning("Change was not persisted (%d tasks in memory).", len(tasks))


# ---- mutations ----


def add_task(store: TaskRepo, title: str | None, *, now: datetime | None = None) -> Task:
    title = _require(title, "Task title is required").strip()

    tasks = store.load()
    ts = now or utc_now()
    task = Task(
        id=generate_id(t.id for t in tasks),
        title=title,
        status=TaskStatus.NOT_DONE,
        created_at=ts,
        updated_at=ts,
    )
    tasks.append(task)
    _save(store, tasks)
    logger.debug("Task added id=%s", task.id)
    return task


def update_task(
    store: TaskRepo, task_id: str | None, title: str | None, *, now: datetime | None = None
) -> Task:
    message = "Task ID and new title are required"
    task_id = _require(task_id, message)
    title = _require(title, message).strip()

    tasks = store.load()
    task = _find(tasks, task_id)
    task.title = title
    task.touch(now)
    _save(store, tasks)
    logger.debug("Task updated id=%s", task.id)
    return task


def delete_task(store: TaskRepo, task_id: str | None) -> Task:
    task_id = _require(task_id, "Task ID is required")

    tasks = store.load()
    task = _find(tasks, task_id)
    remaining = [t for t in tasks if t is not task]
    _save(store, remaining)
    logger.debug("Task deleted id=%s", task.id)
    return task


def set_status(
    store: TaskRepo,
    task_id: str | None,
    status: TaskStatus,
    *,
    now: datetime | None = None,
) -> Task:
    task_id = _require(task_id, "Task ID is required")

    tasks = store.load()
    task = _find(tasks, task_id)
    task.status = status
    task.touch(now)
    _save(store, tasks)
    logger.debug("Task id=%s status -> %s", task.id, status.value)
    return task


def mark_in_progress(store: TaskRepo, task_id: str | None, *, now: datetime | None = None) -> Task:
    return set_status(store, task_id, TaskStatus.IN_PROGRESS, now=now)


def mark_done(store: TaskRepo, task_id: str | None, *, now: datetime | None = None) -> Task:
    return set_status(store, task_id, TaskStatus.DONE, now=now)


# ---- queries (never save) ----


def list_all(store: TaskRepo) -> list[Task]:
    return store.load()


def list_done(store: TaskRepo) -> list[Task]:
    return [t for t in store.load() if t.status is TaskStatus.DONE]


def list_not_done(store: TaskRepo) -> list[Task]:
    return [t for t in store.load() if t.status is not TaskStatus.DONE]


def list_in_progress(store: TaskRepo) -> list[Task]:
    return [t for t in store.load() if t.status is TaskStatus.IN_PROGRESS]
