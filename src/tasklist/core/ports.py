# src/tasklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task operations and command handlers.

Handlers depend on this Protocol instead of the JSON store, so tests can pass
an in-memory store.
"""

from typing import Iterable, Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> bool: ...
