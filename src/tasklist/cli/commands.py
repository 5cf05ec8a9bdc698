# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ..core.ports import TaskRepo
from ..tasks import task_api
from ..tasks.task_models import Task, TaskStatus

CommandHandler = Callable[[TaskRepo, list[str]], str]

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNKNOWN_COMMAND = 2

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandResult:
    exit_code: int
    output: str = ""
    error: str = ""


class CommandRegistry:
    """Maps a command name (first argv word) to a handler."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, tuple[str, str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str = "",
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        self._handlers[name] = handler
        self._help[name] = (f"{name} {usage}".strip(), help_text)
        for alias in aliases:
            self._handlers[alias] = handler

    def dispatch(self, store: TaskRepo, argv: Sequence[str]) -> CommandResult:
        """
        Run one command line, e.g. ["update", "17", "new", "title"].

        No command at all prints help. Validation errors never propagate.
        """
        if not argv or not argv[0].strip():
            return CommandResult(EXIT_OK, self.build_help())

        name = argv[0]
        args = list(argv[1:])

        handler = self._handlers.get(name)
        if not handler:
            return CommandResult(
                EXIT_UNKNOWN_COMMAND,
                error=f'Unknown command: "{name}". Use "help" for available commands.',
            )

        try:
            return CommandResult(EXIT_OK, handler(store, args))
        except task_api.TaskError as e:
            logger.debug("Command %s rejected: %s", name, e)
            return CommandResult(EXIT_ERROR, error=f"Error: {e}")

    def build_help(self) -> str:
        width = max((len(u) for u, _ in self._help.values()), default=0) + 3
        lines = [
            "Task Manager CLI",
            "",
            "Usage: tasklist <command> [arguments]",
            "",
            "Commands:",
        ]
        for usage, help_text in self._help.values():
            lines.append(f"  {usage.ljust(width)}{help_text}")
        lines += [
            "",
            "Examples:",
            '  tasklist add "Buy groceries"',
            '  tasklist update 1707450000000 "Buy groceries and cook"',
            "  tasklist done 1707450000000",
            "  tasklist list-not-done",
        ]
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----

_MARKERS = {
    TaskStatus.DONE: "✓",
    TaskStatus.IN_PROGRESS: "⏳",
    TaskStatus.NOT_DONE: "◯",
}


def _render(header: str, tasks: list[Task], empty: str, *, show_status: bool) -> str:
    if not tasks:
        return empty
    lines = [f"=== {header} ==="]
    for i, t in enumerate(tasks, start=1):
        tag = f" [{t.status.value}]" if show_status else ""
        lines.append(f"{i}. {_MARKERS[t.status]}{tag} {t.title} (ID: {t.id})")
    return "\n".join(lines)


def _arg(args: list[str], idx: int) -> str | None:
    return args[idx] if len(args) > idx else None


# ---- handlers ----


def cmd_help(store: TaskRepo, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(store: TaskRepo, args: list[str]) -> str:
    task = task_api.add_task(store, " ".join(args))
    return f'✓ Task added: "{task.title}" (ID: {task.id})'


def cmd_update(store: TaskRepo, args: list[str]) -> str:
    task = task_api.update_task(store, _arg(args, 0), " ".join(args[1:]))
    return f'✓ Task updated: "{task.title}"'


def cmd_delete(store: TaskRepo, args: list[str]) -> str:
    task_api.delete_task(store, _arg(args, 0))
    return "✓ Task deleted"


def cmd_done(store: TaskRepo, args: list[str]) -> str:
    task = task_api.mark_done(store, _arg(args, 0))
    return f'✓ Task marked as done: "{task.title}"'


def cmd_progress(store: TaskRepo, args: list[str]) -> str:
    task = task_api.mark_in_progress(store, _arg(args, 0))
    return f'✓ Task marked as in-progress: "{task.title}"'


def cmd_list(store: TaskRepo, args: list[str]) -> str:
    return _render("All Tasks", task_api.list_all(store), "No tasks found", show_status=True)


def cmd_list_done(store: TaskRepo, args: list[str]) -> str:
    return _render(
        "Done Tasks", task_api.list_done(store), "No completed tasks found", show_status=False
    )


def cmd_list_not_done(store: TaskRepo, args: list[str]) -> str:
    return _render(
        "Not Done Tasks", task_api.list_not_done(store), "No pending tasks found", show_status=True
    )


def cmd_list_progress(store: TaskRepo, args: list[str]) -> str:
    return _render(
        "In Progress Tasks",
        task_api.list_in_progress(store),
        "No in-progress tasks found",
        show_status=False,
    )


registry.register("add", cmd_add, "Add a new task", usage="<title>")
registry.register("update", cmd_update, "Update task title", usage="<id> <title>")
registry.register("delete", cmd_delete, "Delete a task", usage="<id>")
registry.register("done", cmd_done, "Mark task as done", usage="<id>")
registry.register("progress", cmd_progress, "Mark task as in-progress", usage="<id>")
registry.register("list", cmd_list, "List all tasks")
registry.register("list-done", cmd_list_done, "List all completed tasks")
registry.register("list-not-done", cmd_list_not_done, "List all not done tasks")
registry.register("list-progress", cmd_list_progress, "List all in-progress tasks")
registry.register("help", cmd_help, "Show this help message", aliases=["-h", "--help"])
