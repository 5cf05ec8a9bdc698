# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the JSON task store from settings, then runs exactly
one command and exits with its code.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..config import Settings, get_settings
from ..logging_setup import setup_logging
from ..tasks.task_store import JsonTaskStore
from .commands import registry

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    if settings is None:
        settings = get_settings()
    if argv is None:
        argv = sys.argv[1:]

    console_level = getattr(logging, str(settings.log_level).upper(), logging.WARNING)
    setup_logging(console_level=console_level, log_file=settings.log_file)

    store = JsonTaskStore(settings.tasks_file)
    logger.debug("%s: argv=%s store=%s", settings.app_name, list(argv), store.path)

    result = registry.dispatch(store, argv)
    if result.output:
        print(result.output)
    if result.error:
        print(result.error, file=sys.stderr)
    return result.exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
