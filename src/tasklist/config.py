# src/tasklist/config.py

"""Settings loaded from environment variables (+ optional .env).

Nothing is required: with no environment set, the task file lives next to the
package and only warnings reach the console.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"

PROGRAM_DIR = Path(__file__).resolve().parent
DEFAULT_TASKS_FILE = PROGRAM_DIR / "tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path | None = None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    log_level: str
    tasks_file: Path
    log_file: Path | None

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name="tasklist",
            log_level=_env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING",
            tasks_file=_env_path(_k("TASKS_FILE")) or DEFAULT_TASKS_FILE,
            log_file=_env_path(_k("LOG_FILE")),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Build settings once per process; .env never overrides real env vars."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
