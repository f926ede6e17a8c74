# src/listkeeper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Every value has a usable default; nothing is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "LISTKEEPER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Real environment wins over .env.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Persistence ----
    save_tasks: bool
    save_retries: int
    save_retry_delay_ms: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_path: Path

    @property
    def save_retry_delay_seconds(self) -> float:
        return self.save_retry_delay_ms / 1000.0

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "listkeeper").strip() or "listkeeper"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        save_tasks = _env_bool(_k("SAVE_TASKS"), True)
        save_retries = max(0, _env_int(_k("SAVE_RETRIES"), 2))
        save_retry_delay_ms = max(0, _env_int(_k("SAVE_RETRY_DELAY_MS"), 200))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/listkeeper"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            save_tasks=save_tasks,
            save_retries=save_retries,
            save_retry_delay_ms=save_retry_delay_ms,
            data_dir=data_dir,
            tasks_path=tasks_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
