# src/listkeeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- seeds the TaskStore from the task file and wires the background saver into it,
- shuts the saver down cleanly.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskFile
from ..core.state import AppState
from ..tasks.persistence import BackgroundSaver, JsonTaskFile
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, task_file: TaskFile | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    With save_tasks off the store starts empty and nothing is written.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if not settings.save_tasks:
        logger.info("Task persistence disabled; starting with an empty collection.")
        return AppState(settings=settings, task_store=TaskStore())

    if task_file is None:
        task_file = JsonTaskFile(settings.tasks_path)

    seed: list[dict] = []
    try:
        seed = task_file.load()
    except Exception:
        logger.exception("Failed to load task seed; starting empty.")

    store = TaskStore(seed)
    saver = BackgroundSaver(
        task_file,
        retries=settings.save_retries,
        retry_delay_seconds=settings.save_retry_delay_seconds,
    )
    store.subscribe(saver.submit)

    return AppState(settings=settings, task_store=store, saver=saver)


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    saver = state.saver
    if saver is None:
        return
    try:
        saver.shutdown()
    except Exception:
        logger.exception("Task saver shutdown failed.")
