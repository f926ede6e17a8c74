# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from listkeeper.core.state import AppState
from listkeeper.tasks.task_store import TaskStore

from .fakes import FakeClock, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="listkeeper-test",
        log_level="DEBUG",
        save_tasks=True,
        save_retries=1,
        save_retry_delay_ms=0,
        save_retry_delay_seconds=0.0,
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.json",
    )


@pytest.fixture()
def store() -> TaskStore:
    """Empty store with predictable ids (t0001, ...) and timestamps."""
    return TaskStore(id_factory=SequentialIds(), clock=FakeClock())


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState wired with the deterministic store and no saver."""
    return AppState(settings=settings, task_store=store)
