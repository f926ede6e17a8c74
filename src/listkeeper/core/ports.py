# src/listkeeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) between the task core and its collaborators.

Presentation code depends on TaskRepo, persistence implements SnapshotSink.
Keeping these as Protocols lets tests swap in fakes without touching the core.
"""

from collections.abc import Callable
from typing import Any, Protocol

from ..tasks.task_models import Category, Priority, StoreResult, Task, TaskCollection


class SnapshotSink(Protocol):
    """Where snapshots go after a successful mutation (file, backend, ...)."""

    def save(self, snapshot: TaskCollection) -> None: ...


class SeedSource(Protocol):
    """Supplies previously saved raw task records on startup."""

    def load(self) -> list[dict[str, Any]]: ...


class TaskFile(SeedSource, SnapshotSink, Protocol):
    """Both ends of persistence in one object (e.g. JsonTaskFile)."""


class TaskRepo(Protocol):
    # Queries
    def list(self) -> TaskCollection: ...
    def get(self, task_id: str) -> Task | StoreResult: ...

    # Mutators
    def create(
            self,
            text: str,
            category: Category | str | None = None,
            priority: Priority | str | None = None,
    ) -> Task | StoreResult: ...
    def update(self, task_id: str, **fields: Any) -> Task | StoreResult: ...
    def toggle_completion(self, task_id: str) -> Task | StoreResult: ...
    def delete(self, task_id: str) -> StoreResult: ...

    # Change notification
    def subscribe(self, observer: Callable[[TaskCollection], None]) -> Callable[[], None]: ...
