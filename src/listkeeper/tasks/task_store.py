# src/listkeeper/tasks/task_store.py

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from .task_codec import task_from_dict
from .task_models import Category, Priority, StoreResult, Task, TaskCollection

logger = logging.getLogger(__name__)

TaskObserver = Callable[[TaskCollection], None]

_UPDATABLE = frozenset({"text", "category", "priority", "completed"})
_IMMUTABLE = frozenset({"id", "created_at", "createdAt"})


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TaskStore:
    """
    In-memory task store: the only writer of task state.

    Collection:
    - an immutable tuple of frozen Task values, in creation order (new tasks are appended)
    - every mutation builds a new tuple and publishes it with a single assignment,
      so list() always returns a complete snapshot

    Results:
    - failures are returned as StoreResult members (REJECTED / NOT_FOUND), never raised

    Thread-safety:
    - mutators run under one re-entrant lock
    - observers are called under that lock, in mutation order, with the new snapshot
    """

    def __init__(
        self,
        seed: Iterable[Mapping[str, Any] | Task] | None = None,
        *,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._id_factory = id_factory
        self._clock = clock
        self._lock = threading.RLock()
        self._observers: list[TaskObserver] = []
        self._tasks: TaskCollection = self._validate_seed(seed or ())
        logger.info("TaskStore ready total=%s", len(self._tasks))

    # ---- seeding ----

    def _fresh_id(self, taken: set[str]) -> str:
        while True:
            tid = self._id_factory()
            if tid not in taken:
                return tid

    def _validate_seed(self, seed: Iterable[Mapping[str, Any] | Task]) -> TaskCollection:
        out: list[Task] = []
        seen: set[str] = set()
        dropped = 0

        for item in seed:
            if isinstance(item, Task):
                record: Mapping[str, Any] = {
                    "id": item.id,
                    "text": item.text,
                    "completed": item.completed,
                    "category": item.category,
                    "priority": item.priority,
                    "createdAt": item.created_at,
                }
            elif isinstance(item, Mapping):
                record = item
            else:
                dropped += 1
                continue

            task = task_from_dict(record, new_id=lambda: self._fresh_id(seen), now=self._clock)
            if task is None or task.id in seen:
                dropped += 1
                continue

            seen.add(task.id)
            out.append(task)

        if dropped:
            logger.warning("TaskStore seed: dropped %s malformed or duplicate entries", dropped)
        return tuple(out)

    # ---- observers ----

    def subscribe(self, observer: TaskObserver) -> Callable[[], None]:
        """Register a callback for new snapshots. Returns an unsubscribe function."""
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _publish(self, tasks: TaskCollection) -> None:
        self._tasks = tasks
        for observer in list(self._observers):
            try:
                observer(tasks)
            except Exception:
                logger.exception("Task observer failed: %r", observer)

    # ---- queries ----

    def list(self) -> TaskCollection:
        return self._tasks

    def get(self, task_id: str) -> Task | StoreResult:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return StoreResult.NOT_FOUND

    def __len__(self) -> int:
        return len(self._tasks)

    def _index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    # ---- mutators ----

    def create(
        self,
        text: str,
        category: Category | str | None = None,
        priority: Priority | str | None = None,
    ) -> Task | StoreResult:
        clean = text.strip() if isinstance(text, str) else ""
        if not clean:
            logger.debug("Task create rejected: blank text")
            return StoreResult.REJECTED

        with self._lock:
            task = Task(
                id=self._fresh_id({t.id for t in self._tasks}),
                text=clean,
                created_at=self._clock(),
                completed=False,
                category=Category.from_raw(category),
                priority=Priority.from_raw(priority),
            )
            self._publish((*self._tasks, task))

        logger.debug(
            "Task created id=%s category=%s priority=%s",
            task.id,
            task.category.value,
            task.priority.value,
        )
        return task

    def update(self, task_id: str, **fields: Any) -> Task | StoreResult:
        """
        Apply a partial field set (text, category, priority, completed).

        - blank text is ignored (the other fields still apply)
        - id / created_at are immutable; passing them does nothing
        - unknown category/priority values fall back to the defaults
        - None leaves a field unchanged
        """
        changes: dict[str, Any] = {}

        for key, value in fields.items():
            if key in _IMMUTABLE or value is None:
                continue
            if key not in _UPDATABLE:
                logger.debug("Task update: ignoring unknown field %s", key)
                continue

            if key == "text":
                clean = value.strip() if isinstance(value, str) else ""
                if clean:
                    changes["text"] = clean
            elif key == "category":
                changes["category"] = Category.from_raw(value)
            elif key == "priority":
                changes["priority"] = Priority.from_raw(value)
            elif key == "completed" and isinstance(value, bool):
                changes["completed"] = value

        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return StoreResult.NOT_FOUND

            current = self._tasks[idx]
            updated = replace(current, **changes)
            if updated != current:
                self._publish((*self._tasks[:idx], updated, *self._tasks[idx + 1 :]))
                logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
            return updated

    def toggle_completion(self, task_id: str) -> Task | StoreResult:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return StoreResult.NOT_FOUND

            current = self._tasks[idx]
            updated = replace(current, completed=not current.completed)
            self._publish((*self._tasks[:idx], updated, *self._tasks[idx + 1 :]))

        logger.debug("Task toggled id=%s completed=%s", task_id, updated.completed)
        return updated

    def delete(self, task_id: str) -> StoreResult:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return StoreResult.NOT_FOUND
            self._publish((*self._tasks[:idx], *self._tasks[idx + 1 :]))

        logger.debug("Task deleted id=%s", task_id)
        return StoreResult.DELETED
