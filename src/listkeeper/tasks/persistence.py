# src/listkeeper/tasks/persistence.py

"""
JSON file persistence for the task collection.

- JsonTaskFile: load a seed on startup, write snapshots atomically (tmp + os.replace)
- BackgroundSaver: store observer that hands snapshots to a worker thread,
  so a mutation never waits for disk I/O
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import queue
import threading
import time
from pathlib import Path
from typing import Any

from ..core.ports import SnapshotSink
from .task_codec import task_to_dict
from .task_models import TaskCollection

logger = logging.getLogger(__name__)


class JsonTaskFile:
    """File format: {"tasks": [<task dict>, ...]} (a bare list is accepted on load)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[dict[str, Any]]:
        """Best-effort: missing or unreadable file -> empty seed."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text("utf-8"))
        except Exception:
            logger.exception("Failed to read tasks from %s", self.path)
            return []

        if isinstance(data, dict):
            data = data.get("tasks", [])
        if not isinstance(data, list):
            logger.warning("Unexpected tasks file layout in %s; starting empty.", self.path)
            return []

        records = [r for r in data if isinstance(r, dict)]
        logger.info("Loaded %d task records from %s", len(records), self.path)
        return records

    def save(self, snapshot: TaskCollection) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"tasks": [task_to_dict(t) for t in snapshot]}
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self.path)
        with contextlib.suppress(Exception):
            os.chmod(self.path, 0o600)
        logger.debug("Saved %d tasks to %s", len(snapshot), self.path)


class BackgroundSaver:
    """
    Fire-and-forget snapshot writer.

    - submit() only enqueues; it is safe to register as a TaskStore observer
    - the worker writes the newest pending snapshot and skips older ones
    - a failed write is retried `retries` times, then logged and dropped
    - once stopped (or if the worker is gone) snapshots are dropped with a warning
    """

    def __init__(
        self,
        sink: SnapshotSink,
        *,
        retries: int = 2,
        retry_delay_seconds: float = 0.2,
        shutdown_timeout_seconds: float = 5.0,
    ) -> None:
        self._sink = sink
        self._retries = max(0, int(retries))
        self._retry_delay = max(0.0, float(retry_delay_seconds))
        self._shutdown_timeout = max(0.0, float(shutdown_timeout_seconds))

        self._queue: queue.Queue[TaskCollection | None] = queue.Queue()
        # Guards _stop_requested together with the put, so nothing lands behind the stop sentinel.
        self._lock = threading.Lock()
        self._stop_requested = False

        self._worker = threading.Thread(target=self._run, name="task-saver", daemon=True)
        self._worker.start()
        logger.info("Task saver started.")

    def submit(self, snapshot: TaskCollection) -> None:
        with self._lock:
            if self._stop_requested or not self._worker.is_alive():
                logger.warning("Task saver is stopped; snapshot not saved.")
                return
            self._queue.put(snapshot)

    def _latest(self, item: TaskCollection) -> tuple[TaskCollection, int, bool]:
        """Drain whatever is already queued; return (newest snapshot, drained, stop seen)."""
        drained = 0
        stop = False
        while True:
            try:
                nxt = self._queue.get_nowait()
            except queue.Empty:
                return item, drained, stop
            drained += 1
            if nxt is None:
                stop = True
            else:
                item = nxt

    def _write(self, snapshot: TaskCollection) -> None:
        for attempt in range(self._retries + 1):
            try:
                self._sink.save(snapshot)
                return
            except Exception:
                logger.exception("Task save failed (attempt %d/%d)", attempt + 1, self._retries + 1)
                if attempt < self._retries:
                    time.sleep(self._retry_delay)
        logger.error("Giving up on task snapshot (%d tasks).", len(snapshot))

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is None:
                self._queue.task_done()
                logger.info("Task saver received stop signal.")
                return

            snapshot, drained, stop = self._latest(item)
            try:
                self._write(snapshot)
            finally:
                for _ in range(drained + 1):
                    self._queue.task_done()

            if stop:
                logger.info("Task saver received stop signal.")
                return

    def flush(self, timeout: float | None = None) -> bool:
        """
        Block until every submitted snapshot has been handled.

        Returns False if the timeout expired or the worker exited with work still queued.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        done = self._queue.all_tasks_done
        with done:
            while self._queue.unfinished_tasks:
                if not self._worker.is_alive():
                    return False
                wait_s = 0.1
                if deadline is not None:
                    wait_s = min(wait_s, deadline - time.monotonic())
                    if wait_s <= 0:
                        return False
                done.wait(wait_s)
        return True

    def shutdown(self) -> None:
        with self._lock:
            if self._stop_requested:
                return
            self._stop_requested = True
            logger.info("Stopping task saver...")
            self._queue.put(None)

        self._worker.join(timeout=self._shutdown_timeout)
        if self._worker.is_alive():
            logger.warning("Task saver did not stop within %.1fs.", self._shutdown_timeout)
            return
        logger.info("Task saver stopped.")
