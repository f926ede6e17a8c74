# src/listkeeper/tasks/task_codec.py

"""
Task <-> plain dict conversion.

The dict form is what the persistence collaborator writes:
    {"id", "text", "completed", "category", "priority", "createdAt"}

Decoding is the validation boundary for anything that did not come from
TaskStore itself, so it is lenient: it normalizes what it can and reports
what it cannot (None) instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from .task_models import Category, Priority, Task

logger = logging.getLogger(__name__)


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "category": task.category.value,
        "priority": task.priority.value,
        "createdAt": task.created_at.isoformat(),
    }


def parse_timestamp(raw: object) -> datetime | None:
    """ISO-8601 string or epoch seconds -> aware UTC datetime (None if unusable)."""
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, bool):
        return None
    elif isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(float(raw), UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(raw, str) and raw.strip():
        try:
            dt = datetime.fromisoformat(raw.strip())
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def task_from_dict(
    raw: Mapping[str, Any],
    *,
    new_id: Callable[[], str],
    now: Callable[[], datetime],
) -> Task | None:
    """
    Build a Task from an untrusted record.

    Returns None when the record cannot hold a valid task (blank text).
    `title` is accepted as a legacy alias for `text`, `created_at` for `createdAt`.
    """
    text_any = raw.get("text")
    if text_any is None:
        text_any = raw.get("title")
    text = text_any.strip() if isinstance(text_any, str) else ""
    if not text:
        return None

    id_any = raw.get("id")
    if isinstance(id_any, bool):
        id_any = None
    if isinstance(id_any, int):
        id_any = str(id_any)
    task_id = id_any.strip() if isinstance(id_any, str) else ""
    if not task_id:
        task_id = new_id()

    ts_any = raw.get("createdAt", raw.get("created_at"))
    created_at = parse_timestamp(ts_any) or now()

    completed_any = raw.get("completed", False)
    completed = completed_any if isinstance(completed_any, bool) else False

    return Task(
        id=task_id,
        text=text,
        created_at=created_at,
        completed=completed,
        category=Category.from_raw(raw.get("category")),
        priority=Priority.from_raw(raw.get("priority")),
    )
