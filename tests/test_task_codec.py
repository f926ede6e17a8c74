# tests/test_task_codec.py

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from listkeeper.tasks.task_codec import parse_timestamp, task_from_dict, task_to_dict
from listkeeper.tasks.task_models import Category, Priority, Task


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("GoTo", Category.GOTO),
        ("go to", Category.GOTO),
        ("Go to List", Category.GOTO),
        ("SHOPPING", Category.SHOPPING),
        ("wish_list", Category.WISH),
        (Category.WISH, Category.WISH),
        ("Groceries", None),
        ("", None),
        (3, None),
    ],
)
def test_category_parse(raw, expected) -> None:
    assert Category.parse(raw) is expected


def test_priority_defaults() -> None:
    assert Priority.from_raw("low") is Priority.LOW
    assert Priority.from_raw(None) is Priority.MEDIUM
    assert Priority.from_raw("critical") is Priority.MEDIUM


def test_parse_timestamp_variants() -> None:
    expected = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert parse_timestamp("2024-01-02T03:04:05Z") == expected
    assert parse_timestamp("2024-01-02T03:04:05") == expected
    assert parse_timestamp(expected.timestamp()) == expected
    assert parse_timestamp("soon") is None
    assert parse_timestamp(True) is None


def test_wire_format_uses_enum_values() -> None:
    task = Task(
        id="x1",
        text="Paris",
        created_at=datetime(2024, 1, 2, tzinfo=UTC),
        category=Category.GOTO,
        priority=Priority.LOW,
    )
    data = task_to_dict(task)
    assert data["category"] == "GoTo"
    assert data["priority"] == "Low"

    again = task_from_dict(data, new_id=lambda: "unused", now=lambda: datetime.now(UTC))
    assert again == task


def test_from_dict_rejects_blank_and_fills_missing() -> None:
    now = datetime(2030, 1, 1, tzinfo=UTC)
    assert task_from_dict({"text": "  "}, new_id=lambda: "n", now=lambda: now) is None

    task = task_from_dict({"text": "x", "id": 42}, new_id=lambda: "n", now=lambda: now)
    assert task is not None
    assert task.id == "42"
    assert task.created_at == now
