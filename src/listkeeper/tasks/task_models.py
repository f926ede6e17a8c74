# src/listkeeper/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

_SEP_RE = re.compile(r"[\s_\-]+")


def _norm_key(raw: str) -> str:
    return _SEP_RE.sub("", raw).lower()


class Category(StrEnum):
    """
    Named lists a task can belong to.

    Notes:
    - GENERAL doubles as the umbrella list: viewing it shows every task.
    - Stored/serialized as the enum value ("General", "GoTo", ...).
    """

    GENERAL = "General"
    WISH = "Wish"
    GOTO = "GoTo"
    SHOPPING = "Shopping"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @classmethod
    def parse(cls, raw: object) -> Category | None:
        """Accept value, member name or display label; None if unknown."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            return None
        return _CATEGORY_LOOKUP.get(_norm_key(raw))

    @classmethod
    def from_raw(cls, raw: object) -> Category:
        return cls.parse(raw) or cls.GENERAL


_CATEGORY_LABELS: dict[Category, str] = {
    Category.GENERAL: "General List",
    Category.WISH: "Wish List",
    Category.GOTO: "Go to List",
    Category.SHOPPING: "Shopping List",
}

_CATEGORY_LOOKUP: dict[str, Category] = {}
for _c in Category:
    _CATEGORY_LOOKUP[_norm_key(_c.value)] = _c
    _CATEGORY_LOOKUP[_norm_key(_c.name)] = _c
    _CATEGORY_LOOKUP[_norm_key(_c.label)] = _c

UMBRELLA = Category.GENERAL


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: object) -> Priority | None:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        key = raw.strip().lower()
        for p in cls:
            if p.value.lower() == key:
                return p
        return None

    @classmethod
    def from_raw(cls, raw: object) -> Priority:
        return cls.parse(raw) or cls.MEDIUM


class StoreResult(StrEnum):
    """Negative/plain outcomes of store operations (returned, never raised)."""

    DELETED = "deleted"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    text: str
    created_at: datetime

    completed: bool = False
    category: Category = Category.GENERAL
    priority: Priority = Priority.MEDIUM


TaskCollection = tuple[Task, ...]
