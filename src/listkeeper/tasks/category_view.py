# src/listkeeper/tasks/category_view.py

"""
Read-only derivations over a task snapshot.

Everything here is a pure function of the collection passed in: nothing is
cached and nothing is mutated. General is the umbrella list, so its view is
the whole collection and its count is the collection size.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .task_models import UMBRELLA, Category, Task


@dataclass(slots=True, frozen=True)
class CategorySummary:
    category: Category
    label: str
    count: int


def filter_by_category(collection: Sequence[Task], category: Category | str) -> list[Task]:
    wanted = Category.parse(category)
    if wanted is None:
        return []
    if wanted is UMBRELLA:
        return list(collection)
    return [t for t in collection if t.category == wanted]


def counts_by_category(
    collection: Sequence[Task],
    categories: Iterable[Category | str] | None = None,
) -> dict[Category, int]:
    """Names are parsed like filter_by_category; unknown names are left out."""
    if categories is None:
        wanted = list(Category)
    else:
        wanted = [c for c in (Category.parse(raw) for raw in categories) if c is not None]
    counts = {c: 0 for c in wanted}

    for task in collection:
        # Anything outside the enum only shows up in the umbrella total.
        if task.category in counts and task.category is not UMBRELLA:
            counts[task.category] += 1

    if UMBRELLA in counts:
        counts[UMBRELLA] = len(collection)
    return counts


def overview(collection: Sequence[Task]) -> list[CategorySummary]:
    counts = counts_by_category(collection)
    return [CategorySummary(category=c, label=c.label, count=counts[c]) for c in Category]
