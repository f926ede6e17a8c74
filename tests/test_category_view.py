# tests/test_category_view.py

from __future__ import annotations

from dataclasses import replace

from listkeeper.tasks.category_view import counts_by_category, filter_by_category, overview
from listkeeper.tasks.task_models import Category, StoreResult, Task
from listkeeper.tasks.task_store import TaskStore


def _fill(store: TaskStore) -> None:
    store.create("Bike", Category.WISH)
    store.create("Milk", Category.SHOPPING)
    store.create("Paris", Category.GOTO)
    store.create("Eggs", Category.SHOPPING)
    store.create("Laundry")


def test_umbrella_list_shows_everything_in_order(store: TaskStore) -> None:
    _fill(store)
    tasks = store.list()

    assert filter_by_category(tasks, Category.GENERAL) == list(tasks)
    assert filter_by_category(tasks, "General List") == list(tasks)


def test_specific_filter_matches_counts(store: TaskStore) -> None:
    _fill(store)
    tasks = store.list()
    counts = counts_by_category(tasks)

    for category in (Category.WISH, Category.GOTO, Category.SHOPPING):
        shown = filter_by_category(tasks, category)
        assert all(t.category is category for t in shown)
        assert len(shown) == counts[category]

    assert [t.text for t in filter_by_category(tasks, "shopping")] == ["Milk", "Eggs"]


def test_umbrella_count_is_collection_size(store: TaskStore) -> None:
    _fill(store)
    tasks = store.list()

    counts = counts_by_category(tasks)
    assert counts[Category.GENERAL] == len(tasks) == 5
    assert counts == {
        Category.GENERAL: 5,
        Category.WISH: 1,
        Category.GOTO: 1,
        Category.SHOPPING: 2,
    }


def test_counts_accept_the_same_names_as_filter(store: TaskStore) -> None:
    _fill(store)
    tasks = store.list()

    for name in ("Shopping List", "shopping", "go to", "Wish List", "General List", "general"):
        counts = counts_by_category(tasks, [name])
        category = Category.parse(name)
        assert category is not None
        assert list(counts) == [category]
        assert counts[category] == len(filter_by_category(tasks, name))

    assert counts_by_category(tasks, ["Holidays", "wish"]) == {Category.WISH: 1}


def test_counts_report_zero_for_empty_categories() -> None:
    assert counts_by_category(()) == {c: 0 for c in Category}
    assert counts_by_category((), [Category.WISH]) == {Category.WISH: 0}


def test_unknown_category_name_matches_nothing(store: TaskStore) -> None:
    _fill(store)
    assert filter_by_category(store.list(), "Holidays") == []


def test_out_of_enum_task_only_counts_in_umbrella(store: TaskStore) -> None:
    _fill(store)
    stray = replace(store.list()[0], id="stray", category="Bogus")  # type: ignore[arg-type]
    tasks = (*store.list(), stray)

    counts = counts_by_category(tasks)
    specific = sum(n for c, n in counts.items() if c is not Category.GENERAL)

    assert counts[Category.GENERAL] == 6
    assert specific == 4
    assert stray not in filter_by_category(tasks, Category.WISH)
    assert stray in filter_by_category(tasks, Category.GENERAL)


def test_overview_rows_follow_display_order(store: TaskStore) -> None:
    _fill(store)
    rows = overview(store.list())

    assert [r.label for r in rows] == ["General List", "Wish List", "Go to List", "Shopping List"]
    assert [r.count for r in rows] == [5, 1, 1, 2]


def test_scenario_walkthrough(store: TaskStore) -> None:
    t1 = store.create("Buy milk", category=Category.SHOPPING)
    assert isinstance(t1, Task)
    assert t1.completed is False

    assert store.create("", category=Category.SHOPPING) is StoreResult.REJECTED
    assert len(store.list()) == 1

    toggled = store.toggle_completion(t1.id)
    assert isinstance(toggled, Task) and toggled.completed is True

    assert filter_by_category(store.list(), "Shopping") == [toggled]

    assert store.delete(t1.id) is StoreResult.DELETED
    assert store.list() == ()
    assert counts_by_category(store.list()) == {
        Category.GENERAL: 0,
        Category.WISH: 0,
        Category.GOTO: 0,
        Category.SHOPPING: 0,
    }
