# tests/test_bootstrap.py

from __future__ import annotations

import json
from types import SimpleNamespace

from listkeeper.cli.bootstrap import create_initial_state, shutdown_state
from listkeeper.tasks.persistence import JsonTaskFile
from listkeeper.tasks.task_models import Category

from .fakes import RecordingSink


def test_state_is_seeded_and_changes_reach_the_file(settings: SimpleNamespace) -> None:
    settings.tasks_path.parent.mkdir(parents=True)
    settings.tasks_path.write_text(
        json.dumps({"tasks": [{"id": "abc123", "text": "Seeded", "category": "Wish List"}]}),
        "utf-8",
    )

    state = create_initial_state(settings=settings)
    assert [t.text for t in state.task_store.list()] == ["Seeded"]
    assert state.task_store.list()[0].category is Category.WISH

    state.task_store.create("Fresh", Category.GOTO)
    shutdown_state(state)

    records = JsonTaskFile(settings.tasks_path).load()
    assert [r["text"] for r in records] == ["Seeded", "Fresh"]
    assert records[1]["category"] == "GoTo"


def test_injected_task_file_is_used(settings: SimpleNamespace) -> None:
    sink = RecordingSink(seed=[{"id": "s1", "text": "from sink"}, {"text": ""}])

    state = create_initial_state(settings=settings, task_file=sink)
    assert [t.id for t in state.task_store.list()] == ["s1"]

    state.task_store.toggle_completion("s1")
    shutdown_state(state)
    assert sink.saved and sink.saved[-1][0].completed is True


def test_persistence_disabled(settings: SimpleNamespace) -> None:
    settings.save_tasks = False

    state = create_initial_state(settings=settings)
    state.task_store.create("memory only")
    shutdown_state(state)

    assert state.saver is None
    assert not settings.tasks_path.exists()
