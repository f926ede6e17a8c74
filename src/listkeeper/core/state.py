# src/listkeeper/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.persistence import BackgroundSaver
from ..tasks.task_models import Category
from .ports import TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskRepo
    saver: BackgroundSaver | None = None

    # List that plain-text input and /add without @list go to.
    current_list: Category = Category.GENERAL
