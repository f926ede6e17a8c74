# src/listkeeper/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.category_view import counts_by_category, filter_by_category, overview
from ..tasks.task_models import Category, Priority, StoreResult, Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

SHORT_ID_LEN = 8
MIN_REF_LEN = 4

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def short_id(task: Task) -> str:
    return task.id[:SHORT_ID_LEN]


def format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"[{mark}] {short_id(task)}  {task.text}  ({task.category.label}, {task.priority.value})"


def count_phrase(count: int) -> str:
    return f"You have {count} item" if count == 1 else f"You have {count} items"


def parse_task_args(args: list[str]) -> tuple[Category | None, Priority | None, str, str | None]:
    """
    Split "/add"-style arguments into (category, priority, text, error).

    "@list" picks the list, "!priority" the priority; the rest is the task text.
    """
    category: Category | None = None
    priority: Priority | None = None
    words: list[str] = []

    for arg in args:
        if arg.startswith("@") and len(arg) > 1:
            category = Category.parse(arg[1:])
            if category is None:
                return None, None, "", f"Unknown list: {arg[1:]}. Lists: {_list_names()}."
        elif arg.startswith("!") and len(arg) > 1:
            priority = Priority.parse(arg[1:])
            if priority is None:
                return None, None, "", f"Unknown priority: {arg[1:]}. Use low, medium or high."
        else:
            words.append(arg)

    return category, priority, " ".join(words), None


def _list_names() -> str:
    return ", ".join(c.value.lower() for c in Category)


def resolve_task(state: AppState, ref: str) -> Task | str:
    """
    Find a task by exact id, else by id prefix.
    Returns the Task or a user-facing error string.
    """
    ref = ref.strip().lower()
    tasks = state.task_store.list()

    # Short ids (e.g. numeric ids from older task files) must stay addressable.
    for task in tasks:
        if task.id.lower() == ref:
            return task

    if len(ref) < MIN_REF_LEN:
        return f"Task reference too short: use at least {MIN_REF_LEN} characters of the id."

    matches = [t for t in tasks if t.id.lower().startswith(ref)]
    if not matches:
        return f"No task matches {ref}."
    if len(matches) > 1:
        return f"Reference {ref} is ambiguous ({len(matches)} tasks). Use more characters."
    return matches[0]


# ---- commands ----


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    tasks = state.task_store.list()
    done = sum(1 for t in tasks if t.completed)
    saving = "ON" if getattr(state.settings, "save_tasks", False) else "OFF"
    path = getattr(state.settings, "tasks_path", None)
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({done} completed)\n"
        f"  Current list: {state.current_list.label}\n"
        f"  Saving: {saving}" + (f" ({path})" if path and saving == "ON" else "")
    )


def cmd_lists(state: AppState, args: list[str]) -> str:
    lines = ["Lists:"]
    for row in overview(state.task_store.list()):
        lines.append(f"  {row.label:<14} {count_phrase(row.count)}")
    return "\n".join(lines)


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list         -> show the current list
    /list <name>  -> switch to <name> and show it
    """
    if args:
        category = Category.parse(" ".join(args))
        if category is None:
            return f"Unknown list: {' '.join(args)}. Lists: {_list_names()}."
        state.current_list = category
        logger.debug("Current list -> %s", category.value)

    category = state.current_list
    tasks = state.task_store.list()
    shown = filter_by_category(tasks, category)
    count = counts_by_category(tasks, [category])[category]

    lines = [f"{category.label} - {count_phrase(count)}"]
    if not shown:
        lines.append("  No tasks in this list yet.")
    for task in shown:
        lines.append(f"  {format_task(task)}")
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str]) -> str:
    category, priority, text, error = parse_task_args(args)
    if error:
        return error

    result = state.task_store.create(text, category or state.current_list, priority)
    if not isinstance(result, Task):
        return "Nothing to add: the task text is empty."
    return f"Added {format_task(result)}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /edit <id> [@list] [!priority] [new text]"

    found = resolve_task(state, args[0])
    if isinstance(found, str):
        return found

    category, priority, text, error = parse_task_args(args[1:])
    if error:
        return error

    fields: dict[str, object] = {}
    if category is not None:
        fields["category"] = category
    if priority is not None:
        fields["priority"] = priority
    if text:
        fields["text"] = text
    if not fields:
        return "Nothing to change. Usage: /edit <id> [@list] [!priority] [new text]"

    result = state.task_store.update(found.id, **fields)
    if not isinstance(result, Task):
        return f"No task matches {args[0]}."
    return f"Updated {format_task(result)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"

    found = resolve_task(state, args[0])
    if isinstance(found, str):
        return found

    result = state.task_store.toggle_completion(found.id)
    if not isinstance(result, Task):
        return f"No task matches {args[0]}."
    verb = "Completed" if result.completed else "Reopened"
    return f"{verb} {format_task(result)}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rm <id>"

    found = resolve_task(state, args[0])
    if isinstance(found, str):
        return found

    if state.task_store.delete(found.id) is StoreResult.NOT_FOUND:
        return f"No task matches {args[0]}."
    return f"Deleted: {found.text}"


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """Wait until queued snapshots are written."""
    if state.saver is None:
        return "Saving is OFF."

    if emit:
        with contextlib.suppress(Exception):
            emit("[SAVE] Waiting for pending writes...")

    state.saver.flush()
    return "All changes saved."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task totals and settings.")
registry.register("lists", cmd_lists, help_text="Show every list with its item count.")
registry.register("list", cmd_list, help_text="Show a list and make it current: /list [name].", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add [@list] [!priority] text.")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> [@list] [!priority] [text].")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del"])
registry.register("save", cmd_save, help_text="Wait until pending changes are written.")
