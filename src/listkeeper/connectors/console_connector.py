# src/listkeeper/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import CommandRegistry, format_task
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(
    state: AppState,
    line: str,
    registry: CommandRegistry = command_registry,
    emit: Callable[[str], None] | None = None,
) -> str | None:
    """
    One REPL step without the I/O: commands go to the registry,
    plain text becomes a task in the current list.
    """
    line = line.strip()
    if not line:
        return None

    try:
        cmd_response = registry.handle(state, line, emit=emit)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if cmd_response is not None:
        return cmd_response

    result = state.task_store.create(line, state.current_list)
    if not isinstance(result, Task):
        return None
    return f"Added {format_task(result)}"


def run_console_loop(state: AppState, *, read: Callable[[str], str] = input) -> None:
    logger.info("Console connector started (tasks=%s).", len(state.task_store.list()))
    _print_ts("[CONSOLE] Type a task to add it to the current list. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        # Immediate user-visible feedback for long operations.
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = read(f"{state.current_list.label} > ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input, emit=emit)
        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
