# src/goal_planner/cli/console.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core import planner
from ..core.errors import PlannerError
from ..core.state import AppState
from .commands import registry as command_registry
from .commands import show_current

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def handle_line(state: AppState, line: str, emit: Callable[[str], None] | None = None) -> str | None:
    """
    One console input -> reply text.

    Slash commands go to the registry; anything else is a new goal.
    Returns None for blank input.
    """
    line = line.strip()
    if not line:
        return None

    reply = command_registry.handle(state, line, emit=emit)
    if reply is not None:
        return reply

    if emit:
        emit("Breaking down your goal...")
    try:
        planner.submit_goal(state, line)
    except PlannerError as e:
        logger.info("Goal submission failed: %s", e)
        return f"Failed to generate task plan: {e}"
    return "Task plan generated successfully!\n\n" + show_current(state)


def run_console_loop(state: AppState, read: Callable[[str], str] = input) -> None:
    logger.info("Console started (offline=%s).", state.offline)
    _print_ts("Type a goal to break it into tasks. Use /help for commands, /exit to quit.")
    if state.offline:
        _print_ts("Offline demo mode: no LLM API key configured, plans come from demo data.")

    while True:
        try:
            user_input = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input, emit=_print_ts)
        except Exception:
            logger.exception("Console handler crashed.")
            reply = "Internal error while handling your input."

        if reply is not None:
            print(reply + "\n", flush=True)

    logger.info("Console finished.")
