# src/goal_planner/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core import planner
from ..core.errors import PlannerError, PlannerInputError
from ..core.rendering import render_plan, render_saved_list
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console (/help, /plan, /save, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._raw: set[str] = set()
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw_args: bool = False,
    ) -> None:
        """raw_args=True passes the rest of the line as a single argument."""
        aliases = aliases or []
        key = name.lower()
        self._help[key] = help_text
        for k in [key, *(a.lower() for a in aliases)]:
            self._handlers[k] = handler
            if raw_args:
                self._raw.add(k)

    def handle(self, state: AppState, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Planner errors become the reply text.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].strip().split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1].strip() if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        args = ([rest] if rest else []) if name in self._raw else rest.split()

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                return cast(CommandHandler3, handler)(state, args, emit)
            return cast(CommandHandler2, handler)(state, args)
        except PlannerError as e:
            logger.info("/%s failed: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Any other text is taken as a new goal.")
        return "\n".join(lines)


registry = CommandRegistry()


def show_current(state: AppState) -> str:
    plan = state.current_plan
    if plan is None:
        return "No plan on display. Enter a goal first."
    return render_plan(plan, planner.ordered_tasks(state, plan))


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    mode = "OFFLINE DEMO" if state.offline else "LLM"
    models = ", ".join(list(getattr(state.settings, "llm_models", []) or []))
    plan = state.current_plan
    current = "none" if plan is None else f"{plan.goal!r} ({planner.completion(state)}% complete)"
    return (
        "Status:\n"
        f"  Generation: {mode}\n"
        f"  Models (priority -> fallback): {models}\n"
        f"  Ordering: {getattr(state.settings, 'sort_strategy', 'topological')}\n"
        f"  Saved plans file: {getattr(state.settings, 'plans_path', '-')}\n"
        f"  Current plan: {current}"
    )


def cmd_plan(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        raise PlannerInputError("Usage: /plan <goal>")
    if emit:
        with contextlib.suppress(Exception):
            emit("Breaking down your goal...")
    planner.submit_goal(state, args[0])
    return "Task plan generated successfully!\n\n" + show_current(state)


def cmd_show(state: AppState, args: list[str]) -> str:
    return show_current(state)


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        raise PlannerInputError("Usage: /toggle <task id>")
    task = planner.toggle_task(state, args[0])
    return f"{task.title}: {task.status.value} ({planner.completion(state)}% Complete)"


def cmd_toggle_title(state: AppState, args: list[str]) -> str:
    if not args:
        raise PlannerInputError("Usage: /toggle-title <task title>")
    task = planner.toggle_task_by_title(state, args[0])
    return f"{task.title}: {task.status.value} ({planner.completion(state)}% Complete)"


def cmd_save(state: AppState, args: list[str]) -> str:
    plan = planner.save_current(state)
    return f"Plan saved successfully! (id {plan.id})"


def cmd_saved(state: AppState, args: list[str]) -> str:
    return render_saved_list(planner.saved_plans(state))


def cmd_view(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        raise PlannerInputError("Usage: /view <number | plan id>")
    planner.open_saved(state, args[0])
    return show_current(state)


def cmd_export(state: AppState, args: list[str]) -> str:
    if not args:
        raise PlannerInputError("Usage: /export <path.md>")
    path = planner.export_markdown(state, args[0])
    return f"Plan exported to {path}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show generation mode, ordering and current plan.")
registry.register("plan", cmd_plan, help_text="Generate a plan: /plan <goal>.", raw_args=True)
registry.register("show", cmd_show, help_text="Show the current plan, timeline and progress.")
registry.register("toggle", cmd_toggle, help_text="Advance a task's status: /toggle <task id>.")
registry.register(
    "toggle-title",
    cmd_toggle_title,
    help_text="Advance the first task with this title: /toggle-title <title>.",
    raw_args=True,
)
registry.register("save", cmd_save, help_text="Save the current plan (adds a new saved plan).")
registry.register("saved", cmd_saved, help_text="List saved plans, most recent first.", aliases=["plans"])
registry.register("view", cmd_view, help_text="Open a saved plan: /view <number | plan id>.")
registry.register("export", cmd_export, help_text="Write the current plan as Markdown: /export <path>.", raw_args=True)
