# src/goal_planner/core/planner.py

"""
Session operations behind the front end.

This module is transport-agnostic: the console (or any other front end) passes
user actions in and renders the returned records. Failures are PlannerError
subclasses; the displayed plan is only replaced after a complete generation.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import PlannerInputError, StorageError
from .models import Plan, Task
from .rendering import render_markdown
from .sorter import TOPOLOGICAL, sort_for_display
from .state import AppState
from .tracker import advance_status, advance_status_by_title, compute_completion

logger = logging.getLogger(__name__)


def _require_plan(state: AppState) -> Plan:
    if state.current_plan is None:
        raise PlannerInputError("No plan to work with. Enter a goal first.")
    return state.current_plan


def submit_goal(state: AppState, goal: str) -> Plan:
    goal = (goal or "").strip()
    if not goal:
        raise PlannerInputError("Please enter a goal.")

    tasks = state.gateway.generate(goal)
    state.current_plan = Plan(goal=goal, tasks=tasks)
    logger.info("Displaying new plan with %d task(s)", len(tasks))
    return state.current_plan


def ordered_tasks(state: AppState, plan: Plan | None = None) -> list[Task]:
    plan = plan or _require_plan(state)
    strategy = getattr(state.settings, "sort_strategy", TOPOLOGICAL)
    return sort_for_display(plan.tasks, strategy=strategy)


def toggle_task(state: AppState, task_id: str) -> Task:
    plan = _require_plan(state)
    task = advance_status(plan, task_id)
    if task is None:
        raise PlannerInputError(f"No task with id {task_id!r} in this plan.")
    return task


def toggle_task_by_title(state: AppState, title: str) -> Task:
    plan = _require_plan(state)
    task = advance_status_by_title(plan, title)
    if task is None:
        raise PlannerInputError(f"No task titled {title!r} in this plan.")
    return task


def completion(state: AppState) -> int:
    return compute_completion(_require_plan(state))


def save_current(state: AppState) -> Plan:
    """Persist the displayed plan as a new saved plan (status changes included)."""
    plan = _require_plan(state)
    return state.plan_store.save(plan.goal, plan.tasks)


def saved_plans(state: AppState) -> list[Plan]:
    return state.plan_store.load_all()


def open_saved(state: AppState, ref: str) -> Plan:
    """
    Display a saved plan by 1-based position in the saved list or by plan id.

    The displayed plan is a working copy; saving it again creates a new entry.
    """
    ref = (ref or "").strip()
    if not ref:
        raise PlannerInputError("Which plan? Use a number from /saved or a plan id.")

    chosen: Plan | None = None
    if ref.isdigit():
        plans = state.plan_store.load_all()
        if 1 <= int(ref) <= len(plans):
            chosen = plans[int(ref) - 1]
    if chosen is None:
        chosen = state.plan_store.get(ref)

    if chosen is None:
        raise PlannerInputError(f"No saved plan {ref!r}.")

    state.current_plan = chosen.draft()
    logger.info("Displaying saved plan id=%s", chosen.id)
    return state.current_plan


def export_markdown(state: AppState, path: str | Path) -> Path:
    """Write the displayed plan (in display order) as a Markdown document."""
    plan = _require_plan(state)
    target = Path(path).expanduser()
    text = render_markdown(plan, ordered_tasks(state, plan))
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, "utf-8")
    except OSError as e:
        raise StorageError(f"Could not export plan to {target}: {e}") from e
    logger.info("Exported plan to %s", target)
    return target
