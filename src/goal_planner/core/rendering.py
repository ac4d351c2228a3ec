# src/goal_planner/core/rendering.py

"""Plain-text and Markdown views of a plan (task cards, timeline, progress)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .models import Plan, Task, TaskStatus, parse_deadline
from .tracker import compute_completion, count_completed

_STATUS_MARK = {
    TaskStatus.NOT_STARTED: "[ ]",
    TaskStatus.IN_PROGRESS: "[~]",
    TaskStatus.COMPLETED: "[x]",
}

PROGRESS_BAR_WIDTH = 20


def format_date(raw: str | None) -> str:
    """'2024-01-10' -> 'Jan 10, 2024'; unparseable input is shown as-is."""
    d = parse_deadline(raw)
    if d is None:
        return raw or "-"
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_timestamp(raw: str | None) -> str:
    """Local calendar date of an ISO timestamp such as a plan's created_at."""
    try:
        stamp = datetime.fromisoformat((raw or "").strip())
    except ValueError:
        return format_date(raw)
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone()
    return f"{stamp.strftime('%b')} {stamp.day}, {stamp.year}"


def dependency_titles(task: Task, plan: Plan) -> list[str]:
    """Titles of the task's dependencies; ids not in the plan are left out."""
    titles: list[str] = []
    for dep_id in task.dependencies:
        dep = plan.find_task(dep_id)
        if dep is not None:
            titles.append(dep.title)
    return titles


def progress_line(plan: Plan) -> str:
    pct = compute_completion(plan)
    filled = round(PROGRESS_BAR_WIDTH * pct / 100)
    bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
    return f"[{bar}] {pct}% Complete"


def render_task_card(task: Task, plan: Plan) -> str:
    lines = [
        f"{_STATUS_MARK[task.status]} {task.title}  (id {task.id}, due {format_date(task.deadline)})",
    ]
    if task.description:
        lines.append(f"    {task.description}")
    lines.append(f"    Est. Duration: {task.estimated_duration or '-'}")
    deps = dependency_titles(task, plan)
    if deps:
        lines.append(f"    Dependencies: {', '.join(deps)}")
    lines.append(f"    Status: {task.status.value}")
    return "\n".join(lines)


def render_timeline(ordered: Sequence[Task]) -> str:
    lines = ["Timeline:"]
    for task in ordered:
        lines.append(f"  {format_date(task.deadline):>13}  o  {task.title}")
        if task.description:
            lines.append(f"  {'':>13}  |  {task.description}")
    return "\n".join(lines)


def render_plan(plan: Plan, ordered: Sequence[Task]) -> str:
    header = f"Goal: {plan.goal}"
    if plan.is_saved:
        header += f"  (saved {format_timestamp(plan.created_at)})"
    parts = [header, progress_line(plan), ""]
    parts.extend(render_task_card(t, plan) for t in ordered)
    parts.append("")
    parts.append(render_timeline(ordered))
    return "\n".join(parts)


def render_saved_summary(index: int, plan: Plan) -> str:
    total = len(plan.tasks)
    done = count_completed(plan.tasks)
    return (
        f"{index}. {plan.goal}\n"
        f"   Created: {format_timestamp(plan.created_at)} | {total} tasks | {done}/{total} completed | id {plan.id}"
    )


def render_saved_list(plans: Sequence[Plan]) -> str:
    if not plans:
        return "No saved plans yet."
    return "\n".join(render_saved_summary(i, p) for i, p in enumerate(plans, start=1))


def render_markdown(plan: Plan, ordered: Sequence[Task]) -> str:
    lines = [f"# {plan.goal}", "", f"Progress: {compute_completion(plan)}% complete", "", "## Tasks", ""]
    for task in ordered:
        lines.append(f"### {task.title}")
        lines.append("")
        lines.append(f"- Deadline: {format_date(task.deadline)}")
        lines.append(f"- Estimated duration: {task.estimated_duration or '-'}")
        lines.append(f"- Status: {task.status.value}")
        deps = dependency_titles(task, plan)
        if deps:
            lines.append(f"- Depends on: {', '.join(deps)}")
        if task.description:
            lines.append("")
            lines.append(task.description)
        lines.append("")
    lines.append("## Timeline")
    lines.append("")
    lines.append("| Date | Task |")
    lines.append("| --- | --- |")
    for task in ordered:
        lines.append(f"| {format_date(task.deadline)} | {task.title} |")
    return "\n".join(lines) + "\n"
