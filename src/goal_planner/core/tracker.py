# src/goal_planner/core/tracker.py

"""
Task status lifecycle and plan completion.

Status changes only touch the in-memory plan; saving is a separate, explicit step.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .models import Plan, Task, TaskStatus

logger = logging.getLogger(__name__)

_NEXT_STATUS: dict[TaskStatus, TaskStatus] = {
    TaskStatus.NOT_STARTED: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.NOT_STARTED,
}


def next_status(status: TaskStatus) -> TaskStatus:
    return _NEXT_STATUS[status]


def _advance(task: Task) -> Task:
    old = task.status
    task.status = next_status(old)
    logger.debug("Task %s status %s -> %s", task.id, old.value, task.status.value)
    return task


def advance_status(plan: Plan, task_id: str) -> Task | None:
    """Advance the task with this id one step; no-op (None) when the id is unknown."""
    task = plan.find_task(task_id)
    if task is None:
        logger.info("advance_status: no task id=%s in plan", task_id)
        return None
    return _advance(task)


def advance_status_by_title(plan: Plan, title: str) -> Task | None:
    """
    Title-based variant kept for display lookups.

    Titles are not unique: the first task in plan order with this exact title wins.
    """
    for task in plan.tasks:
        if task.title == title:
            return _advance(task)
    logger.info("advance_status_by_title: no task titled %r in plan", title)
    return None


def count_completed(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)


def compute_completion(plan: Plan | Sequence[Task]) -> int:
    """Percentage of completed tasks, rounded half up; 0 for an empty plan."""
    tasks = plan.tasks if isinstance(plan, Plan) else plan
    total = len(tasks)
    if total == 0:
        return 0
    return int(math.floor(100 * count_completed(tasks) / total + 0.5))
