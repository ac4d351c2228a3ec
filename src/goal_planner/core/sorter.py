# src/goal_planner/core/sorter.py

"""
Display ordering for plan tasks.

Two strategies:
- topological_sort: Kahn's algorithm over the dependency graph. Among tasks whose
  dependencies are already placed, the earliest deadline goes first, then input
  position. Cycles raise PlanCycleError.
- pairwise_sort: the legacy comparator (dependency check between the two compared
  tasks, else deadline). Approximate: it only looks at direct links between a pair,
  so transitive chains can come out of order on adversarial input.

Both return a new list and never reorder the input. Dependencies on ids that are
not in the list are ignored.
"""

from __future__ import annotations

import heapq
import logging
from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from functools import cmp_to_key

from .errors import PlanCycleError
from .models import Task

logger = logging.getLogger(__name__)

TOPOLOGICAL = "topological"
PAIRWISE = "pairwise"


def _compare_tasks(a: Task, b: Task) -> int:
    if b.id in a.dependencies:
        return 1
    if a.id in b.dependencies:
        return -1

    da = a.deadline_date
    db = b.deadline_date
    # Unparseable deadlines give no preference.
    if da is None or db is None or da == db:
        return 0
    return -1 if da < db else 1


def pairwise_sort(tasks: Sequence[Task]) -> list[Task]:
    """Legacy comparator ordering (stable; sorted() never touches the input)."""
    return sorted(tasks, key=cmp_to_key(_compare_tasks))


def _ready_key(task: Task, index: int) -> tuple[bool, date, int]:
    d = task.deadline_date
    # Undated tasks go after dated ones among the ready set.
    return (d is None, d or date.max, index)


def topological_sort(tasks: Sequence[Task]) -> list[Task]:
    """
    Dependency-respecting order with deadline tie-break.

    Raises PlanCycleError when some tasks can never become ready
    (a cycle, including a task that depends on itself).
    """
    items = list(tasks)

    positions: dict[str, list[int]] = defaultdict(list)
    for i, task in enumerate(items):
        positions[task.id].append(i)

    indegree = [0] * len(items)
    dependents: dict[int, list[int]] = defaultdict(list)

    for i, task in enumerate(items):
        for dep_id in task.dependencies:
            for j in positions.get(dep_id, ()):
                dependents[j].append(i)
                indegree[i] += 1

    ready = [_ready_key(task, i) for i, task in enumerate(items) if indegree[i] == 0]
    heapq.heapify(ready)

    order: list[Task] = []
    while ready:
        *_, current = heapq.heappop(ready)
        order.append(items[current])
        for nxt in dependents[current]:
            indegree[nxt] -= 1
            if indegree[nxt] == 0:
                heapq.heappush(ready, _ready_key(items[nxt], nxt))

    if len(order) != len(items):
        stuck = [items[i].id for i in range(len(items)) if indegree[i] > 0]
        raise PlanCycleError(
            f"Cycle detected in task dependencies: {', '.join(stuck)}",
            task_ids=stuck,
        )

    return order


def sort_for_display(tasks: Sequence[Task], *, strategy: str = TOPOLOGICAL) -> list[Task]:
    """
    Order tasks for display.

    With the topological strategy a dependency cycle is logged and the legacy
    pairwise ordering is used instead, so a plan can always be shown.
    """
    if strategy == PAIRWISE:
        return pairwise_sort(tasks)
    if strategy != TOPOLOGICAL:
        raise ValueError(f"unknown sort strategy: {strategy!r}")

    try:
        return topological_sort(tasks)
    except PlanCycleError as e:
        logger.warning("%s; falling back to pairwise ordering", e)
        return pairwise_sort(tasks)
