# src/goal_planner/core/models.py

"""
Task and plan records.

Records come from the generation gateway (trusted) or from the local plan store
(possibly stale or hand-edited), so parsing only enforces structural shape:
- missing/malformed dependencies -> empty list
- missing/unknown status -> NOT_STARTED
- unparseable deadline -> kept verbatim, parse_deadline() returns None

Serialized form uses the camelCase keys of the stored JSON slot.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Task lifecycle status (values are the stored/display strings)."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    @classmethod
    def from_raw(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.NOT_STARTED
        # Accept "Not Started", "NotStarted", "not_started", ...
        key = "".join(ch for ch in str(raw).lower() if ch.isalnum())
        for status in cls:
            if key == "".join(ch for ch in status.value.lower() if ch.isalnum()):
                return status
        return cls.NOT_STARTED


def parse_deadline(raw: str | None) -> date | None:
    """Parse an ISO 8601 date (or datetime) string; None when it cannot be parsed."""
    if not raw:
        return None
    s = str(raw).strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        return None


def _as_text(v: Any) -> str:
    return "" if v is None else str(v)


def _as_dependencies(v: Any) -> list[str]:
    if not isinstance(v, (list, tuple)):
        return []
    out: list[str] = []
    for dep in v:
        if dep is None or isinstance(dep, (dict, list)):
            continue
        dep_id = str(dep).strip()
        if dep_id and dep_id not in out:
            out.append(dep_id)
    return out


@dataclass(slots=True)
class Task:
    id: str
    title: str
    description: str = ""
    estimated_duration: str = ""
    deadline: str = ""
    dependencies: list[str] = field(default_factory=list)
    status: TaskStatus = TaskStatus.NOT_STARTED

    @property
    def deadline_date(self) -> date | None:
        return parse_deadline(self.deadline)

    @classmethod
    def from_dict(cls, raw: dict[str, Any], *, fallback_id: str | None = None) -> Task:
        if not isinstance(raw, dict):
            raise TypeError(f"task record must be an object, got {type(raw).__name__}")
        task_id = _as_text(raw.get("id")).strip() or (fallback_id or "")
        return cls(
            id=task_id,
            title=_as_text(raw.get("title")),
            description=_as_text(raw.get("description")),
            estimated_duration=_as_text(raw.get("estimatedDuration")),
            deadline=_as_text(raw.get("deadline")),
            dependencies=_as_dependencies(raw.get("dependencies")),
            status=TaskStatus.from_raw(raw.get("status")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "estimatedDuration": self.estimated_duration,
            "deadline": self.deadline,
            "dependencies": list(self.dependencies),
            "status": self.status.value,
        }


@dataclass(slots=True)
class Plan:
    """
    A goal with its generated tasks.

    id/created_at are None until the plan is saved; PlanStore assigns them.
    """

    goal: str
    tasks: list[Task] = field(default_factory=list)
    id: str | None = None
    created_at: str | None = None

    @property
    def is_saved(self) -> bool:
        return self.id is not None

    def find_task(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def draft(self) -> Plan:
        """Unsaved working copy (tasks copied, no id/created_at)."""
        return Plan(goal=self.goal, tasks=copy.deepcopy(self.tasks))

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Plan:
        if not isinstance(raw, dict):
            raise TypeError(f"plan record must be an object, got {type(raw).__name__}")
        tasks_raw = raw.get("tasks")
        if not isinstance(tasks_raw, list):
            raise ValueError("plan record has no task list")
        plan_id = raw.get("id")
        created_at = raw.get("createdAt")
        return cls(
            goal=_as_text(raw.get("goal")),
            tasks=[Task.from_dict(t, fallback_id=str(i + 1)) for i, t in enumerate(tasks_raw)],
            id=None if plan_id is None else str(plan_id),
            created_at=None if created_at is None else str(created_at),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "goal": self.goal,
            "tasks": [t.to_dict() for t in self.tasks],
            "createdAt": self.created_at,
        }
