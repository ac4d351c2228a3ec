# src/goal_planner/core/errors.py

from __future__ import annotations


class PlannerError(Exception):
    """Base class for planner failures reported to the user."""


class PlannerInputError(PlannerError, ValueError):
    """Raised for invalid user input (empty goal, unknown plan id, bad arguments)."""


class GenerationError(PlannerError):
    """Raised when the gateway cannot produce a complete task list."""


class StorageError(PlannerError):
    """Raised when saved plans cannot be written."""


class PlanCycleError(PlannerError):
    """Raised when the task dependency graph contains a cycle."""

    def __init__(self, message: str, task_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.task_ids = list(task_ids or [])
