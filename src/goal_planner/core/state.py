# src/goal_planner/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..storage.plan_store import PlanStore
from .models import Plan
from .ports import PlanGateway


@dataclass
class AppState:
    """
    Everything one session works with, passed explicitly to each operation.

    current_plan is the plan on display: freshly generated (unsaved) or an
    unsaved working copy of a saved plan.
    """

    settings: Any
    gateway: PlanGateway
    plan_store: PlanStore
    offline: bool = False

    current_plan: Plan | None = None
