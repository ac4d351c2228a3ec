# src/goal_planner/llm/gateway.py

"""
Plan generation gateway: goal text in, complete task list out.

All-or-nothing: any LLM failure or malformed answer raises GenerationError and
no partial task list is returned.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from ..core.errors import GenerationError, PlannerInputError
from ..core.models import Task
from ..core.ports import LLMClient
from .client import friendly_llm_error_message
from .prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)


def _extract_json_object(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("{") and raw.endswith("}"):
        return raw
    first = raw.find("{")
    last = raw.rfind("}")
    if first != -1 and last != -1 and last > first:
        return raw[first : last + 1]
    return raw


def parse_task_list(raw: str) -> list[Task]:
    """Parse a completion into tasks; raises GenerationError on malformed output."""
    try:
        data: Any = json.loads(_extract_json_object(raw))
    except ValueError as e:
        raise GenerationError("Failed to parse the generated task plan.") from e

    tasks_raw = data.get("tasks") if isinstance(data, dict) else None
    if not isinstance(tasks_raw, list):
        raise GenerationError("Generated task plan has no task list.")

    tasks: list[Task] = []
    seen: set[str] = set()
    for i, item in enumerate(tasks_raw):
        if not isinstance(item, dict):
            raise GenerationError(f"Generated task #{i + 1} is not an object.")
        task = Task.from_dict(item, fallback_id=str(i + 1))
        if task.id in seen:
            raise GenerationError(f"Generated task plan repeats task id {task.id!r}.")
        seen.add(task.id)
        tasks.append(task)
    return tasks


class LLMPlanGateway:
    def __init__(self, llm: LLMClient, *, today: Callable[[], date] = date.today) -> None:
        self._llm = llm
        self._today = today

    def generate(self, goal: str) -> list[Task]:
        goal = (goal or "").strip()
        if not goal:
            raise PlannerInputError("Goal text is required.")

        messages = [{"role": "user", "content": build_user_prompt(goal, self._today().isoformat())}]

        try:
            raw = "".join(self._llm.stream_chat(messages, SYSTEM_PROMPT))
        except RuntimeError as e:
            logger.info("Plan generation failed: %s", e)
            raise GenerationError(friendly_llm_error_message(e)) from e

        if not raw.strip():
            raise GenerationError("The model returned an empty answer.")

        try:
            tasks = parse_task_list(raw)
        except GenerationError:
            logger.warning("Unparseable plan from LLM (first 500 chars): %s", raw[:500])
            raise

        logger.info("Generated %d task(s) for goal=%r", len(tasks), goal[:80])
        return tasks
