# src/goal_planner/llm/offline.py

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterable
from datetime import date, timedelta
from typing import Any

from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)

_GOAL_LINE = re.compile(r"^\s*Goal:\s*(.+?)\s*$", re.MULTILINE)

# (title, description, estimated duration, days from today, dependencies)
_LAUNCH_TEMPLATE = [
    ("Finalize product features", "Review and finalize all product features that will be included in the initial launch", "2 days", 2, []),
    ("Complete product testing", "Perform thorough testing of all features and fix any critical bugs", "2 days", 4, ["1"]),
    ("Prepare marketing materials", "Create promotional content, social media posts, and press releases", "3 days", 7, ["1"]),
    ("Set up sales channels", "Ensure all distribution channels are ready for product launch", "3 days", 10, ["2"]),
    ("Launch product", "Official product launch across all planned channels", "1 day", 14, ["3", "4"]),
]

_WEBSITE_TEMPLATE = [
    ("Create website wireframes", "Design layout and user flow for all main pages", "2 days", 2, []),
    ("Develop frontend components", "Create HTML, CSS, and JavaScript for all pages based on wireframes", "3 days", 5, ["1"]),
    ("Implement backend functionality", "Set up server, database, and API endpoints", "3 days", 8, ["2"]),
    ("Test and debug website", "Perform comprehensive testing on different devices and browsers", "2 days", 12, ["3"]),
    ("Deploy website to production", "Launch the website on production servers and configure domain", "1 day", 14, ["4"]),
]

_GENERIC_TEMPLATE = [
    ("Project planning", "Define project scope, objectives, and key milestones", "2 days", 2, []),
    ("Resource allocation", "Assign team members and allocate necessary resources", "3 days", 5, ["1"]),
    ("Implementation phase", "Execute the core project work based on the plan", "3 days", 8, ["2"]),
    ("Quality assurance", "Review and test all deliverables to ensure quality", "4 days", 12, ["3"]),
    ("Project delivery", "Finalize all deliverables and present to stakeholders", "2 days", 14, ["4"]),
]


def _pick_template(goal: str) -> list[tuple[str, str, str, int, list[str]]]:
    g = goal.lower()
    if "launch" in g and "product" in g:
        return _LAUNCH_TEMPLATE
    if "website" in g or "web" in g:
        return _WEBSITE_TEMPLATE
    return _GENERIC_TEMPLATE


def demo_tasks(goal: str, today: date) -> list[dict[str, Any]]:
    """Canned five-task plan for the goal, deadlines relative to today."""
    return [
        {
            "id": str(i),
            "title": title,
            "description": description,
            "estimatedDuration": duration,
            "deadline": (today + timedelta(days=days)).isoformat(),
            "dependencies": list(deps),
        }
        for i, (title, description, duration, days, deps) in enumerate(_pick_template(goal), start=1)
    ]


class OfflineLLMClient:
    """
    Offline deterministic LLM client used for demos when no API key is configured.

    Answers a planning prompt with a canned plan chosen by keywords in the
    "Goal:" line of the last user message.
    """

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def stream_chat(self, messages: list[ChatMessage], system_prompt: str) -> Iterable[str]:
        user_text = ""
        for m in reversed(messages):
            if m["role"] == "user":
                user_text = m["content"]
                break

        match = _GOAL_LINE.search(user_text)
        goal = match.group(1) if match else user_text
        logger.info("Using demo data - no LLM API key configured")

        yield json.dumps({"tasks": demo_tasks(goal, self._today())}, ensure_ascii=False)
