# tests/test_gateway.py

from __future__ import annotations

import json
from datetime import date

import pytest

from goal_planner.core.errors import GenerationError, PlannerInputError
from goal_planner.core.models import TaskStatus
from goal_planner.llm.gateway import LLMPlanGateway, parse_task_list
from goal_planner.llm.offline import OfflineLLMClient, demo_tasks
from goal_planner.llm.prompts import SYSTEM_PROMPT

from .fakes import FakeLLMClient

TODAY = date(2024, 3, 1)

PLAN_JSON = json.dumps(
    {
        "tasks": [
            {
                "id": "1",
                "title": "Research",
                "description": "Look around",
                "estimatedDuration": "2 days",
                "deadline": "2024-03-03",
                "dependencies": [],
            },
            {"id": "2", "title": "Build", "deadline": "2024-03-08", "dependencies": ["1"]},
        ]
    }
)


def _gateway(llm) -> LLMPlanGateway:
    return LLMPlanGateway(llm, today=lambda: TODAY)


def test_generate_parses_tasks_and_sends_fixed_prompt() -> None:
    llm = FakeLLMClient(PLAN_JSON)

    tasks = _gateway(llm).generate("  Build a shed  ")

    assert [t.id for t in tasks] == ["1", "2"]
    assert tasks[0].estimated_duration == "2 days"
    assert tasks[1].dependencies == ["1"]
    assert all(t.status == TaskStatus.NOT_STARTED for t in tasks)

    messages, system_prompt = llm.calls[0]
    assert system_prompt == SYSTEM_PROMPT
    assert "Goal: Build a shed\n" in messages[0]["content"]
    assert "2024-03-01" in messages[0]["content"]


def test_generate_joins_streamed_chunks_and_ignores_prose() -> None:
    text = "Sure! Here is your plan:\n```json\n" + PLAN_JSON + "\n```\nGood luck."
    chunks = [text[i : i + 7] for i in range(0, len(text), 7)]

    tasks = _gateway(FakeLLMClient(chunks)).generate("Build a shed")

    assert [t.title for t in tasks] == ["Research", "Build"]


def test_empty_goal_is_rejected_without_calling_the_llm() -> None:
    llm = FakeLLMClient(PLAN_JSON)
    with pytest.raises(PlannerInputError):
        _gateway(llm).generate("   ")
    assert llm.calls == []


def test_llm_failure_becomes_generation_error() -> None:
    llm = FakeLLMClient(error=RuntimeError("LLM is rate-limited. Try again later."))
    with pytest.raises(GenerationError, match="rate-limited"):
        _gateway(llm).generate("Build a shed")


def test_missing_key_error_gets_a_friendly_message() -> None:
    llm = FakeLLMClient(error=RuntimeError("LLM API key is not set. Set PLANNER_OPENAI_API_KEY in your .env."))
    with pytest.raises(GenerationError, match="not configured"):
        _gateway(llm).generate("Build a shed")


@pytest.mark.parametrize(
    "raw",
    [
        "I cannot help with that.",
        "",
        '{"steps": []}',
        '{"tasks": {"id": "1"}}',
        '{"tasks": ["do it"]}',
        '{"tasks": [{"id": "1", "title": "a"}, {"id": "1", "title": "b"}]}',
    ],
)
def test_malformed_output_is_all_or_nothing(raw: str) -> None:
    with pytest.raises(GenerationError):
        _gateway(FakeLLMClient(raw)).generate("Build a shed")


def test_parse_task_list_fills_missing_ids_by_position() -> None:
    tasks = parse_task_list('{"tasks": [{"title": "a"}, {"title": "b", "dependencies": ["1"]}]}')
    assert [t.id for t in tasks] == ["1", "2"]
    assert tasks[1].dependencies == ["1"]


@pytest.mark.parametrize(
    ("goal", "first_title"),
    [
        ("Launch our new product in 2 weeks", "Finalize product features"),
        ("Build a website for my bakery", "Create website wireframes"),
        ("Learn to play the guitar", "Project planning"),
    ],
)
def test_demo_templates(goal: str, first_title: str) -> None:
    tasks = demo_tasks(goal, TODAY)
    assert len(tasks) == 5
    assert tasks[0]["title"] == first_title
    assert tasks[0]["deadline"] == "2024-03-03"
    assert tasks[-1]["deadline"] == "2024-03-15"


def test_offline_client_through_gateway() -> None:
    gateway = _gateway(OfflineLLMClient(today=lambda: TODAY))

    tasks = gateway.generate("Launch product at the fair")

    assert [t.id for t in tasks] == ["1", "2", "3", "4", "5"]
    assert tasks[4].dependencies == ["3", "4"]
    assert tasks[2].dependencies == ["1"]
    assert tasks[4].title == "Launch product"
