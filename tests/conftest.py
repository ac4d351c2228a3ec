# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from goal_planner.core.models import Task
from goal_planner.core.state import AppState
from goal_planner.storage.file_slot import FileSlot
from goal_planner.storage.plan_store import PlanStore

from .fakes import FakeGateway, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment.
    """
    return SimpleNamespace(
        app_name="goal-planner-test",
        openai_api_key=None,
        openai_base_url="https://api.openai.com/v1",
        llm_models=["gpt-3.5-turbo"],
        extra_headers={},
        data_dir=tmp_path / "data",
        plans_path=tmp_path / "data" / "task_plans.json",
        sort_strategy="topological",
    )


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        make_task("1", "2024-01-02", title="Project planning"),
        make_task("2", "2024-01-05", ["1"], title="Resource allocation"),
        make_task("3", "2024-01-08", ["2"], title="Implementation phase"),
    ]


@pytest.fixture()
def state(settings: SimpleNamespace, sample_tasks: list[Task]) -> AppState:
    """
    AppState wired with a fake gateway.

    The plan store is the real JSON-file store under tmp_path, since its
    behaviour is part of what we want to test.
    """
    return AppState(
        settings=settings,
        gateway=FakeGateway(sample_tasks),
        plan_store=PlanStore(FileSlot(settings.plans_path)),
    )
