# tests/test_models.py

from __future__ import annotations

from datetime import date

import pytest

from goal_planner.core.models import Plan, Task, TaskStatus, parse_deadline


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, TaskStatus.NOT_STARTED),
        ("", TaskStatus.NOT_STARTED),
        ("Not Started", TaskStatus.NOT_STARTED),
        ("In Progress", TaskStatus.IN_PROGRESS),
        ("InProgress", TaskStatus.IN_PROGRESS),
        ("in_progress", TaskStatus.IN_PROGRESS),
        ("Completed", TaskStatus.COMPLETED),
        ("done-ish", TaskStatus.NOT_STARTED),
    ],
)
def test_status_from_raw(raw, expected) -> None:
    assert TaskStatus.from_raw(raw) is expected


def test_parse_deadline() -> None:
    assert parse_deadline("2024-01-10") == date(2024, 1, 10)
    assert parse_deadline("2024-01-10T08:30:00") == date(2024, 1, 10)
    assert parse_deadline("tomorrow") is None
    assert parse_deadline("") is None
    assert parse_deadline(None) is None


def test_task_from_dict_tolerates_missing_and_malformed_fields() -> None:
    task = Task.from_dict({"id": 7, "title": "T", "dependencies": "1,2", "deadline": None}, fallback_id="x")
    assert task.id == "7"
    assert task.dependencies == []
    assert task.status == TaskStatus.NOT_STARTED
    assert task.deadline == ""
    assert task.deadline_date is None


def test_task_from_dict_normalizes_dependencies() -> None:
    task = Task.from_dict({"title": "T", "dependencies": [1, "2", "2", None, {"id": 3}]}, fallback_id="4")
    assert task.id == "4"
    assert task.dependencies == ["1", "2"]


def test_task_from_dict_rejects_non_objects() -> None:
    with pytest.raises(TypeError):
        Task.from_dict(["not", "a", "task"])  # type: ignore[arg-type]


def test_plan_draft_is_an_unsaved_copy() -> None:
    plan = Plan(goal="g", tasks=[Task(id="1", title="T")], id="p", created_at="2024-01-01T00:00:00+00:00")
    draft = plan.draft()

    assert draft.id is None and draft.created_at is None
    assert not draft.is_saved
    draft.tasks[0].status = TaskStatus.COMPLETED
    assert plan.tasks[0].status == TaskStatus.NOT_STARTED


def test_plan_from_dict_requires_task_list() -> None:
    with pytest.raises(ValueError):
        Plan.from_dict({"id": "p", "goal": "g"})
    plan = Plan.from_dict({"id": "p", "goal": "g", "tasks": [{"title": "a"}, {"title": "b"}]})
    assert [t.id for t in plan.tasks] == ["1", "2"]
    assert plan.find_task("2") is plan.tasks[1]
    assert plan.find_task("3") is None
