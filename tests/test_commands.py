# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

from goal_planner.cli.bootstrap import create_initial_state
from goal_planner.cli.commands import CommandRegistry
from goal_planner.cli.console import handle_line, run_console_loop
from goal_planner.core.models import TaskStatus

from .fakes import FakeGateway


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")
    reg.register("c", h2, "c", raw_args=True)

    assert reg.handle(state, "/a x  y") == "h2:x,y"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert reg.handle(state, "/c x  y") == "h2:x  y"
    assert called == {"h2": 2, "h3": 1}


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_goal_text_generates_and_displays_plan(state) -> None:
    reply = handle_line(state, "Ship the quarterly report")

    assert reply is not None
    assert reply.startswith("Task plan generated successfully!")
    assert "Goal: Ship the quarterly report" in reply
    assert state.current_plan is not None
    assert state.current_plan.id is None
    assert state.gateway.goals == ["Ship the quarterly report"]


def test_plan_command_and_blank_input(state) -> None:
    assert handle_line(state, "   ") is None
    reply = handle_line(state, "/plan   Learn Rust  ")
    assert reply is not None and "Goal: Learn Rust" in reply
    assert "Usage: /plan" in (handle_line(state, "/plan") or "")


def test_failed_generation_keeps_previous_plan(state) -> None:
    handle_line(state, "First goal")
    previous = state.current_plan

    state.gateway = FakeGateway(fail=True)
    reply = handle_line(state, "Second goal")

    assert reply is not None and reply.startswith("Failed to generate task plan")
    assert state.current_plan is previous


def test_commands_need_a_plan(state) -> None:
    assert "Enter a goal first" in (handle_line(state, "/save") or "")
    assert "Enter a goal first" in (handle_line(state, "/toggle 1") or "")
    assert "Enter a goal first" in (handle_line(state, "/show") or "")


def test_toggle_save_and_view_flow(state) -> None:
    handle_line(state, "Ship the quarterly report")

    assert handle_line(state, "/toggle 1") == "Project planning: In Progress (0% Complete)"
    assert handle_line(state, "/toggle 1") == "Project planning: Completed (33% Complete)"
    assert "No task with id '9'" in (handle_line(state, "/toggle 9") or "")
    assert handle_line(state, "/toggle-title Resource allocation") == "Resource allocation: In Progress (33% Complete)"

    assert (handle_line(state, "/save") or "").startswith("Plan saved successfully!")
    listing = handle_line(state, "/saved") or ""
    assert listing.startswith("1. Ship the quarterly report")
    assert "1/3 completed" in listing

    # In-memory changes after saving are not persisted automatically.
    handle_line(state, "/toggle 3")
    assert state.plan_store.load_all()[0].find_task("3").status == TaskStatus.NOT_STARTED

    handle_line(state, "Another goal")
    shown = handle_line(state, "/view 1") or ""
    assert "Goal: Ship the quarterly report" in shown
    assert state.current_plan is not None
    assert state.current_plan.id is None
    assert state.current_plan.find_task("1").status == TaskStatus.COMPLETED

    saved_id = state.plan_store.load_all()[0].id
    assert "Goal: Ship the quarterly report" in (handle_line(state, f"/view {saved_id}") or "")
    assert "No saved plan '7'" in (handle_line(state, "/view 7") or "")


def test_view_by_id_goes_through_the_store(state, monkeypatch) -> None:
    handle_line(state, "Ship the quarterly report")
    handle_line(state, "/save")
    saved_id = state.plan_store.load_all()[0].id
    looked_up: list[str] = []
    real_get = state.plan_store.get

    def spy_get(plan_id):
        looked_up.append(plan_id)
        return real_get(plan_id)

    monkeypatch.setattr(state.plan_store, "get", spy_get)

    assert "Goal: Ship the quarterly report" in (handle_line(state, f"/view {saved_id}") or "")
    assert looked_up == [saved_id]


def test_save_over_corrupt_storage_reports_error_and_keeps_file(state) -> None:
    path = state.settings.plans_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text('[{"id": "p1", "goal": "keep me", "tasks": []}, ]', encoding="utf-8")

    handle_line(state, "Ship the quarterly report")
    out = handle_line(state, "/save") or ""

    assert out.startswith("Error: Saved plans are not valid JSON")
    assert "keep me" in path.read_text("utf-8")
    assert handle_line(state, "/saved") == "No saved plans yet."


def test_show_orders_by_dependencies(state) -> None:
    handle_line(state, "Ship the quarterly report")
    shown = handle_line(state, "/show") or ""
    assert shown.index("Project planning") < shown.index("Resource allocation") < shown.index("Implementation phase")


def test_export_writes_markdown(state, tmp_path: Path) -> None:
    handle_line(state, "Ship the quarterly report")
    target = tmp_path / "out" / "plan.md"

    reply = handle_line(state, f"/export {target}")

    assert reply == f"Plan exported to {target}"
    assert target.read_text("utf-8").startswith("# Ship the quarterly report")


def test_status_command(state) -> None:
    text = handle_line(state, "/status") or ""
    assert "Generation: LLM" in text
    assert "Current plan: none" in text


def test_bootstrap_without_key_runs_offline(settings) -> None:
    state = create_initial_state(settings=settings)

    assert state.offline is True
    assert settings.data_dir.is_dir()

    reply = handle_line(state, "Build a website for my band") or ""
    assert "Create website wireframes" in reply
    assert (handle_line(state, "/save") or "").startswith("Plan saved")
    assert settings.plans_path.exists()


def test_console_loop_reads_until_exit(state, capsys) -> None:
    lines = iter(["Ship the quarterly report", "/toggle 1", "/exit", "never read"])

    run_console_loop(state, read=lambda _prompt: next(lines))

    out = capsys.readouterr().out
    assert "Task plan generated successfully!" in out
    assert "Project planning: In Progress" in out
    assert state.current_plan is not None


def test_console_loop_stops_on_eof(state) -> None:
    def _eof(_prompt: str) -> str:
        raise EOFError

    run_console_loop(state, read=_eof)
