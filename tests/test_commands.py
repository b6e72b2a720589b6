# tests/test_commands.py

from __future__ import annotations

import pytest

from roster_keeper.cli.commands import ADD_USAGE, CommandRegistry, parse_add_args, registry
from roster_keeper.connectors.console_connector import prompt_add_request, run_console_loop
from roster_keeper.core.dispatch import handle_request
from roster_keeper.core.requests import OperationKind, OperationRequest
from roster_keeper.tasks.task_models import WorkerState


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def h(state, args, emit):
        called.append(args)
        if emit is not None:
            emit("note")
        return "ok"

    reg.register("a", h, "a", aliases=["9"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, "/9", emit=lambda _: None) == "ok"
    assert called == [["x", "y"], []]
    assert reg.resolve("/9 z") == "a"
    assert "/a - a (also: /9)" in reg.build_help()


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


@pytest.mark.parametrize(
    "args, expected",
    [
        (["Ann", "30"], ("Ann", 30, "")),
        (["Mary", "Ann", "25", "pw"], ("Mary Ann", 25, "pw")),
        (["Bob", "30", "1234"], ("Bob", 30, "1234")),
        (["R2D2", "7", "top", "secret"], ("R2D2", 7, "top secret")),
    ],
)
def test_parse_add_args(args, expected) -> None:
    req = parse_add_args(args)
    assert req is not None
    assert (req.name, req.age, req.secret) == expected
    assert req.kind is OperationKind.ADD_RECORD


@pytest.mark.parametrize("args", [[], ["Ann"], ["30"], ["Ann", "thirty"]])
def test_parse_add_args_rejects_incomplete(args) -> None:
    assert parse_add_args(args) is None


def test_request_repr_hides_secret() -> None:
    assert "hunter2" not in repr(OperationRequest.add("Ann", 3, "hunter2"))


def test_add_and_undo_run_immediately(state) -> None:
    reply = registry.handle(state, "/add Ann 30 pw")
    assert reply is not None and "Added Ann (30)" in reply
    assert len(state.roster) == 1

    assert "Undone" in (registry.handle(state, "/2") or "")
    assert len(state.roster) == 0
    assert registry.handle(state, "/undo") == "Nothing to undo."
    assert registry.handle(state, "/add Ann") == ADD_USAGE


def test_deferred_requests_go_through_worker(state, sink) -> None:
    handle_request(state, OperationRequest.add("Ann", 20, "sec-aaa"))
    handle_request(state, OperationRequest.add("Bob", 40, "sec-bbb"))

    replies = [
        handle_request(state, OperationRequest(kind=k))
        for k in (OperationKind.DISPLAY, OperationKind.SAVE, OperationKind.ANALYZE_AGE)
    ]
    assert all(r.startswith("Queued") for r in replies)
    assert sink.wait_for(3)

    assert sink.kinds == ["display", "save", "analyze_age"]
    assert sink.results[2].stats is not None
    assert sink.results[2].stats.mean == 30.0
    assert state.store.path.exists()
    assert "sec-" not in state.store.path.read_text("utf-8")


def test_save_then_load_round_trip_through_worker(state, sink) -> None:
    registry.handle(state, "/add Zed 50 x")
    registry.handle(state, "/add Ann 20 y")
    registry.handle(state, "/save")
    assert sink.wait_for(1)

    registry.handle(state, "/add Extra 1 z")
    registry.handle(state, "/load")
    assert sink.wait_for(2)

    assert all(r.ok for r in sink.results)
    assert [(r.name, r.age) for r in state.roster.snapshot()] == [("Zed", 50), ("Ann", 20)]


def test_load_without_file_reports_failure(state, sink) -> None:
    registry.handle(state, "/add Ann 20")
    registry.handle(state, "/load")
    assert sink.wait_for(1)

    assert not sink.results[0].ok
    assert len(state.roster) == 1


def test_shutdown_request_stops_worker(state) -> None:
    assert registry.handle(state, "/exit") == "Worker stopped."
    assert state.worker.state is WorkerState.STOPPED
    assert registry.handle(state, "/save") == "Worker is stopped; request ignored."


def test_status_reports_counts(state) -> None:
    registry.handle(state, "/add Ann 20")
    text = registry.handle(state, "/status") or ""
    assert "Records: 1" in text
    assert "Undo depth: 1" in text


def test_prompt_add_request() -> None:
    answers = iter(["Ann", "31"])
    req = prompt_add_request(lambda _p: next(answers), lambda _p: "hidden")
    assert req == OperationRequest.add("Ann", 31, "hidden")

    bad = iter(["Ann", "old"])
    assert prompt_add_request(lambda _p: next(bad), lambda _p: "x") is None


def test_console_loop_end_to_end(state, sink, capsys) -> None:
    script = iter(["/add Ann 30 pw", "1", "Bob", "41", "", "hello", "/undo", "5", "/exit"])

    def read(prompt: str) -> str:
        line = next(script)
        if line == "/exit":
            # Let the queued display finish before the non-draining stop.
            assert state.worker.wait_all(timeout=5.0)
        return line

    run_console_loop(state, read=read, read_secret=lambda _p: "s3cret")

    out = capsys.readouterr().out
    assert "Added Ann (30)" in out
    assert "Added Bob (41)" in out
    assert "Commands start with '/'" in out
    assert "Undone: add of Bob (41)" in out
    assert "Worker stopped." in out
    assert "s3cret" not in out

    assert sink.kinds == ["display"]
    assert [r.name for r in state.roster.snapshot()] == ["Ann"]
    assert state.worker.state is WorkerState.STOPPED


def test_console_loop_exits_on_eof(state) -> None:
    def read(prompt: str) -> str:
        raise EOFError

    run_console_loop(state, read=read, read_secret=read)
    assert state.worker.is_alive()
