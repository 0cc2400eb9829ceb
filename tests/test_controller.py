# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the run controller lifecycle."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from svelte_check.config import Config
from svelte_check.errors import LaunchError
from svelte_check.execution import RunController
from svelte_check.execution.outcome import AMBIGUOUS_MESSAGE, LAUNCH_FAILURE_MESSAGE
from svelte_check.models import NO_ISSUES_MESSAGE, OutcomeKind, RunOutcome, RunState
from svelte_check.presentation import RESULTS_TITLE
from svelte_check.progress import Spinner

ERROR_LINE = '1700000000001 ERROR "src/App.svelte" 10:5 "Cannot find name \'foo\'."'
WARNING_LINE = '1700000000002 WARNING "src/lib/Card.svelte" 3:1 "Unused CSS selector"'
COMPLETED_LINE = "1700000000003 COMPLETED 12 FILES 3 ERRORS 2 WARNINGS 1 FILES_WITH_PROBLEMS"


@pytest.fixture
def build(tmp_path: Path, presenter, sink, reporter, renderer):
    """Return a factory wiring a controller to recording collaborators."""

    def _build(runner, config: Config | None = None) -> tuple[RunController, Spinner]:
        spinner = Spinner(renderer, frames=("a", "b"), interval=0.001)
        controller = RunController(
            config or Config(command="pnpm run check"),
            runner=runner,
            root_finder=lambda start: tmp_path,
            presenter=presenter,
            raw_sink=sink,
            spinner=spinner,
            reporter=reporter,
            cwd=tmp_path,
        )
        return controller, spinner

    return _build


def test_issues_run_presents_diagnostics(build, runner_factory, presenter, sink, reporter, tmp_path: Path) -> None:
    runner = runner_factory([(ERROR_LINE, False), (WARNING_LINE, False), (COMPLETED_LINE, False)], exit_code=1)
    controller, spinner = build(runner)

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.ISSUES
    assert outcome.exit_code == 1
    assert outcome.message == "Svelte Check completed with 3 errors and 2 warnings in 12 files."
    assert runner.calls == [("pnpm run check", tmp_path)]
    [(title, diagnostics)] = presenter.calls
    assert title == RESULTS_TITLE
    assert [diag.location for diag in diagnostics] == ["src/App.svelte:10:5", "src/lib/Card.svelte:3:1"]
    assert sink.saved == []
    assert reporter.texts("warn") == [outcome.message]
    assert controller.state is RunState.IDLE
    assert not spinner.running


def test_clean_run_clears_previous_results(build, runner_factory, presenter, sink, reporter) -> None:
    runner = runner_factory([("1700000000003 COMPLETED 4 FILES 0 ERRORS 0 WARNINGS", False)], exit_code=0)
    controller, _ = build(runner)

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.CLEAN
    assert outcome.ok
    assert presenter.calls == [(RESULTS_TITLE, ())]
    assert reporter.texts("ok") == [NO_ISSUES_MESSAGE]
    assert sink.saved == []


def test_ambiguous_run_saves_raw_output(build, runner_factory, presenter, sink, reporter) -> None:
    runner = runner_factory([("Loading svelte-check", False), ("something odd", True)], exit_code=1)
    controller, _ = build(runner)

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.AMBIGUOUS
    assert outcome.raw_output_path == sink.path
    assert sink.saved == [("Loading svelte-check", "STDERR: something odd")]
    assert presenter.calls == [(RESULTS_TITLE, ())]
    assert reporter.texts("warn") == [AMBIGUOUS_MESSAGE]
    assert reporter.texts("info") == [f"Raw output saved to: {sink.path}"]


def test_failure_run_saves_raw_output(build, runner_factory, sink, reporter) -> None:
    runner = runner_factory([("Error: config invalid", True)], exit_code=2)
    controller, _ = build(runner)

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.FAILURE
    assert outcome.message == "Svelte Check failed with exit code 2"
    assert sink.saved == [("STDERR: Error: config invalid",)]
    assert reporter.texts("fail") == ["Svelte Check failed with exit code 2"]


def test_failed_raw_output_save_is_reported(build, runner_factory, sink, reporter) -> None:
    sink.fail = True
    controller, _ = build(runner_factory([("garbage", False)], exit_code=3))

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.raw_output_path is None
    assert "Failed to save raw output to log file" in reporter.texts("warn")


def test_debug_mode_always_saves_raw_output(
    build,
    runner_factory,
    sink,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr("svelte_check.execution.controller.enable_debug_logging", lambda: None)
    runner = runner_factory([("1700000000003 COMPLETED 1 FILES 0 ERRORS 0 WARNINGS", False)], exit_code=0)
    controller, _ = build(runner, Config(debug_mode=True))

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.CLEAN
    assert len(sink.saved) == 1


def test_launch_failure(build, runner_factory, presenter, reporter, tmp_path: Path) -> None:
    runner = runner_factory(launch_error=LaunchError("pnpm run check", tmp_path, "No such file or directory"))
    controller, spinner = build(runner)

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.LAUNCH_FAILURE
    assert outcome.message == LAUNCH_FAILURE_MESSAGE
    assert presenter.calls == []
    assert reporter.texts("fail") == [f"{LAUNCH_FAILURE_MESSAGE} No such file or directory"]
    assert controller.state is RunState.IDLE
    assert not spinner.running


def test_unexpected_runner_error_ends_run_as_failure(build, runner_factory, presenter, sink, reporter) -> None:
    runner = runner_factory(launch_error=RuntimeError("boom"))
    controller, spinner = build(runner)

    async def scenario() -> tuple[RunOutcome | None, bool]:
        outcome = await controller.run()
        restarted = controller.start()
        await controller.wait()
        return outcome, restarted

    outcome, restarted = asyncio.run(scenario())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.FAILURE
    assert outcome.message == "Svelte Check run failed: boom"
    assert reporter.texts("fail")[0] == "Svelte Check run failed: boom"
    assert presenter.calls == []
    assert sink.saved == []
    assert restarted
    assert len(runner.calls) == 2
    assert controller.state is RunState.IDLE
    assert not spinner.running


def test_presenter_error_ends_run_as_failure(build, runner_factory, reporter) -> None:
    class BrokenPresenter:
        def present(self, title, diagnostics) -> None:
            raise RuntimeError("display closed")

    runner = runner_factory([(ERROR_LINE, False)], exit_code=1)
    controller, spinner = build(runner)
    controller._presenter = BrokenPresenter()

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.FAILURE
    assert outcome.exit_code == 1
    assert reporter.texts("fail") == ["Svelte Check results could not be processed: display closed"]
    assert controller.state is RunState.IDLE
    assert not spinner.running


def test_zero_totals_fall_back_to_counting_diagnostics(build, runner_factory, presenter, reporter) -> None:
    runner = runner_factory(
        [(ERROR_LINE, False), ("1700000000003 COMPLETED 1 FILES 0 ERRORS 0 WARNINGS", False)],
        exit_code=1,
    )
    controller, _ = build(runner)

    outcome = asyncio.run(controller.run())

    assert outcome is not None
    assert outcome.kind is OutcomeKind.ISSUES
    assert outcome.message == "Svelte Check completed with 1 errors and 0 warnings."
    assert outcome.message != NO_ISSUES_MESSAGE
    assert reporter.texts("warn") == [outcome.message]
    [(_, diagnostics)] = presenter.calls
    assert [diag.location for diag in diagnostics] == ["src/App.svelte:10:5"]


def test_second_start_is_rejected_while_running(build, runner_factory, reporter, renderer) -> None:
    async def scenario() -> tuple[bool, bool, RunState]:
        gate = asyncio.Event()
        runner = runner_factory([(ERROR_LINE, False)], exit_code=1, gate=gate)
        controller, _ = build(runner)
        first = controller.start()
        second = controller.start()
        state = controller.state
        gate.set()
        await controller.wait()
        assert len(runner.calls) == 1
        return first, second, state

    first, second, state = asyncio.run(scenario())

    assert first is True
    assert second is False
    assert state is RunState.RUNNING
    assert reporter.texts("warn").count("Svelte Check is already running") == 1
    assert renderer.clears == 1


def test_each_run_starts_with_a_fresh_report(build, runner_factory, presenter) -> None:
    runner = runner_factory([(ERROR_LINE, False)], exit_code=1)
    controller, _ = build(runner)

    async def scenario() -> None:
        await controller.run()
        await controller.run()

    asyncio.run(scenario())

    assert [len(diagnostics) for _, diagnostics in presenter.calls] == [1, 1]
    assert controller.last_report is not None
    assert controller.last_report.raw_line_count == 1


def test_close_ignores_late_callbacks(build, runner_factory, presenter, sink, reporter) -> None:
    async def scenario() -> object:
        gate = asyncio.Event()
        controller, spinner = build(runner_factory([(ERROR_LINE, False)], exit_code=1, gate=gate))
        controller.start()
        await asyncio.sleep(0.01)
        controller.close()
        assert not spinner.running
        gate.set()
        outcome = await controller.wait()
        assert controller.start() is False
        return outcome

    outcome = asyncio.run(scenario())

    assert outcome is None
    assert presenter.calls == []
    assert sink.saved == []
    assert reporter.messages == []


def test_missing_script_hint_is_shown_once(build, runner_factory, reporter) -> None:
    lines = [
        ('ERR_PNPM_NO_SCRIPT  Missing script: check', True),
        ('Command "check" not found.', True),
    ]
    controller, _ = build(runner_factory(lines, exit_code=1))

    asyncio.run(controller.run())

    hints = [msg for msg in reporter.texts("warn") if msg.startswith("Command not found")]
    assert len(hints) == 1
    assert "npx svelte-check" in hints[0]
    assert controller.raw_lines[0].startswith("STDERR: ERR_PNPM_NO_SCRIPT")


def test_missing_project_root_falls_back_to_cwd(
    tmp_path: Path,
    runner_factory,
    presenter,
    sink,
    reporter,
    renderer,
) -> None:
    runner = runner_factory([], exit_code=0)
    controller = RunController(
        Config(),
        runner=runner,
        root_finder=lambda start: None,
        presenter=presenter,
        raw_sink=sink,
        spinner=Spinner(renderer, interval=0.001),
        reporter=reporter,
        cwd=tmp_path,
    )

    asyncio.run(controller.run())

    assert runner.calls[0][1] == tmp_path
    assert reporter.texts("info")[0].startswith("Could not find project root with package.json")


def test_spinner_runs_while_output_streams(build, runner_factory, renderer) -> None:
    async def scenario() -> None:
        gate = asyncio.Event()
        controller, spinner = build(runner_factory([], exit_code=0, gate=gate))
        controller.start()
        await asyncio.sleep(0.05)
        assert spinner.running
        gate.set()
        await controller.wait()
        assert not spinner.running

    asyncio.run(scenario())

    assert renderer.frames[:2] == ["a", "b"]
