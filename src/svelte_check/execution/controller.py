# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run controller: lifecycle state machine for a single check run."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Final, Protocol

from ..aggregator import ResultAggregator
from ..config import Config
from ..console import get_console_manager
from ..discovery import find_project_root
from ..errors import LaunchError
from ..logging import enable_debug_logging
from ..models import OutcomeKind, RunOutcome, RunReport, RunState
from ..presentation import RESULTS_TITLE, ResultsPresenter, build_presenter
from ..progress import ConsoleSpinnerRenderer, Spinner
from ..reporting import ConsoleReporter, Reporter
from ..sinks import RawOutputLog, RawOutputSink
from .outcome import LAUNCH_FAILURE_MESSAGE, decide_outcome, describe_outcome, retains_raw_output
from .runner import ExitCallback, LineCallback, ProcessRunner

logger: logging.Logger = logging.getLogger(__name__)

RootFinder = Callable[[Path], Path | None]

STDERR_PREFIX: Final[str] = "STDERR: "
PREVIEW_LINES: Final[int] = 5
_MISSING_SCRIPT_PATTERN: Final[re.Pattern[str]] = re.compile(r'ERR_PNPM_NO_SCRIPT|Command "[^"]+" not found')


class CommandRunner(Protocol):
    """Launch the check command and stream its output."""

    async def start(
        self,
        command: str,
        working_directory: Path,
        on_line: LineCallback,
        on_exit: ExitCallback,
    ) -> asyncio.Task[int]:
        """Start the command; raise :class:`LaunchError` when it cannot start."""
        ...


class RunController:
    """Own the ``IDLE -> RUNNING -> FINALIZING -> IDLE`` lifecycle of check runs.

    Only one run may be active at a time. Output and exit callbacks are bound
    to the run that produced them; callbacks from a stale run, or arriving
    after :meth:`close`, are ignored.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        runner: CommandRunner | None = None,
        root_finder: RootFinder = find_project_root,
        presenter: ResultsPresenter | None = None,
        raw_sink: RawOutputSink | None = None,
        spinner: Spinner | None = None,
        reporter: Reporter | None = None,
        cwd: Path | None = None,
    ) -> None:
        """Create a controller wired to default collaborators built from ``config``.

        Args:
            config: Effective configuration; defaults when omitted.
            runner: Process runner used to launch the command.
            root_finder: Project-root lookup starting from ``cwd``.
            presenter: Collaborator that displays the diagnostics.
            raw_sink: Collaborator that persists raw output.
            spinner: Progress indicator driven while the run is active.
            reporter: Channel for user-facing messages.
            cwd: Directory the project-root lookup starts from.
        """

        self._config = config or Config()
        console = get_console_manager().get(color=self._config.color, emoji=self._config.emoji)
        self._runner: CommandRunner = runner or ProcessRunner(machine_flag=self._config.machine_flag)
        self._root_finder = root_finder
        self._presenter = presenter or build_presenter(self._config, console)
        self._raw_sink = raw_sink or RawOutputLog(self._config.raw_output_path)
        self._spinner = spinner or Spinner(
            ConsoleSpinnerRenderer(console),
            frames=self._config.spinner_frames,
            interval=self._config.spinner_interval,
        )
        self._reporter = reporter or ConsoleReporter(use_emoji=self._config.emoji, use_color=self._config.color)
        self._cwd = cwd
        self._state = RunState.IDLE
        self._generation = 0
        self._closed = False
        self._aggregator = ResultAggregator()
        self._raw_lines: list[str] = []
        self._hinted = False
        self._task: asyncio.Task[None] | None = None
        self._last_outcome: RunOutcome | None = None
        if self._config.debug_mode:
            enable_debug_logging()

    @property
    def config(self) -> Config:
        """Return the configuration the controller was built with."""

        return self._config

    @property
    def state(self) -> RunState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def last_outcome(self) -> RunOutcome | None:
        """Return the outcome of the most recent finished run."""

        return self._last_outcome

    @property
    def last_report(self) -> RunReport | None:
        """Return the read-only report of the most recent finished run."""

        return None if self._last_outcome is None else self._last_outcome.report

    @property
    def raw_lines(self) -> tuple[str, ...]:
        """Return the raw lines captured for the current or most recent run."""

        return tuple(self._raw_lines)

    def start(self) -> bool:
        """Begin a run on the running event loop.

        Returns:
            bool: ``True`` when a run was started, ``False`` when the request was
            rejected because a run is already active or the controller is closed.
        """

        if self._closed:
            logger.debug("start requested after close; ignoring")
            return False
        if self._state is not RunState.IDLE:
            self._reporter.warn("Svelte Check is already running")
            return False
        loop = asyncio.get_running_loop()
        self._generation += 1
        self._aggregator = ResultAggregator()
        self._raw_lines = []
        self._hinted = False
        self._state = RunState.RUNNING
        self._spinner.start()
        self._task = loop.create_task(self._drive(self._generation))
        return True

    async def wait(self) -> RunOutcome | None:
        """Wait for the in-flight run, if any, and return the latest outcome."""

        if self._task is not None:
            await self._task
        return self._last_outcome

    async def run(self) -> RunOutcome | None:
        """Start a run and wait for it; returns ``None`` if the start was rejected."""

        if not self.start():
            return None
        return await self.wait()

    def close(self) -> None:
        """Detach from any in-flight run; later callbacks become no-ops."""

        self._closed = True
        self._generation += 1
        self._spinner.stop()
        self._state = RunState.IDLE

    # Run lifecycle --------------------------------------------------------------------

    async def _drive(self, generation: int) -> None:
        try:
            root = self._resolve_root()
            stream = await self._runner.start(
                self._config.command,
                root,
                partial(self._on_line, generation),
                partial(self._on_exit, generation),
            )
            await stream
        except LaunchError as exc:
            self._finish_launch_failure(generation, exc)
        except (OSError, ValueError, asyncio.IncompleteReadError) as exc:
            logger.debug("output stream failed: %s", exc)
            self._abort(generation, f"Svelte Check output could not be read: {exc}")
        except Exception as exc:
            logger.exception("check run failed unexpectedly")
            self._abort(generation, f"Svelte Check run failed: {exc}")

    def _resolve_root(self) -> Path:
        try:
            start = self._cwd or Path.cwd()
            root = self._root_finder(start)
        except OSError as exc:
            raise LaunchError(self._config.command, self._cwd or Path(), str(exc)) from exc
        if root is None:
            self._reporter.info("Could not find project root with package.json. Running in the current directory.")
            root = start
        logger.debug("running %r in %s", self._config.command, root)
        return root

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _on_line(self, generation: int, line: str, is_error: bool) -> None:
        if not self._is_current(generation) or self._state is not RunState.RUNNING:
            return
        self._raw_lines.append(f"{STDERR_PREFIX}{line}" if is_error else line)
        parsed = self._aggregator.ingest_line(line)
        logger.debug("%s%s -> %s", "stderr: " if is_error else "", line, type(parsed).__name__)
        if is_error and not self._hinted and _MISSING_SCRIPT_PATTERN.search(line):
            self._hinted = True
            self._reporter.warn(
                f"Command not found: {self._config.command}. "
                "Try 'npx svelte-check' as the command, for example in svelte-check.toml: "
                'command = "npx svelte-check"',
            )

    def _on_exit(self, generation: int, exit_code: int) -> None:
        if not self._is_current(generation) or self._state is not RunState.RUNNING:
            return
        self._state = RunState.FINALIZING
        self._spinner.stop()
        try:
            self._last_outcome = self._finalize(exit_code)
        except Exception as exc:
            logger.exception("finalizing run failed")
            message = f"Svelte Check results could not be processed: {exc}"
            self._reporter.fail(message)
            self._last_outcome = RunOutcome(kind=OutcomeKind.FAILURE, message=message, exit_code=exit_code)
        finally:
            self._state = RunState.IDLE

    def _finalize(self, exit_code: int) -> RunOutcome:
        report = self._aggregator.finalize()
        self._trace_preview(exit_code, report)
        kind = decide_outcome(exit_code, report)
        message = describe_outcome(kind, exit_code, report)
        logger.debug("exit code %d with %d diagnostics -> %s", exit_code, len(report.diagnostics), kind.value)
        diagnostics = report.diagnostics if kind is OutcomeKind.ISSUES else ()
        self._presenter.present(RESULTS_TITLE, diagnostics)
        raw_path = self._save_raw_output(kind)
        self._announce(kind, message, raw_path)
        return RunOutcome(kind=kind, message=message, exit_code=exit_code, report=report, raw_output_path=raw_path)

    def _finish_launch_failure(self, generation: int, exc: LaunchError) -> None:
        if not self._is_current(generation) or self._state is not RunState.RUNNING:
            return
        self._state = RunState.FINALIZING
        self._spinner.stop()
        self._last_outcome = RunOutcome(kind=OutcomeKind.LAUNCH_FAILURE, message=LAUNCH_FAILURE_MESSAGE)
        try:
            self._reporter.fail(f"{LAUNCH_FAILURE_MESSAGE} {exc.reason}")
        finally:
            self._state = RunState.IDLE

    def _abort(self, generation: int, message: str) -> None:
        if not self._is_current(generation) or self._state is not RunState.RUNNING:
            return
        self._state = RunState.FINALIZING
        self._spinner.stop()
        try:
            raw_path = self._raw_sink.save(self._raw_lines) if self._raw_lines else None
            self._announce(OutcomeKind.FAILURE, message, raw_path)
            self._last_outcome = RunOutcome(
                kind=OutcomeKind.FAILURE,
                message=message,
                report=self._aggregator.finalize(),
                raw_output_path=raw_path,
            )
        finally:
            self._state = RunState.IDLE

    # Reporting helpers ----------------------------------------------------------------

    def _save_raw_output(self, kind: OutcomeKind) -> Path | None:
        if not (retains_raw_output(kind) or self._config.debug_mode) or not self._raw_lines:
            return None
        path = self._raw_sink.save(self._raw_lines)
        if path is None:
            self._reporter.warn("Failed to save raw output to log file")
        return path

    def _announce(self, kind: OutcomeKind, message: str, raw_path: Path | None) -> None:
        match kind:
            case OutcomeKind.CLEAN:
                self._reporter.ok(message)
            case OutcomeKind.ISSUES:
                self._reporter.warn(message)
            case OutcomeKind.AMBIGUOUS:
                self._reporter.warn(message)
            case _:
                self._reporter.fail(message)
        if raw_path is not None:
            self._reporter.info(f"Raw output saved to: {raw_path}")

    def _trace_preview(self, exit_code: int, report: RunReport) -> None:
        if not self._config.debug_mode:
            return
        logger.debug("svelte-check completed with exit code: %d", exit_code)
        logger.debug("processing %d lines of svelte-check output", len(self._raw_lines))
        for index, line in enumerate(self._raw_lines[:PREVIEW_LINES], start=1):
            logger.debug("[%d] %s", index, line)
        if report.unparsed_line_count:
            logger.debug("%d structured lines could not be parsed", report.unparsed_line_count)


__all__ = ["CommandRunner", "RootFinder", "RunController"]
