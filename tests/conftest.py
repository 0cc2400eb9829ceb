# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures and collaborator doubles."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from svelte_check.console import get_console_manager
from svelte_check.execution.runner import ExitCallback, LineCallback
from svelte_check.models import Diagnostic


@dataclass
class RecordingReporter:
    """Reporter double capturing ``(level, message)`` pairs."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def info(self, msg: str) -> None:
        self.messages.append(("info", msg))

    def ok(self, msg: str) -> None:
        self.messages.append(("ok", msg))

    def warn(self, msg: str) -> None:
        self.messages.append(("warn", msg))

    def fail(self, msg: str) -> None:
        self.messages.append(("fail", msg))

    def texts(self, level: str) -> list[str]:
        return [msg for lvl, msg in self.messages if lvl == level]


@dataclass
class RecordingPresenter:
    calls: list[tuple[str, tuple[Diagnostic, ...]]] = field(default_factory=list)

    def present(self, title: str, diagnostics: Sequence[Diagnostic]) -> None:
        self.calls.append((title, tuple(diagnostics)))


@dataclass
class RecordingSink:
    path: Path
    saved: list[tuple[str, ...]] = field(default_factory=list)
    fail: bool = False

    def save(self, lines: Sequence[str]) -> Path | None:
        self.saved.append(tuple(lines))
        return None if self.fail else self.path


@dataclass
class RecordingRenderer:
    frames: list[str] = field(default_factory=list)
    clears: int = 0

    def draw(self, label: str, frame: str) -> None:
        self.frames.append(frame)

    def clear(self) -> None:
        self.clears += 1


class ScriptedRunner:
    """Runner double that replays canned output and an exit code.

    When ``gate`` is provided the exit is held back until the event is set,
    which lets tests observe the controller while a run is in flight.
    """

    def __init__(
        self,
        lines: Sequence[tuple[str, bool]] = (),
        exit_code: int = 0,
        *,
        launch_error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.lines = list(lines)
        self.exit_code = exit_code
        self.launch_error = launch_error
        self.gate = gate
        self.calls: list[tuple[str, Path]] = []

    async def start(
        self,
        command: str,
        working_directory: Path,
        on_line: LineCallback,
        on_exit: ExitCallback,
    ) -> asyncio.Task[int]:
        self.calls.append((command, working_directory))
        if self.launch_error is not None:
            raise self.launch_error

        async def _feed() -> int:
            for line, is_error in self.lines:
                on_line(line, is_error)
                await asyncio.sleep(0)
            if self.gate is not None:
                await self.gate.wait()
            on_exit(self.exit_code)
            return self.exit_code

        return asyncio.get_running_loop().create_task(_feed())


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the XDG cache at a temporary directory for every test."""

    cache_dir = tmp_path / "xdg-cache"
    monkeypatch.setenv("XDG_CACHE_HOME", str(cache_dir))
    get_console_manager().clear()
    return cache_dir


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def sink(tmp_path: Path) -> RecordingSink:
    return RecordingSink(path=tmp_path / "raw.log")


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def runner_factory() -> type[ScriptedRunner]:
    """Return the scripted runner class so tests can build one per scenario."""

    return ScriptedRunner
