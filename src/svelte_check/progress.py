# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Spinner rendering for in-flight runs."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Final, Protocol

from rich.console import Console
from rich.control import Control, ControlType
from rich.text import Text

from .config import DEFAULT_SPINNER_FRAMES, DEFAULT_SPINNER_INTERVAL

SPINNER_LABEL: Final[str] = "Running Svelte Check..."


class SpinnerRenderer(Protocol):
    """Draw spinner frames somewhere visible to the user."""

    def draw(self, label: str, frame: str) -> None:
        """Render ``frame`` next to ``label``, replacing the previous frame."""
        ...

    def clear(self) -> None:
        """Remove the spinner from the display."""
        ...


class ConsoleSpinnerRenderer:
    """Redraw the spinner in place on the current terminal line."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self._drawn = False

    def draw(self, label: str, frame: str) -> None:
        if not self._console.is_terminal:
            return
        self._console.control(Control(ControlType.CARRIAGE_RETURN, (ControlType.ERASE_IN_LINE, 2)))
        self._console.print(Text(f"{label} {frame}", style="cyan"), end="")
        self._drawn = True

    def clear(self) -> None:
        if not self._drawn:
            return
        self._console.control(Control(ControlType.CARRIAGE_RETURN, (ControlType.ERASE_IN_LINE, 2)))
        self._drawn = False


class Spinner:
    """Repeating deferred callback that draws one frame per tick.

    Each tick reschedules itself on the running event loop after ``interval``
    seconds. :meth:`stop` cancels the pending tick so nothing outlives the run.
    """

    def __init__(
        self,
        renderer: SpinnerRenderer,
        *,
        frames: Sequence[str] = DEFAULT_SPINNER_FRAMES,
        interval: float = DEFAULT_SPINNER_INTERVAL,
        label: str = SPINNER_LABEL,
    ) -> None:
        if not frames:
            raise ValueError("spinner requires at least one frame")
        self._renderer = renderer
        self._frames = tuple(frames)
        self._interval = interval
        self._label = label
        self._index = 0
        self._handle: asyncio.TimerHandle | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self.frames_drawn = 0

    @property
    def running(self) -> bool:
        """Return ``True`` while a tick is scheduled."""

        return self._handle is not None

    def start(self) -> None:
        """Begin ticking on the running loop, restarting any previous cycle."""

        self._cancel()
        loop = asyncio.get_running_loop()
        self._loop = loop
        self._index = 0
        self._schedule(loop)

    def stop(self) -> None:
        """Cancel the pending tick and clear the display."""

        was_running = self.running
        self._cancel()
        self._loop = None
        if was_running:
            self._renderer.clear()

    def _schedule(self, loop: asyncio.AbstractEventLoop) -> None:
        self._handle = loop.call_later(self._interval, self._tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        loop = self._loop
        if loop is None:
            return
        self._renderer.draw(self._label, self._frames[self._index])
        self.frames_drawn += 1
        self._index = (self._index + 1) % len(self._frames)
        self._schedule(loop)


__all__ = ["SPINNER_LABEL", "ConsoleSpinnerRenderer", "Spinner", "SpinnerRenderer"]
