# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persist raw run output for post-mortem inspection."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Final, Protocol

logger: logging.Logger = logging.getLogger(__name__)

RAW_OUTPUT_HEADER: Final[str] = "--- Svelte Check Raw Output ---"


class RawOutputSink(Protocol):
    """Store the raw lines of a run somewhere retrievable."""

    def save(self, lines: Sequence[str]) -> Path | None:
        """Persist ``lines`` and return their location, or ``None`` on failure."""
        ...


def format_raw_output(lines: Sequence[str]) -> str:
    """Render ``lines`` as a numbered log document."""

    body = "".join(f"[{index}] {line}\n" for index, line in enumerate(lines, start=1))
    return f"{RAW_OUTPUT_HEADER}\n\n{body}"


class RawOutputLog:
    """Write raw output to a single log file, replacing the previous run's log."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        """Return the log file location."""

        return self._path

    def save(self, lines: Sequence[str]) -> Path | None:
        if not lines:
            return None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(format_raw_output(lines), encoding="utf-8")
        except OSError as exc:
            logger.warning("failed to save raw output to %s: %s", self._path, exc)
            return None
        return self._path


__all__ = ["RAW_OUTPUT_HEADER", "RawOutputLog", "RawOutputSink", "format_raw_output"]
