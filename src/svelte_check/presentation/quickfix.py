# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Default presenter: jump-to lines on the console plus an editor errorfile."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.text import Text

from ..models import Diagnostic
from .base import quickfix_entry, severity_color

logger: logging.Logger = logging.getLogger(__name__)


class QuickfixPresenter:
    """Print ``file:line:col`` entries and mirror them into a quickfix errorfile.

    Editors load the errorfile directly (for example ``vim -q <path>``). An
    empty diagnostic sequence truncates the file so stale entries disappear.
    """

    def __init__(self, console: Console, errorfile: Path | None = None) -> None:
        self._console = console
        self._errorfile = errorfile
        self.last_title: str | None = None
        self.entries: tuple[str, ...] = ()

    @property
    def errorfile(self) -> Path | None:
        """Return the errorfile path, when one is configured."""

        return self._errorfile

    def present(self, title: str, diagnostics: Sequence[Diagnostic]) -> None:
        self.last_title = title
        self.entries = tuple(quickfix_entry(diagnostic) for diagnostic in diagnostics)
        self._write_errorfile()
        if not diagnostics:
            return
        self._console.print(Text(f"{title} ({len(diagnostics)} issues)", style="bold"))
        for diagnostic in diagnostics:
            line = Text(diagnostic.location, style="bold")
            line.append(": ")
            line.append(diagnostic.severity.value, style=severity_color(diagnostic.severity))
            line.append(f": {diagnostic.message}")
            self._console.print(line)

    def _write_errorfile(self) -> None:
        if self._errorfile is None:
            return
        payload = "".join(f"{entry}\n" for entry in self.entries)
        try:
            self._errorfile.parent.mkdir(parents=True, exist_ok=True)
            self._errorfile.write_text(payload, encoding="utf-8")
        except OSError as exc:
            logger.warning("unable to write quickfix file %s: %s", self._errorfile, exc)


__all__ = ["QuickfixPresenter"]
