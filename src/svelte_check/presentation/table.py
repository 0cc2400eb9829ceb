# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Alternate presenter rendering diagnostics as a rich table."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import Diagnostic
from .base import severity_color


class TablePresenter:
    """Render diagnostics in arrival order inside a :class:`rich.table.Table`."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self.rows_rendered = 0

    def present(self, title: str, diagnostics: Sequence[Diagnostic]) -> None:
        if not diagnostics:
            self.rows_rendered = 0
            self._console.print(Text(f"{title}: results cleared", style="dim"))
            return
        table = Table(title=title, show_lines=False)
        table.add_column("Severity")
        table.add_column("Location", no_wrap=True)
        table.add_column("Message")
        for diagnostic in diagnostics:
            table.add_row(
                Text(diagnostic.severity.value, style=severity_color(diagnostic.severity)),
                diagnostic.location,
                diagnostic.message,
            )
        self.rows_rendered = len(diagnostics)
        self._console.print(table)


__all__ = ["TablePresenter"]
