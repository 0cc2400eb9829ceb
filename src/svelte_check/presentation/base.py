# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Presentation protocol and shared rendering helpers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final, Protocol

from ..models import Diagnostic
from ..severity import Severity

RESULTS_TITLE: Final[str] = "Svelte Check"


class ResultsPresenter(Protocol):
    """Display diagnostics so the user can jump to each location."""

    def present(self, title: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Show ``diagnostics`` under ``title``; an empty sequence clears the display."""
        ...


def severity_color(severity: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
    }.get(severity, "yellow")


def quickfix_entry(diagnostic: Diagnostic) -> str:
    """Return ``diagnostic`` as a ``file:line:col: type: message`` errorfile entry."""

    return f"{diagnostic.location}: {diagnostic.severity.letter}: {diagnostic.message}"


__all__ = ["RESULTS_TITLE", "ResultsPresenter", "quickfix_entry", "severity_color"]
