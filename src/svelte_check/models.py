# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the svelte_check package."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity

NO_ISSUES_MESSAGE = "No errors or warnings found... nice!"


class Diagnostic(BaseModel):
    """Normalised diagnostic reported by ``svelte-check``."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    file: str
    line: int = Field(ge=1)
    column: int = Field(ge=1)
    message: str

    @property
    def location(self) -> str:
        """Return the ``file:line:column`` jump target for the diagnostic."""

        return f"{self.file}:{self.line}:{self.column}"


class RunSummary(BaseModel):
    """Aggregate counters for a single run."""

    model_config = ConfigDict(frozen=True)

    file_count: int = Field(default=0, ge=0)
    error_count: int = Field(default=0, ge=0)
    warning_count: int = Field(default=0, ge=0)
    has_explicit_totals: bool = False

    def describe(self) -> str:
        """Return the user-facing summary sentence."""

        if self.error_count == 0 and self.warning_count == 0:
            return NO_ISSUES_MESSAGE
        counts = f"{self.error_count} errors and {self.warning_count} warnings"
        if self.has_explicit_totals:
            return f"Svelte Check completed with {counts} in {self.file_count} files."
        return f"Svelte Check completed with {counts}."


class RunReport(BaseModel):
    """Finalised report handed off once per run."""

    model_config = ConfigDict(frozen=True)

    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    summary: RunSummary = Field(default_factory=RunSummary)
    raw_line_count: int = 0
    unparsed_line_count: int = 0

    @property
    def has_diagnostics(self) -> bool:
        """Return ``True`` when at least one diagnostic was collected."""

        return bool(self.diagnostics)

    def describe(self) -> str:
        """Return the summary sentence, tallying diagnostics when the totals report none."""

        summary = self.summary
        if summary.error_count == 0 and summary.warning_count == 0 and self.diagnostics:
            summary = tally_summary(self.diagnostics)
        return summary.describe()


def tally_summary(diagnostics: Sequence[Diagnostic]) -> RunSummary:
    """Derive a summary by counting ``diagnostics`` per severity."""

    errors = sum(1 for diag in diagnostics if diag.severity is Severity.ERROR)
    warnings = sum(1 for diag in diagnostics if diag.severity is Severity.WARNING)
    return RunSummary(error_count=errors, warning_count=warnings, has_explicit_totals=False)


class RunState(str, Enum):
    """Lifecycle states of the run controller."""

    IDLE = "idle"
    RUNNING = "running"
    FINALIZING = "finalizing"


class OutcomeKind(str, Enum):
    """Final classification of a run."""

    CLEAN = "clean"
    ISSUES = "issues"
    AMBIGUOUS = "ambiguous"
    FAILURE = "failure"
    LAUNCH_FAILURE = "launch-failure"

    @property
    def exit_code(self) -> int:
        """Return the CLI exit status associated with the outcome."""

        return _OUTCOME_EXIT_CODES[self]


_OUTCOME_EXIT_CODES: dict[OutcomeKind, int] = {
    OutcomeKind.CLEAN: 0,
    OutcomeKind.ISSUES: 1,
    OutcomeKind.AMBIGUOUS: 2,
    OutcomeKind.FAILURE: 3,
    OutcomeKind.LAUNCH_FAILURE: 4,
}


class RunOutcome(BaseModel):
    """Result bundle produced when a run returns to idle."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    message: str
    exit_code: int | None = None
    report: RunReport | None = None
    raw_output_path: Path | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the tool reported a clean run."""

        return self.kind is OutcomeKind.CLEAN


__all__ = [
    "NO_ISSUES_MESSAGE",
    "Diagnostic",
    "OutcomeKind",
    "RunOutcome",
    "RunReport",
    "RunState",
    "RunSummary",
    "tally_summary",
]
