# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reconcile the tool's exit code with the parsed report."""

from __future__ import annotations

from typing import Final

from ..models import OutcomeKind, RunReport

EXIT_CLEAN: Final[int] = 0
EXIT_ISSUES: Final[int] = 1

AMBIGUOUS_MESSAGE: Final[str] = (
    "Svelte Check exited with code 1 but no errors were captured. This might indicate a parsing issue."
)
LAUNCH_FAILURE_MESSAGE: Final[str] = "Failed to start Svelte Check process!"


def decide_outcome(exit_code: int, report: RunReport) -> OutcomeKind:
    """Classify a finished run.

    ======== ================ ==========
    exit     diagnostics      outcome
    ======== ================ ==========
    0        any              CLEAN
    1        one or more      ISSUES
    1        none             AMBIGUOUS
    >1       any              FAILURE
    ======== ================ ==========
    """

    if exit_code == EXIT_CLEAN:
        return OutcomeKind.CLEAN
    if exit_code == EXIT_ISSUES:
        return OutcomeKind.ISSUES if report.has_diagnostics else OutcomeKind.AMBIGUOUS
    return OutcomeKind.FAILURE


def describe_outcome(kind: OutcomeKind, exit_code: int | None, report: RunReport | None) -> str:
    """Return the user-facing message for ``kind``."""

    match kind:
        case OutcomeKind.CLEAN | OutcomeKind.ISSUES:
            if report is None:
                raise ValueError(f"{kind.value} outcome requires a run report")
            return report.describe()
        case OutcomeKind.AMBIGUOUS:
            return AMBIGUOUS_MESSAGE
        case OutcomeKind.FAILURE:
            return f"Svelte Check failed with exit code {exit_code}"
        case OutcomeKind.LAUNCH_FAILURE:
            return LAUNCH_FAILURE_MESSAGE


def retains_raw_output(kind: OutcomeKind) -> bool:
    """Return ``True`` for outcomes that always persist the raw output."""

    return kind in {OutcomeKind.AMBIGUOUS, OutcomeKind.FAILURE}


__all__ = [
    "AMBIGUOUS_MESSAGE",
    "LAUNCH_FAILURE_MESSAGE",
    "decide_outcome",
    "describe_outcome",
    "retains_raw_output",
]
