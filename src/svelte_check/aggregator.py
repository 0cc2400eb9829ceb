# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Accumulate parsed lines of one run into a :class:`RunReport`."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Diagnostic, RunReport, RunSummary, tally_summary
from .parsers import CompletionLine, IssueLine, ParsedLine, UnrecognizedLine, parse_line


class ResultAggregator:
    """Collect diagnostics and summary counters for a single run.

    The aggregator is not reusable across runs: construct a fresh instance for
    every invocation of the external command.
    """

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []
        self._summary: RunSummary | None = None
        self._raw_line_count = 0
        self._unparsed_line_count = 0

    @property
    def diagnostics(self) -> Sequence[Diagnostic]:
        """Return the diagnostics collected so far, in arrival order."""

        return tuple(self._diagnostics)

    @property
    def raw_line_count(self) -> int:
        """Return the number of lines ingested so far."""

        return self._raw_line_count

    def ingest(self, parsed: ParsedLine) -> None:
        """Fold one parsed line into the run state."""

        self._raw_line_count += 1
        match parsed:
            case CompletionLine():
                self._summary = RunSummary(
                    file_count=parsed.file_count,
                    error_count=parsed.error_count,
                    warning_count=parsed.warning_count,
                    has_explicit_totals=True,
                )
            case IssueLine():
                self._diagnostics.append(parsed.to_diagnostic())
            case UnrecognizedLine(malformed=True):
                self._unparsed_line_count += 1
            case UnrecognizedLine():
                pass

    def ingest_line(self, line: str) -> ParsedLine:
        """Parse ``line``, ingest the result and return it."""

        parsed = parse_line(line)
        self.ingest(parsed)
        return parsed

    def finalize(self) -> RunReport:
        """Return the report for the lines ingested so far.

        When no completion line was seen the summary is derived by counting the
        collected diagnostics. State is left untouched so repeated calls return
        equal reports.
        """

        summary = self._summary or tally_summary(self._diagnostics)
        return RunReport(
            diagnostics=tuple(self._diagnostics),
            summary=summary,
            raw_line_count=self._raw_line_count,
            unparsed_line_count=self._unparsed_line_count,
        )


__all__ = ["ResultAggregator"]
