# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure: parsed-line variants and matcher protocol."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Final, Protocol, TypeAlias

from ..models import Diagnostic
from ..severity import Severity, severity_from_token

_QUOTE: Final[str] = '"'


@dataclass(slots=True, frozen=True)
class CompletionLine:
    """Summary record emitted once at the end of a run."""

    file_count: int
    error_count: int
    warning_count: int
    files_with_problems: int | None = None


@dataclass(slots=True, frozen=True)
class IssueLine:
    """Diagnostic record captured from a single machine-format line."""

    severity_token: str
    file: str
    line: int
    column: int
    message: str

    @property
    def severity(self) -> Severity | None:
        """Return the severity implied by :attr:`severity_token`."""

        return severity_from_token(self.severity_token)

    def to_diagnostic(self) -> Diagnostic:
        """Materialise the record as a :class:`Diagnostic`.

        Raises:
            ValueError: If the severity token does not start with ``E`` or ``W``.
        """

        severity = self.severity
        if severity is None:
            raise ValueError(f"unsupported severity token {self.severity_token!r}")
        return Diagnostic(
            severity=severity,
            file=self.file,
            line=self.line,
            column=self.column,
            message=self.message,
        )


@dataclass(slots=True, frozen=True)
class UnrecognizedLine:
    """Line that carries no structured information.

    ``malformed`` is ``True`` when the line resembled a structured record
    (timestamp prefix plus a record keyword) but matched no pattern.
    """

    text: str
    malformed: bool = False


ParsedLine: TypeAlias = CompletionLine | IssueLine | UnrecognizedLine


class IssueMatcher(Protocol):
    """Strategy that attempts to read an :class:`IssueLine` from ``line``."""

    name: str

    def match(self, line: str) -> IssueLine | None:
        """Return the parsed record, or ``None`` when ``line`` does not fit."""
        ...


def strip_quotes(value: str) -> str:
    """Strip at most one leading and one trailing double quote from ``value``."""

    if value.startswith(_QUOTE):
        value = value[1:]
    if value.endswith(_QUOTE):
        value = value[:-1]
    return value


def issue_from_match(match: re.Match[str], *, message: str | None = None) -> IssueLine:
    """Build an :class:`IssueLine` from a match exposing the standard groups.

    Args:
        match: Match carrying ``severity``, ``file``, ``line``, ``col`` and
            ``message`` groups.
        message: Optional replacement for the ``message`` group.

    Returns:
        IssueLine: Parsed record.
    """

    return IssueLine(
        severity_token=match.group("severity"),
        file=match.group("file"),
        line=int(match.group("line")),
        column=int(match.group("col")),
        message=match.group("message") if message is None else message,
    )


def first_match(matchers: Sequence[IssueMatcher], line: str) -> tuple[IssueMatcher, IssueLine] | None:
    """Return the first matcher that accepts ``line`` together with its record."""

    for matcher in matchers:
        issue = matcher.match(line)
        if issue is not None:
            return matcher, issue
    return None


def iter_nonblank(lines: Iterable[str]) -> Iterator[str]:
    """Yield ``lines`` with trailing line terminators removed, skipping blanks."""

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if line.strip():
            yield line


__all__ = [
    "CompletionLine",
    "IssueLine",
    "IssueMatcher",
    "ParsedLine",
    "UnrecognizedLine",
    "first_match",
    "issue_from_match",
    "iter_nonblank",
    "strip_quotes",
]
