# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for the ``svelte-check --output machine`` line format.

Every structured line starts with an epoch-millisecond timestamp::

    1700000000001 ERROR "src/App.svelte" 10:5 "Cannot find name 'foo'."
    1700000000002 COMPLETED 12 FILES 3 ERRORS 2 WARNINGS 1 FILES_WITH_PROBLEMS

The tool interleaves banners and progress text on the same streams, so
anything that does not fit is returned as :class:`UnrecognizedLine` instead of
raising.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from .base import (
    CompletionLine,
    IssueLine,
    IssueMatcher,
    ParsedLine,
    UnrecognizedLine,
    first_match,
    issue_from_match,
    iter_nonblank,
    strip_quotes,
)

logger: logging.Logger = logging.getLogger(__name__)

COMPLETED_TOKEN: Final[str] = "COMPLETED"
ISSUE_TOKENS: Final[tuple[str, ...]] = ("ERROR", "WARNING")

_TIMESTAMP_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9]+")
_COMPLETED_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^[0-9]+\s+COMPLETED\s+(?P<files>[0-9]+)\s+FILES\s+(?P<errors>[0-9]+)\s+ERRORS"
    r"\s+(?P<warnings>[0-9]+)\s+WARNINGS(?:\s+(?P<problems>[0-9]+)(?:\s+FILES_WITH_PROBLEMS)?)?",
)
_STRICT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r'^[0-9]+\s+(?P<severity>[A-Za-z]+)\s+"(?P<file>[^"]+)"\s+(?P<line>[0-9]+):(?P<col>[0-9]+)'
    r'\s+"(?P<message>.*)"\s*$',
)
_RELAXED_PATTERN: Final[re.Pattern[str]] = re.compile(
    r'^[0-9]+\s+(?P<severity>[A-Za-z]+)\s+"(?P<file>[^"]+)"\s+(?P<line>[0-9]+):(?P<col>[0-9]+)'
    r"(?:\s+(?P<message>.*?))?\s*$",
)
_LINE_COL_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?P<line>[0-9]+):(?P<col>[0-9]+)")
_MIN_SCAN_TOKENS: Final[int] = 4


@dataclass(slots=True, frozen=True)
class StrictIssueMatcher:
    """Canonical form: quoted file path and quoted message."""

    name: str = "strict"

    def match(self, line: str) -> IssueLine | None:
        match = _STRICT_PATTERN.match(line)
        return issue_from_match(match) if match else None


@dataclass(slots=True, frozen=True)
class RelaxedMessageMatcher:
    """Quoted file path followed by an unquoted (or half-quoted) message."""

    name: str = "relaxed-message"

    def match(self, line: str) -> IssueLine | None:
        match = _RELAXED_PATTERN.match(line)
        if not match:
            return None
        return issue_from_match(match, message=strip_quotes(match.group("message") or ""))


@dataclass(slots=True, frozen=True)
class TokenScanMatcher:
    """Whitespace token scan used when neither regular form applies.

    Paths containing whitespace are split across tokens and misattributed;
    the behaviour is kept as observed from the tool.
    """

    name: str = "token-scan"

    def match(self, line: str) -> IssueLine | None:
        tokens = line.split()
        if len(tokens) < _MIN_SCAN_TOKENS:
            return None
        position = _LINE_COL_PATTERN.fullmatch(tokens[3])
        if position is None:
            return None
        return IssueLine(
            severity_token=tokens[1],
            file=strip_quotes(tokens[2]),
            line=int(position.group("line")),
            column=int(position.group("col")),
            message=strip_quotes(" ".join(tokens[4:])),
        )


ISSUE_MATCHERS: Final[tuple[IssueMatcher, ...]] = (
    StrictIssueMatcher(),
    RelaxedMessageMatcher(),
    TokenScanMatcher(),
)


def is_machine_line(line: str) -> bool:
    """Return ``True`` when ``line`` carries the machine-format timestamp prefix."""

    return _TIMESTAMP_PATTERN.match(line) is not None


def parse_completion(line: str) -> CompletionLine | None:
    """Parse a ``COMPLETED`` summary line, returning ``None`` on a partial match."""

    match = _COMPLETED_PATTERN.match(line)
    if not match:
        return None
    problems = match.group("problems")
    return CompletionLine(
        file_count=int(match.group("files")),
        error_count=int(match.group("errors")),
        warning_count=int(match.group("warnings")),
        files_with_problems=int(problems) if problems is not None else None,
    )


def parse_issue(line: str, matchers: Sequence[IssueMatcher] = ISSUE_MATCHERS) -> IssueLine | None:
    """Try ``matchers`` in order and return the first valid issue record.

    A record whose severity word starts with anything other than ``E`` or
    ``W``, or whose position is not 1-based, is rejected without consulting
    later matchers.
    """

    found = first_match(matchers, line)
    if found is None:
        return None
    matcher, issue = found
    if issue.severity is None:
        logger.debug("rejecting %s match with severity %r: %s", matcher.name, issue.severity_token, line)
        return None
    if issue.line < 1 or issue.column < 1:
        logger.debug("rejecting %s match with position %d:%d: %s", matcher.name, issue.line, issue.column, line)
        return None
    return issue


def parse_line(line: str) -> ParsedLine:
    """Classify one raw output line.

    Args:
        line: Single line of tool output, stdout or stderr.

    Returns:
        ParsedLine: Completion summary, issue record, or unrecognised text.
    """

    if not is_machine_line(line):
        return UnrecognizedLine(line)
    if COMPLETED_TOKEN in line:
        completion = parse_completion(line)
        if completion is None:
            logger.debug("could not extract all stats from COMPLETED line: %s", line)
            return UnrecognizedLine(line, malformed=True)
        return completion
    if not any(token in line for token in ISSUE_TOKENS):
        return UnrecognizedLine(line)
    issue = parse_issue(line)
    if issue is None:
        logger.debug("no pattern matched for line: %s", line)
        return UnrecognizedLine(line, malformed=True)
    return issue


def parse_lines(lines: Iterable[str]) -> list[ParsedLine]:
    """Parse every non-blank line of ``lines`` in order."""

    return [parse_line(line) for line in iter_nonblank(lines)]


__all__ = [
    "COMPLETED_TOKEN",
    "ISSUE_MATCHERS",
    "ISSUE_TOKENS",
    "RelaxedMessageMatcher",
    "StrictIssueMatcher",
    "TokenScanMatcher",
    "is_machine_line",
    "parse_completion",
    "parse_issue",
    "parse_line",
    "parse_lines",
]
