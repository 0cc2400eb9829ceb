# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Line parsers for ``svelte-check`` machine output."""

from __future__ import annotations

from .base import (
    CompletionLine,
    IssueLine,
    IssueMatcher,
    ParsedLine,
    UnrecognizedLine,
    strip_quotes,
)
from .machine import (
    ISSUE_MATCHERS,
    RelaxedMessageMatcher,
    StrictIssueMatcher,
    TokenScanMatcher,
    is_machine_line,
    parse_completion,
    parse_issue,
    parse_line,
    parse_lines,
)

__all__ = [
    "CompletionLine",
    "ISSUE_MATCHERS",
    "IssueLine",
    "IssueMatcher",
    "ParsedLine",
    "RelaxedMessageMatcher",
    "StrictIssueMatcher",
    "TokenScanMatcher",
    "UnrecognizedLine",
    "is_machine_line",
    "parse_completion",
    "parse_issue",
    "parse_line",
    "parse_lines",
    "strip_quotes",
]
