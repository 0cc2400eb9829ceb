# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process execution and run lifecycle management."""

from __future__ import annotations

from .controller import CommandRunner, RootFinder, RunController
from .outcome import decide_outcome, describe_outcome, retains_raw_output
from .runner import ProcessRunner, normalize_exit_code

__all__ = [
    "CommandRunner",
    "ProcessRunner",
    "RootFinder",
    "RunController",
    "decide_outcome",
    "describe_outcome",
    "normalize_exit_code",
    "retains_raw_output",
]
