# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core package metadata and convenience exports."""

from __future__ import annotations

from importlib import metadata

from .aggregator import ResultAggregator
from .config import Config, ConfigError
from .execution.controller import RunController
from .models import Diagnostic, OutcomeKind, RunOutcome, RunReport, RunState, RunSummary
from .parsers import parse_line
from .severity import Severity

__all__ = [
    "Config",
    "ConfigError",
    "Diagnostic",
    "OutcomeKind",
    "ResultAggregator",
    "RunController",
    "RunOutcome",
    "RunReport",
    "RunState",
    "RunSummary",
    "Severity",
    "__version__",
    "parse_line",
]

try:
    __version__ = metadata.version("svelte-check-runner")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
