# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Results presenters for finished runs."""

from __future__ import annotations

from rich.console import Console

from ..config import Config
from .base import RESULTS_TITLE, ResultsPresenter, quickfix_entry, severity_color
from .quickfix import QuickfixPresenter
from .table import TablePresenter


def build_presenter(config: Config, console: Console) -> ResultsPresenter:
    """Return the presenter selected by ``config.use_alternate_results_view``."""

    if config.use_alternate_results_view:
        return TablePresenter(console)
    return QuickfixPresenter(console, errorfile=config.quickfix_path)


__all__ = [
    "RESULTS_TITLE",
    "QuickfixPresenter",
    "ResultsPresenter",
    "TablePresenter",
    "build_presenter",
    "quickfix_entry",
    "severity_color",
]
