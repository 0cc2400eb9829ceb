# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Structured CLI options shared by every sub-command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(slots=True, frozen=True)
class CLIOptions:
    """Options collected by the top-level callback."""

    config_file: Path | None = None
    command: str | None = None
    debug: bool | None = None
    alternate_view: bool | None = None
    root: Path | None = None
    no_color: bool = False
    no_emoji: bool = False

    def overrides(self) -> dict[str, Any]:
        """Return the config overrides implied by the flags that were supplied."""

        overrides: dict[str, Any] = {
            "command": self.command,
            "debug_mode": self.debug,
            "use_alternate_results_view": self.alternate_view,
        }
        if self.no_color:
            overrides["color"] = False
        if self.no_emoji:
            overrides["emoji"] = False
        return {key: value for key, value in overrides.items() if value is not None}


__all__ = ["CLIOptions"]
