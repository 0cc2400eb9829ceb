# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User notification channel used by the run controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .logging import fail, info, ok, warn


class Reporter(Protocol):
    """Surface run progress and outcomes to the user."""

    def info(self, msg: str) -> None:
        """Emit an informational message."""
        ...

    def ok(self, msg: str) -> None:
        """Emit a success message."""
        ...

    def warn(self, msg: str) -> None:
        """Emit a warning message."""
        ...

    def fail(self, msg: str) -> None:
        """Emit an error message."""
        ...


@dataclass(slots=True, frozen=True)
class ConsoleReporter:
    """Route notifications through the rich console helpers."""

    use_emoji: bool = True
    use_color: bool | None = None

    def info(self, msg: str) -> None:
        info(msg, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, msg: str) -> None:
        ok(msg, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, msg: str) -> None:
        warn(msg, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, msg: str) -> None:
        fail(msg, use_emoji=self.use_emoji, use_color=self.use_color)


__all__ = ["ConsoleReporter", "Reporter"]
