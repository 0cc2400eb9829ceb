# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared rich consoles for run messages, spinner frames and result tables."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True, slots=True)
class ConsoleProfile:
    """Presentation flags a console is built for."""

    color: bool
    emoji: bool
    tty: bool

    @property
    def styled(self) -> bool:
        """Return ``True`` when ANSI styling reaches the terminal."""

        return self.color and self.tty

    def build(self) -> Console:
        return Console(
            color_system="auto" if self.styled else None,
            force_terminal=self.tty,
            no_color=not self.styled,
            emoji=self.emoji,
            soft_wrap=True,
        )


class RichConsoleManager:
    """Hand out one cached :class:`Console` per :class:`ConsoleProfile`."""

    def __init__(self) -> None:
        self._consoles: dict[ConsoleProfile, Console] = {}

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for ``color``/``emoji`` on the current stdout."""

        profile = ConsoleProfile(color=color, emoji=emoji, tty=detect_tty())
        console = self._consoles.get(profile)
        if console is None:
            console = self._consoles[profile] = profile.build()
        return console

    def clear(self) -> None:
        """Forget cached consoles so new ones bind to the current ``sys.stdout``."""

        self._consoles.clear()


@cache
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager` instance."""

    return RichConsoleManager()


__all__ = ["ConsoleProfile", "RichConsoleManager", "detect_tty", "get_console_manager"]
