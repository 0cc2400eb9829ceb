# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console message helpers and opt-in debug tracing for check runs."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Final

from rich.text import Text

from .console import detect_tty, get_console_manager

PACKAGE_LOGGER_NAME: Final[str] = "svelte_check"
_DEBUG_FLAG: Final[str] = "_svelte_check_debug_configured"


class MessageLevel(Enum):
    """Severity of a user-facing message, carrying its glyph and rich style."""

    INFO = ("ℹ️ ", "cyan")
    OK = ("✅ ", "green")
    WARN = ("⚠️ ", "yellow")
    FAIL = ("❌ ", "red")

    @property
    def glyph(self) -> str:
        return self.value[0]

    @property
    def style(self) -> str:
        return self.value[1]


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def emit(level: MessageLevel, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> Text:
    """Print ``msg`` prefixed and styled for ``level``.

    Args:
        level: Message level selecting the glyph and colour.
        msg: Message text.
        use_emoji: Prefix the level glyph when ``True``.
        use_color: Force colour on or off; ``None`` follows TTY detection.

    Returns:
        Text: The rendered line, mostly useful to tests.
    """

    colored = detect_tty() if use_color is None else use_color
    text = Text(f"{emoji(level.glyph, use_emoji)}{msg}")
    if colored:
        text.stylize(level.style)
    get_console_manager().get(color=colored, emoji=use_emoji).print(text)
    return text


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    emit(MessageLevel.INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    emit(MessageLevel.OK, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    emit(MessageLevel.WARN, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    emit(MessageLevel.FAIL, msg, use_emoji=use_emoji, use_color=use_color)


def enable_debug_logging() -> logging.Logger:
    """Stream package debug records to stderr.

    Safe to call repeatedly; the handler is attached only once.

    Returns:
        logging.Logger: The package root logger.
    """

    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if getattr(logger, _DEBUG_FLAG, False):
        return logger
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    setattr(logger, _DEBUG_FLAG, True)
    return logger


__all__ = [
    "PACKAGE_LOGGER_NAME",
    "MessageLevel",
    "emit",
    "emoji",
    "enable_debug_logging",
    "fail",
    "info",
    "ok",
    "warn",
]
