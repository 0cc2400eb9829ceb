# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console message helpers and debug logging set-up."""

from __future__ import annotations

import logging

import pytest

import svelte_check.logging
from svelte_check.console import ConsoleProfile, RichConsoleManager
from svelte_check.logging import (
    PACKAGE_LOGGER_NAME,
    MessageLevel,
    emit,
    emoji,
    enable_debug_logging,
    fail,
    info,
    ok,
    warn,
)
from svelte_check.reporting import ConsoleReporter


def test_emoji_toggle() -> None:
    assert emoji("✅ ", True) == "✅ "
    assert emoji("✅ ", False) == ""


def test_plain_helpers_print_messages(capsys: pytest.CaptureFixture[str]) -> None:
    info("starting", use_emoji=False, use_color=False)
    ok("done", use_emoji=False, use_color=False)
    warn("careful", use_emoji=False, use_color=False)
    fail("broken", use_emoji=False, use_color=False)

    assert capsys.readouterr().out.splitlines() == ["starting", "done", "careful", "broken"]


def test_emit_styles_only_when_colour_enabled(capsys: pytest.CaptureFixture[str]) -> None:
    plain = emit(MessageLevel.FAIL, "broken", use_emoji=True, use_color=False)
    styled = emit(MessageLevel.FAIL, "broken", use_emoji=False, use_color=True)

    assert plain.plain == "❌ broken"
    assert plain.spans == []
    assert styled.plain == "broken"
    assert [span.style for span in styled.spans] == ["red"]
    capsys.readouterr()


def test_message_helpers_cover_reporter_levels() -> None:
    assert {level.name.lower() for level in MessageLevel} == {"info", "ok", "warn", "fail"}
    assert not hasattr(svelte_check.logging, "section")


def test_console_manager_caches_per_profile() -> None:
    manager = RichConsoleManager()

    first = manager.get(color=False, emoji=True)

    assert manager.get(color=False, emoji=True) is first
    assert manager.get(color=False, emoji=False) is not first
    assert not ConsoleProfile(color=True, emoji=True, tty=False).styled


def test_console_reporter_uses_emoji(capsys: pytest.CaptureFixture[str]) -> None:
    ConsoleReporter(use_emoji=True, use_color=False).ok("clean")

    assert capsys.readouterr().out.strip().endswith("clean")


def test_enable_debug_logging_attaches_one_handler() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    try:
        first = enable_debug_logging()
        second = enable_debug_logging()

        assert first is second is logger
        assert len(logger.handlers) == len(handlers) + 1
        assert logger.level == logging.DEBUG
    finally:
        logger.__dict__.pop("_svelte_check_debug_configured", None)
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate
