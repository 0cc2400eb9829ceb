# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the package."""

from __future__ import annotations

from pathlib import Path


class SvelteCheckError(Exception):
    """Base class for errors raised by :mod:`svelte_check`."""


class ConfigError(SvelteCheckError):
    """Raised when configuration input is invalid."""


class LaunchError(SvelteCheckError):
    """Raised when the external check command could not be started at all."""

    def __init__(self, command: str, working_directory: Path, reason: str) -> None:
        super().__init__(f"Failed to start '{command}' in {working_directory}: {reason}")
        self.command = command
        self.working_directory = working_directory
        self.reason = reason


__all__ = ["ConfigError", "LaunchError", "SvelteCheckError"]
