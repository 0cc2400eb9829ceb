# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line interface for the svelte-check runner."""

from __future__ import annotations

from .app import CONFIG_ERROR_EXIT, app, main

__all__ = ["CONFIG_ERROR_EXIT", "app", "main"]
