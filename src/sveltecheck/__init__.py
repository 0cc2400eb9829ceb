# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Deprecated import name kept for older integrations; use :mod:`svelte_check`."""

from __future__ import annotations

import warnings
from typing import Any, Final

import svelte_check

RENAMED_MESSAGE: Final[str] = "The 'sveltecheck' module has been renamed to 'svelte_check'; update your imports."

warnings.warn(RENAMED_MESSAGE, DeprecationWarning, stacklevel=2)


def __getattr__(name: str) -> Any:
    return getattr(svelte_check, name)


def __dir__() -> list[str]:
    return sorted(set(dir(svelte_check)) | {"RENAMED_MESSAGE"})
