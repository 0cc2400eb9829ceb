# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels reported by ``svelte-check``."""

    ERROR = "error"
    WARNING = "warning"

    @property
    def letter(self) -> str:
        """Return the single-letter quickfix type for the severity."""

        return _SEVERITY_LETTERS[self]


_SEVERITY_LETTERS: Final[dict[Severity, str]] = {
    Severity.ERROR: "E",
    Severity.WARNING: "W",
}

_LEADING_CHARACTERS: Final[dict[str, Severity]] = {
    "E": Severity.ERROR,
    "W": Severity.WARNING,
}


def severity_from_token(token: str | None) -> Severity | None:
    """Infer severity from the first character of a machine-format severity word.

    The comparison is case-sensitive: ``ERROR`` and ``Error`` map to
    :attr:`Severity.ERROR` while ``error`` does not.

    Args:
        token: Severity word captured from a diagnostic line.

    Returns:
        Severity | None: Matching severity, or ``None`` when the word does not
        start with ``E`` or ``W``.
    """

    if not token:
        return None
    return _LEADING_CHARACTERS.get(token[0])


__all__ = ["Severity", "severity_from_token"]
