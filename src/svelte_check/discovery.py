# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Utilities for locating the Svelte project and choosing the check command."""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Final

logger: logging.Logger = logging.getLogger(__name__)

PROJECT_MARKER: Final[str] = "package.json"
CHECK_SCRIPT: Final[str] = "check"
PACKAGE_MANAGERS: Final[frozenset[str]] = frozenset({"pnpm", "npm", "yarn"})
CANDIDATE_COMMANDS: Final[tuple[str, ...]] = (
    "pnpm run check",
    "npm run check",
    "yarn run check",
    "npx svelte-check",
)

WhichFn = Callable[[str], str | None]


def find_project_root(start: Path | None = None, *, marker: str = PROJECT_MARKER) -> Path | None:
    """Walk upward from ``start`` until a directory containing ``marker`` is found.

    Args:
        start: Directory to begin the search from. Defaults to the current
            working directory.
        marker: File name identifying the project root.

    Returns:
        Path | None: The first directory holding ``marker``, or ``None`` when
        the filesystem root is reached without a match.
    """

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / marker).is_file():
            return directory
    return None


def _read_scripts(project_root: Path) -> dict[str, Any]:
    manifest = project_root / PROJECT_MARKER
    try:
        payload = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.debug("unable to read %s: %s", manifest, exc)
        return {}
    scripts = payload.get("scripts") if isinstance(payload, dict) else None
    return scripts if isinstance(scripts, dict) else {}


def has_check_script(project_root: Path) -> bool:
    """Return ``True`` when ``package.json`` under ``project_root`` defines a ``check`` script."""

    return CHECK_SCRIPT in _read_scripts(project_root)


def detect_command(
    project_root: Path,
    *,
    candidates: Sequence[str] = CANDIDATE_COMMANDS,
    which: WhichFn = shutil.which,
) -> str | None:
    """Pick the first usable command for running ``svelte-check``.

    Package-manager commands need both the executable on ``PATH`` and a
    ``check`` script in ``package.json``; any other command only needs its
    executable.

    Args:
        project_root: Directory containing ``package.json``.
        candidates: Commands to try, in order of preference.
        which: Executable lookup, injectable for tests.

    Returns:
        str | None: The selected command, or ``None`` when nothing is usable.
    """

    script_present: bool | None = None
    for command in candidates:
        executable = command.split(maxsplit=1)[0]
        if which(executable) is None:
            continue
        if executable in PACKAGE_MANAGERS:
            if script_present is None:
                script_present = has_check_script(project_root)
            if not script_present:
                continue
        logger.debug("selected command %r", command)
        return command
    return None


__all__ = [
    "CANDIDATE_COMMANDS",
    "PROJECT_MARKER",
    "detect_command",
    "find_project_root",
    "has_check_script",
]
