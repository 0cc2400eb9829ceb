# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for svelte-check runs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError

DEFAULT_COMMAND: Final[str] = "pnpm run check"
DEFAULT_SPINNER_FRAMES: Final[tuple[str, ...]] = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")
DEFAULT_SPINNER_INTERVAL: Final[float] = 0.1
MACHINE_OUTPUT_FLAG: Final[str] = "--output machine"
CACHE_DIR_NAME: Final[str] = "svelte-check"
RAW_OUTPUT_FILENAME: Final[str] = "svelte-check-output.log"
QUICKFIX_FILENAME: Final[str] = "svelte-check-quickfix.txt"
XDG_CACHE_ENV: Final[str] = "XDG_CACHE_HOME"


def default_cache_dir() -> Path:
    """Return the per-user cache directory used for run artifacts."""

    base = os.environ.get(XDG_CACHE_ENV)
    root = Path(base) if base else Path.home() / ".cache"
    return root / CACHE_DIR_NAME


def _default_raw_output_path() -> Path:
    return default_cache_dir() / RAW_OUTPUT_FILENAME


class Config(BaseModel):
    """Effective configuration for the run controller and CLI."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    command: str = DEFAULT_COMMAND
    spinner_frames: tuple[str, ...] = DEFAULT_SPINNER_FRAMES
    spinner_interval: float = Field(default=DEFAULT_SPINNER_INTERVAL, gt=0)
    debug_mode: bool = False
    use_alternate_results_view: bool = False
    raw_output_path: Path = Field(default_factory=_default_raw_output_path)
    machine_flag: str = MACHINE_OUTPUT_FLAG
    auto_detect_command: bool = True
    color: bool = True
    emoji: bool = True

    @field_validator("command")
    @classmethod
    def _require_command(cls, value: str) -> str:
        """Reject blank commands."""
        if not value.strip():
            raise ValueError("command must not be empty")
        return value.strip()

    @field_validator("spinner_frames", mode="before")
    @classmethod
    def _coerce_frames(cls, value: Any) -> Any:
        """Accept a single string of glyphs as well as a sequence."""
        if isinstance(value, str):
            return tuple(value)
        return value

    @field_validator("spinner_frames")
    @classmethod
    def _require_frames(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Require at least one spinner frame."""
        if not value:
            raise ValueError("spinner_frames must contain at least one glyph")
        return value

    @property
    def quickfix_path(self) -> Path:
        """Return the errorfile written by the default results presenter."""

        return self.raw_output_path.with_name(QUICKFIX_FILENAME)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible snapshot of the configuration."""

        return self.model_dump(mode="json")


__all__ = [
    "CACHE_DIR_NAME",
    "DEFAULT_COMMAND",
    "DEFAULT_SPINNER_FRAMES",
    "DEFAULT_SPINNER_INTERVAL",
    "MACHINE_OUTPUT_FLAG",
    "QUICKFIX_FILENAME",
    "RAW_OUTPUT_FILENAME",
    "Config",
    "ConfigError",
    "default_cache_dir",
]
