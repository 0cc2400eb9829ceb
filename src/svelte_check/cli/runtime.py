# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve configuration and execute runs on behalf of the CLI."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..config import Config
from ..config_loader import ConfigLoader, ConfigLoadResult, FieldUpdate
from ..discovery import detect_command, find_project_root
from ..execution import RunController
from ..models import OutcomeKind, RunOutcome
from ..reporting import ConsoleReporter, Reporter
from .options import CLIOptions

CommandDetector = Callable[[Path], str | None]

AUTO_DETECT_SOURCE: Final[str] = "auto-detect"


@dataclass(slots=True, frozen=True)
class CLIRuntime:
    """Resolved project location and configuration for one invocation."""

    start_dir: Path
    project_root: Path | None
    load_result: ConfigLoadResult

    @property
    def config(self) -> Config:
        """Return the effective configuration."""

        return self.load_result.config


def resolve_runtime(
    options: CLIOptions,
    *,
    detector: CommandDetector | None = None,
    reporter: Reporter | None = None,
) -> CLIRuntime:
    """Load layered configuration and apply command auto-detection.

    Raises:
        ConfigError: If any configuration source is invalid.
    """

    start_dir = (options.root or Path.cwd()).resolve()
    project_root = find_project_root(start_dir)
    loader = ConfigLoader.for_root(project_root or start_dir, config_file=options.config_file)
    result = loader.load(options.overrides())
    config = result.config
    if config.auto_detect_command and not result.is_explicit("command") and project_root is not None:
        detected = (detector or detect_command)(project_root)
        if detected is not None and detected != config.command:
            active = reporter or ConsoleReporter(use_emoji=config.emoji, use_color=config.color)
            active.info(f"Automatically selecting svelte-check command: {detected}")
            result = ConfigLoadResult(
                config=config.model_copy(update={"command": detected}),
                updates=[*result.updates, FieldUpdate(field="command", source=AUTO_DETECT_SOURCE, value=detected)],
            )
    return CLIRuntime(start_dir=start_dir, project_root=project_root, load_result=result)


def execute_check(runtime: CLIRuntime) -> RunOutcome:
    """Run one check to completion on a fresh event loop."""

    async def _run() -> RunOutcome | None:
        controller = RunController(runtime.config, cwd=runtime.start_dir)
        try:
            return await controller.run()
        finally:
            controller.close()

    outcome = asyncio.run(_run())
    if outcome is None:
        return RunOutcome(kind=OutcomeKind.LAUNCH_FAILURE, message="Svelte Check run was not started")
    return outcome


__all__ = ["AUTO_DETECT_SOURCE", "CLIRuntime", "execute_check", "resolve_runtime"]
