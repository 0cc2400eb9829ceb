# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Launch the external check command and stream its output line by line."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Final

from ..config import MACHINE_OUTPUT_FLAG
from ..errors import LaunchError

logger: logging.Logger = logging.getLogger(__name__)

LineCallback = Callable[[str, bool], None]
ExitCallback = Callable[[int], None]

SIGNAL_EXIT_BASE: Final[int] = 128
_ENCODING: Final[str] = "utf-8"
_STREAM_LIMIT: Final[int] = 1024 * 1024
_SEPARATOR: Final[bytes] = b"\n"


def normalize_exit_code(returncode: int) -> int:
    """Map signal terminations (negative return codes) onto ``128 + signal``."""

    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode


class ProcessRunner:
    """Run a shell command asynchronously and deliver output through callbacks."""

    def __init__(self, *, machine_flag: str = MACHINE_OUTPUT_FLAG) -> None:
        self._machine_flag = machine_flag

    def build_command(self, command: str) -> str:
        """Return ``command`` with the machine-output flag appended."""

        return f"{command.strip()} {self._machine_flag}" if self._machine_flag else command.strip()

    async def start(
        self,
        command: str,
        working_directory: Path,
        on_line: LineCallback,
        on_exit: ExitCallback,
    ) -> asyncio.Task[int]:
        """Launch ``command`` in ``working_directory`` and stream its output.

        Args:
            command: Base shell command configured by the user.
            working_directory: Directory the command runs in.
            on_line: Invoked with ``(line, is_error)`` for every non-empty line.
            on_exit: Invoked once with the exit code after all output was delivered.

        Returns:
            asyncio.Task[int]: Task that completes with the exit code.

        Raises:
            LaunchError: If the process could not be started. ``on_exit`` is
                not invoked in that case.
        """

        final_command = self.build_command(command)
        logger.debug("running %r in %s", final_command, working_directory)
        try:
            if not working_directory.is_dir():
                raise LaunchError(final_command, working_directory, "working directory does not exist")
            process = await asyncio.create_subprocess_shell(
                final_command,
                cwd=str(working_directory),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=_STREAM_LIMIT,
            )
        except OSError as exc:
            raise LaunchError(final_command, working_directory, str(exc)) from exc
        return asyncio.get_running_loop().create_task(self._stream(process, on_line, on_exit))

    async def _stream(
        self,
        process: asyncio.subprocess.Process,
        on_line: LineCallback,
        on_exit: ExitCallback,
    ) -> int:
        if process.stdout is None or process.stderr is None:
            raise RuntimeError("process output streams were not captured")
        pumps = (
            asyncio.ensure_future(_pump(process.stdout, on_line, is_error=False)),
            asyncio.ensure_future(_pump(process.stderr, on_line, is_error=True)),
        )
        try:
            await asyncio.gather(*pumps)
        except BaseException:
            for pump in pumps:
                pump.cancel()
            _terminate(process)
            raise
        finally:
            returncode = await process.wait()
        exit_code = normalize_exit_code(returncode)
        logger.debug("process %s exited with %d", process.pid, exit_code)
        on_exit(exit_code)
        return exit_code


def _terminate(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    with contextlib.suppress(ProcessLookupError):
        process.kill()


async def _read_line(stream: asyncio.StreamReader) -> bytes:
    """Read one line of any length; returns ``b""`` only at end of stream.

    Lines longer than the reader limit are consumed in chunks instead of
    failing the whole stream.
    """

    parts: list[bytes] = []
    while True:
        try:
            parts.append(await stream.readuntil(_SEPARATOR))
        except asyncio.IncompleteReadError as exc:
            parts.append(exc.partial)
        except asyncio.LimitOverrunError as exc:
            parts.append(await stream.read(exc.consumed))
            continue
        return b"".join(parts)


async def _pump(stream: asyncio.StreamReader, on_line: LineCallback, *, is_error: bool) -> None:
    while True:
        chunk = await _read_line(stream)
        if not chunk:
            return
        if len(chunk) > _STREAM_LIMIT:
            logger.debug("read oversized line of %d bytes", len(chunk))
        line = chunk.decode(_ENCODING, errors="replace").rstrip("\r\n")
        if line:
            on_line(line, is_error)


__all__ = ["ExitCallback", "LineCallback", "ProcessRunner", "normalize_exit_code"]
