# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application exposing ``check`` and ``config`` commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Final

import typer

from ..errors import ConfigError
from ..logging import fail
from .options import CLIOptions
from .runtime import CLIRuntime, execute_check, resolve_runtime

CONFIG_ERROR_EXIT: Final[int] = 5

app = typer.Typer(
    name="svelte-check-runner",
    help="Run svelte-check and report its diagnostics.",
    add_completion=False,
    no_args_is_help=False,
)


def _options(ctx: typer.Context) -> CLIOptions:
    options = ctx.obj
    return options if isinstance(options, CLIOptions) else CLIOptions()


def _load_runtime(options: CLIOptions) -> CLIRuntime:
    try:
        return resolve_runtime(options)
    except ConfigError as exc:
        fail(str(exc), use_emoji=not options.no_emoji, use_color=False if options.no_color else None)
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from exc


def _run_check(options: CLIOptions) -> None:
    runtime = _load_runtime(options)
    outcome = execute_check(runtime)
    raise typer.Exit(code=outcome.kind.exit_code)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Explicit TOML configuration file.", dir_okay=False),
    ] = None,
    command: Annotated[
        str | None,
        typer.Option("--command", help="Check command to run (the machine-output flag is appended)."),
    ] = None,
    debug: Annotated[
        bool | None,
        typer.Option("--debug/--no-debug", help="Enable debug tracing and always keep raw output."),
    ] = None,
    alternate_view: Annotated[
        bool | None,
        typer.Option("--alternate-view/--no-alternate-view", help="Render results as a table."),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Directory to start the project-root search from.", file_okay=False),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in console output.")] = False,
) -> None:
    """Run svelte-check for the surrounding project when no command is given."""

    options = CLIOptions(
        config_file=config_file,
        command=command,
        debug=debug,
        alternate_view=alternate_view,
        root=root,
        no_color=no_color,
        no_emoji=no_emoji,
    )
    ctx.obj = options
    if ctx.invoked_subcommand is None:
        _run_check(options)


@app.command("check")
def check_command(ctx: typer.Context) -> None:
    """Run svelte-check once and exit with a code describing the outcome."""

    _run_check(_options(ctx))


@app.command("config")
def config_command(ctx: typer.Context) -> None:
    """Print the effective merged configuration as JSON."""

    runtime = _load_runtime(_options(ctx))
    typer.echo(json.dumps(runtime.config.to_dict(), indent=2, sort_keys=True))


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["CONFIG_ERROR_EXIT", "app", "main"]
