# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence and traceability."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import Config, ConfigError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "svelte-check"
PROJECT_CONFIG_FILENAME: Final[str] = "svelte-check.toml"
DEFAULTS_SOURCE: Final[str] = "defaults"
CLI_SOURCE: Final[str] = "cli"


class ConfigSource(Protocol):
    """Provide one layer of configuration data."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the raw configuration fragment supplied by the source."""
        ...

    def describe(self) -> str:
        """Return a human-readable description of the source."""
        ...


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _normalise_keys(fragment: Mapping[str, Any]) -> dict[str, Any]:
    """Accept ``kebab-case`` keys alongside the canonical ``snake_case``."""

    return {str(key).replace("-", "_"): value for key, value in fragment.items()}


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = DEFAULTS_SOURCE

    def load(self) -> Mapping[str, Any]:
        return Config().model_dump()

    def describe(self) -> str:
        return "Built-in defaults"


class TomlConfigSource:
    """Load configuration data from a standalone TOML document."""

    def __init__(self, path: Path, *, name: str | None = None, required: bool = False) -> None:
        self._path = path
        self.name = name or str(path)
        self._required = required

    def load(self) -> Mapping[str, Any]:
        return self._read()

    def _read(self) -> dict[str, Any]:
        if not self._path.is_file():
            if self._required:
                raise ConfigError(f"Configuration file not found: {self._path}")
            return {}
        try:
            with self._path.open("rb") as handle:
                return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self._path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read {self._path}: {exc}") from exc

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.svelte-check]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = self._read()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {self.name} must be a table")
        return dict(section)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


class FieldUpdate(BaseModel):
    """Description of a single configuration field mutation."""

    model_config = ConfigDict(validate_assignment=True)

    field: str
    source: str
    value: Any


class ConfigLoadResult(BaseModel):
    """Container bundling a resolved config with provenance metadata."""

    model_config = ConfigDict(validate_assignment=True)

    config: Config
    updates: list[FieldUpdate] = Field(default_factory=list)

    def is_explicit(self, field: str) -> bool:
        """Return ``True`` when ``field`` was set by a source other than the defaults."""

        return any(update.field == field and update.source != DEFAULTS_SOURCE for update in self.updates)


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(cls, project_root: Path, *, config_file: Path | None = None) -> ConfigLoader:
        """Build the standard source chain for ``project_root``.

        Precedence, lowest first: defaults, ``[tool.svelte-check]`` in
        ``pyproject.toml``, ``svelte-check.toml``, then ``config_file``.
        """

        sources: list[ConfigSource] = [
            DefaultConfigSource(),
            PyProjectConfigSource(project_root / PYPROJECT_FILENAME),
            TomlConfigSource(project_root / PROJECT_CONFIG_FILENAME),
        ]
        if config_file is not None:
            sources.append(TomlConfigSource(config_file, required=True))
        return cls(sources=sources)

    @property
    def sources(self) -> tuple[ConfigSource, ...]:
        """Return the configured sources in precedence order."""

        return tuple(self._sources)

    def load(self, overrides: Mapping[str, Any] | None = None) -> ConfigLoadResult:
        """Merge every source plus ``overrides`` and validate the result.

        Raises:
            ConfigError: If a source is unreadable or the merged data is invalid.
        """

        merged: dict[str, Any] = {}
        updates: list[FieldUpdate] = []
        layers = [(source.name, source.load()) for source in self._sources]
        if overrides:
            layers.append((CLI_SOURCE, overrides))
        for name, fragment in layers:
            present = {key: value for key, value in _normalise_keys(fragment).items() if value is not None}
            updates.extend(FieldUpdate(field=key, source=name, value=value) for key, value in present.items())
            merged = _deep_merge(merged, present)
        try:
            config = Config.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc
        return ConfigLoadResult(config=config, updates=updates)


__all__ = [
    "CLI_SOURCE",
    "DEFAULTS_SOURCE",
    "PROJECT_CONFIG_FILENAME",
    "ConfigLoadResult",
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "FieldUpdate",
    "PyProjectConfigSource",
    "TomlConfigSource",
]
