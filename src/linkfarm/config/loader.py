# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading with layered precedence: defaults, pyproject, project file, overrides."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol

from pydantic import ValidationError

from ..errors import ConfigError
from .models import LinkfarmConfig

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "linkfarm"
PROJECT_CONFIG_NAME: Final[str] = ".linkfarm.toml"


class ConfigSource(Protocol):
    """Provide a raw configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the fragment supplied by this source."""
        ...


class TomlConfigSource:
    """Load configuration data from a standalone TOML document."""

    def __init__(self, path: Path, *, name: str | None = None) -> None:
        self._path = path
        self.name = name or str(path)

    def load(self) -> Mapping[str, Any]:
        return self._read_document()

    def _read_document(self) -> dict[str, Any]:
        if not self._path.is_file():
            return {}
        try:
            with self._path.open("rb") as handle:
                return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self._path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read {self._path}: {exc}") from exc


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.linkfarm]`` within ``pyproject.toml``."""

    def load(self) -> Mapping[str, Any]:
        data = self._read_document()
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return dict(section)


class MappingConfigSource:
    """Wrap an in-memory mapping, typically CLI overrides."""

    def __init__(self, data: Mapping[str, Any], *, name: str = "overrides") -> None:
        self._data = data
        self.name = name

    def load(self) -> Mapping[str, Any]:
        return self._data


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` recursively updated with ``override``.

    Args:
        base: Mapping providing default values.
        override: Mapping whose values take precedence.

    Returns:
        dict[str, Any]: New merged mapping; inputs are left untouched.
    """

    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        """Initialise a loader that merges ``sources`` in order.

        Args:
            sources: Ordered collection of configuration sources; later
                sources override earlier ones.
        """

        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        project_root: Path,
        *,
        overrides: Mapping[str, Any] | None = None,
    ) -> ConfigLoader:
        """Build a loader for ``project_root`` with the default precedence.

        Args:
            project_root: Workspace root used to discover configuration files.
            overrides: Optional explicit overrides applied last.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        sources: list[ConfigSource] = [
            PyProjectConfigSource(root / "pyproject.toml"),
            TomlConfigSource(root / PROJECT_CONFIG_NAME),
        ]
        if overrides:
            sources.append(MappingConfigSource(overrides))
        return cls(sources=sources)

    @property
    def source_names(self) -> tuple[str, ...]:
        """Return the names of the configured sources in precedence order."""

        return tuple(source.name for source in self._sources)

    def load(self) -> LinkfarmConfig:
        """Return the merged configuration.

        Returns:
            LinkfarmConfig: Validated configuration model.

        Raises:
            ConfigError: If a source is unreadable or the merged data is invalid.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if fragment:
                merged = _deep_merge(merged, fragment)
        try:
            return LinkfarmConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid linkfarm configuration: {exc}") from exc


def load_config(project_root: Path, overrides: Mapping[str, Any] | None = None) -> LinkfarmConfig:
    """Load configuration for ``project_root`` using the default tiered sources."""

    return ConfigLoader.for_root(project_root, overrides=overrides).load()


__all__ = [
    "ConfigLoader",
    "ConfigSource",
    "MappingConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "load_config",
]
