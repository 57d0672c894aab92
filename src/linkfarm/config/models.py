# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the materialization pipeline."""

from __future__ import annotations

import os
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

_MAX_DEFAULT_JOBS: Final[int] = 32


def default_io_jobs() -> int:
    """Return the default worker count for I/O-bound materialization work.

    Returns:
        int: ``cpu_count + 4`` capped at 32, mirroring the thread pool default.
    """

    return min(_MAX_DEFAULT_JOBS, (os.cpu_count() or 1) + 4)


def _single_component(value: str) -> str:
    stripped = value.strip()
    if not stripped or stripped in {".", ".."} or "/" in stripped or os.sep in stripped:
        raise ValueError(f"expected a single path component, got {value!r}")
    return stripped


class ManifestConfig(BaseModel):
    """File names of the resolver manifests, relative to the project root."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    hash_file: str = "hash.json"
    graph_file: str = "resolved_graph.json"
    location_file: str = "map.json"


class LayoutConfig(BaseModel):
    """On-disk naming conventions for the store and symlink farm."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    store_dir: str = ".package_store"
    modules_dir: str = "node_modules"
    bin_dir: str = ".bin"
    descriptor_name: str = "package.json"
    cache_marker_prefix: str = ".yarn-"
    root_node: str = "root"
    variant_delimiter: str = "+"
    hash_separator_replacement: str = "_"

    @field_validator("store_dir", "modules_dir", "bin_dir", "descriptor_name")
    @classmethod
    def _validate_component(cls, value: str) -> str:
        return _single_component(value)

    @field_validator("variant_delimiter", "hash_separator_replacement")
    @classmethod
    def _validate_token(cls, value: str) -> str:
        if not value or "/" in value:
            raise ValueError("must be a non-empty string without '/'")
        return value


class ExecutionConfig(BaseModel):
    """Concurrency and post-install behaviour."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    jobs: int = Field(default_factory=default_io_jobs, ge=1)
    run_postinstall: bool = True
    postinstall_command: list[str] = Field(default_factory=lambda: ["yarn", "postinstall"])
    postinstall_timeout: float | None = Field(default=None, gt=0)

    @field_validator("postinstall_command")
    @classmethod
    def _validate_command(cls, value: list[str]) -> list[str]:
        if not value or not value[0].strip():
            raise ValueError("postinstall_command must name an executable")
        return value


class LinkfarmConfig(BaseModel):
    """Primary configuration container."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    manifests: ManifestConfig = Field(default_factory=ManifestConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    use_emoji: bool = True


__all__ = [
    "ExecutionConfig",
    "LayoutConfig",
    "LinkfarmConfig",
    "ManifestConfig",
    "default_io_jobs",
]
