# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders."""

from __future__ import annotations

from ..errors import ConfigError
from .loader import ConfigLoader, load_config
from .models import ExecutionConfig, LayoutConfig, LinkfarmConfig, ManifestConfig, default_io_jobs

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "ExecutionConfig",
    "LayoutConfig",
    "LinkfarmConfig",
    "ManifestConfig",
    "default_io_jobs",
    "load_config",
]
