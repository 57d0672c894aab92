# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared CLI infrastructure."""

from __future__ import annotations

from .shared import CLIError, CLILogger, build_cli_logger

__all__ = ["CLIError", "CLILogger", "build_cli_logger"]
