# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime helpers for invoking external processes."""

from .process import CommandOptions, SubprocessExecutionError, run_command

__all__ = ["CommandOptions", "SubprocessExecutionError", "run_command"]
