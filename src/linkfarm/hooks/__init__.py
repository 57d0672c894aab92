# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-package lifecycle hooks."""

from __future__ import annotations

from .postinstall import PostinstallOrchestrator, PostinstallOutcome, PostinstallStatus

__all__ = ["PostinstallOrchestrator", "PostinstallOutcome", "PostinstallStatus"]
