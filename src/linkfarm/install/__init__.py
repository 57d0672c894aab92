# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Install location planning and resolution."""

from __future__ import annotations

from .locations import InstallKind, InstallLocationResolver, InstallPlan

__all__ = ["InstallKind", "InstallLocationResolver", "InstallPlan"]
