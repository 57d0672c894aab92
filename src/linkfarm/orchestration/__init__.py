# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Two-phase orchestration of a materialization run."""

from __future__ import annotations

from .models import MaterializeResult
from .runner import MaterializationRunner, materialize

__all__ = ["MaterializationRunner", "MaterializeResult", "materialize"]
