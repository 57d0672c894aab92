# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared logging helpers."""

from __future__ import annotations

from .public import fail, info, ok, section, warn

__all__ = [
    "fail",
    "info",
    "ok",
    "section",
    "warn",
]
