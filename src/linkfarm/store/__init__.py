# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Content-addressable package store."""

from __future__ import annotations

from .package_store import PackageStore

__all__ = ["PackageStore"]
