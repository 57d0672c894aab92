# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolver manifest models and loading helpers."""

from __future__ import annotations

from .loader import ManifestBundle, load_manifests
from .models import GraphLink, HashEntry, LocationEntry, ResolvedGraph

__all__ = [
    "GraphLink",
    "HashEntry",
    "LocationEntry",
    "ManifestBundle",
    "ResolvedGraph",
    "load_manifests",
]
