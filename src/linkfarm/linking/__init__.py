# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Symlink farm materialization and executable linking."""

from __future__ import annotations

from .bins import BinLinker, BinReport
from .descriptor import DescriptorReader, PackageDescriptor
from .farm import DependencyLinkReport, NodeLinkReport, SymlinkFarm

__all__ = [
    "BinLinker",
    "BinReport",
    "DependencyLinkReport",
    "DescriptorReader",
    "NodeLinkReport",
    "PackageDescriptor",
    "SymlinkFarm",
]
