# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem utilities for copying trees and building symlink farms."""

from __future__ import annotations

from .operations import LinkOutcome, copy_tree, remove_tree, reset_directory, symlink_if_absent
from .paths import display_relative_path, is_within, relative_link_target

__all__ = [
    "LinkOutcome",
    "copy_tree",
    "display_relative_path",
    "is_within",
    "relative_link_target",
    "remove_tree",
    "reset_directory",
    "symlink_if_absent",
]
