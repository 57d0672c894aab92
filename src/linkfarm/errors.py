# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the materialization pipeline."""

from __future__ import annotations

from pathlib import Path


class LinkfarmError(RuntimeError):
    """Base class for failures raised by linkfarm."""


class ConfigError(LinkfarmError):
    """Raised when configuration input is invalid."""


class ManifestError(LinkfarmError):
    """Raised when resolver manifests are missing, malformed, or inconsistent.

    A missing hash or location entry for a referenced node indicates an
    upstream resolver bug, so these errors abort the run.
    """

    def __init__(self, message: str, *, source: Path | None = None) -> None:
        """Initialise the error with an optional manifest path.

        Args:
            message: Human-readable description of the fault.
            source: Manifest file the fault was detected in, when known.
        """

        prefix = f"{source}: " if source is not None else ""
        super().__init__(f"{prefix}{message}")
        self.source = source


class DescriptorError(LinkfarmError):
    """Raised when a package descriptor exists but cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialise the error with the offending descriptor path.

        Args:
            path: Location of the unreadable descriptor.
            reason: Parser or validation message.
        """

        super().__init__(f"Invalid package descriptor {path}: {reason}")
        self.path = path


__all__ = ["ConfigError", "DescriptorError", "LinkfarmError", "ManifestError"]
