# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Link dependency executables into a dependent's shared ``.bin`` directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from ..context import InstallContext
from ..core.logging import warn
from ..filesystem import LinkOutcome, symlink_if_absent
from .descriptor import DescriptorReader


@dataclass(slots=True)
class BinReport:
    """Outcome of linking one dependency's executables."""

    created: list[str] = field(default_factory=list)
    collisions: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)


def _is_safe_command(name: str) -> bool:
    return bool(name) and name not in {".", ".."} and "/" not in name and "\\" not in name


class BinLinker:
    """Create command symlinks for the executables a dependency declares.

    Several dependencies of one node write into the same ``.bin`` directory
    concurrently. An existing entry always wins and later attempts are
    skipped, so whichever dependency links a command first provides it.
    """

    def __init__(self, context: InstallContext, descriptors: DescriptorReader) -> None:
        self._context = context
        self._descriptors = descriptors

    def link_bins(self, install_location: Path, dependency_location: Path, package_name: str) -> BinReport:
        """Link the executables of ``dependency_location`` under ``install_location``.

        Args:
            install_location: Directory of the dependent package.
            dependency_location: Directory of the dependency exposing commands.
            package_name: Name the dependency is linked under; names a string
                ``bin`` entry.

        Returns:
            BinReport: Commands created, skipped because of a collision, or
            rejected because the command name is not a plain file name.
        """

        report = BinReport()
        descriptor = self._descriptors.read(dependency_location)
        if descriptor is None:
            return report
        bin_dir = self._context.bin_dir(install_location)
        for command, script in descriptor.commands(package_name).items():
            if not _is_safe_command(command):
                warn(
                    f"Ignoring executable '{command}' declared by {package_name}: not a plain command name",
                    use_emoji=self._context.use_emoji,
                )
                report.rejected.append(command)
                continue
            target = dependency_location / PurePosixPath(script)
            outcome = symlink_if_absent(target, bin_dir / command)
            if outcome is LinkOutcome.CREATED:
                report.created.append(command)
            elif outcome is LinkOutcome.CONFLICT:
                report.collisions.append(command)
        return report


__all__ = ["BinLinker", "BinReport"]
