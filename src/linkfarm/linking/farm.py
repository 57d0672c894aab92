# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rebuild each node's ``node_modules`` directory as a farm of relative symlinks."""

from __future__ import annotations

from concurrent.futures import Executor, Future, wait
from dataclasses import dataclass, field
from pathlib import Path

from ..context import InstallContext, InstallLocations
from ..core.logging import warn
from ..errors import ManifestError
from ..filesystem import LinkOutcome, display_relative_path, reset_directory, symlink_if_absent
from ..naming import package_name
from .bins import BinLinker, BinReport
from .descriptor import DescriptorReader


@dataclass(frozen=True, slots=True)
class DependencyLinkReport:
    """Outcome of linking a single dependency into a dependent."""

    dependency: str
    name: str
    outcome: LinkOutcome
    bins: BinReport | None = None


@dataclass(slots=True)
class NodeLinkReport:
    """Aggregated link outcomes for one node."""

    node: str
    location: Path
    dependencies: list[DependencyLinkReport] = field(default_factory=list)

    @property
    def links_created(self) -> int:
        return sum(1 for entry in self.dependencies if entry.outcome is LinkOutcome.CREATED)

    @property
    def conflicts(self) -> list[DependencyLinkReport]:
        return [entry for entry in self.dependencies if entry.outcome is LinkOutcome.CONFLICT]

    @property
    def bin_collisions(self) -> list[str]:
        return [command for entry in self.dependencies if entry.bins for command in entry.bins.collisions]


class SymlinkFarm:
    """Materialize dependency and executable links for graph nodes.

    Args:
        context: Read-only run context.
        locations: Install location of every non-root node.
        descriptors: Shared descriptor reader.
        executor: Optional pool used to link a node's dependencies
            concurrently; dependencies are linked inline when omitted.
    """

    def __init__(
        self,
        context: InstallContext,
        locations: InstallLocations,
        descriptors: DescriptorReader,
        *,
        executor: Executor | None = None,
    ) -> None:
        self._context = context
        self._locations = locations
        self._bins = BinLinker(context, descriptors)
        self._executor = executor

    def prepare(self, install_location: Path) -> None:
        """Reset the executable-link directory of ``install_location``.

        Called once per distinct location before any node is linked, so nodes
        aliasing one physical copy never wipe each other's commands.
        """

        reset_directory(self._context.bin_dir(install_location))

    def materialize(self, node: str) -> NodeLinkReport:
        """Link every direct dependency of ``node`` plus ``node`` itself.

        Args:
            node: Graph node whose dependency-link directory is rebuilt.

        Returns:
            NodeLinkReport: Outcomes for each linked dependency.

        Raises:
            ManifestError: If a dependency has no install location.
            OSError: Propagated from filesystem operations. All sibling
                dependency tasks finish before the first error is raised.
        """

        location = self._location_of(node)
        targets = (*self._context.manifests.dependencies(node), node)
        report = NodeLinkReport(node=node, location=location)
        if self._executor is None:
            report.dependencies.extend(self._link_dependency(location, dependency) for dependency in targets)
            return report

        futures: list[Future[DependencyLinkReport]] = [
            self._executor.submit(self._link_dependency, location, dependency) for dependency in targets
        ]
        wait(futures)
        report.dependencies.extend(future.result() for future in futures)
        return report

    def _location_of(self, node: str) -> Path:
        try:
            return self._locations[node]
        except KeyError:
            raise ManifestError(f"No install location for node '{node}'") from None

    def _link_dependency(self, install_location: Path, dependency: str) -> DependencyLinkReport:
        dependency_location = self._location_of(dependency)
        name = package_name(dependency, self._context.manifests.delimiter)
        destination = self._context.modules_dir(install_location) / name
        outcome = symlink_if_absent(dependency_location, destination)
        if outcome is LinkOutcome.CONFLICT:
            root = self._context.project_root
            warn(
                f"Skipping {name} in {display_relative_path(install_location, root)}: "
                f"already linked to a different copy than {display_relative_path(dependency_location, root)} "
                "(unresolved peer dependency conflict)",
                use_emoji=self._context.use_emoji,
            )
            return DependencyLinkReport(dependency=dependency, name=name, outcome=outcome)
        bins = self._bins.link_bins(install_location, dependency_location, name)
        return DependencyLinkReport(dependency=dependency, name=name, outcome=outcome, bins=bins)


__all__ = ["DependencyLinkReport", "NodeLinkReport", "SymlinkFarm"]
