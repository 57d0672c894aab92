# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Result models describing a materialization run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..hooks import PostinstallOutcome, PostinstallStatus
from ..install import InstallKind, InstallPlan
from ..linking import DependencyLinkReport, NodeLinkReport


@dataclass(slots=True)
class MaterializeResult:
    """Capture the outcome of a materialization run.

    Attributes:
        plans: Install plan of every non-root node, in graph order.
        links: Link reports per node; empty for dry runs.
        postinstall: Post-install outcomes per distinct install location.
        store_copies: Number of packages physically copied into the store.
        dry_run: ``True`` when only planning was performed.
    """

    plans: list[InstallPlan] = field(default_factory=list)
    links: list[NodeLinkReport] = field(default_factory=list)
    postinstall: list[PostinstallOutcome] = field(default_factory=list)
    store_copies: int = 0
    dry_run: bool = False

    @property
    def locations(self) -> dict[str, Path]:
        """Return the install location of each node."""

        return {plan.node: plan.location for plan in self.plans}

    @property
    def local_count(self) -> int:
        return sum(1 for plan in self.plans if plan.kind is InstallKind.LOCAL)

    @property
    def stored_count(self) -> int:
        return sum(1 for plan in self.plans if plan.kind is InstallKind.STORED)

    @property
    def links_created(self) -> int:
        return sum(report.links_created for report in self.links)

    @property
    def conflicts(self) -> list[tuple[str, DependencyLinkReport]]:
        """Return ``(node, dependency report)`` pairs whose link was skipped."""

        return [(report.node, entry) for report in self.links for entry in report.conflicts]

    @property
    def bin_collisions(self) -> list[tuple[str, str]]:
        """Return ``(node, command)`` pairs skipped because the command already existed."""

        return [(report.node, command) for report in self.links for command in report.bin_collisions]

    @property
    def postinstall_failures(self) -> list[PostinstallOutcome]:
        return [outcome for outcome in self.postinstall if outcome.status is PostinstallStatus.FAILED]

    @property
    def postinstall_runs(self) -> int:
        return sum(1 for outcome in self.postinstall if outcome.status is not PostinstallStatus.SKIPPED)


__all__ = ["MaterializeResult"]
