# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide and produce the physical directory representing each graph node."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from threading import Lock

from ..context import InstallContext
from ..filesystem import is_within, remove_tree
from ..store import PackageStore


class InstallKind(str, Enum):
    """Enumerate how a node is represented on disk."""

    LOCAL = "local"
    STORED = "stored"


@dataclass(frozen=True, slots=True)
class InstallPlan:
    """Side-effect free description of a node's install location.

    Attributes:
        node: Graph node identifier.
        kind: ``LOCAL`` for workspace packages used in place, ``STORED`` for
            packages copied into the store.
        source: Cache directory recorded by the resolver.
        location: Directory that will represent the node.
        content_hash: Store key for ``STORED`` plans, ``None`` otherwise.
    """

    node: str
    kind: InstallKind
    source: Path
    location: Path
    content_hash: str | None = None


class InstallLocationResolver:
    """Resolve graph nodes to install locations.

    Calls for distinct nodes are independent and may run concurrently.
    """

    def __init__(self, context: InstallContext, store: PackageStore) -> None:
        self._context = context
        self._store = store
        self._lock = Lock()
        self._cleaned: set[Path] = set()

    def plan(self, node: str) -> InstallPlan:
        """Return the install plan for ``node`` without touching the filesystem.

        Args:
            node: Graph node identifier.

        Returns:
            InstallPlan: Decision describing where ``node`` will live.

        Raises:
            ManifestError: If the location or, for stored packages, the hash
                of ``node`` is missing from the manifests.
        """

        manifests = self._context.manifests
        source = manifests.location_for(node)
        if not source.is_absolute():
            source = self._context.project_root / source
        if is_within(source, self._context.project_root):
            # Links are computed lexically, so local locations must be canonical.
            return InstallPlan(node=node, kind=InstallKind.LOCAL, source=source, location=source.resolve())
        # Looked up by node, not package key: peer variants of one package may hash differently.
        content_hash = manifests.hash_for(node)
        return InstallPlan(
            node=node,
            kind=InstallKind.STORED,
            source=source,
            location=self._store.path_for(content_hash),
            content_hash=content_hash,
        )

    def resolve(self, node: str) -> InstallPlan:
        """Produce the install location for ``node`` on disk.

        Workspace packages keep their directory but lose any stale dependency
        subtree; other packages are copied into the store.

        Args:
            node: Graph node identifier.

        Returns:
            InstallPlan: The executed plan; ``location`` exists afterwards.
        """

        plan = self.plan(node)
        if plan.kind is InstallKind.LOCAL:
            self._clean_local(plan.location)
            return plan
        self._store.ensure_copied(self._context.manifests.hash_for(node), plan.source)
        return plan

    def _clean_local(self, location: Path) -> None:
        with self._lock:
            if location in self._cleaned:
                return
            self._cleaned.add(location)
        remove_tree(self._context.modules_dir(location))


__all__ = ["InstallKind", "InstallLocationResolver", "InstallPlan"]
