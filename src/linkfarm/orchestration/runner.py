# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execute a materialization run in ordered, internally concurrent phases."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import TypeVar

from ..context import InstallContext, InstallLocations, freeze_locations
from ..core.logging import info
from ..hooks import PostinstallOrchestrator, PostinstallOutcome
from ..install import InstallLocationResolver, InstallPlan
from ..linking import DescriptorReader, NodeLinkReport, SymlinkFarm
from ..store import PackageStore
from .models import MaterializeResult

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")


def _run_all(executor: Executor, func: Callable[[ItemT], ResultT], items: Iterable[ItemT]) -> list[ResultT]:
    """Apply ``func`` to ``items`` concurrently and return results in input order.

    Every task runs to completion before the first failure, if any, is raised.

    Args:
        executor: Pool the tasks are submitted to.
        func: Callable applied to each item.
        items: Work items.

    Returns:
        list[ResultT]: Results ordered like ``items``.
    """

    futures: list[Future[ResultT]] = [executor.submit(func, item) for item in items]
    wait(futures)
    return [future.result() for future in futures]


class MaterializationRunner:
    """Turn resolved manifests into a ``node_modules`` symlink farm.

    Phases:
        1. Reset the store and resolve every install location concurrently.
        2. Reset executable-link directories, then link every node's
           dependencies (nodes and their dependencies concurrently).
        3. Run post-install hooks once per distinct install location.

    Each phase starts only after the previous one has fully completed.
    """

    def __init__(
        self,
        context: InstallContext,
        *,
        store: PackageStore | None = None,
        run_postinstall: bool | None = None,
    ) -> None:
        """Initialise the runner.

        Args:
            context: Read-only run context.
            store: Optional store override; defaults to the configured location.
            run_postinstall: Optional override of ``execution.run_postinstall``.
        """

        layout = context.config.layout
        self._context = context
        self._store = store or PackageStore(
            context.store_root,
            separator_replacement=layout.hash_separator_replacement,
            skip_prefix=layout.cache_marker_prefix,
        )
        self._run_postinstall = (
            context.config.execution.run_postinstall if run_postinstall is None else run_postinstall
        )

    @property
    def store(self) -> PackageStore:
        return self._store

    def plan(self) -> MaterializeResult:
        """Compute every install plan without touching the filesystem."""

        resolver = InstallLocationResolver(self._context, self._store)
        plans = [resolver.plan(node) for node in self._context.manifests.packages]
        return MaterializeResult(plans=plans, dry_run=True)

    def run(self, *, dry_run: bool = False) -> MaterializeResult:
        """Execute the full materialization.

        Args:
            dry_run: When ``True`` only compute install plans.

        Returns:
            MaterializeResult: Summary of the run.

        Raises:
            ManifestError: On data-integrity faults in the manifests.
            DescriptorError: When a package descriptor cannot be parsed.
            OSError: On filesystem failures other than tolerated link conflicts.
        """

        if dry_run:
            return self.plan()

        use_emoji = self._context.use_emoji
        jobs = self._context.config.execution.jobs
        packages = self._context.manifests.packages
        descriptors = DescriptorReader(self._context.config.layout.descriptor_name)

        self._store.reset()
        resolver = InstallLocationResolver(self._context, self._store)
        info(f"Resolving install locations for {len(packages)} packages", use_emoji=use_emoji)
        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="linkfarm-resolve") as pool:
            plans = _run_all(pool, resolver.resolve, packages)

        locations = freeze_locations({plan.node: plan.location for plan in plans})
        distinct = _first_node_per_location(plans)
        info(f"Linking dependencies into {len(distinct)} install locations", use_emoji=use_emoji)
        links = self._link(locations, descriptors, distinct, packages, jobs)

        postinstall: list[PostinstallOutcome] = []
        if self._run_postinstall:
            hooks = PostinstallOrchestrator(self._context, descriptors)
            with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="linkfarm-postinstall") as pool:
                futures = [pool.submit(hooks.run, node, location) for location, node in distinct.items()]
                wait(futures)
                postinstall = [future.result() for future in futures]

        return MaterializeResult(
            plans=plans,
            links=links,
            postinstall=postinstall,
            store_copies=self._store.copies_performed,
        )

    def _link(
        self,
        locations: InstallLocations,
        descriptors: DescriptorReader,
        distinct: dict[Path, str],
        packages: tuple[str, ...],
        jobs: int,
    ) -> list[NodeLinkReport]:
        # Node tasks block on their dependency tasks, so the two levels use separate pools.
        with (
            ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="linkfarm-node") as node_pool,
            ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="linkfarm-link") as link_pool,
        ):
            farm = SymlinkFarm(self._context, locations, descriptors, executor=link_pool)
            _run_all(node_pool, farm.prepare, distinct)
            return _run_all(node_pool, farm.materialize, packages)


def _first_node_per_location(plans: Iterable[InstallPlan]) -> dict[Path, str]:
    """Map each distinct install location to the first node using it."""

    distinct: dict[Path, str] = {}
    for plan in plans:
        distinct.setdefault(plan.location, plan.node)
    return distinct


def materialize(project_root: Path, *, dry_run: bool = False) -> MaterializeResult:
    """Load configuration and manifests under ``project_root`` and materialize them."""

    return MaterializationRunner(InstallContext.load(project_root)).run(dry_run=dry_run)


__all__ = ["MaterializationRunner", "materialize"]
