# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helper services for the materialize CLI."""

from __future__ import annotations

from ....config import load_config
from ....context import InstallContext
from ....errors import LinkfarmError
from ....filesystem import display_relative_path
from ....orchestration import MaterializationRunner, MaterializeResult
from ...core.shared import CLIError, CLILogger
from .models import MaterializeCLIOptions


def perform_materialize(options: MaterializeCLIOptions, *, logger: CLILogger) -> MaterializeResult:
    """Run (or plan) a materialization for ``options.root``.

    Args:
        options: Normalised CLI options.
        logger: Logger used for debug output.

    Returns:
        MaterializeResult: Outcome of the run.

    Raises:
        CLIError: When configuration, manifests, or the filesystem fail.
    """

    try:
        config = load_config(options.root, overrides=options.config_overrides())
        context = InstallContext.load(options.root, config=config)
        logger.debug(
            f"root={context.project_root} jobs={config.execution.jobs} "
            f"nodes={len(context.manifests.packages)} store={config.layout.store_dir}"
        )
        return MaterializationRunner(context).run(dry_run=options.dry_run)
    except (LinkfarmError, OSError) as exc:
        raise CLIError(str(exc)) from exc


def emit_plan(result: MaterializeResult, options: MaterializeCLIOptions, *, logger: CLILogger) -> None:
    """Print the install location chosen for every node.

    Args:
        result: Dry-run result holding install plans.
        options: CLI options providing the project root.
        logger: Logger used to emit messages.
    """

    for plan in result.plans:
        location = display_relative_path(plan.location, options.root)
        logger.echo(f"{plan.node}\t{plan.kind.value}\t{location}")
    logger.ok(f"Dry run: {result.stored_count} stored, {result.local_count} local packages")


def emit_summary(result: MaterializeResult, options: MaterializeCLIOptions, *, logger: CLILogger) -> None:
    """Report the outcome of a completed run.

    Args:
        result: Result returned by the runner.
        options: CLI options providing the project root.
        logger: Logger used to emit messages.
    """

    logger.section("Materialization summary")
    for report in result.links:
        logger.debug(
            f"node={report.node} location={display_relative_path(report.location, options.root)} "
            f"created={report.links_created} conflicts={len(report.conflicts)}"
        )
    for node, command in result.bin_collisions:
        logger.debug(f"node={node} bin={command} skipped=already-provided")
    if result.conflicts:
        logger.warn(f"{len(result.conflicts)} dependency links skipped due to conflicting copies")
    if result.postinstall_failures:
        failed = ", ".join(outcome.node for outcome in result.postinstall_failures)
        logger.warn(f"postinstall failed for: {failed}")
    logger.ok(
        f"Materialized {len(result.plans)} packages "
        f"({result.stored_count} stored, {result.local_count} local, {result.store_copies} copied); "
        f"{result.links_created} links created, {result.postinstall_runs} postinstall scripts run"
    )


__all__ = ["emit_plan", "emit_summary", "perform_materialize"]
