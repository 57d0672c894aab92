# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the materialize CLI command."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root holding the resolver manifests."),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Maximum concurrent filesystem or hook operations."),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Print install locations without touching the filesystem."),
]
NO_POSTINSTALL_OPTION = Annotated[
    bool,
    typer.Option("--no-postinstall", help="Skip package post-install scripts."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Print per-node details."),
]


@dataclass(slots=True)
class MaterializeCLIOptions:
    """Normalised CLI inputs for the materialize command."""

    root: Path
    jobs: int | None
    dry_run: bool
    run_postinstall: bool
    emoji: bool
    debug: bool

    def config_overrides(self) -> dict[str, Any]:
        """Return configuration overrides expressed by the CLI flags."""

        overrides: dict[str, Any] = {"use_emoji": self.emoji}
        execution: dict[str, Any] = {}
        if self.jobs is not None:
            execution["jobs"] = self.jobs
        if not self.run_postinstall:
            execution["run_postinstall"] = False
        if execution:
            overrides["execution"] = execution
        return overrides


def build_materialize_options(
    root: Path,
    jobs: int | None,
    dry_run: bool,
    no_postinstall: bool,
    emoji: bool,
    debug: bool,
) -> MaterializeCLIOptions:
    """Construct ``MaterializeCLIOptions`` from Typer parameters.

    Args:
        root: Project root supplied via CLI options.
        jobs: Optional worker count override.
        dry_run: Whether only planning should run.
        no_postinstall: Whether post-install scripts are disabled.
        emoji: Flag controlling emoji usage in logging output.
        debug: Flag enabling debug output.

    Returns:
        MaterializeCLIOptions: Normalised command options.
    """

    return MaterializeCLIOptions(
        root=root.resolve(),
        jobs=jobs,
        dry_run=dry_run,
        run_postinstall=not no_postinstall,
        emoji=emoji,
        debug=debug,
    )


__all__ = [
    "MaterializeCLIOptions",
    "build_materialize_options",
]
