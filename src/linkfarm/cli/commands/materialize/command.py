# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command materializing resolver manifests into symlink farms."""

from __future__ import annotations

from pathlib import Path

import typer

from ...core.shared import CLIError, build_cli_logger
from .models import (
    DEBUG_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    JOBS_OPTION,
    NO_POSTINSTALL_OPTION,
    ROOT_OPTION,
    build_materialize_options,
)
from .services import emit_plan, emit_summary, perform_materialize


def materialize_command(
    root: ROOT_OPTION = Path("."),
    jobs: JOBS_OPTION = None,
    dry_run: DRY_RUN_OPTION = False,
    no_postinstall: NO_POSTINSTALL_OPTION = False,
    emoji: EMOJI_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Build node_modules symlink farms from the resolver manifests.

    Raises:
        typer.Exit: Always raised to terminate the command with an exit status.
    """

    options = build_materialize_options(root, jobs, dry_run, no_postinstall, emoji, debug)
    logger = build_cli_logger(emoji=options.emoji, debug=options.debug)
    try:
        result = perform_materialize(options, logger=logger)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc

    if options.dry_run:
        logger.info("Dry run: no files were changed")
        emit_plan(result, options, logger=logger)
    else:
        emit_summary(result, options, logger=logger)
    raise typer.Exit(code=0)


__all__ = ["materialize_command"]
