# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Materialize CLI command."""

from __future__ import annotations

import typer

from .command import materialize_command

__all__ = ["register"]


def register(app: typer.Typer) -> None:
    """Register the materialize command with ``app``.

    Args:
        app: Typer application receiving the command registration.
    """

    app.command(name="materialize", help="Build node_modules symlink farms from resolver manifests.")(
        materialize_command,
    )
