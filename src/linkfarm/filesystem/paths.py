# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path

_Pathish = str | PathLike[str] | Path


def _best_effort_resolve(path: Path) -> Path:
    """Return ``path`` resolved where possible without raising.

    Args:
        path: Candidate path to resolve.

    Returns:
        Path: Absolute variant when resolution succeeds; otherwise the closest
        achievable approximation.
    """

    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute() if not path.is_absolute() else path


def is_within(path: _Pathish, root: _Pathish) -> bool:
    """Return ``True`` when ``path`` is ``root`` or one of its descendants.

    Both inputs are resolved first, so sibling directories sharing a name
    prefix (``/work/app`` and ``/work/app-cache``) are told apart.

    Args:
        path: Candidate path.
        root: Directory that may contain ``path``.

    Returns:
        bool: ``True`` if ``path`` lies inside ``root``.
    """

    candidate = _best_effort_resolve(Path(path))
    base = _best_effort_resolve(Path(root))
    return candidate == base or candidate.is_relative_to(base)


def relative_link_target(target: _Pathish, link_path: _Pathish) -> str:
    """Return the value a symlink at ``link_path`` needs to reach ``target``.

    Args:
        target: Path the link should point at.
        link_path: Location of the symlink itself.

    Returns:
        str: Target expressed relative to the link's parent directory.
    """

    return os.path.relpath(Path(target), Path(link_path).parent)


def display_relative_path(path: _Pathish, root: _Pathish) -> str:
    """Return a display-friendly representation of ``path`` relative to ``root``.

    Args:
        path: Path to present to the user.
        root: Base directory used for relativisation.

    Returns:
        str: Relative POSIX path when ``path`` lies under ``root``, otherwise
        the absolute POSIX representation.
    """

    candidate = _best_effort_resolve(Path(path))
    base = _best_effort_resolve(Path(root))
    try:
        return candidate.relative_to(base).as_posix() or "."
    except ValueError:
        return candidate.as_posix()


__all__ = (
    "display_relative_path",
    "is_within",
    "relative_link_target",
)
