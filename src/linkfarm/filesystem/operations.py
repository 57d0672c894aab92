# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem primitives used by the store and the symlink farm."""

from __future__ import annotations

import os
import shutil
from enum import Enum
from pathlib import Path

from .paths import relative_link_target


class LinkOutcome(str, Enum):
    """Result of an idempotent symlink creation attempt."""

    CREATED = "created"
    ALREADY_LINKED = "already-linked"
    CONFLICT = "conflict"


def _raise(error: OSError) -> None:
    raise error


def copy_tree(source: Path, destination: Path, *, skip_prefix: str | None = None) -> int:
    """Copy every file below ``source`` into ``destination``.

    Symlinks inside ``source`` are followed and their contents rewritten as
    regular files. File mode bits are preserved so executables stay runnable.

    Args:
        source: Directory to copy from.
        destination: Directory to copy into; created when absent.
        skip_prefix: Files whose base name starts with this prefix are skipped.

    Returns:
        int: Number of files copied.

    Raises:
        OSError: If ``source`` or any directory below it cannot be listed, or
            a file cannot be copied.
    """

    destination.mkdir(parents=True, exist_ok=True)
    copied = 0
    for directory, _subdirs, files in os.walk(source, onerror=_raise, followlinks=True):
        relative = Path(directory).relative_to(source)
        target_dir = destination / relative
        for name in files:
            if skip_prefix and name.startswith(skip_prefix):
                continue
            target_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy(Path(directory) / name, target_dir / name)
            copied += 1
    return copied


def remove_tree(path: Path) -> None:
    """Remove ``path`` whether it is a directory tree, a file, or a symlink.

    Missing paths are ignored.
    """

    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
    elif path.is_dir():
        shutil.rmtree(path)


def reset_directory(path: Path) -> None:
    """Destroy ``path`` and recreate it as an empty directory."""

    remove_tree(path)
    path.mkdir(parents=True, exist_ok=True)


def symlink_if_absent(target: Path, destination: Path) -> LinkOutcome:
    """Create a relative symlink at ``destination`` unless one already exists.

    The creation itself is the existence check, so concurrent callers racing
    for the same destination observe exactly one ``CREATED`` outcome.

    Args:
        target: Path the link should point at.
        destination: Location of the new link; its parent is created.

    Returns:
        LinkOutcome: ``CREATED`` for a new link, ``ALREADY_LINKED`` when the
        existing entry resolves to ``target``, ``CONFLICT`` otherwise.
    """

    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        os.symlink(
            relative_link_target(target, destination),
            destination,
            target_is_directory=target.is_dir(),
        )
    except FileExistsError:
        if os.path.realpath(destination) == os.path.realpath(target):
            return LinkOutcome.ALREADY_LINKED
        return LinkOutcome.CONFLICT
    return LinkOutcome.CREATED


__all__ = [
    "LinkOutcome",
    "copy_tree",
    "remove_tree",
    "reset_directory",
    "symlink_if_absent",
]
