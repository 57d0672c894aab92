# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Content-addressable store holding one copy of each package hash."""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path
from threading import Lock

from ..filesystem import copy_tree, reset_directory
from ..naming import sanitize_hash


class PackageStore:
    """Own the copy-or-reuse decision for non-local packages.

    Destinations are a pure function of the content hash. Copies are
    single-flight per hash: the first caller performs the copy while any
    concurrent caller for the same hash waits on the same future and receives
    the same directory, or the same exception.
    """

    def __init__(
        self,
        root: Path,
        *,
        separator_replacement: str = "_",
        skip_prefix: str | None = ".yarn-",
    ) -> None:
        """Initialise the store rooted at ``root``.

        Args:
            root: Absolute directory holding the store.
            separator_replacement: Character replacing path separators in hashes.
            skip_prefix: Cache-marker prefix of files never copied into the store.
        """

        self.root = root
        self._replacement = separator_replacement
        self._skip_prefix = skip_prefix
        self._lock = Lock()
        self._copies: dict[str, Future[Path]] = {}
        self._copies_performed = 0

    @property
    def copies_performed(self) -> int:
        """Return how many physical copies were made since the last reset."""

        with self._lock:
            return self._copies_performed

    def reset(self) -> None:
        """Destroy and recreate the store root.

        Must not run concurrently with :meth:`ensure_copied`.
        """

        with self._lock:
            self._copies.clear()
            self._copies_performed = 0
        reset_directory(self.root)

    def path_for(self, content_hash: str) -> Path:
        """Return the store directory for ``content_hash`` without copying."""

        return self.root / sanitize_hash(content_hash, self._replacement)

    def ensure_copied(self, content_hash: str, source: Path) -> Path:
        """Copy ``source`` into the store unless ``content_hash`` is already present.

        Args:
            content_hash: Content hash of the package contents.
            source: Cache directory holding the package files.

        Returns:
            Path: Store directory holding the package contents.

        Raises:
            OSError: Propagated from the underlying copy.
        """

        with self._lock:
            existing = self._copies.get(content_hash)
            if existing is None:
                pending: Future[Path] = Future()
                self._copies[content_hash] = pending
        if existing is not None:
            return existing.result()

        destination = self.path_for(content_hash)
        try:
            copy_tree(source, destination, skip_prefix=self._skip_prefix)
        except BaseException as exc:
            pending.set_exception(exc)
            raise
        with self._lock:
            self._copies_performed += 1
        pending.set_result(destination)
        return destination


__all__ = ["PackageStore"]
