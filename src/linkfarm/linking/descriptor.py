# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Package descriptor (``package.json``) parsing."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import DescriptorError
from ..naming import unscoped_name


class PackageDescriptor(BaseModel):
    """Subset of a package descriptor relevant to materialization."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    bin: str | dict[str, str] | None = None
    scripts: dict[str, Any] = Field(default_factory=dict)

    def commands(self, package_name: str) -> dict[str, str]:
        """Return the executables exposed by the package.

        A string ``bin`` exposes one command named after the unscoped package
        name; a mapping is returned unchanged.

        Args:
            package_name: Name the package is linked under.

        Returns:
            dict[str, str]: Command names mapped to package-relative script paths.
        """

        if self.bin is None:
            return {}
        if isinstance(self.bin, str):
            return {unscoped_name(package_name): self.bin}
        return dict(self.bin)

    @property
    def postinstall(self) -> str | None:
        """Return the post-install script, when declared."""

        script = self.scripts.get("postinstall")
        if isinstance(script, str) and script.strip():
            return script
        return None


class DescriptorReader:
    """Read package descriptors once per materialization run.

    Many dependents read the same dependency's descriptor, so parsed results
    are cached per path. Safe for concurrent use.
    """

    def __init__(self, descriptor_name: str = "package.json") -> None:
        self._descriptor_name = descriptor_name
        self._lock = Lock()
        self._cache: dict[Path, PackageDescriptor | None] = {}

    def read(self, location: Path) -> PackageDescriptor | None:
        """Return the descriptor stored in ``location``.

        Args:
            location: Package directory.

        Returns:
            PackageDescriptor | None: Parsed descriptor, or ``None`` when the
            package has no descriptor.

        Raises:
            DescriptorError: If the descriptor exists but is not valid JSON
                or does not match the expected shape.
        """

        path = location / self._descriptor_name
        with self._lock:
            if path in self._cache:
                return self._cache[path]
        descriptor = _parse(path)
        with self._lock:
            self._cache.setdefault(path, descriptor)
        return descriptor


def _parse(path: Path) -> PackageDescriptor | None:
    try:
        payload = path.read_bytes()
    except FileNotFoundError:
        return None
    try:
        return PackageDescriptor.model_validate_json(payload)
    except ValidationError as exc:
        raise DescriptorError(path, str(exc)) from exc


__all__ = ["DescriptorReader", "PackageDescriptor"]
