# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read-only context shared by every materialization component."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from .config import LinkfarmConfig, load_config
from .manifests import ManifestBundle, load_manifests

InstallLocations = Mapping[str, Path]


@dataclass(frozen=True, slots=True)
class InstallContext:
    """Immutable description of a materialization run.

    Attributes:
        project_root: Resolved working tree of the project being installed.
        config: Effective configuration.
        manifests: Lookups loaded from the resolver manifests.
    """

    project_root: Path
    config: LinkfarmConfig
    manifests: ManifestBundle

    @classmethod
    def load(cls, project_root: Path, *, config: LinkfarmConfig | None = None) -> InstallContext:
        """Build a context by reading configuration and manifests under ``project_root``.

        Args:
            project_root: Project working tree.
            config: Optional pre-resolved configuration.

        Returns:
            InstallContext: Context ready for a materialization run.
        """

        root = project_root.resolve()
        resolved_config = config if config is not None else load_config(root)
        return cls(project_root=root, config=resolved_config, manifests=load_manifests(root, resolved_config))

    @property
    def store_root(self) -> Path:
        """Return the absolute path of the package store."""

        return self.project_root / self.config.layout.store_dir

    @property
    def use_emoji(self) -> bool:
        return self.config.use_emoji

    def modules_dir(self, install_location: Path) -> Path:
        """Return the dependency-link directory under ``install_location``."""

        return install_location / self.config.layout.modules_dir

    def bin_dir(self, install_location: Path) -> Path:
        """Return the executable-link directory under ``install_location``."""

        return self.modules_dir(install_location) / self.config.layout.bin_dir


def freeze_locations(locations: Mapping[str, Path]) -> InstallLocations:
    """Return a read-only view of ``locations``."""

    return MappingProxyType(dict(locations))


__all__ = ["InstallContext", "InstallLocations", "freeze_locations"]
