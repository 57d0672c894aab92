# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from linkfarm.config import LinkfarmConfig
from linkfarm.context import InstallContext


@dataclass
class FakeProject:
    """Build resolver manifests and a package cache on disk."""

    root: Path
    cache: Path
    nodes: list[str] = field(default_factory=lambda: ["root"])
    links: list[dict[str, str]] = field(default_factory=list)
    hashes: list[dict[str, str]] = field(default_factory=list)
    locations: list[dict[str, str]] = field(default_factory=list)

    def add_package(
        self,
        node: str,
        *,
        content_hash: str | None = None,
        descriptor: Mapping[str, Any] | None = None,
        files: Mapping[str, str] | None = None,
        workspace: str | None = None,
    ) -> Path:
        """Register ``node`` and create its files; return the package directory.

        Packages land in the external cache unless ``workspace`` names a
        directory inside the project. Nodes sharing a package key reuse the
        directory created for the first one.
        """

        key = node.split("+", 1)[0]
        name, _, version = key[1:].partition("@")
        name = key[0] + name
        if node not in self.nodes:
            self.nodes.append(node)
        if content_hash is not None:
            self.hashes.append({"node": node, "hash": content_hash})
        existing = next((entry for entry in self.locations if f"{entry['name']}@{entry['version']}" == key), None)
        if existing is not None:
            return Path(existing["location"]).parent

        if workspace is not None:
            directory = self.root / workspace
        else:
            directory = self.cache / key.replace("/", "__")
        directory.mkdir(parents=True, exist_ok=True)
        payload = {"name": name, "version": version, **(descriptor or {})}
        (directory / "package.json").write_text(json.dumps(payload), encoding="utf-8")
        for relative, content in (files or {}).items():
            target = directory / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        self.locations.append({"name": name, "version": version, "location": str(directory / "package.json")})
        return directory

    def depend(self, source: str, *targets: str) -> None:
        for target in targets:
            self.links.append({"source": source, "target": target})

    def write(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / "hash.json").write_text(json.dumps(self.hashes), encoding="utf-8")
        (self.root / "resolved_graph.json").write_text(
            json.dumps({"nodes": self.nodes, "links": self.links}),
            encoding="utf-8",
        )
        (self.root / "map.json").write_text(json.dumps(self.locations), encoding="utf-8")

    def config(self, **execution: Any) -> LinkfarmConfig:
        settings: dict[str, Any] = {"jobs": 4, "run_postinstall": True}
        settings.update(execution)
        return LinkfarmConfig.model_validate({"use_emoji": False, "execution": settings})

    def context(self, **execution: Any) -> InstallContext:
        self.write()
        return InstallContext.load(self.root, config=self.config(**execution))

    @property
    def store(self) -> Path:
        return self.root.resolve() / ".package_store"


@pytest.fixture
def project(tmp_path: Path) -> FakeProject:
    """Return an empty fake project whose cache lives outside the working tree."""

    root = tmp_path / "project"
    root.mkdir()
    cache = tmp_path / "cache"
    cache.mkdir()
    return FakeProject(root=root, cache=cache)


def _snapshot_tree(root: Path) -> dict[str, tuple[str, str]]:
    entries: dict[str, tuple[str, str]] = {}
    for directory, subdirs, files in os.walk(root):
        base = Path(directory)
        for name in [*subdirs, *files]:
            path = base / name
            key = path.relative_to(root).as_posix()
            if path.is_symlink():
                entries[key] = ("link", os.readlink(path))
            elif path.is_dir():
                entries[key] = ("dir", "")
            else:
                entries[key] = ("file", path.read_text(encoding="utf-8"))
    return entries


@pytest.fixture
def snapshot_tree():
    """Return a helper describing every file, directory, and link below a root."""

    return _snapshot_tree
