# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load resolver manifests into read-only lookup structures."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

from ..config import LinkfarmConfig
from ..errors import ManifestError
from ..naming import package_key
from .models import HashEntry, LocationEntry, ResolvedGraph

T = TypeVar("T")

_HASH_ADAPTER: TypeAdapter[list[HashEntry]] = TypeAdapter(list[HashEntry])
_LOCATION_ADAPTER: TypeAdapter[list[LocationEntry]] = TypeAdapter(list[LocationEntry])
_GRAPH_ADAPTER: TypeAdapter[ResolvedGraph] = TypeAdapter(ResolvedGraph)


@dataclass(frozen=True, slots=True)
class ManifestBundle:
    """Immutable lookups derived from the resolver manifests.

    Attributes:
        nodes: Graph nodes in manifest order, including the root node.
        hashes: Mapping of node identifier to content hash.
        edges: Mapping of node identifier to its direct dependencies.
        locations: Mapping of ``name@version`` to descriptor location.
        root_node: Reserved identifier of the project itself.
        delimiter: Separator preceding node disambiguation suffixes.
        descriptor_name: File name stripped from cache locations.
    """

    nodes: tuple[str, ...]
    hashes: Mapping[str, str]
    edges: Mapping[str, tuple[str, ...]]
    locations: Mapping[str, str]
    root_node: str = "root"
    delimiter: str = "+"
    descriptor_name: str = "package.json"

    @property
    def packages(self) -> tuple[str, ...]:
        """Return every materializable node (all nodes except the root)."""

        return tuple(node for node in self.nodes if node != self.root_node)

    def dependencies(self, node: str) -> tuple[str, ...]:
        """Return the direct dependencies of ``node`` in edge order."""

        return self.edges.get(node, ())

    def hash_for(self, node: str) -> str:
        """Return the content hash recorded for ``node``.

        Raises:
            ManifestError: If the resolver did not record a hash for ``node``.
        """

        try:
            return self.hashes[node]
        except KeyError:
            raise ManifestError(f"No content hash recorded for node '{node}'") from None

    def location_for(self, node: str) -> Path:
        """Return the cache directory holding the contents of ``node``.

        The manifest records the descriptor file; its file name is stripped so
        the result names the package directory.

        Raises:
            ManifestError: If no location is recorded for the node's package key.
        """

        key = package_key(node, self.delimiter)
        try:
            raw = self.locations[key]
        except KeyError:
            raise ManifestError(f"No cache location recorded for package '{key}' (node '{node}')") from None
        location = Path(raw)
        if location.name == self.descriptor_name:
            return location.parent
        return location


def _read_manifest(path: Path, adapter: TypeAdapter[T]) -> T:
    if not path.is_file():
        raise ManifestError("manifest file not found", source=path)
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise ManifestError(f"unable to read manifest: {exc}", source=path) from exc
    try:
        return adapter.validate_json(payload)
    except ValidationError as exc:
        raise ManifestError(f"invalid manifest: {exc}", source=path) from exc


def load_manifests(project_root: Path, config: LinkfarmConfig) -> ManifestBundle:
    """Parse the hash, graph, and location manifests found under ``project_root``.

    Args:
        project_root: Directory containing the manifests.
        config: Configuration naming the manifest files and layout conventions.

    Returns:
        ManifestBundle: Read-only lookups used by the rest of the pipeline.

    Raises:
        ManifestError: If a manifest is missing or malformed, or an edge
            references a node absent from the node list.
    """

    names = config.manifests
    graph_path = project_root / names.graph_file
    hash_entries = _read_manifest(project_root / names.hash_file, _HASH_ADAPTER)
    graph = _read_manifest(graph_path, _GRAPH_ADAPTER)
    location_entries = _read_manifest(project_root / names.location_file, _LOCATION_ADAPTER)

    known = set(graph.nodes)
    edges: dict[str, list[str]] = {node: [] for node in graph.nodes}
    for link in graph.links:
        missing = [endpoint for endpoint in (link.source, link.target) if endpoint not in known]
        if missing:
            raise ManifestError(
                f"edge {link.source} -> {link.target} references unknown node(s): {', '.join(missing)}",
                source=graph_path,
            )
        edges[link.source].append(link.target)

    return ManifestBundle(
        nodes=tuple(dict.fromkeys(graph.nodes)),
        hashes=MappingProxyType({entry.node: entry.hash for entry in hash_entries}),
        edges=MappingProxyType({node: tuple(targets) for node, targets in edges.items()}),
        locations=MappingProxyType({entry.key: entry.location for entry in location_entries}),
        root_node=config.layout.root_node,
        delimiter=config.layout.variant_delimiter,
        descriptor_name=config.layout.descriptor_name,
    )


__all__ = ["ManifestBundle", "load_manifests"]
