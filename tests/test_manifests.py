# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for resolver manifest loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from linkfarm.config import LinkfarmConfig
from linkfarm.errors import ManifestError
from linkfarm.manifests import load_manifests


def _write(root: Path, *, hashes=None, graph=None, locations=None) -> None:
    (root / "hash.json").write_text(json.dumps(hashes if hashes is not None else []), encoding="utf-8")
    (root / "resolved_graph.json").write_text(
        json.dumps(graph if graph is not None else {"nodes": ["root"], "links": []}),
        encoding="utf-8",
    )
    (root / "map.json").write_text(json.dumps(locations if locations is not None else []), encoding="utf-8")


def test_load_manifests_builds_lookups(tmp_path: Path) -> None:
    _write(
        tmp_path,
        hashes=[{"node": "a@1.0.0", "hash": "h1"}, {"node": "b@2.0.0+peer", "hash": "h2"}],
        graph={
            "nodes": ["root", "a@1.0.0", "b@2.0.0+peer"],
            "links": [
                {"source": "root", "target": "a@1.0.0"},
                {"source": "a@1.0.0", "target": "b@2.0.0+peer"},
            ],
        },
        locations=[
            {"name": "a", "version": "1.0.0", "location": "/cache/a/package.json"},
            {"name": "b", "version": "2.0.0", "location": "/cache/b"},
        ],
    )

    bundle = load_manifests(tmp_path, LinkfarmConfig())

    assert bundle.packages == ("a@1.0.0", "b@2.0.0+peer")
    assert bundle.dependencies("root") == ("a@1.0.0",)
    assert bundle.dependencies("a@1.0.0") == ("b@2.0.0+peer",)
    assert bundle.dependencies("b@2.0.0+peer") == ()
    assert bundle.hash_for("b@2.0.0+peer") == "h2"
    assert bundle.location_for("a@1.0.0") == Path("/cache/a")
    assert bundle.location_for("b@2.0.0+peer") == Path("/cache/b")


def test_lookups_are_read_only(tmp_path: Path) -> None:
    _write(tmp_path, hashes=[{"node": "a@1", "hash": "h1"}])

    bundle = load_manifests(tmp_path, LinkfarmConfig())

    with pytest.raises(TypeError):
        bundle.hashes["a@1"] = "other"  # type: ignore[index]


def test_missing_hash_raises(tmp_path: Path) -> None:
    _write(tmp_path, graph={"nodes": ["root", "a@1"], "links": []})

    bundle = load_manifests(tmp_path, LinkfarmConfig())

    with pytest.raises(ManifestError, match="a@1"):
        bundle.hash_for("a@1")


def test_missing_location_raises(tmp_path: Path) -> None:
    _write(tmp_path, graph={"nodes": ["root", "@scope/a@1+x"], "links": []})

    bundle = load_manifests(tmp_path, LinkfarmConfig())

    with pytest.raises(ManifestError, match="@scope/a@1"):
        bundle.location_for("@scope/a@1+x")


def test_missing_manifest_names_the_file(tmp_path: Path) -> None:
    _write(tmp_path)
    (tmp_path / "map.json").unlink()

    with pytest.raises(ManifestError, match="map.json"):
        load_manifests(tmp_path, LinkfarmConfig())


def test_malformed_manifest_raises(tmp_path: Path) -> None:
    _write(tmp_path)
    (tmp_path / "hash.json").write_text('{"node": "a"}', encoding="utf-8")

    with pytest.raises(ManifestError, match="invalid manifest"):
        load_manifests(tmp_path, LinkfarmConfig())


def test_edge_to_unknown_node_raises(tmp_path: Path) -> None:
    _write(tmp_path, graph={"nodes": ["root"], "links": [{"source": "root", "target": "ghost@1"}]})

    with pytest.raises(ManifestError, match="ghost@1"):
        load_manifests(tmp_path, LinkfarmConfig())


def test_manifest_names_follow_config(tmp_path: Path) -> None:
    (tmp_path / "hashes.json").write_text("[]", encoding="utf-8")
    (tmp_path / "graph.json").write_text('{"nodes": ["top", "a@1"]}', encoding="utf-8")
    (tmp_path / "locations.json").write_text("[]", encoding="utf-8")
    config = LinkfarmConfig.model_validate(
        {
            "manifests": {"hash_file": "hashes.json", "graph_file": "graph.json", "location_file": "locations.json"},
            "layout": {"root_node": "top"},
        },
    )

    bundle = load_manifests(tmp_path, config)

    assert bundle.packages == ("a@1",)
