# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for dependency and executable symlink creation."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from conftest import FakeProject

from linkfarm.context import freeze_locations
from linkfarm.errors import DescriptorError
from linkfarm.filesystem import LinkOutcome
from linkfarm.install import InstallLocationResolver
from linkfarm.linking import DescriptorReader, PackageDescriptor, SymlinkFarm
from linkfarm.store import PackageStore


def _build_farm(project: FakeProject, *, executor=None) -> tuple[SymlinkFarm, dict[str, Path]]:
    context = project.context(run_postinstall=False)
    store = PackageStore(context.store_root)
    store.reset()
    resolver = InstallLocationResolver(context, store)
    locations = {node: resolver.resolve(node).location for node in context.manifests.packages}
    farm = SymlinkFarm(context, freeze_locations(locations), DescriptorReader(), executor=executor)
    for location in dict.fromkeys(locations.values()):
        farm.prepare(location)
    return farm, locations


def test_links_dependencies_and_self(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    project.add_package("@scope/b@2.0.0", content_hash="h2")
    project.depend("root", "a@1.0.0")
    project.depend("a@1.0.0", "@scope/b@2.0.0")
    farm, locations = _build_farm(project)

    report = farm.materialize("a@1.0.0")

    modules = locations["a@1.0.0"] / "node_modules"
    assert [entry.name for entry in report.dependencies] == ["@scope/b", "a"]
    assert report.links_created == 2
    assert (modules / "@scope" / "b").is_symlink()
    assert (modules / "@scope" / "b").resolve() == locations["@scope/b@2.0.0"].resolve()
    assert os.readlink(modules / "a") == os.path.join("..")
    assert (modules / "a").resolve() == locations["a@1.0.0"].resolve()
    assert (modules / ".bin").is_dir()


def test_links_are_relative(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    project.add_package("b@1.0.0", content_hash="h2")
    project.depend("a@1.0.0", "b@1.0.0")
    farm, locations = _build_farm(project)

    farm.materialize("a@1.0.0")

    link = locations["a@1.0.0"] / "node_modules" / "b"
    assert not os.path.isabs(os.readlink(link))
    assert os.readlink(link) == os.path.join("..", "..", "h2")


def test_aliased_nodes_report_already_linked(project: FakeProject) -> None:
    project.add_package("a@1.0.0+x", content_hash="h1")
    project.add_package("a@1.0.0+y", content_hash="h1")
    project.add_package("b@1.0.0", content_hash="h2")
    project.depend("a@1.0.0+x", "b@1.0.0")
    project.depend("a@1.0.0+y", "b@1.0.0")
    farm, _ = _build_farm(project)

    first = farm.materialize("a@1.0.0+x")
    second = farm.materialize("a@1.0.0+y")

    assert [entry.outcome for entry in first.dependencies] == [LinkOutcome.CREATED, LinkOutcome.CREATED]
    assert [entry.outcome for entry in second.dependencies] == [
        LinkOutcome.ALREADY_LINKED,
        LinkOutcome.ALREADY_LINKED,
    ]
    assert second.conflicts == []


def test_conflicting_dependency_is_skipped_with_bins(project: FakeProject) -> None:
    project.add_package("a@1.0.0+x", content_hash="h1")
    project.add_package("a@1.0.0+y", content_hash="h1")
    project.add_package("b@1.0.0+x", content_hash="h2", descriptor={"bin": "bin.js"})
    project.add_package("b@1.0.0+y", content_hash="h3")
    project.depend("a@1.0.0+x", "b@1.0.0+x")
    project.depend("a@1.0.0+y", "b@1.0.0+y")
    farm, locations = _build_farm(project)
    (locations["b@1.0.0+y"] / "package.json").write_text('{"name": "b", "bin": {"other": "o.js"}}', encoding="utf-8")

    farm.materialize("a@1.0.0+x")
    report = farm.materialize("a@1.0.0+y")

    modules = locations["a@1.0.0+x"] / "node_modules"
    assert [entry.name for entry in report.conflicts] == ["b"]
    assert report.conflicts[0].bins is None
    assert (modules / "b").resolve() == locations["b@1.0.0+x"].resolve()
    assert (modules / ".bin" / "b").is_symlink()
    assert not (modules / ".bin" / "other").exists()


def test_string_bin_is_named_after_unscoped_package(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    project.add_package("@scope/c@1.0.0", content_hash="h2", descriptor={"bin": "./cli.js"}, files={"cli.js": "#!"})
    project.depend("a@1.0.0", "@scope/c@1.0.0")
    farm, locations = _build_farm(project)

    report = farm.materialize("a@1.0.0")

    link = locations["a@1.0.0"] / "node_modules" / ".bin" / "c"
    assert link.is_symlink()
    assert link.resolve() == (locations["@scope/c@1.0.0"] / "cli.js").resolve()
    assert report.dependencies[0].bins is not None
    assert report.dependencies[0].bins.created == ["c"]


def test_mapping_bin_links_every_command(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    project.add_package(
        "tools@1.0.0",
        content_hash="h2",
        descriptor={"bin": {"build": "bin/build.js", "serve": "bin/serve.js"}},
        files={"bin/build.js": "", "bin/serve.js": ""},
    )
    project.depend("a@1.0.0", "tools@1.0.0")
    farm, locations = _build_farm(project)

    farm.materialize("a@1.0.0")

    bin_dir = locations["a@1.0.0"] / "node_modules" / ".bin"
    assert sorted(entry.name for entry in bin_dir.iterdir()) == ["build", "serve"]
    assert (bin_dir / "serve").resolve() == (locations["tools@1.0.0"] / "bin" / "serve.js").resolve()


def test_bin_collision_keeps_first_command(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    project.add_package("b@1.0.0", content_hash="h2", descriptor={"bin": {"tool": "b.js"}})
    project.add_package("c@1.0.0", content_hash="h3", descriptor={"bin": {"tool": "c.js"}})
    project.depend("a@1.0.0", "b@1.0.0", "c@1.0.0")
    farm, locations = _build_farm(project)

    report = farm.materialize("a@1.0.0")

    tool = locations["a@1.0.0"] / "node_modules" / ".bin" / "tool"
    assert tool.resolve() == (locations["b@1.0.0"] / "b.js").resolve()
    assert report.bin_collisions == ["tool"]
    assert report.conflicts == []


def test_unsafe_command_names_are_rejected(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    project.add_package("b@1.0.0", content_hash="h2", descriptor={"bin": {"../escape": "x.js", "ok": "ok.js"}})
    project.depend("a@1.0.0", "b@1.0.0")
    farm, locations = _build_farm(project)

    report = farm.materialize("a@1.0.0")

    bins = report.dependencies[0].bins
    assert bins is not None
    assert bins.rejected == ["../escape"]
    assert bins.created == ["ok"]
    assert not (locations["a@1.0.0"] / "node_modules" / "escape").exists()


def test_missing_descriptor_links_without_bins(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    source = project.add_package("b@1.0.0", content_hash="h2")
    (source / "package.json").unlink()
    (source / "index.js").write_text("", encoding="utf-8")
    project.depend("a@1.0.0", "b@1.0.0")
    farm, locations = _build_farm(project)

    report = farm.materialize("a@1.0.0")

    assert report.dependencies[0].outcome is LinkOutcome.CREATED
    assert report.dependencies[0].bins is not None
    assert report.dependencies[0].bins.created == []
    assert (locations["a@1.0.0"] / "node_modules" / "b").is_symlink()


def test_malformed_descriptor_raises(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    source = project.add_package("b@1.0.0", content_hash="h2")
    (source / "package.json").write_text("{not json", encoding="utf-8")
    project.depend("a@1.0.0", "b@1.0.0")
    farm, _ = _build_farm(project)

    with pytest.raises(DescriptorError, match="package.json"):
        farm.materialize("a@1.0.0")


def test_prepare_clears_stale_commands(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    farm, locations = _build_farm(project)
    stale = locations["a@1.0.0"] / "node_modules" / ".bin" / "stale"
    stale.write_text("", encoding="utf-8")

    farm.prepare(locations["a@1.0.0"])

    assert not stale.exists()


def test_executor_links_dependencies_concurrently(project: FakeProject) -> None:
    project.add_package("a@1.0.0", content_hash="h1")
    deps = [f"dep{index}@1.0.0" for index in range(6)]
    for index, dep in enumerate(deps):
        project.add_package(dep, content_hash=f"d{index}", descriptor={"bin": {f"cmd{index}": "x.js"}})
    project.depend("a@1.0.0", *deps)

    with ThreadPoolExecutor(max_workers=4) as pool:
        farm, locations = _build_farm(project, executor=pool)
        report = farm.materialize("a@1.0.0")

    modules = locations["a@1.0.0"] / "node_modules"
    assert [entry.dependency for entry in report.dependencies] == [*deps, "a@1.0.0"]
    assert report.links_created == len(deps) + 1
    assert len(list((modules / ".bin").iterdir())) == len(deps)


def test_descriptor_commands_and_postinstall() -> None:
    descriptor = PackageDescriptor.model_validate(
        {"name": "@scope/pkg", "bin": "run.js", "scripts": {"postinstall": "node setup.js", "test": "x"}},
    )

    assert descriptor.commands("@scope/pkg") == {"pkg": "run.js"}
    assert descriptor.postinstall == "node setup.js"
    assert PackageDescriptor().commands("x") == {}
    assert PackageDescriptor.model_validate({"scripts": {"postinstall": " "}}).postinstall is None
