# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from linkfarm.config import ConfigLoader, LinkfarmConfig, default_io_jobs, load_config
from linkfarm.errors import ConfigError


def test_defaults_without_config_files(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config == LinkfarmConfig()
    assert config.execution.jobs == default_io_jobs()
    assert config.execution.postinstall_command == ["yarn", "postinstall"]
    assert config.layout.store_dir == ".package_store"
    assert config.manifests.graph_file == "resolved_graph.json"


def test_precedence_pyproject_then_project_file_then_overrides(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "[tool.linkfarm]\nuse_emoji = false\n\n[tool.linkfarm.execution]\njobs = 2\nrun_postinstall = false\n",
        encoding="utf-8",
    )
    (tmp_path / ".linkfarm.toml").write_text("[execution]\njobs = 3\n", encoding="utf-8")

    loader = ConfigLoader.for_root(tmp_path, overrides={"execution": {"run_postinstall": True}})
    config = loader.load()

    assert config.use_emoji is False
    assert config.execution.jobs == 3
    assert config.execution.run_postinstall is True
    assert loader.source_names[-1] == "overrides"


def test_pyproject_without_section_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")

    assert load_config(tmp_path) == LinkfarmConfig()


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".linkfarm.toml").write_text("[execution\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"execution": {"jobs": 0}},
        {"layout": {"store_dir": "a/b"}},
        {"layout": {"bin_dir": ".."}},
        {"execution": {"postinstall_command": []}},
        {"unknown": True},
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, overrides: dict) -> None:
    with pytest.raises(ConfigError, match="Invalid linkfarm configuration"):
        load_config(tmp_path, overrides)
