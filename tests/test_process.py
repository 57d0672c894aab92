# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the subprocess wrapper."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from linkfarm.core.runtime.process import (
    TIMEOUT_RETURNCODE,
    CommandOptions,
    SubprocessExecutionError,
    run_command,
)


def test_run_command_captures_output(tmp_path: Path) -> None:
    options = CommandOptions(cwd=tmp_path, capture_output=True)

    completed = run_command([sys.executable, "-c", "import os; print(os.getcwd())"], options=options)

    assert completed.returncode == 0
    assert Path(completed.stdout.strip()).resolve() == tmp_path.resolve()


def test_non_zero_exit_raises_with_stderr() -> None:
    options = CommandOptions(capture_output=True)

    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command([sys.executable, "-c", "import sys; sys.stderr.write('nope'); sys.exit(5)"], options=options)

    assert excinfo.value.returncode == 5
    assert excinfo.value.stderr == "nope"


def test_non_zero_exit_without_check_returns() -> None:
    options = CommandOptions(capture_output=True, check=False)

    completed = run_command([sys.executable, "-c", "raise SystemExit(7)"], options=options)

    assert completed.returncode == 7


def test_timeout_maps_to_timeout_returncode() -> None:
    options = CommandOptions(capture_output=True, check=False, timeout=0.2)

    completed = run_command([sys.executable, "-c", "import time; time.sleep(5)"], options=options)

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert "timed out" in completed.stderr


def test_unknown_executable_raises_file_not_found() -> None:
    with pytest.raises(FileNotFoundError, match="not found on PATH"):
        run_command(["linkfarm-missing-executable"])


def test_empty_command_rejected() -> None:
    with pytest.raises(ValueError):
        run_command([])


def test_with_overrides_validates_changes(tmp_path: Path) -> None:
    options = CommandOptions()

    assert options.with_overrides(cwd=tmp_path).cwd == tmp_path
    with pytest.raises(TypeError, match="bogus"):
        options.with_overrides(bogus=True)
    with pytest.raises(ValueError):
        options.with_overrides(timeout=-1)


def test_merged_env_layers_extra_values() -> None:
    options = CommandOptions(env={"A": "1", "B": "2"})

    assert options.merged_env({"B": "3", "C": "4"}) == {"A": "1", "B": "3", "C": "4"}


def test_discard_stdin_gives_child_empty_input() -> None:
    options = CommandOptions(capture_output=True, discard_stdin=True, timeout=10)

    completed = run_command([sys.executable, "-c", "import sys; print(repr(sys.stdin.read()))"], options=options)

    assert completed.stdout.strip() == "''"
