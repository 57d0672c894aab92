# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run declared post-install scripts through the host package manager."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..context import InstallContext
from ..core.logging import fail
from ..core.runtime.process import CommandOptions, SubprocessExecutionError, run_command
from ..errors import DescriptorError
from ..filesystem import display_relative_path
from ..linking import DescriptorReader

_STDERR_TAIL_LINES = 20


class PostinstallStatus(str, Enum):
    """Enumerate post-install outcomes."""

    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class PostinstallOutcome:
    """Result of running (or skipping) a node's post-install hook."""

    node: str
    location: Path
    status: PostinstallStatus
    returncode: int | None = None
    message: str | None = None


class PostinstallOrchestrator:
    """Invoke ``scripts.postinstall`` for packages that declare one.

    Failures are isolated per package: they are logged and reported but never
    raised, so one broken hook cannot block the rest of the run.
    """

    def __init__(self, context: InstallContext, descriptors: DescriptorReader) -> None:
        self._context = context
        self._descriptors = descriptors

    def run(self, node: str, location: Path) -> PostinstallOutcome:
        """Run the post-install hook of ``node`` inside ``location``.

        Args:
            node: Graph node identifier, used for reporting.
            location: Install location used as the working directory.

        Returns:
            PostinstallOutcome: ``SKIPPED`` when no script is declared,
            otherwise the success or failure of the hook.
        """

        try:
            descriptor = self._descriptors.read(location)
        except DescriptorError as exc:
            return self._failed(node, location, None, str(exc))
        if descriptor is None or descriptor.postinstall is None:
            return PostinstallOutcome(node=node, location=location, status=PostinstallStatus.SKIPPED)

        execution = self._context.config.execution
        options = CommandOptions(
            cwd=location,
            timeout=execution.postinstall_timeout,
            capture_output=True,
            discard_stdin=True,
        )
        options = options.with_overrides(env=options.merged_env({"PATH": self._search_path(location)}))
        try:
            completed = run_command(execution.postinstall_command, options=options)
        except SubprocessExecutionError as exc:
            return self._failed(node, location, exc.returncode, _tail(exc.stderr) or str(exc))
        except OSError as exc:
            return self._failed(node, location, None, str(exc))
        return PostinstallOutcome(
            node=node,
            location=location,
            status=PostinstallStatus.SUCCEEDED,
            returncode=completed.returncode,
        )

    def _search_path(self, location: Path) -> str:
        inherited = os.environ.get("PATH", "")
        bin_dir = str(self._context.bin_dir(location))
        return f"{bin_dir}{os.pathsep}{inherited}" if inherited else bin_dir

    def _failed(self, node: str, location: Path, returncode: int | None, message: str) -> PostinstallOutcome:
        where = display_relative_path(location, self._context.project_root)
        status = f" (exit status {returncode})" if returncode is not None else ""
        fail(f"postinstall failed for {node} in {where}{status}: {message}", use_emoji=self._context.use_emoji)
        return PostinstallOutcome(
            node=node,
            location=location,
            status=PostinstallStatus.FAILED,
            returncode=returncode,
            message=message,
        )


def _tail(stream: str | None) -> str:
    if not stream:
        return ""
    return "\n".join(stream.strip().splitlines()[-_STDERR_TAIL_LINES:])


__all__ = ["PostinstallOrchestrator", "PostinstallOutcome", "PostinstallStatus"]
