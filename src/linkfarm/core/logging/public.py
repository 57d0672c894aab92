# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console messages emitted while materializing a project."""

from __future__ import annotations

from typing import Final, NamedTuple

from rich.rule import Rule
from rich.text import Text

from linkfarm.runtime.console.manager import detect_tty, get_console_manager


class _Level(NamedTuple):
    glyph: str
    style: str


_INFO: Final = _Level("ℹ️ ", "cyan")
_OK: Final = _Level("✅ ", "green")
_WARN: Final = _Level("⚠️ ", "yellow")
_FAIL: Final = _Level("❌ ", "red")


def _emit(level: _Level, msg: str, *, use_emoji: bool, use_color: bool | None) -> None:
    """Print ``msg`` with the glyph and style of ``level``.

    Args:
        level: Message severity.
        msg: Text to print.
        use_emoji: Whether the severity glyph is prepended.
        use_color: Explicit colour flag; ``None`` defers to TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji)
    text = Text(f"{level.glyph if use_emoji else ''}{msg}")
    if color_enabled:
        text.stylize(level.style)
    console.print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a header separating blocks of output."""

    console = get_console_manager().get(color=use_color, emoji=True)
    if use_color:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _emit(_INFO, msg, use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    _emit(_OK, msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Report a tolerated problem, such as a skipped link."""

    _emit(_WARN, msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Report a failure, such as a broken post-install hook."""

    _emit(_FAIL, msg, use_emoji=use_emoji, use_color=use_color)
