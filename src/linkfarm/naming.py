# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers deriving package names from graph node identifiers."""

from __future__ import annotations

import os
from typing import Final

DEFAULT_VARIANT_DELIMITER: Final[str] = "+"
VERSION_SEPARATOR: Final[str] = "@"


def package_key(node: str, delimiter: str = DEFAULT_VARIANT_DELIMITER) -> str:
    """Return the ``name@version`` key for ``node``.

    Peer-dependency resolution may create duplicate instances of a package
    whose identifiers carry a disambiguation suffix after ``delimiter``.

    Args:
        node: Graph node identifier.
        delimiter: Separator preceding the disambiguation suffix.

    Returns:
        str: Identifier portion preceding the first delimiter.
    """

    return node.split(delimiter, 1)[0]


def package_name(node: str, delimiter: str = DEFAULT_VARIANT_DELIMITER) -> str:
    """Return the package name encoded in ``node``.

    Scoped names start with ``@`` so the version separator is the first
    ``@`` after position zero.

    Args:
        node: Graph node identifier.
        delimiter: Separator preceding the disambiguation suffix.

    Returns:
        str: Package name, or the whole key when no version is present.

    Examples:
        >>> package_name("@scope/c@1.0.0+peer")
        '@scope/c'
        >>> package_name("left-pad@1.3.0")
        'left-pad'
    """

    key = package_key(node, delimiter)
    index = key.find(VERSION_SEPARATOR, 1)
    if index <= 0:
        return key
    return key[:index]


def unscoped_name(name: str) -> str:
    """Return ``name`` without its ``@scope/`` prefix."""

    return name.rsplit("/", 1)[-1]


def sanitize_hash(content_hash: str, replacement: str = "_") -> str:
    """Return ``content_hash`` made safe for use as a single path component.

    Args:
        content_hash: Hash string supplied by the resolver.
        replacement: Character substituted for path separators.

    Returns:
        str: Sanitised directory name.
    """

    sanitized = content_hash.replace("/", replacement)
    if os.sep != "/":
        sanitized = sanitized.replace(os.sep, replacement)
    if os.altsep and os.altsep != "/":
        sanitized = sanitized.replace(os.altsep, replacement)
    return sanitized


__all__ = [
    "DEFAULT_VARIANT_DELIMITER",
    "package_key",
    "package_name",
    "sanitize_hash",
    "unscoped_name",
]
