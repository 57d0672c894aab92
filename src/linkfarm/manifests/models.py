# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models describing the three resolver manifests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HashEntry(BaseModel):
    """Content hash recorded for a single graph node."""

    model_config = ConfigDict(frozen=True)

    node: str
    hash: str = Field(min_length=1)


class GraphLink(BaseModel):
    """Directed ``source -> target`` dependency edge."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class ResolvedGraph(BaseModel):
    """Resolved dependency graph as produced by the resolver."""

    model_config = ConfigDict(frozen=True)

    nodes: list[str]
    links: list[GraphLink] = Field(default_factory=list)


class LocationEntry(BaseModel):
    """Package cache location keyed by ``name`` and ``version``."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    location: str

    @property
    def key(self) -> str:
        """Return the ``name@version`` package key."""

        return f"{self.name}@{self.version}"


__all__ = ["GraphLink", "HashEntry", "LocationEntry", "ResolvedGraph"]
