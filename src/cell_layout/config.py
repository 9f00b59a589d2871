"""Centralized configuration for cell-layout."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from cell_layout.types import RankDirection


@dataclass(frozen=True)
class LayoutOptions:
    """Immutable options for one layout pass.

    A new value is derived with ``with_options``; strategies are built from a
    value and never mutate it.
    """

    # Hierarchical layout
    rank_direction: RankDirection = RankDirection.TB
    node_spacing: float = 80
    rank_spacing: float = 100
    edge_spacing: float = 50

    # Cell sizing
    min_cell_size: float = 300
    cell_padding_multiplier: float = 1.5
    cell_min_padding: float = 60

    # External actor zones
    external_spacing: float = 50
    external_offset: float = 150

    # Edge routing
    curve_radius: float = 10
    bidirectional_offset: float = 20

    # Overlap handling / grid fallback
    overlap_padding: float = 20
    grid_spacing: float = 100
    grid_vertical_offset: float = 100

    # Margin around the whole diagram
    diagram_padding: float = 50

    def __post_init__(self) -> None:
        if not isinstance(self.rank_direction, RankDirection):
            object.__setattr__(self, "rank_direction", parse_rank_direction(self.rank_direction))
        for f in fields(self):
            if f.name == "rank_direction":
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"'{f.name}' must be a number, got {type(value).__name__}")
            if not math.isfinite(value):
                raise ValueError(f"'{f.name}' must be finite, got {value}")
            if value < 0:
                raise ValueError(f"'{f.name}' must not be negative, got {value}")

    def with_options(self, **changes: Any) -> LayoutOptions:
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LayoutOptions:
        """Build options from a mapping with camelCase or snake_case keys."""
        if not isinstance(data, Mapping):
            raise ValueError(f"Layout options must be an object, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name not in known:
                raise ValueError(f"Unknown layout option '{key}'")
            kwargs[name] = value
        return cls(**kwargs)


def parse_rank_direction(value: object) -> RankDirection:
    """Accept a RankDirection or one of 'TB', 'TD', 'BT', 'LR', 'RL'."""
    if isinstance(value, RankDirection):
        return value
    key = str(value).upper()
    if key == "TD":
        key = "TB"
    try:
        return RankDirection(key)
    except ValueError:
        raise ValueError(f"Unknown direction '{value}'; use TB, BT, LR, or RL") from None


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


DEFAULT_OPTIONS = LayoutOptions()
