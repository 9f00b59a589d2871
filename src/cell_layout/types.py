"""Shared type definitions for cell-layout.

Enums used across the input model, layout strategies, routing and export.
"""

from __future__ import annotations

from enum import Enum


class RankDirection(Enum):
    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"

    @classmethod
    def default(cls) -> RankDirection:
        return cls.TB

    @property
    def is_horizontal(self) -> bool:
        return self in (RankDirection.LR, RankDirection.RL)


class PortAlignment(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class CellBound(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @classmethod
    def default(cls) -> CellBound:
        return cls.NORTH


class ExternalType(Enum):
    USER = "user"  # human actor
    EXTERNAL = "external"  # third-party system


class NodeKind(Enum):
    CELL = "cell"
    COMPONENT = "component"
    GATEWAY = "gateway"
    USER = "user"
    EXTERNAL = "external"


class Zone(Enum):
    HEADER = "header"  # above the cell row
    BOTTOM = "bottom"  # below the cell row


# Connection direction markers carried in LayoutEdge.data["direction"]
NORTHBOUND = "northbound"
SOUTHBOUND = "southbound"
