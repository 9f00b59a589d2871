"""Layout types shared across strategies, the engine and exporters."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cell_layout.types import NodeKind, PortAlignment

if TYPE_CHECKING:
    from cell_layout.ir.diagram import LayoutEdge, LayoutNode
    from cell_layout.ir.validation import LayoutWarning


@dataclass(frozen=True)
class Position:
    """A 2D point; top-left corner when it locates a node."""

    x: float
    y: float

    def translate(self, dx: float, dy: float) -> Position:
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box; ``BoundingBox.empty()`` stands in for "no inputs"."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def empty(cls) -> BoundingBox:
        return cls(0, 0, 0, 0)

    @classmethod
    def from_rects(cls, rects: Iterable[tuple[float, float, float, float]]) -> BoundingBox:
        """Tightest box around ``(x, y, width, height)`` rectangles."""
        min_x = min_y = float("inf")
        max_x = max_y = float("-inf")
        for x, y, w, h in rects:
            min_x = min(min_x, x)
            min_y = min(min_y, y)
            max_x = max(max_x, x + w)
            max_y = max(max_y, y + h)
        if min_x == float("inf"):
            return cls.empty()
        return cls(min_x, min_y, max_x, max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    @property
    def center_y(self) -> float:
        return (self.min_y + self.max_y) / 2


@dataclass(frozen=True)
class CellDimensions:
    """Square cell size plus the shift that centres children inside it."""

    width: float
    height: float
    content_offset: Position = field(default_factory=lambda: Position(0, 0))


@dataclass(frozen=True)
class NodePosition:
    """A placed node: top-left corner, size and what kind of node it is."""

    x: float
    y: float
    width: float
    height: float
    kind: NodeKind = NodeKind.COMPONENT
    parent: str | None = None

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class EdgePath:
    """A routed edge and the SVG path drawn for it."""

    id: str
    source: str
    target: str
    path: str
    source_port: PortAlignment | None = None
    target_port: PortAlignment | None = None
    source_point: Position | None = None
    target_point: Position | None = None


@dataclass
class LayoutResult:
    """Self-contained layout output: everything renderers need."""

    nodes: dict[str, NodePosition] = field(default_factory=dict)
    edges: dict[str, EdgePath] = field(default_factory=dict)
    cell_dimensions: dict[str, CellDimensions] = field(default_factory=dict)
    bounds: BoundingBox = field(default_factory=BoundingBox.empty)
    warnings: list[LayoutWarning] = field(default_factory=list)


@dataclass
class CellLayoutResult:
    """Component positions of one cell, relative to the cell's content origin."""

    node_positions: dict[str, Position]
    dimensions: CellDimensions
    bounds: BoundingBox


@dataclass
class SeparatedGraphs:
    linked_nodes: list[LayoutNode]
    linked_edges: list[LayoutEdge]
    unlinked_nodes: list[LayoutNode]


@dataclass(frozen=True)
class NodeOverlap:
    node_a: str
    node_b: str
    overlap_area: float


# Size assumed for a positioned id whose node data is unknown
DEFAULT_NODE_SIZE: float = 80
