"""Pure geometry helpers: distances, ports, containment and intersection."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from cell_layout.layout.types import DEFAULT_NODE_SIZE, BoundingBox, Dimensions, Position
from cell_layout.types import PortAlignment

if TYPE_CHECKING:
    from cell_layout.ir.diagram import LayoutNode


def distance(p1: Position, p2: Position) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def midpoint(p1: Position, p2: Position) -> Position:
    return Position((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)


def angle(p1: Position, p2: Position) -> float:
    """Angle of the vector p1 → p2, in radians."""
    return math.atan2(p2.y - p1.y, p2.x - p1.x)


def interpolate(p1: Position, p2: Position, t: float) -> Position:
    return Position(p1.x + (p2.x - p1.x) * t, p1.y + (p2.y - p1.y) * t)


def approximate_path_length(points: Iterable[Position]) -> float:
    """Length of the polyline through ``points``."""
    total = 0.0
    prev: Position | None = None
    for point in points:
        if prev is not None:
            total += distance(prev, point)
        prev = point
    return total


def get_port_position(node: Position, width: float, height: float, alignment: PortAlignment | None) -> Position:
    """Attachment point on a node's box; the centre when no alignment is given."""
    if alignment is PortAlignment.TOP:
        return Position(node.x + width / 2, node.y)
    if alignment is PortAlignment.BOTTOM:
        return Position(node.x + width / 2, node.y + height)
    if alignment is PortAlignment.LEFT:
        return Position(node.x, node.y + height / 2)
    if alignment is PortAlignment.RIGHT:
        return Position(node.x + width, node.y + height / 2)
    return Position(node.x + width / 2, node.y + height / 2)


def get_best_port_alignment(
    source: Position,
    source_width: float,
    source_height: float,
    target: Position,
    target_width: float,
    target_height: float,
) -> tuple[PortAlignment, PortAlignment]:
    """Pick (source port, target port) facing each other along the dominant axis.

    Ties between the axes go to the vertical ports.
    """
    dx = (target.x + target_width / 2) - (source.x + source_width / 2)
    dy = (target.y + target_height / 2) - (source.y + source_height / 2)

    if abs(dx) > abs(dy):
        if dx > 0:
            return PortAlignment.RIGHT, PortAlignment.LEFT
        return PortAlignment.LEFT, PortAlignment.RIGHT
    if dy > 0:
        return PortAlignment.BOTTOM, PortAlignment.TOP
    return PortAlignment.TOP, PortAlignment.BOTTOM


def port_normal(alignment: PortAlignment) -> tuple[int, int]:
    """Outward unit vector of a port's side."""
    return {
        PortAlignment.TOP: (0, -1),
        PortAlignment.BOTTOM: (0, 1),
        PortAlignment.LEFT: (-1, 0),
        PortAlignment.RIGHT: (1, 0),
    }[alignment]


def is_point_in_bounds(point: Position, bounds: BoundingBox) -> bool:
    return bounds.min_x <= point.x <= bounds.max_x and bounds.min_y <= point.y <= bounds.max_y


def _orientation(p1: Position, p2: Position, p3: Position) -> float:
    # Cross product sign of (p3 - p1) against (p2 - p1)
    return (p3.x - p1.x) * (p2.y - p1.y) - (p2.x - p1.x) * (p3.y - p1.y)


def _on_segment(p1: Position, p2: Position, p3: Position) -> bool:
    return min(p1.x, p2.x) <= p3.x <= max(p1.x, p2.x) and min(p1.y, p2.y) <= p3.y <= max(p1.y, p2.y)


def line_segments_intersect(p1: Position, p2: Position, p3: Position, p4: Position) -> bool:
    """True if segment p1-p2 touches or crosses segment p3-p4."""
    d1 = _orientation(p3, p4, p1)
    d2 = _orientation(p3, p4, p2)
    d3 = _orientation(p1, p2, p3)
    d4 = _orientation(p1, p2, p4)

    if ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4)):
        return True

    if d1 == 0 and _on_segment(p3, p4, p1):
        return True
    if d2 == 0 and _on_segment(p3, p4, p2):
        return True
    if d3 == 0 and _on_segment(p1, p2, p3):
        return True
    if d4 == 0 and _on_segment(p1, p2, p4):
        return True
    return False


def line_intersects_bounds(p1: Position, p2: Position, bounds: BoundingBox) -> bool:
    """True if segment p1-p2 enters or touches the box."""
    if is_point_in_bounds(p1, bounds) or is_point_in_bounds(p2, bounds):
        return True

    top_left = Position(bounds.min_x, bounds.min_y)
    top_right = Position(bounds.max_x, bounds.min_y)
    bottom_left = Position(bounds.min_x, bounds.max_y)
    bottom_right = Position(bounds.max_x, bounds.max_y)
    sides = [
        (top_left, top_right),
        (top_right, bottom_right),
        (bottom_left, bottom_right),
        (top_left, bottom_left),
    ]
    return any(line_segments_intersect(p1, p2, a, b) for a, b in sides)


def bounding_box(
    positions: Mapping[str, Position],
    dimensions: Mapping[str, Dimensions],
    default_size: float = DEFAULT_NODE_SIZE,
) -> BoundingBox:
    """Tightest box around positioned ids; unknown sizes use ``default_size``."""
    fallback = Dimensions(default_size, default_size)

    def rects():
        for node_id, pos in positions.items():
            dim = dimensions.get(node_id, fallback)
            yield (pos.x, pos.y, dim.width, dim.height)

    return BoundingBox.from_rects(rects())


def node_bounds(positions: Mapping[str, Position], nodes: Iterable[LayoutNode]) -> BoundingBox:
    """Tightest box around positioned nodes; ids missing from ``nodes`` use the default size."""
    return bounding_box(positions, {n.id: Dimensions(n.width, n.height) for n in nodes})
