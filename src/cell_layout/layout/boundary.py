"""External actor placement.

Actors are sorted into two zones: the header above the cell row and the
bottom below it. Inside a zone, an actor tied to a single cell sits over
(or under) that cell's centre; the others form a row centred on all cells.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from cell_layout.ir.diagram import ExternalLayoutData, LayoutEdge, LayoutNode
from cell_layout.layout.types import BoundingBox, Position
from cell_layout.types import NORTHBOUND, SOUTHBOUND, CellBound, ExternalType, Zone


@dataclass
class ZoneAssignment:
    header: list[str] = field(default_factory=list)
    bottom: list[str] = field(default_factory=list)
    # actor id -> the one cell it connects to, or None
    anchors: dict[str, str | None] = field(default_factory=dict)

    def zone_of(self, actor_id: str) -> Zone | None:
        if actor_id in self.header:
            return Zone.HEADER
        if actor_id in self.bottom:
            return Zone.BOTTOM
        return None


@dataclass(frozen=True)
class BoundaryPositioner:
    offset: float = 150
    spacing: float = 50

    def classify(
        self,
        externals: Sequence[ExternalLayoutData],
        connections: Iterable[LayoutEdge],
        owner_of: Callable[[str], str | None],
    ) -> ZoneAssignment:
        """Assign every actor to the header or bottom zone.

        ``owner_of`` maps a node reference to the id of the cell that owns it,
        or None when the reference is not inside a cell.
        """
        connections = list(connections)
        assignment = ZoneAssignment()

        for ext in externals:
            cells: list[str] = []
            northbound = southbound = False
            for edge in connections:
                if edge.source == ext.id:
                    cell_id = owner_of(edge.target)
                    inbound = True
                elif edge.target == ext.id:
                    cell_id = owner_of(edge.source)
                    inbound = False
                else:
                    continue
                if cell_id is None:
                    continue
                if cell_id not in cells:
                    cells.append(cell_id)
                if inbound:
                    if edge.direction == SOUTHBOUND:
                        southbound = True
                    else:
                        northbound = True
                elif edge.direction == NORTHBOUND:
                    northbound = True
                else:
                    southbound = True

            assignment.anchors[ext.id] = cells[0] if len(cells) == 1 else None

            if ext.type is ExternalType.USER:
                zone = Zone.HEADER
            elif ext.direction is CellBound.NORTH:
                zone = Zone.HEADER
            elif ext.direction is CellBound.SOUTH:
                zone = Zone.BOTTOM
            elif southbound and not northbound:
                zone = Zone.BOTTOM
            else:
                zone = Zone.HEADER

            if zone is Zone.HEADER:
                assignment.header.append(ext.id)
            else:
                assignment.bottom.append(ext.id)

        return assignment

    def position_zones(
        self,
        assignment: ZoneAssignment,
        externals: Sequence[ExternalLayoutData],
        cell_bounds: Mapping[str, BoundingBox],
        header_y: float,
        bottom_y: float,
    ) -> dict[str, Position]:
        """Top-left positions for every classified actor."""
        by_id = {ext.id: ext for ext in externals}
        combined = self.combined_bounds(cell_bounds.values())

        positions: dict[str, Position] = {}
        for members, y in ((assignment.header, header_y), (assignment.bottom, bottom_y)):
            actors = [by_id[actor_id] for actor_id in members if actor_id in by_id]
            positions.update(self._position_row(actors, assignment.anchors, cell_bounds, combined, y))
        return positions

    def _position_row(
        self,
        actors: list[ExternalLayoutData],
        anchors: Mapping[str, str | None],
        cell_bounds: Mapping[str, BoundingBox],
        combined: BoundingBox,
        y: float,
    ) -> dict[str, Position]:
        desired: list[tuple[float, int, ExternalLayoutData]] = []
        floating: list[tuple[int, ExternalLayoutData]] = []
        for index, actor in enumerate(actors):
            anchor = anchors.get(actor.id)
            cell = cell_bounds.get(anchor) if anchor is not None else None
            if cell is not None:
                desired.append((cell.center_x - actor.width / 2, index, actor))
            else:
                floating.append((index, actor))

        if floating:
            row_width = sum(actor.width for _, actor in floating) + self.spacing * (len(floating) - 1)
            cursor = combined.center_x - row_width / 2
            for index, actor in floating:
                desired.append((cursor, index, actor))
                cursor += actor.width + self.spacing

        desired.sort(key=lambda item: (item[0], item[1]))

        positions: dict[str, Position] = {}
        prev_right: float | None = None
        for x, _, actor in desired:
            if prev_right is not None and x < prev_right + self.spacing:
                x = prev_right + self.spacing
            positions[actor.id] = Position(x, y)
            prev_right = x + actor.width
        return positions

    def combined_bounds(self, cell_bounds: Iterable[BoundingBox]) -> BoundingBox:
        return BoundingBox.from_rects((box.min_x, box.min_y, box.width, box.height) for box in cell_bounds)

    def position_relative_to_cell(self, node: LayoutNode, cell: BoundingBox, bound: CellBound) -> Position:
        """Place ``node`` ``offset`` away from the given side of ``cell``, centred on it."""
        if bound is CellBound.SOUTH:
            return Position(cell.center_x - node.width / 2, cell.max_y + self.offset)
        if bound is CellBound.EAST:
            return Position(cell.max_x + self.offset, cell.center_y - node.height / 2)
        if bound is CellBound.WEST:
            return Position(cell.min_x - self.offset - node.width, cell.center_y - node.height / 2)
        return Position(cell.center_x - node.width / 2, cell.min_y - self.offset - node.height)

    def infer_bound(self, node: ExternalLayoutData) -> CellBound:
        """Side of a cell an actor belongs on when nothing else is known."""
        if node.direction is not None:
            return node.direction
        if node.type is ExternalType.USER:
            return CellBound.NORTH
        return CellBound.SOUTH
