"""Overlap detection and grid fallback.

Nodes caught in any overlap are moved onto a clean grid below the rest of
the layout. One grid pass; nothing is iterated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from cell_layout.ir.diagram import LayoutNode
from cell_layout.layout.geometry import bounding_box
from cell_layout.layout.grid import GridLayout
from cell_layout.layout.types import DEFAULT_NODE_SIZE, Dimensions, NodeOverlap, Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlapResolver:
    padding: float = 20
    grid_spacing: float = 100
    grid_vertical_offset: float = 100

    def resolve(self, positions: Mapping[str, Position], nodes: Sequence[LayoutNode]) -> dict[str, Position]:
        """Return positions in which no two nodes overlap."""
        dimensions = _dimensions(nodes)
        overlaps = self.detect_overlaps(positions, dimensions)
        if not overlaps:
            return dict(positions)

        overlapping: set[str] = set()
        for overlap in overlaps:
            overlapping.add(overlap.node_a)
            overlapping.add(overlap.node_b)

        remaining = {node_id: pos for node_id, pos in positions.items() if node_id not in overlapping}
        by_id = {node.id: node for node in nodes}
        moved = [
            by_id.get(node_id, LayoutNode(node_id, DEFAULT_NODE_SIZE, DEFAULT_NODE_SIZE))
            for node_id in positions
            if node_id in overlapping
        ]

        anchor = bounding_box(remaining if remaining else positions, dimensions)
        logger.debug(
            "%d overlapping pair(s); moving %d node(s) to a grid at (%s, %s)",
            len(overlaps),
            len(moved),
            anchor.min_x,
            anchor.max_y + self.grid_vertical_offset,
        )

        grid = GridLayout(spacing=self.grid_spacing).layout_nodes(
            moved,
            start_x=anchor.min_x,
            start_y=anchor.max_y + self.grid_vertical_offset,
        )
        resolved = dict(remaining)
        resolved.update(grid)
        return resolved

    def detect_overlaps(
        self,
        positions: Mapping[str, Position],
        dimensions: Mapping[str, Dimensions],
    ) -> list[NodeOverlap]:
        """Every overlapping pair, in position order, with its padded overlap area."""
        fallback = Dimensions(DEFAULT_NODE_SIZE, DEFAULT_NODE_SIZE)
        entries = list(positions.items())
        overlaps: list[NodeOverlap] = []
        for i, (id_a, pos_a) in enumerate(entries):
            dim_a = dimensions.get(id_a, fallback)
            for id_b, pos_b in entries[i + 1 :]:
                dim_b = dimensions.get(id_b, fallback)
                if self.is_overlapping(pos_a, dim_a, pos_b, dim_b, self.padding):
                    area = self.calculate_overlap_area(pos_a, dim_a, pos_b, dim_b, self.padding)
                    overlaps.append(NodeOverlap(id_a, id_b, area))
        return overlaps

    @staticmethod
    def is_overlapping(
        pos_a: Position,
        dim_a: Dimensions,
        pos_b: Position,
        dim_b: Dimensions,
        padding: float = 0,
    ) -> bool:
        """Inclusive test: boxes that touch once padded count as overlapping."""
        return not (
            pos_a.x + dim_a.width + padding < pos_b.x
            or pos_b.x + dim_b.width + padding < pos_a.x
            or pos_a.y + dim_a.height + padding < pos_b.y
            or pos_b.y + dim_b.height + padding < pos_a.y
        )

    @staticmethod
    def calculate_overlap_area(
        pos_a: Position,
        dim_a: Dimensions,
        pos_b: Position,
        dim_b: Dimensions,
        padding: float = 0,
    ) -> float:
        overlap_x = max(
            0.0,
            min(pos_a.x + dim_a.width + padding, pos_b.x + dim_b.width + padding) - max(pos_a.x, pos_b.x),
        )
        overlap_y = max(
            0.0,
            min(pos_a.y + dim_a.height + padding, pos_b.y + dim_b.height + padding) - max(pos_a.y, pos_b.y),
        )
        return overlap_x * overlap_y


def _dimensions(nodes: Sequence[LayoutNode]) -> dict[str, Dimensions]:
    return {node.id: Dimensions(node.width, node.height) for node in nodes}
