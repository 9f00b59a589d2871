"""Square-grid placement for nodes whose connections do not matter.

Used for components without internal connections and as the relocation
target of the overlap resolver.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from cell_layout.ir.diagram import LayoutEdge, LayoutNode
from cell_layout.layout.types import Position


@dataclass(frozen=True)
class GridLayout:
    spacing: float = 100
    start_x: float = 0
    start_y: float = 0
    max_columns: int | None = None

    def layout(
        self,
        nodes: Sequence[LayoutNode],
        _edges: Iterable[LayoutEdge] = (),
        spacing: float | None = None,
    ) -> dict[str, Position]:
        """Place ``nodes`` on a grid; edges are ignored."""
        return self.layout_nodes(nodes, spacing=spacing)

    def layout_nodes(
        self,
        nodes: Sequence[LayoutNode],
        spacing: float | None = None,
        start_x: float | None = None,
        start_y: float | None = None,
        max_columns: int | None = None,
    ) -> dict[str, Position]:
        """Centre each node in a uniform grid cell, row by row.

        Columns default to ``ceil(sqrt(n))``. Every grid cell is as large as
        the widest and tallest node plus ``spacing``.
        """
        if not nodes:
            return {}

        spacing = self.spacing if spacing is None else spacing
        x0 = self.start_x if start_x is None else start_x
        y0 = self.start_y if start_y is None else start_y
        columns = max_columns or self.max_columns or math.ceil(math.sqrt(len(nodes)))

        cell_w = max(n.width for n in nodes) + spacing
        cell_h = max(n.height for n in nodes) + spacing

        positions: dict[str, Position] = {}
        for index, node in enumerate(nodes):
            col = index % columns
            row = index // columns
            center_x = x0 + col * cell_w + cell_w / 2
            center_y = y0 + row * cell_h + cell_h / 2
            positions[node.id] = Position(center_x - node.width / 2, center_y - node.height / 2)
        return positions

