"""Split a cell's components into linked and unlinked sets, and merge them back.

Linked components go through the hierarchical layout; unlinked ones are
gridded underneath.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from cell_layout.ir.diagram import LayoutEdge, LayoutNode
from cell_layout.layout.types import BoundingBox, Position, SeparatedGraphs


class TwoGraphStrategy:
    def separate(self, nodes: Sequence[LayoutNode], edges: Sequence[LayoutEdge]) -> SeparatedGraphs:
        """A node is linked iff some edge names it as source or target."""
        connected = self.connected_node_ids(edges)
        linked_nodes = [n for n in nodes if n.id in connected]
        unlinked_nodes = [n for n in nodes if n.id not in connected]
        linked_ids = {n.id for n in linked_nodes}
        linked_edges = [e for e in edges if e.source in linked_ids and e.target in linked_ids]
        return SeparatedGraphs(linked_nodes=linked_nodes, linked_edges=linked_edges, unlinked_nodes=unlinked_nodes)

    def merge(
        self,
        linked: Mapping[str, Position],
        unlinked: Mapping[str, Position],
        linked_bounds: BoundingBox,
        spacing: float = 100,
    ) -> dict[str, Position]:
        """Place the unlinked positions ``spacing`` below the linked block."""
        if not unlinked:
            return dict(linked)
        if not linked:
            return dict(unlinked)

        dx = linked_bounds.min_x
        dy = linked_bounds.max_y + spacing
        merged = dict(linked)
        for node_id, pos in unlinked.items():
            merged[node_id] = pos.translate(dx, dy)
        return merged

    def is_connected(self, node_id: str, edges: Iterable[LayoutEdge]) -> bool:
        return any(e.source == node_id or e.target == node_id for e in edges)

    def connection_count(self, node_id: str, edges: Iterable[LayoutEdge]) -> int:
        return sum(1 for e in edges if e.source == node_id or e.target == node_id)

    def connected_node_ids(self, edges: Iterable[LayoutEdge]) -> set[str]:
        ids: set[str] = set()
        for edge in edges:
            ids.add(edge.source)
            ids.add(edge.target)
        return ids
