"""Graph IR: wraps layout nodes and edges in a networkx DiGraph.

The hierarchical layout and the inter-cell ordering pass work on this
structure. Node insertion order follows the input list so that every
downstream tie-break is deterministic.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import networkx as nx

from cell_layout.ir.diagram import LayoutEdge, LayoutNode


@dataclass
class NodeData:
    id: str
    width: float
    height: float


class GraphIR:
    """Directed graph over layout nodes.

    Parallel edges between the same pair fold into one networkx edge.
    """

    def __init__(self, digraph: nx.DiGraph, dropped_edges: list[str]) -> None:
        self.digraph = digraph
        self.dropped_edges = dropped_edges

    @classmethod
    def from_layout(cls, nodes: Iterable[LayoutNode], edges: Iterable[LayoutEdge]) -> GraphIR:
        """Build a GraphIR; edges with an endpoint outside ``nodes`` are dropped."""
        digraph: nx.DiGraph = nx.DiGraph()
        for node in nodes:
            if node.id not in digraph:
                digraph.add_node(node.id, data=NodeData(node.id, node.width, node.height))

        dropped: list[str] = []
        for edge in edges:
            if edge.source not in digraph or edge.target not in digraph:
                dropped.append(edge.id)
                continue
            digraph.add_edge(edge.source, edge.target)

        return cls(digraph=digraph, dropped_edges=dropped)

    def node_data(self, node_id: str) -> NodeData:
        return self.digraph.nodes[node_id]["data"]
