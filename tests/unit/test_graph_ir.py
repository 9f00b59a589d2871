"""Tests for cell_layout.ir.graph: GraphIR construction."""

from cell_layout.ir.diagram import LayoutEdge, LayoutNode
from cell_layout.ir.graph import GraphIR, NodeData


def _node(id: str, width: float = 80, height: float = 40) -> LayoutNode:
    return LayoutNode(id, width, height)


def _edge(source: str, target: str, id: str | None = None) -> LayoutEdge:
    return LayoutEdge(id or f"{source}->{target}", source, target)


class TestBasicConstruction:
    def test_empty_graph(self):
        gir = GraphIR.from_layout([], [])
        assert gir.digraph.number_of_nodes() == 0
        assert gir.digraph.number_of_edges() == 0
        assert gir.dropped_edges == []

    def test_nodes_keep_input_order(self):
        gir = GraphIR.from_layout([_node("b"), _node("a"), _node("c")], [])
        assert list(gir.digraph.nodes) == ["b", "a", "c"]

    def test_node_data(self):
        gir = GraphIR.from_layout([_node("a", 120, 60)], [])
        assert gir.node_data("a") == NodeData("a", 120, 60)

    def test_duplicate_node_first_wins(self):
        gir = GraphIR.from_layout([_node("a", 10, 10), _node("a", 99, 99)], [])
        assert gir.digraph.number_of_nodes() == 1
        assert gir.node_data("a").width == 10


class TestEdges:
    def test_edge_added(self):
        gir = GraphIR.from_layout([_node("a"), _node("b")], [_edge("a", "b")])
        assert gir.digraph.number_of_edges() == 1
        assert gir.digraph.has_edge("a", "b")

    def test_parallel_edges_fold(self):
        edges = [_edge("a", "b", "e1"), _edge("a", "b", "e2")]
        gir = GraphIR.from_layout([_node("a"), _node("b")], edges)
        assert gir.digraph.number_of_edges() == 1
        assert gir.dropped_edges == []

    def test_dangling_edges_dropped(self):
        edges = [_edge("a", "ghost", "e1"), _edge("ghost", "a", "e2")]
        gir = GraphIR.from_layout([_node("a")], edges)
        assert gir.digraph.number_of_edges() == 0
        assert gir.dropped_edges == ["e1", "e2"]
        assert "ghost" not in gir.digraph

    def test_self_loop_kept(self):
        gir = GraphIR.from_layout([_node("a")], [_edge("a", "a")])
        assert gir.digraph.has_edge("a", "a")
