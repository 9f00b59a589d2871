"""Tests for the placement strategies: grid, two-graph split, cell sizing, overlap fallback."""

import math

from cell_layout.ir.diagram import LayoutEdge, LayoutNode
from cell_layout.layout.cell_sizer import CellSizer
from cell_layout.layout.grid import GridLayout
from cell_layout.layout.overlap import OverlapResolver
from cell_layout.layout.types import BoundingBox, CellDimensions, Dimensions, Position
from cell_layout.layout.two_graph import TwoGraphStrategy

# ─── Helpers ──────────────────────────────────────────────────────────────────


def nodes(*ids: str, size: float = 50) -> list[LayoutNode]:
    return [LayoutNode(node_id, size, size) for node_id in ids]


def edge(source: str, target: str) -> LayoutEdge:
    return LayoutEdge(f"{source}->{target}", source, target)


def dims(node_list: list[LayoutNode]) -> dict[str, Dimensions]:
    return {n.id: Dimensions(n.width, n.height) for n in node_list}


# ─── GridLayout ───────────────────────────────────────────────────────────────


class TestGridLayout:
    def test_empty(self):
        assert GridLayout().layout([]) == {}

    def test_four_nodes_two_columns(self):
        positions = GridLayout(spacing=100).layout(nodes("a", "b", "c", "d"))
        assert positions == {
            "a": Position(50, 50),
            "b": Position(200, 50),
            "c": Position(50, 200),
            "d": Position(200, 200),
        }

    def test_uniform_grid_property(self):
        size, gap = 40, 30
        node_list = nodes(*[f"n{i}" for i in range(7)], size=size)
        positions = GridLayout(spacing=gap).layout(node_list)
        cols = math.ceil(math.sqrt(len(node_list)))
        cell = size + gap
        for i, node in enumerate(node_list):
            col, row = i % cols, i // cols
            assert positions[node.id] == Position(col * cell + gap / 2, row * cell + gap / 2)

    def test_edges_are_ignored(self):
        node_list = nodes("a", "b")
        assert GridLayout().layout(node_list, [edge("a", "b")]) == GridLayout().layout(node_list)

    def test_mixed_sizes_centred_in_uniform_cells(self):
        node_list = [LayoutNode("big", 100, 100), LayoutNode("small", 20, 20)]
        positions = GridLayout(spacing=0).layout(node_list)
        assert positions["big"] == Position(0, 0)
        assert positions["small"] == Position(140, 40)

    def test_start_and_columns(self):
        positions = GridLayout(spacing=0).layout_nodes(nodes("a", "b", "c"), start_x=10, start_y=20, max_columns=1)
        assert [positions[i].y for i in "abc"] == [20, 70, 120]
        assert {positions[i].x for i in "abc"} == {10}

    def test_spacing_override(self):
        positions = GridLayout(spacing=100).layout(nodes("a", "b"), spacing=0)
        assert positions["b"] == Position(50, 0)


# ─── TwoGraphStrategy ─────────────────────────────────────────────────────────


class TestTwoGraphStrategy:
    def test_separate(self):
        sep = TwoGraphStrategy().separate(nodes("a", "b", "c"), [edge("a", "b")])
        assert [n.id for n in sep.linked_nodes] == ["a", "b"]
        assert [n.id for n in sep.unlinked_nodes] == ["c"]
        assert [e.id for e in sep.linked_edges] == ["a->b"]

    def test_dangling_edge_not_linked(self):
        sep = TwoGraphStrategy().separate(nodes("a", "b"), [edge("a", "ghost")])
        assert [n.id for n in sep.linked_nodes] == ["a"]
        assert sep.linked_edges == []
        assert [n.id for n in sep.unlinked_nodes] == ["b"]

    def test_no_edges_all_unlinked(self):
        sep = TwoGraphStrategy().separate(nodes("a", "b"), [])
        assert sep.linked_nodes == []
        assert len(sep.unlinked_nodes) == 2

    def test_merge_places_block_below(self):
        merged = TwoGraphStrategy().merge(
            {"a": Position(0, 0)},
            {"c": Position(10, 20)},
            BoundingBox(5, 0, 105, 50),
            spacing=100,
        )
        assert merged == {"a": Position(0, 0), "c": Position(15, 170)}

    def test_merge_empty_unlinked_is_identity(self):
        linked = {"a": Position(1, 2), "b": Position(3, 4)}
        merged = TwoGraphStrategy().merge(linked, {}, BoundingBox(1, 2, 100, 100))
        assert merged == linked
        assert all(merged[k] is linked[k] for k in linked)

    def test_merge_empty_linked(self):
        unlinked = {"c": Position(10, 20)}
        assert TwoGraphStrategy().merge({}, unlinked, BoundingBox.empty()) == unlinked

    def test_connection_helpers(self):
        strategy = TwoGraphStrategy()
        edges = [edge("a", "b"), edge("b", "c")]
        assert strategy.is_connected("b", edges)
        assert not strategy.is_connected("d", edges)
        assert strategy.connection_count("b", edges) == 2
        assert strategy.connected_node_ids(edges) == {"a", "b", "c"}


# ─── CellSizer ────────────────────────────────────────────────────────────────


class TestCellSizer:
    def test_empty_is_min_square(self):
        assert CellSizer().calculate_size({}, {}) == CellDimensions(300, 300, Position(0, 0))

    def test_small_content(self):
        size = CellSizer().calculate_size({"a": Position(0, 0)}, {"a": Dimensions(100, 50)})
        assert (size.width, size.height) == (450, 450)
        assert size.content_offset == Position(175, 200)

    def test_large_content(self):
        size = CellSizer().calculate_size({"a": Position(0, 0)}, {"a": Dimensions(400, 100)})
        assert (size.width, size.height) == (600, 600)
        assert size.content_offset == Position(100, 250)

    def test_min_padding_floor(self):
        sizer = CellSizer(padding_multiplier=1.0)
        size = sizer.calculate_size({"a": Position(0, 0)}, {"a": Dimensions(400, 100)})
        assert size.width == 400
        assert size.content_offset.x == 60

    def test_offset_accounts_for_content_origin(self):
        size = CellSizer().calculate_size({"a": Position(30, 40)}, {"a": Dimensions(100, 50)})
        assert size.content_offset == Position(145, 160)

    def test_always_square(self):
        size = CellSizer().calculate_size({"a": Position(0, 0)}, {"a": Dimensions(900, 10)})
        assert size.width == size.height

    def test_from_nodes(self):
        sizer = CellSizer()
        by_nodes = sizer.calculate_size_from_nodes({"a": Position(0, 0)}, [LayoutNode("a", 100, 50)])
        assert by_nodes == sizer.calculate_size({"a": Position(0, 0)}, {"a": Dimensions(100, 50)})

    def test_apply_content_offset(self):
        cell = CellDimensions(300, 300, Position(10, 20))
        shifted = CellSizer().apply_content_offset({"a": Position(1, 1)}, cell)
        assert shifted == {"a": Position(11, 21)}

    def test_resize(self):
        resized = CellSizer().resize(CellDimensions(450, 450, Position(175, 200)), 600)
        assert resized == CellDimensions(600, 600, Position(250, 275))

    def test_resize_floors_at_min(self):
        assert CellSizer().resize(CellDimensions(450, 450), 100).width == 300

    def test_fit_to_centres_content(self):
        size = CellSizer().fit_to({"a": Position(10, 20)}, {"a": Dimensions(100, 50)}, 200, 100)
        assert size == CellDimensions(200, 100, Position(40, 5))


# ─── OverlapResolver ──────────────────────────────────────────────────────────


class TestOverlapResolver:
    def test_no_overlap_unchanged(self):
        positions = {"a": Position(0, 0), "b": Position(200, 0)}
        assert OverlapResolver().resolve(positions, nodes("a", "b")) == positions

    def test_empty(self):
        assert OverlapResolver().resolve({}, []) == {}

    def test_is_overlapping_inclusive_with_padding(self):
        a, b = Dimensions(50, 50), Dimensions(50, 50)
        assert OverlapResolver.is_overlapping(Position(0, 0), a, Position(70, 0), b, padding=20)
        assert not OverlapResolver.is_overlapping(Position(0, 0), a, Position(70, 0), b, padding=19)

    def test_overlap_area(self):
        area = OverlapResolver.calculate_overlap_area(Position(0, 0), Dimensions(50, 50), Position(25, 25), Dimensions(50, 50))
        assert area == 625

    def test_disjoint_area_is_zero(self):
        area = OverlapResolver.calculate_overlap_area(Position(0, 0), Dimensions(50, 50), Position(100, 0), Dimensions(50, 50))
        assert area == 0

    def test_detect_overlaps(self):
        positions = {"a": Position(0, 0), "b": Position(10, 10), "c": Position(500, 500)}
        overlaps = OverlapResolver().detect_overlaps(positions, dims(nodes("a", "b", "c")))
        assert [(o.node_a, o.node_b) for o in overlaps] == [("a", "b")]
        assert overlaps[0].overlap_area > 0

    def test_overlapping_pair_forced_apart(self):
        resolver = OverlapResolver()
        node_list = nodes("a", "b")
        resolved = resolver.resolve({"a": Position(0, 0), "b": Position(0, 0)}, node_list)
        area = resolver.calculate_overlap_area(resolved["a"], Dimensions(50, 50), resolved["b"], Dimensions(50, 50))
        assert area == 0
        assert resolved == {"a": Position(50, 200), "b": Position(200, 200)}
        assert max(resolved["a"].y, resolved["b"].y) > 50

    def test_only_overlapping_nodes_move(self):
        positions = {"a": Position(0, 0), "b": Position(10, 10), "c": Position(500, 500)}
        resolved = OverlapResolver().resolve(positions, nodes("a", "b", "c"))
        assert resolved["c"] == Position(500, 500)
        # Grid starts below the remaining node, left-aligned with it
        assert resolved["a"] == Position(550, 700)
        assert resolved["b"] == Position(700, 700)

    def test_resolved_set_has_no_overlaps(self):
        positions = {f"n{i}": Position(i * 10, i * 5) for i in range(6)}
        node_list = nodes(*positions)
        resolver = OverlapResolver()
        resolved = resolver.resolve(positions, node_list)
        assert resolver.detect_overlaps(resolved, dims(node_list)) == []
        ids = list(resolved)
        for i, a in enumerate(ids):
            for b in ids[i + 1 :]:
                area = resolver.calculate_overlap_area(resolved[a], Dimensions(50, 50), resolved[b], Dimensions(50, 50))
                assert area == 0
