"""Tests for cell_layout.layout.boundary: zone classification and actor placement."""

from cell_layout.ir.diagram import ExternalLayoutData, LayoutEdge, LayoutNode
from cell_layout.layout.boundary import BoundaryPositioner, ZoneAssignment
from cell_layout.layout.types import BoundingBox, Position
from cell_layout.types import NORTHBOUND, SOUTHBOUND, CellBound, ExternalType, Zone

# ─── Helpers ──────────────────────────────────────────────────────────────────

OWNERS = {"c1": "c1", "api": "c1", "gw1": "c1", "c2": "c2", "db": "c2"}


def owner_of(ref: str) -> str | None:
    return OWNERS.get(ref)


def actor(
    actor_id: str,
    kind: ExternalType = ExternalType.EXTERNAL,
    width: float = 100,
    direction: CellBound | None = None,
) -> ExternalLayoutData:
    return ExternalLayoutData(actor_id, width, 60, type=kind, direction=direction)


def conn(source: str, target: str, direction: str | None = None) -> LayoutEdge:
    data = {"direction": direction} if direction else None
    return LayoutEdge(f"{source}->{target}", source, target, data)


def classify(externals, connections) -> ZoneAssignment:
    return BoundaryPositioner().classify(externals, connections, owner_of)


# ─── Classification ───────────────────────────────────────────────────────────


class TestClassify:
    def test_user_always_header(self):
        zones = classify([actor("u", ExternalType.USER)], [conn("api", "u")])
        assert zones.header == ["u"]
        assert zones.bottom == []

    def test_cell_emits_to_external_is_bottom(self):
        zones = classify([actor("pay")], [conn("api", "pay")])
        assert zones.bottom == ["pay"]
        assert zones.zone_of("pay") is Zone.BOTTOM

    def test_external_into_cell_is_header(self):
        zones = classify([actor("partner")], [conn("partner", "api")])
        assert zones.header == ["partner"]

    def test_both_directions_is_header(self):
        zones = classify([actor("x")], [conn("x", "api"), conn("db", "x")])
        assert zones.header == ["x"]

    def test_unconnected_defaults_to_header(self):
        zones = classify([actor("lonely")], [])
        assert zones.header == ["lonely"]
        assert zones.anchors["lonely"] is None

    def test_explicit_direction_wins(self):
        zones = classify([actor("x", direction=CellBound.SOUTH)], [conn("x", "api")])
        assert zones.bottom == ["x"]
        zones = classify([actor("y", direction=CellBound.NORTH)], [conn("api", "y")])
        assert zones.header == ["y"]

    def test_edge_direction_data(self):
        zones = classify([actor("x")], [conn("x", "api", SOUTHBOUND)])
        assert zones.bottom == ["x"]
        zones = classify([actor("y")], [conn("api", "y", NORTHBOUND)])
        assert zones.header == ["y"]

    def test_non_cell_peer_ignored(self):
        zones = classify([actor("a"), actor("b")], [conn("a", "b")])
        assert zones.header == ["a", "b"]

    def test_unowned_ref_ignored(self):
        zones = classify([actor("pay")], [conn("c9.api", "pay")])
        assert zones.header == ["pay"]

    def test_anchor_single_cell(self):
        zones = classify([actor("pay")], [conn("api", "pay"), conn("gw1", "pay")])
        assert zones.anchors["pay"] == "c1"

    def test_anchor_none_for_several_cells(self):
        zones = classify([actor("pay")], [conn("api", "pay"), conn("db", "pay")])
        assert zones.anchors["pay"] is None


# ─── Placement ────────────────────────────────────────────────────────────────

CELLS = {
    "c1": BoundingBox(50, 200, 350, 500),
    "c2": BoundingBox(430, 200, 730, 500),
}


class TestPositionZones:
    def test_anchored_actor_above_cell_centre(self):
        zones = ZoneAssignment(header=["u"], anchors={"u": "c2"})
        positions = BoundaryPositioner().position_zones(zones, [actor("u")], CELLS, 50, 650)
        assert positions == {"u": Position(530, 50)}

    def test_anchored_actor_below_cell(self):
        zones = ZoneAssignment(bottom=["pay"], anchors={"pay": "c1"})
        positions = BoundaryPositioner().position_zones(zones, [actor("pay")], CELLS, 50, 650)
        assert positions == {"pay": Position(150, 650)}

    def test_floating_row_centred_on_all_cells(self):
        zones = ZoneAssignment(header=["u", "x"], anchors={"u": None, "x": None})
        externals = [actor("u"), actor("x", width=60)]
        positions = BoundaryPositioner().position_zones(zones, externals, CELLS, 50, 650)
        assert positions == {"u": Position(285, 50), "x": Position(435, 50)}

    def test_collision_pushes_right(self):
        zones = ZoneAssignment(bottom=["a", "b"], anchors={"a": "c1", "b": "c1"})
        positions = BoundaryPositioner().position_zones(zones, [actor("a"), actor("b")], CELLS, 50, 650)
        assert positions["a"] == Position(150, 650)
        assert positions["b"] == Position(300, 650)

    def test_no_cells(self):
        zones = ZoneAssignment(header=["u"], anchors={"u": None})
        positions = BoundaryPositioner().position_zones(zones, [actor("u")], {}, 50, 150)
        assert positions == {"u": Position(-50, 50)}


class TestHelpers:
    def test_combined_bounds(self):
        assert BoundaryPositioner().combined_bounds(CELLS.values()) == BoundingBox(50, 200, 730, 500)

    def test_combined_bounds_empty(self):
        assert BoundaryPositioner().combined_bounds([]) == BoundingBox.empty()

    def test_position_relative_to_cell(self):
        positioner = BoundaryPositioner(offset=100)
        cell = BoundingBox(0, 0, 300, 300)
        node = LayoutNode("n", 50, 40)
        assert positioner.position_relative_to_cell(node, cell, CellBound.NORTH) == Position(125, -140)
        assert positioner.position_relative_to_cell(node, cell, CellBound.SOUTH) == Position(125, 400)
        assert positioner.position_relative_to_cell(node, cell, CellBound.EAST) == Position(400, 130)
        assert positioner.position_relative_to_cell(node, cell, CellBound.WEST) == Position(-150, 130)

    def test_infer_bound(self):
        positioner = BoundaryPositioner()
        assert positioner.infer_bound(actor("u", ExternalType.USER)) is CellBound.NORTH
        assert positioner.infer_bound(actor("x")) is CellBound.SOUTH
        assert positioner.infer_bound(actor("y", direction=CellBound.EAST)) is CellBound.EAST
