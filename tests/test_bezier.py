"""Tests for cell_layout.routing.bezier: straight, arced and port-aware routes."""

from cell_layout.layout.types import Position
from cell_layout.routing.bezier import BezierRouter
from cell_layout.types import PortAlignment


class TestStraight:
    def test_horizontal_line(self):
        assert BezierRouter().route(Position(0, 0), Position(100, 0)) == "M 0 0 L 100 0"

    def test_within_tolerance_is_straight(self):
        path = BezierRouter().route(Position(0, 0), Position(100, 3))
        assert path == "M 0 0 L 100 3"

    def test_vertical_line_ignores_ports(self):
        router = BezierRouter()
        path = router.route(Position(50, 0), Position(50, 200), PortAlignment.BOTTOM, PortAlignment.TOP)
        assert path == "M 50 0 L 50 200"

    def test_degenerate_radius_collapses(self):
        router = BezierRouter(straight_line_tolerance=0)
        assert router.route(Position(0, 0), Position(100, 1)) == "M 0 0 L 100 1"


class TestArcs:
    def test_right_down(self):
        path = BezierRouter().route(Position(0, 0), Position(100, 50))
        assert path == "M 0 0 L 40 0 A 10,10 0 0 1 50,10 L 50 40 A 10,10 0 0 0 60,50 L 100 50"

    def test_right_up(self):
        path = BezierRouter().route(Position(0, 50), Position(100, 0))
        assert path == "M 0 50 L 40 50 A 10,10 0 0 0 50,40 L 50 10 A 10,10 0 0 1 60,0 L 100 0"

    def test_left_down(self):
        path = BezierRouter().route(Position(100, 0), Position(0, 50))
        assert path == "M 100 0 L 60 0 A 10,10 0 0 0 50,10 L 50 40 A 10,10 0 0 1 40,50 L 0 50"

    def test_left_up(self):
        path = BezierRouter().route(Position(100, 50), Position(0, 0))
        assert path == "M 100 50 L 60 50 A 10,10 0 0 1 50,40 L 50 10 A 10,10 0 0 0 40,0 L 0 0"

    def test_radius_limited_by_half_height(self):
        path = BezierRouter().route(Position(0, 0), Position(100, 10))
        assert "A 5,5" in path

    def test_radius_limited_by_half_width(self):
        path = BezierRouter().route(Position(0, 0), Position(6, 100))
        assert path == "M 0 0 L 0 0 A 3,3 0 0 1 3,3 L 3 97 A 3,3 0 0 0 6,100 L 6 100"

    def test_four_branches_differ(self):
        router = BezierRouter()
        paths = {
            router.route(Position(0, 0), Position(100, 50)),
            router.route(Position(0, 50), Position(100, 0)),
            router.route(Position(100, 0), Position(0, 50)),
            router.route(Position(100, 50), Position(0, 0)),
        }
        assert len(paths) == 4


class TestPortAware:
    def test_cubic_with_ports(self):
        path = BezierRouter().route(Position(0, 0), Position(200, 100), PortAlignment.RIGHT, PortAlignment.LEFT)
        assert path == "M 0 0 C 50 0, 150 100, 200 100"

    def test_control_offset_limited_by_gap(self):
        path = BezierRouter().route(Position(0, 0), Position(40, 300), PortAlignment.BOTTOM, PortAlignment.TOP)
        assert path == "M 0 0 C 0 20, 40 280, 40 300"

    def test_missing_target_port_defaults_left(self):
        path = BezierRouter().route(Position(0, 0), Position(200, 100), PortAlignment.RIGHT)
        assert path == "M 0 0 C 50 0, 150 100, 200 100"


class TestExtras:
    def test_quadratic_has_single_control(self):
        path = BezierRouter().quadratic_path(Position(0, 0), Position(100, 0))
        assert path.startswith("M 0 0 Q ")
        assert path.endswith(", 100 0")

    def test_quadratic_zero_length(self):
        assert BezierRouter().quadratic_path(Position(5, 5), Position(5, 5)) == "M 5 5 L 5 5"

    def test_smooth_step_passes_midpoint(self):
        path = BezierRouter().smooth_step_path(Position(0, 0), Position(100, 100))
        assert path.startswith("M 0 0 L 40 0 Q 50 0, 50 10 L 50 90 Q 50 100, 60 100")
        assert path.endswith("L 100 100")
