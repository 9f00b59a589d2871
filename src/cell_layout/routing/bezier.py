"""Bezier edge routing.

Produces SVG path strings between two attachment points: straight lines for
nearly axis-aligned pairs, cubic curves when port sides are known, and an
arc-cornered route otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass

from cell_layout.layout.geometry import port_normal
from cell_layout.layout.types import Position
from cell_layout.routing.paths import arc_to, cubic_to, join, line_to, move_to, quadratic_to
from cell_layout.types import PortAlignment


@dataclass(frozen=True)
class BezierRouter:
    straight_line_tolerance: float = 4
    curve_offset: float = 10
    min_curve_radius: float = 1

    def route(
        self,
        source: Position,
        target: Position,
        source_port: PortAlignment | None = None,
        target_port: PortAlignment | None = None,
    ) -> str:
        """Route an edge from ``source`` to ``target``."""
        if self.is_straight(source, target):
            return self.straight_path(source, target)
        if source_port is not None or target_port is not None:
            return self.port_aware_path(source, target, source_port, target_port)
        return self.curved_path(source, target)

    def is_straight(self, source: Position, target: Position) -> bool:
        tol = self.straight_line_tolerance
        return abs(source.y - target.y) <= tol or abs(source.x - target.x) <= tol

    def straight_path(self, source: Position, target: Position) -> str:
        return join(move_to(source), line_to(target))

    def curved_path(self, source: Position, target: Position) -> str:
        """Horizontal run, arc down/up at the midpoint, vertical run, arc back, horizontal run."""
        r = min(self.curve_offset, abs(target.x - source.x) / 2, abs(source.y - target.y) / 2)
        if r < self.min_curve_radius:
            return self.straight_path(source, target)

        mid_x = (source.x + target.x) / 2

        going_right = source.x < target.x
        going_down = source.y < target.y

        entry_x = mid_x - r if going_right else mid_x + r
        if going_right and going_down:
            first_sweep, second_sweep, exit_x = 1, 0, mid_x + r
        elif going_right:
            first_sweep, second_sweep, exit_x = 0, 1, mid_x + r
        elif going_down:
            first_sweep, second_sweep, exit_x = 0, 1, mid_x - r
        else:
            first_sweep, second_sweep, exit_x = 1, 0, mid_x - r

        turn_y = source.y + r if going_down else source.y - r
        settle_y = target.y - r if going_down else target.y + r

        return join(
            move_to(source),
            line_to(Position(entry_x, source.y)),
            arc_to(Position(mid_x, turn_y), r, first_sweep),
            line_to(Position(mid_x, settle_y)),
            arc_to(Position(exit_x, target.y), r, second_sweep),
            line_to(target),
        )

    def port_aware_path(
        self,
        source: Position,
        target: Position,
        source_port: PortAlignment | None,
        target_port: PortAlignment | None,
    ) -> str:
        """Cubic curve leaving and entering along each port's outward normal."""
        source_port = source_port or PortAlignment.RIGHT
        target_port = target_port or PortAlignment.LEFT

        reach = self.curve_offset * 5
        dy_half = abs(target.y - source.y) / 2
        control_offset = min(reach, abs(target.x - source.x) / 2, dy_half or reach)

        sx, sy = port_normal(source_port)
        tx, ty = port_normal(target_port)
        source_control = Position(source.x + sx * control_offset, source.y + sy * control_offset)
        target_control = Position(target.x + tx * control_offset, target.y + ty * control_offset)

        return join(move_to(source), cubic_to(source_control, target_control, target))

    def quadratic_path(self, source: Position, target: Position) -> str:
        """Single quadratic curve bowed to the left of the travel direction."""
        dx = target.x - source.x
        dy = target.y - source.y
        dist = (dx * dx + dy * dy) ** 0.5
        if dist == 0:
            return self.straight_path(source, target)

        bow = min(dist * 0.2, 50)
        control = Position((source.x + target.x) / 2 - dy / dist * bow, (source.y + target.y) / 2 + dx / dist * bow)
        return join(move_to(source), quadratic_to(control, target))

    def smooth_step_path(self, source: Position, target: Position) -> str:
        """Orthogonal step through the x midpoint with rounded corners."""
        mid_x = (source.x + target.x) / 2
        r = min(self.curve_offset, abs(mid_x - source.x) / 2, abs(target.y - source.y) / 2)
        if r < self.min_curve_radius:
            return self.straight_path(source, target)

        going_right = source.x < target.x
        going_down = source.y < target.y
        step = r if going_down else -r
        entry_x, exit_x = (mid_x - r, mid_x + r) if going_right else (mid_x + r, mid_x - r)

        return join(
            move_to(source),
            line_to(Position(entry_x, source.y)),
            quadratic_to(Position(mid_x, source.y), Position(mid_x, source.y + step)),
            line_to(Position(mid_x, target.y - step)),
            quadratic_to(Position(mid_x, target.y), Position(exit_x, target.y)),
            line_to(target),
        )
