"""SVG path command builders.

Numbers are written without a trailing ``.0`` and rounded to three decimals,
so paths are stable strings that compare equal across runs.
"""

from __future__ import annotations

import math
import re

from cell_layout.layout.types import Position


def fmt(value: float) -> str:
    """Format a coordinate for a path string."""
    rounded = round(float(value), 3)
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


def move_to(point: Position) -> str:
    return f"M {fmt(point.x)} {fmt(point.y)}"


def line_to(point: Position) -> str:
    return f"L {fmt(point.x)} {fmt(point.y)}"


def arc_to(end: Position, radius: float, sweep_flag: int = 1, large_arc_flag: int = 0) -> str:
    r = fmt(radius)
    return f"A {r},{r} 0 {large_arc_flag} {sweep_flag} {fmt(end.x)},{fmt(end.y)}"


def quadratic_to(control: Position, end: Position) -> str:
    return f"Q {fmt(control.x)} {fmt(control.y)}, {fmt(end.x)} {fmt(end.y)}"


def cubic_to(control1: Position, control2: Position, end: Position) -> str:
    return (
        f"C {fmt(control1.x)} {fmt(control1.y)}, "
        f"{fmt(control2.x)} {fmt(control2.y)}, "
        f"{fmt(end.x)} {fmt(end.y)}"
    )


def join(*commands: str) -> str:
    return " ".join(commands)


_COMMAND = re.compile(r"([MLQCA])([^MLQCA]*)")

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def offset_path(path: str, dx: float, dy: float) -> str:
    """Translate a path written by the builders in this module."""
    commands = []
    for command, args in _COMMAND.findall(path):
        values = [float(n) for n in _NUMBER.findall(args)]
        if command == "A":
            # rx, ry, rotation, large-arc flag, sweep flag, x, y
            rx, ry, rotation, large_arc, sweep, x, y = values
            commands.append(
                f"A {fmt(rx)},{fmt(ry)} {fmt(rotation)} {fmt(large_arc)} {fmt(sweep)} {fmt(x + dx)},{fmt(y + dy)}"
            )
            continue
        pairs = [f"{fmt(values[i] + dx)} {fmt(values[i + 1] + dy)}" for i in range(0, len(values) - 1, 2)]
        commands.append(f"{command} " + ", ".join(pairs))
    return join(*commands)


def create_arrow_path(tip: Position, direction: float, size: float = 10) -> str:
    """Open arrow head at ``tip`` pointing along ``direction`` (radians)."""
    a1 = direction + math.pi * 0.8
    a2 = direction - math.pi * 0.8
    p1 = Position(tip.x + math.cos(a1) * size, tip.y + math.sin(a1) * size)
    p2 = Position(tip.x + math.cos(a2) * size, tip.y + math.sin(a2) * size)
    return join(move_to(p1), line_to(tip), line_to(p2))
