"""Edge routing: SVG path builders and the bezier router."""

from cell_layout.routing.bezier import BezierRouter
from cell_layout.routing.paths import (
    arc_to,
    create_arrow_path,
    cubic_to,
    line_to,
    move_to,
    offset_path,
    quadratic_to,
)

__all__ = [
    "BezierRouter",
    "arc_to",
    "create_arrow_path",
    "cubic_to",
    "line_to",
    "move_to",
    "offset_path",
    "quadratic_to",
]
