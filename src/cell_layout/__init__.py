"""cell-layout: automatic layout for cell-based architecture diagrams."""

from cell_layout.layout.engine import LayoutEngine, layout_diagram
from cell_layout.layout.types import LayoutResult
from cell_layout.config import LayoutOptions
from cell_layout.export import dumps_result, result_to_dict
from cell_layout.ir.diagram import (
    CellLayoutData,
    DiagramLayoutData,
    ExternalLayoutData,
    GatewayData,
    LayoutEdge,
    LayoutNode,
)
from cell_layout.ir.loader import diagram_from_dict, load_diagram
from cell_layout.ir.validation import LayoutInputError, LayoutWarning
from cell_layout.types import CellBound, ExternalType, NodeKind, PortAlignment, RankDirection


def layout_json(data: dict, options: LayoutOptions | None = None) -> dict:
    """Lay out a diagram given as a JSON-style dict and return the result as one.

    Args:
        data: Diagram document with camelCase keys (see ``cell_layout.ir.loader``).
        options: Layout options; defaults when None.

    Returns:
        The layout result converted by ``result_to_dict``.

    Raises:
        ValueError: If the document is malformed or holds sizes no layout can use.
    """
    return result_to_dict(layout_diagram(diagram_from_dict(data), options))


__all__ = [
    "CellBound",
    "CellLayoutData",
    "DiagramLayoutData",
    "ExternalLayoutData",
    "ExternalType",
    "GatewayData",
    "LayoutEdge",
    "LayoutEngine",
    "LayoutInputError",
    "LayoutNode",
    "LayoutOptions",
    "LayoutResult",
    "LayoutWarning",
    "NodeKind",
    "PortAlignment",
    "RankDirection",
    "diagram_from_dict",
    "dumps_result",
    "layout_diagram",
    "layout_json",
    "load_diagram",
    "result_to_dict",
]
