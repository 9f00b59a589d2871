"""Intermediate representation: diagram input, GraphIR and validation."""

from cell_layout.ir.diagram import (
    CellLayoutData,
    DiagramLayoutData,
    ExternalLayoutData,
    GatewayData,
    LayoutEdge,
    LayoutNode,
    qualified_id,
)
from cell_layout.ir.graph import GraphIR, NodeData
from cell_layout.ir.validation import LayoutInputError, LayoutWarning, WarningCode, validate_diagram

__all__ = [
    "CellLayoutData",
    "DiagramLayoutData",
    "ExternalLayoutData",
    "GatewayData",
    "GraphIR",
    "LayoutEdge",
    "LayoutInputError",
    "LayoutNode",
    "LayoutWarning",
    "NodeData",
    "WarningCode",
    "qualified_id",
    "validate_diagram",
]
