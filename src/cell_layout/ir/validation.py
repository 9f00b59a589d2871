"""Input validation for layout passes.

Structural problems that the engine can degrade around (dangling edge
references, duplicate ids, unconnected actors) are reported as
``LayoutWarning`` values. Values that no layout can be computed from
(negative sizes, NaN or infinite numbers) raise ``LayoutInputError``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from cell_layout.ir.diagram import DiagramLayoutData, LayoutEdge

logger = logging.getLogger(__name__)


class LayoutInputError(ValueError):
    """Raised when the diagram contains sizes no layout can be computed from."""


class WarningCode(str, Enum):
    DUPLICATE_ID = "duplicate-id"
    UNRESOLVED_ENDPOINT = "unresolved-endpoint"
    UNCONNECTED_EXTERNAL = "unconnected-external"
    NOT_INTER_CELL = "not-inter-cell"


@dataclass(frozen=True)
class LayoutWarning:
    """A degraded-input finding; the layout is still produced."""

    code: WarningCode
    message: str
    subject: str | None = None

    def to_dict(self) -> dict:
        result = {"code": self.code.value, "message": self.message}
        if self.subject is not None:
            result["subject"] = self.subject
        return result


def check_size(owner: str, width: float, height: float) -> None:
    """Reject negative or non-finite sizes."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise LayoutInputError(f"{owner}: {name} must be a number, got {type(value).__name__}")
        if not math.isfinite(value):
            raise LayoutInputError(f"{owner}: {name} must be finite, got {value}")
        if value < 0:
            raise LayoutInputError(f"{owner}: {name} must not be negative, got {value}")


def validate_diagram(diagram: DiagramLayoutData) -> list[LayoutWarning]:
    """Check a diagram before layout.

    Raises:
        LayoutInputError: A node or precomputed cell size is negative, NaN or infinite.

    Returns:
        Warnings for duplicate ids, edge endpoints that resolve to no node,
        externals with no connection, and inter-cell edges that stay inside one cell.
    """
    warnings: list[LayoutWarning] = []

    for cell in diagram.cells:
        for comp in cell.components:
            check_size(f"component '{comp.id}'", comp.width, comp.height)
        if cell.gateway is not None:
            check_size(f"gateway '{cell.gateway.id}'", cell.gateway.width, cell.gateway.height)
        if cell.dimensions is not None:
            check_size(f"cell '{cell.id}'", cell.dimensions.width, cell.dimensions.height)
    for ext in diagram.externals:
        check_size(f"external '{ext.id}'", ext.width, ext.height)

    seen: dict[str, str] = {}

    def claim(node_id: str, what: str) -> None:
        if node_id in seen:
            warnings.append(
                LayoutWarning(
                    WarningCode.DUPLICATE_ID,
                    f"{what} '{node_id}' reuses the id of a {seen[node_id]}; the first one wins",
                    node_id,
                )
            )
        else:
            seen[node_id] = what

    for cell in diagram.cells:
        claim(cell.id, "cell")
    for cell in diagram.cells:
        for comp in cell.components:
            claim(comp.id, "component")
        if cell.gateway is not None:
            claim(cell.gateway.id, "gateway")
    for ext in diagram.externals:
        claim(ext.id, "external")

    owners = diagram.owner_map()
    external_ids = {ext.id for ext in diagram.externals}

    def resolvable(ref: str) -> bool:
        return ref in seen or diagram.owner_of(ref, owners) is not None

    for edge in diagram.connections:
        for end in (edge.source, edge.target):
            if not resolvable(end):
                warnings.append(_unresolved(edge, end))

    for cell in diagram.cells:
        for edge in cell.internal_connections:
            for end in (edge.source, edge.target):
                if cell.local_ref(end) is None:
                    warnings.append(_unresolved(edge, end, f"cell '{cell.id}'"))

    for edge in diagram.inter_cell_connections:
        src_cell = diagram.owner_of(edge.source, owners)
        tgt_cell = diagram.owner_of(edge.target, owners)
        if src_cell is None or tgt_cell is None or src_cell == tgt_cell:
            warnings.append(
                LayoutWarning(
                    WarningCode.NOT_INTER_CELL,
                    f"edge '{edge.id}' does not join two different cells; ignored for cell ordering",
                    edge.id,
                )
            )

    connected: set[str] = set()
    for edge in diagram.connections:
        connected.add(edge.source)
        connected.add(edge.target)
    for ext_id in sorted(external_ids - connected):
        warnings.append(
            LayoutWarning(
                WarningCode.UNCONNECTED_EXTERNAL,
                f"external '{ext_id}' has no connections",
                ext_id,
            )
        )

    for warning in warnings:
        logger.warning("%s", warning.message)
    return warnings


def _unresolved(edge: LayoutEdge, end: str, scope: str = "the diagram") -> LayoutWarning:
    return LayoutWarning(
        WarningCode.UNRESOLVED_ENDPOINT,
        f"edge '{edge.id}' references '{end}', which is not a node of {scope}; ignored",
        edge.id,
    )
