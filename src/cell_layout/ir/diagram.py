"""Input data structures for one layout pass.

These types are what the upstream converter hands to the engine: cells with
their components and gateway, external actors, and the connections between
them. The engine never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from cell_layout.types import CellBound, ExternalType

if TYPE_CHECKING:
    from cell_layout.layout.types import Dimensions

QUALIFIER_SEP = "."

GATEWAY_SIZE: float = 45


def qualified_id(cell_id: str, local_id: str) -> str:
    """Build a ``cell.component`` reference."""
    return f"{cell_id}{QUALIFIER_SEP}{local_id}"


def split_qualified(ref: str) -> tuple[str, str] | None:
    """Split a ``cell.component`` reference, or None if it is not qualified."""
    cell_id, sep, local_id = ref.partition(QUALIFIER_SEP)
    if not sep or not cell_id or not local_id:
        return None
    return cell_id, local_id


@dataclass(frozen=True)
class LayoutNode:
    """An opaque, sized layout unit."""

    id: str
    width: float
    height: float
    data: Any = None


@dataclass(frozen=True)
class LayoutEdge:
    """A directed connection between two node ids."""

    id: str
    source: str
    target: str
    data: Any = None

    @property
    def direction(self) -> str | None:
        if isinstance(self.data, dict):
            value = self.data.get("direction")
            return value if isinstance(value, str) else None
        return None


@dataclass(frozen=True)
class GatewayData:
    """Ingress/egress point drawn on a cell's boundary."""

    id: str
    position: CellBound = field(default_factory=CellBound.default)
    width: float = GATEWAY_SIZE
    height: float = GATEWAY_SIZE


@dataclass(frozen=True)
class CellLayoutData:
    id: str
    components: list[LayoutNode] = field(default_factory=list)
    internal_connections: list[LayoutEdge] = field(default_factory=list)
    gateway: GatewayData | None = None
    dimensions: Dimensions | None = None

    def local_ref(self, ref: str) -> str | None:
        """Resolve ``ref`` (plain or ``cell.component``) to a component id of this cell."""
        local = {comp.id for comp in self.components}
        if ref in local:
            return ref
        parts = split_qualified(ref)
        if parts is not None and parts[0] == self.id and parts[1] in local:
            return parts[1]
        return None


@dataclass(frozen=True)
class ExternalLayoutData(LayoutNode):
    """A node outside any cell: a human user or an external system."""

    type: ExternalType = ExternalType.EXTERNAL
    direction: CellBound | None = None


@dataclass(frozen=True)
class DiagramLayoutData:
    """The complete input of one layout pass.

    ``connections`` holds every edge; ``inter_cell_connections`` is the subset
    that joins two different cells.
    """

    cells: list[CellLayoutData] = field(default_factory=list)
    externals: list[ExternalLayoutData] = field(default_factory=list)
    inter_cell_connections: list[LayoutEdge] = field(default_factory=list)
    connections: list[LayoutEdge] = field(default_factory=list)

    def owner_map(self) -> dict[str, str]:
        """Map every cell, component and gateway id to its cell id."""
        owners: dict[str, str] = {}
        for cell in self.cells:
            owners.setdefault(cell.id, cell.id)
            for comp in cell.components:
                owners.setdefault(comp.id, cell.id)
            if cell.gateway is not None:
                owners.setdefault(cell.gateway.id, cell.id)
        return owners

    def owner_of(self, ref: str, owners: dict[str, str] | None = None) -> str | None:
        """Cell id owning ``ref`` (plain or ``cell.component`` form), if any."""
        owners = self.owner_map() if owners is None else owners
        if ref in owners:
            return owners[ref]
        parts = split_qualified(ref)
        if parts is not None and parts[0] in owners and owners[parts[0]] == parts[0]:
            return parts[0]
        return None
