"""Layout engine: sequences every strategy into one deterministic pass.

Zones, top to bottom:
  - header: users and externals that connect into cells
  - middle: the cells, in a single horizontal row
  - bottom: externals that cells connect out to
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from cell_layout.config import DEFAULT_OPTIONS, LayoutOptions
from cell_layout.ir.diagram import (
    CellLayoutData,
    DiagramLayoutData,
    GatewayData,
    LayoutEdge,
    LayoutNode,
    split_qualified,
)
from cell_layout.ir.validation import LayoutWarning, WarningCode, validate_diagram
from cell_layout.layout.boundary import BoundaryPositioner
from cell_layout.layout.cell_sizer import CellSizer
from cell_layout.layout.geometry import get_best_port_alignment, get_port_position, node_bounds
from cell_layout.layout.grid import GridLayout
from cell_layout.layout.overlap import OverlapResolver
from cell_layout.layout.sugiyama import SugiyamaLayout
from cell_layout.layout.two_graph import TwoGraphStrategy
from cell_layout.layout.types import (
    BoundingBox,
    CellDimensions,
    CellLayoutResult,
    Dimensions,
    EdgePath,
    LayoutResult,
    NodePosition,
    Position,
)
from cell_layout.routing.bezier import BezierRouter
from cell_layout.types import CellBound, ExternalType, NodeKind, PortAlignment, RankDirection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Strategies:
    """Every strategy of one layout pass, built from a single options value."""

    sugiyama: SugiyamaLayout
    grid: GridLayout
    two_graph: TwoGraphStrategy
    cell_sizer: CellSizer
    overlap: OverlapResolver
    boundary: BoundaryPositioner
    router: BezierRouter

    @classmethod
    def from_options(cls, options: LayoutOptions) -> Strategies:
        return cls(
            sugiyama=SugiyamaLayout.from_options(options),
            grid=GridLayout(spacing=options.grid_spacing),
            two_graph=TwoGraphStrategy(),
            cell_sizer=CellSizer(
                min_cell_size=options.min_cell_size,
                padding_multiplier=options.cell_padding_multiplier,
                min_padding=options.cell_min_padding,
            ),
            overlap=OverlapResolver(
                padding=options.overlap_padding,
                grid_spacing=options.grid_spacing,
                grid_vertical_offset=options.grid_vertical_offset,
            ),
            boundary=BoundaryPositioner(offset=options.external_offset, spacing=options.external_spacing),
            router=BezierRouter(curve_offset=options.curve_radius),
        )


class LayoutEngine:
    """Computes a complete layout for a cell diagram.

    The engine holds one immutable ``LayoutOptions`` value. ``configure``
    swaps it for a new one; a ``layout`` call may also take a one-off value
    without touching the engine.
    """

    def __init__(self, options: LayoutOptions | None = None) -> None:
        self._options = options or DEFAULT_OPTIONS
        self._strategies = Strategies.from_options(self._options)

    @property
    def options(self) -> LayoutOptions:
        return self._options

    def configure(self, **changes: object) -> LayoutOptions:
        """Replace the engine's options with ``changes`` applied; returns the new value."""
        self._options = self._options.with_options(**changes)
        self._strategies = Strategies.from_options(self._options)
        return self._options

    def layout(self, diagram: DiagramLayoutData, options: LayoutOptions | None = None) -> LayoutResult:
        if options is None:
            return _run(diagram, self._options, self._strategies)
        return _run(diagram, options, Strategies.from_options(options))


def layout_diagram(diagram: DiagramLayoutData, options: LayoutOptions | None = None) -> LayoutResult:
    """Lay out ``diagram`` once with ``options`` (defaults when omitted)."""
    return LayoutEngine(options).layout(diagram)


# ─── Pass ────────────────────────────────────────────────────────────────────


def _run(diagram: DiagramLayoutData, options: LayoutOptions, strategies: Strategies) -> LayoutResult:
    warnings = validate_diagram(diagram)
    result = LayoutResult(warnings=warnings)
    padding = options.diagram_padding

    cells = _first_by_id(diagram.cells)
    cell_results: dict[str, CellLayoutResult] = {}
    for cell in cells:
        cell_result = layout_cell(cell, options, strategies)
        cell_results[cell.id] = cell_result
        result.cell_dimensions[cell.id] = cell_result.dimensions

    owners = diagram.owner_map()
    externals = [ext for ext in _first_by_id(diagram.externals) if ext.id not in owners]

    def owner_of(ref: str) -> str | None:
        return diagram.owner_of(ref, owners)

    assignment = strategies.boundary.classify(externals, diagram.connections, owner_of)
    by_id = {ext.id: ext for ext in externals}
    header_height = max((by_id[ext_id].height for ext_id in assignment.header), default=0)
    cell_y = padding + header_height + options.external_offset if assignment.header else padding

    ordered = order_cells(cells, diagram.inter_cell_connections, owner_of, strategies)

    cell_boxes: dict[str, BoundingBox] = {}
    cell_x = padding
    for cell in ordered:
        dims = result.cell_dimensions[cell.id]
        result.nodes[cell.id] = NodePosition(cell_x, cell_y, dims.width, dims.height, NodeKind.CELL)
        cell_boxes[cell.id] = BoundingBox(cell_x, cell_y, cell_x + dims.width, cell_y + dims.height)
        cell_x += dims.width + options.node_spacing

    for cell in ordered:
        _place_cell_contents(cell, cell_results[cell.id], result.nodes)

    cells_box = strategies.boundary.combined_bounds(cell_boxes.values())
    actor_positions = strategies.boundary.position_zones(
        assignment,
        externals,
        cell_boxes,
        header_y=padding,
        bottom_y=cells_box.max_y + options.external_offset,
    )
    for ext in externals:
        pos = actor_positions[ext.id]
        kind = NodeKind.USER if ext.type is ExternalType.USER else NodeKind.EXTERNAL
        result.nodes[ext.id] = NodePosition(pos.x, pos.y, ext.width, ext.height, kind)

    route_edges(diagram.connections, result, options, strategies.router)

    result.bounds = BoundingBox.from_rects(node.rect() for node in result.nodes.values())
    logger.debug(
        "laid out %d cell(s), %d external(s), %d edge(s)",
        len(cells),
        len(externals),
        len(result.edges),
    )
    return result


def layout_cell(cell: CellLayoutData, options: LayoutOptions, strategies: Strategies) -> CellLayoutResult:
    """Lay out one cell's components relative to the cell's content origin."""
    components = _first_by_id(cell.components)
    if not components:
        if cell.dimensions is not None:
            dims = CellDimensions(cell.dimensions.width, cell.dimensions.height, Position(0, 0))
        else:
            dims = CellDimensions(options.min_cell_size, options.min_cell_size, Position(0, 0))
        return CellLayoutResult(node_positions={}, dimensions=dims, bounds=BoundingBox.empty())

    edges: list[LayoutEdge] = []
    for edge in cell.internal_connections:
        source = cell.local_ref(edge.source)
        target = cell.local_ref(edge.target)
        if source is None or target is None:
            continue
        edges.append(replace(edge, source=source, target=target))

    separated = strategies.two_graph.separate(components, edges)
    if separated.linked_nodes:
        linked = strategies.sugiyama.layout(separated.linked_nodes, separated.linked_edges)
        unlinked = strategies.grid.layout(separated.unlinked_nodes)
        positions = strategies.two_graph.merge(
            linked,
            unlinked,
            node_bounds(linked, separated.linked_nodes),
            options.node_spacing,
        )
    else:
        positions = strategies.grid.layout(components)

    positions = strategies.overlap.resolve(positions, components)

    dimensions = {comp.id: Dimensions(comp.width, comp.height) for comp in components}
    if cell.dimensions is not None:
        cell_dims = strategies.cell_sizer.fit_to(positions, dimensions, cell.dimensions.width, cell.dimensions.height)
    else:
        cell_dims = strategies.cell_sizer.calculate_size(positions, dimensions)

    logger.debug(
        "cell '%s': %d component(s) (%d linked), size %sx%s",
        cell.id,
        len(components),
        len(separated.linked_nodes),
        cell_dims.width,
        cell_dims.height,
    )
    return CellLayoutResult(node_positions=positions, dimensions=cell_dims, bounds=node_bounds(positions, components))


def order_cells(
    cells: Sequence[CellLayoutData],
    inter_cell_connections: Sequence[LayoutEdge],
    owner_of: Callable[[str], str | None],
    strategies: Strategies,
) -> list[CellLayoutData]:
    """Left-to-right order of the cell row.

    Without inter-cell connections the input order is kept. Otherwise the
    cells are ranked left to right by the hierarchical layout, so traffic
    between cells mostly flows rightwards.
    """
    cell_ids = {cell.id for cell in cells}
    edges: list[LayoutEdge] = []
    for edge in inter_cell_connections:
        source = owner_of(edge.source)
        target = owner_of(edge.target)
        if source in cell_ids and target in cell_ids and source != target:
            edges.append(LayoutEdge(edge.id, source, target))
    if not edges:
        return list(cells)

    ranker = replace(strategies.sugiyama, rank_direction=RankDirection.LR)
    positions = ranker.layout([LayoutNode(cell.id, 1, 1) for cell in cells], edges)
    index = {cell.id: i for i, cell in enumerate(cells)}
    return sorted(cells, key=lambda cell: (positions[cell.id].x, positions[cell.id].y, index[cell.id]))


def _place_cell_contents(cell: CellLayoutData, cell_result: CellLayoutResult, nodes: dict[str, NodePosition]) -> None:
    box = nodes[cell.id]
    offset = cell_result.dimensions.content_offset
    for comp in cell.components:
        if comp.id in nodes or comp.id not in cell_result.node_positions:
            continue
        local = cell_result.node_positions[comp.id]
        nodes[comp.id] = NodePosition(
            box.x + offset.x + local.x,
            box.y + offset.y + local.y,
            comp.width,
            comp.height,
            NodeKind.COMPONENT,
            parent=cell.id,
        )

    gateway = cell.gateway
    if gateway is not None and gateway.id not in nodes:
        pos = gateway_position(box, gateway)
        nodes[gateway.id] = NodePosition(pos.x, pos.y, gateway.width, gateway.height, NodeKind.GATEWAY, parent=cell.id)


def gateway_position(cell: NodePosition, gateway: GatewayData) -> Position:
    """Centre the gateway on the middle of the cell side it names."""
    center_x = cell.x + cell.width / 2
    center_y = cell.y + cell.height / 2
    if gateway.position is CellBound.SOUTH:
        center_y = cell.y + cell.height
    elif gateway.position is CellBound.EAST:
        center_x = cell.x + cell.width
    elif gateway.position is CellBound.WEST:
        center_x = cell.x
    else:
        center_y = cell.y
    return Position(center_x - gateway.width / 2, center_y - gateway.height / 2)


# ─── Edge Routing ────────────────────────────────────────────────────────────


def resolve_endpoint(ref: str, nodes: dict[str, NodePosition]) -> str | None:
    """Node id for ``ref``: the id itself, then ``cell.component``, then the cell."""
    if ref in nodes:
        return ref
    parts = split_qualified(ref)
    if parts is None:
        return None
    cell_id, local_id = parts
    local = nodes.get(local_id)
    if local is not None and local.parent == cell_id:
        return local_id
    cell = nodes.get(cell_id)
    if cell is not None and cell.kind is NodeKind.CELL:
        return cell_id
    return None


def route_edges(
    connections: Sequence[LayoutEdge],
    result: LayoutResult,
    options: LayoutOptions,
    router: BezierRouter,
) -> None:
    """Route every resolvable connection into ``result.edges``."""
    resolved: list[tuple[LayoutEdge, str, str]] = []
    seen: set[str] = set()
    for edge in connections:
        if edge.id in seen:
            continue
        seen.add(edge.id)
        source = resolve_endpoint(edge.source, result.nodes)
        target = resolve_endpoint(edge.target, result.nodes)
        if source is None or target is None:
            logger.debug("skipping edge '%s': unresolved endpoint", edge.id)
            if not any(w.subject == edge.id for w in result.warnings):
                result.warnings.append(
                    LayoutWarning(
                        WarningCode.UNRESOLVED_ENDPOINT,
                        f"edge '{edge.id}' could not be routed; ignored",
                        edge.id,
                    )
                )
            continue
        resolved.append((edge, source, target))

    pairs = {(source, target) for _, source, target in resolved}
    half_offset = options.bidirectional_offset / 2

    for edge, source, target in resolved:
        src_node = result.nodes[source]
        tgt_node = result.nodes[target]
        source_port, target_port = get_best_port_alignment(
            src_node.position,
            src_node.width,
            src_node.height,
            tgt_node.position,
            tgt_node.width,
            tgt_node.height,
        )
        source_point = get_port_position(src_node.position, src_node.width, src_node.height, source_port)
        target_point = get_port_position(tgt_node.position, tgt_node.width, tgt_node.height, target_port)

        if source != target and (target, source) in pairs:
            shift = half_offset if source < target else -half_offset
            source_point = _slide(source_point, source_port, shift)
            target_point = _slide(target_point, target_port, shift)

        path = router.route(source_point, target_point, source_port, target_port)
        result.edges[edge.id] = EdgePath(
            id=edge.id,
            source=source,
            target=target,
            path=path,
            source_port=source_port,
            target_port=target_port,
            source_point=source_point,
            target_point=target_point,
        )


def _slide(point: Position, port: PortAlignment, shift: float) -> Position:
    # Move along the side the port sits on
    if port in (PortAlignment.TOP, PortAlignment.BOTTOM):
        return point.translate(shift, 0)
    return point.translate(0, shift)


def _first_by_id(items):
    seen: set[str] = set()
    unique = []
    for item in items:
        if item.id not in seen:
            seen.add(item.id)
            unique.append(item)
    return unique
