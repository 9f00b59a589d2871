"""Convert a LayoutResult into JSON-ready dicts with camelCase keys."""

from __future__ import annotations

import json
from typing import Any

from cell_layout.layout.types import BoundingBox, CellDimensions, EdgePath, LayoutResult, NodePosition, Position


def result_to_dict(result: LayoutResult) -> dict[str, Any]:
    return {
        "nodes": {node_id: _node(node) for node_id, node in result.nodes.items()},
        "edges": {edge_id: _edge(edge) for edge_id, edge in result.edges.items()},
        "cellDimensions": {cell_id: _cell(dims) for cell_id, dims in result.cell_dimensions.items()},
        "bounds": _bounds(result.bounds),
        "warnings": [warning.to_dict() for warning in result.warnings],
    }


def dumps_result(result: LayoutResult, indent: int | None = 2) -> str:
    return json.dumps(result_to_dict(result), indent=indent)


def _point(pos: Position) -> dict[str, float]:
    return {"x": pos.x, "y": pos.y}


def _node(node: NodePosition) -> dict[str, Any]:
    out: dict[str, Any] = {
        "x": node.x,
        "y": node.y,
        "width": node.width,
        "height": node.height,
        "kind": node.kind.value,
    }
    if node.parent is not None:
        out["parent"] = node.parent
    return out


def _edge(edge: EdgePath) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "path": edge.path,
    }
    if edge.source_port is not None:
        out["sourcePort"] = edge.source_port.value
    if edge.target_port is not None:
        out["targetPort"] = edge.target_port.value
    if edge.source_point is not None:
        out["sourcePoint"] = _point(edge.source_point)
    if edge.target_point is not None:
        out["targetPoint"] = _point(edge.target_point)
    return out


def _cell(dims: CellDimensions) -> dict[str, Any]:
    return {"width": dims.width, "height": dims.height, "contentOffset": _point(dims.content_offset)}


def _bounds(box: BoundingBox) -> dict[str, float]:
    return {"minX": box.min_x, "minY": box.min_y, "maxX": box.max_x, "maxY": box.max_y}
