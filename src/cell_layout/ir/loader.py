"""Load a DiagramLayoutData from JSON.

The document uses the converter's camelCase keys:

    {
      "cells": [{"id", "components", "internalConnections", "gateway", "dimensions"}],
      "externals": [{"id", "width", "height", "type", "direction"}],
      "interCellConnections": [{"id", "source", "target", "data"}],
      "connections": [...]
    }

Malformed documents raise ValueError naming the offending field.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from cell_layout.ir.diagram import (
    GATEWAY_SIZE,
    CellLayoutData,
    DiagramLayoutData,
    ExternalLayoutData,
    GatewayData,
    LayoutEdge,
    LayoutNode,
)
from cell_layout.layout.types import Dimensions
from cell_layout.types import CellBound, ExternalType

_E = TypeVar("_E", bound=Enum)


def load_diagram(path: str | Path) -> DiagramLayoutData:
    """Read and parse a diagram file.

    Raises:
        OSError: The file cannot be read.
        ValueError: The file is not valid JSON or not a valid diagram.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}") from None
    return diagram_from_dict(data)


def diagram_from_dict(data: Any) -> DiagramLayoutData:
    if not isinstance(data, dict):
        raise ValueError(f"diagram: expected an object, got {_kind(data)}")
    return DiagramLayoutData(
        cells=[_cell(item, f"cells[{i}]") for i, item in enumerate(_list(data, "cells", "diagram"))],
        externals=[_external(item, f"externals[{i}]") for i, item in enumerate(_list(data, "externals", "diagram"))],
        inter_cell_connections=_edges(data, "interCellConnections", "diagram"),
        connections=_edges(data, "connections", "diagram"),
    )


def _cell(data: Any, where: str) -> CellLayoutData:
    obj = _object(data, where)
    gateway = obj.get("gateway")
    dimensions = obj.get("dimensions")
    return CellLayoutData(
        id=_string(obj, "id", where),
        components=[_node(item, f"{where}.components[{i}]") for i, item in enumerate(_list(obj, "components", where))],
        internal_connections=_edges(obj, "internalConnections", where),
        gateway=None if gateway is None else _gateway(gateway, f"{where}.gateway"),
        dimensions=None if dimensions is None else _dimensions(dimensions, f"{where}.dimensions"),
    )


def _node(data: Any, where: str) -> LayoutNode:
    obj = _object(data, where)
    return LayoutNode(
        id=_string(obj, "id", where),
        width=_number(obj, "width", where),
        height=_number(obj, "height", where),
        data=obj.get("data"),
    )


def _external(data: Any, where: str) -> ExternalLayoutData:
    obj = _object(data, where)
    direction = obj.get("direction")
    return ExternalLayoutData(
        id=_string(obj, "id", where),
        width=_number(obj, "width", where),
        height=_number(obj, "height", where),
        data=obj.get("data"),
        type=_enum(ExternalType, obj.get("type", ExternalType.EXTERNAL.value), f"{where}.type"),
        direction=None if direction is None else _enum(CellBound, direction, f"{where}.direction"),
    )


def _gateway(data: Any, where: str) -> GatewayData:
    obj = _object(data, where)
    return GatewayData(
        id=_string(obj, "id", where),
        position=_enum(CellBound, obj.get("position", CellBound.default().value), f"{where}.position"),
        width=_number(obj, "width", where, GATEWAY_SIZE),
        height=_number(obj, "height", where, GATEWAY_SIZE),
    )


def _dimensions(data: Any, where: str) -> Dimensions:
    obj = _object(data, where)
    return Dimensions(width=_number(obj, "width", where), height=_number(obj, "height", where))


def _edges(obj: dict, key: str, where: str) -> list[LayoutEdge]:
    edges = []
    for i, item in enumerate(_list(obj, key, where)):
        edge_where = f"{key}[{i}]" if where == "diagram" else f"{where}.{key}[{i}]"
        edge = _object(item, edge_where)
        edges.append(
            LayoutEdge(
                id=_string(edge, "id", edge_where),
                source=_string(edge, "source", edge_where),
                target=_string(edge, "target", edge_where),
                data=edge.get("data"),
            )
        )
    return edges


# ─── Field helpers ───────────────────────────────────────────────────────────


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def _object(data: Any, where: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{where}: expected an object, got {_kind(data)}")
    return data


def _list(obj: dict, key: str, where: str) -> list:
    value = obj.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"{where}.{key}: expected an array, got {_kind(value)}")
    return value


def _string(obj: dict, key: str, where: str) -> str:
    if key not in obj:
        raise ValueError(f"{where}: missing required field '{key}'")
    value = obj[key]
    if not isinstance(value, str) or not value:
        raise ValueError(f"{where}.{key}: expected a non-empty string, got {_kind(value)}")
    return value


def _number(obj: dict, key: str, where: str, default: float | None = None) -> float:
    if key not in obj:
        if default is not None:
            return default
        raise ValueError(f"{where}: missing required field '{key}'")
    value = obj[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where}.{key}: expected a number, got {_kind(value)}")
    return value


def _enum(enum_type: type[_E], value: Any, where: str) -> _E:
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValueError(f"{where}: unknown value {value!r}; use one of {allowed}") from None
