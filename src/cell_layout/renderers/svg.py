"""SVG preview of a computed layout.

Draws node boxes and routed edge paths only; labels are left to the real
renderer. Each shape carries a ``<title>`` with its id for hover inspection.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from cell_layout.layout.types import EdgePath, LayoutResult, NodePosition
from cell_layout.routing.paths import fmt
from cell_layout.types import NodeKind

SVG_NS = "http://www.w3.org/2000/svg"

ARROW_ID = "arrow"

_FILL: dict[NodeKind, str] = {
    NodeKind.CELL: "#f4f7fb",
    NodeKind.COMPONENT: "#ffffff",
    NodeKind.GATEWAY: "#ffe8a3",
    NodeKind.USER: "#e3f2e1",
    NodeKind.EXTERNAL: "#f2e1ef",
}

_CORNER: dict[NodeKind, float] = {
    NodeKind.CELL: 0,
    NodeKind.COMPONENT: 6,
    NodeKind.GATEWAY: 0,
    NodeKind.USER: 20,
    NodeKind.EXTERNAL: 6,
}


@dataclass(frozen=True)
class SvgRenderer:
    margin: float = 20
    stroke: str = "#4a5568"
    edge_stroke: str = "#2b6cb0"

    def render(self, result: LayoutResult) -> str:
        box = result.bounds
        width = box.width + 2 * self.margin
        height = box.height + 2 * self.margin
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": fmt(width),
                "height": fmt(height),
                "viewBox": " ".join(fmt(v) for v in (box.min_x - self.margin, box.min_y - self.margin, width, height)),
            },
        )
        self._defs(root)

        nodes = ET.SubElement(root, "g", {"class": "nodes"})
        # Cells first so their contents paint on top
        ordered = sorted(result.nodes.items(), key=lambda item: item[1].kind is not NodeKind.CELL)
        for node_id, node in ordered:
            self._node(nodes, node_id, node)

        edges = ET.SubElement(root, "g", {"class": "edges"})
        for edge in result.edges.values():
            self._edge(edges, edge)

        return ET.tostring(root, encoding="unicode") + "\n"

    def _defs(self, root: ET.Element) -> None:
        defs = ET.SubElement(root, "defs")
        marker = ET.SubElement(
            defs,
            "marker",
            {
                "id": ARROW_ID,
                "viewBox": "0 0 10 10",
                "refX": "10",
                "refY": "5",
                "markerWidth": "8",
                "markerHeight": "8",
                "orient": "auto-start-reverse",
            },
        )
        ET.SubElement(marker, "path", {"d": "M 0 0 L 10 5 L 0 10 z", "fill": self.edge_stroke})

    def _node(self, parent: ET.Element, node_id: str, node: NodePosition) -> None:
        if node.kind is NodeKind.GATEWAY:
            cx = node.x + node.width / 2
            cy = node.y + node.height / 2
            points = [(cx, node.y), (node.x + node.width, cy), (cx, node.y + node.height), (node.x, cy)]
            shape = ET.SubElement(
                parent,
                "polygon",
                {"points": " ".join(f"{fmt(x)},{fmt(y)}" for x, y in points)},
            )
        else:
            corner = _CORNER[node.kind]
            shape = ET.SubElement(
                parent,
                "rect",
                {
                    "x": fmt(node.x),
                    "y": fmt(node.y),
                    "width": fmt(node.width),
                    "height": fmt(node.height),
                    "rx": fmt(corner),
                },
            )
        shape.set("class", node.kind.value)
        shape.set("fill", _FILL[node.kind])
        shape.set("stroke", self.stroke)
        if node.kind is NodeKind.CELL:
            shape.set("stroke-dasharray", "8 4")
        ET.SubElement(shape, "title").text = node_id

    def _edge(self, parent: ET.Element, edge: EdgePath) -> None:
        path = ET.SubElement(
            parent,
            "path",
            {
                "d": edge.path,
                "fill": "none",
                "stroke": self.edge_stroke,
                "stroke-width": "1.5",
                "marker-end": f"url(#{ARROW_ID})",
            },
        )
        ET.SubElement(path, "title").text = f"{edge.id}: {edge.source} -> {edge.target}"
