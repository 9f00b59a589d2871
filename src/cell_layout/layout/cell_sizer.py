"""Cell sizing: wrap a cell's laid-out components in a padded square."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from cell_layout.ir.diagram import LayoutNode
from cell_layout.layout.geometry import bounding_box
from cell_layout.layout.types import BoundingBox, CellDimensions, Dimensions, Position


@dataclass(frozen=True)
class CellSizer:
    min_cell_size: float = 300
    padding_multiplier: float = 1.5
    min_padding: float = 60

    def calculate_size(
        self,
        positions: Mapping[str, Position],
        dimensions: Mapping[str, Dimensions],
    ) -> CellDimensions:
        """Square cell around the content, never smaller than ``min_cell_size``.

        ``content_offset`` is the translation that moves the content's top-left
        corner onto the padding inset.
        """
        if not positions:
            return CellDimensions(self.min_cell_size, self.min_cell_size, Position(0, 0))

        box = self.bounding_box(positions, dimensions)
        content_w = box.width
        content_h = box.height

        layout_size = max(content_w, content_h, self.min_cell_size)
        cell_size = max(layout_size * self.padding_multiplier, self.min_cell_size)

        padding_x = max((cell_size - content_w) / 2, self.min_padding)
        padding_y = max((cell_size - content_h) / 2, self.min_padding)

        return CellDimensions(
            width=cell_size,
            height=cell_size,
            content_offset=Position(padding_x - box.min_x, padding_y - box.min_y),
        )

    def calculate_size_from_nodes(
        self,
        positions: Mapping[str, Position],
        nodes: Iterable[LayoutNode],
    ) -> CellDimensions:
        return self.calculate_size(positions, {n.id: Dimensions(n.width, n.height) for n in nodes})

    def bounding_box(
        self,
        positions: Mapping[str, Position],
        dimensions: Mapping[str, Dimensions],
    ) -> BoundingBox:
        return bounding_box(positions, dimensions)

    def apply_content_offset(
        self,
        positions: Mapping[str, Position],
        cell: CellDimensions,
    ) -> dict[str, Position]:
        offset = cell.content_offset
        return {node_id: pos.translate(offset.x, offset.y) for node_id, pos in positions.items()}

    def resize(self, current: CellDimensions, new_size: float) -> CellDimensions:
        """Grow or shrink a cell, shifting the content offset by half the change."""
        size = max(new_size, self.min_cell_size)
        delta_w = (size - current.width) / 2
        delta_h = (size - current.height) / 2
        return CellDimensions(size, size, current.content_offset.translate(delta_w, delta_h))

    def fit_to(
        self,
        positions: Mapping[str, Position],
        dimensions: Mapping[str, Dimensions],
        width: float,
        height: float,
    ) -> CellDimensions:
        """Centre the content in a box of fixed size."""
        if not positions:
            return CellDimensions(width, height, Position(0, 0))
        box = self.bounding_box(positions, dimensions)
        return CellDimensions(
            width=width,
            height=height,
            content_offset=Position(
                (width - box.width) / 2 - box.min_x,
                (height - box.height) / 2 - box.min_y,
            ),
        )
