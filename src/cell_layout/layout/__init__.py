"""Layout strategies and the engine that sequences them."""

from __future__ import annotations

from cell_layout.layout.boundary import BoundaryPositioner, ZoneAssignment
from cell_layout.layout.cell_sizer import CellSizer
from cell_layout.layout.engine import LayoutEngine, Strategies, layout_diagram
from cell_layout.layout.grid import GridLayout
from cell_layout.layout.overlap import OverlapResolver
from cell_layout.layout.sugiyama import (
    DUMMY_PREFIX,
    AugmentedGraph,
    LayerAssignment,
    SugiyamaLayout,
    assign_centers,
    count_crossings,
    greedy_fas_ordering,
    insert_dummy_nodes,
    minimise_crossings,
    remove_cycles,
)
from cell_layout.layout.two_graph import TwoGraphStrategy
from cell_layout.layout.types import (
    BoundingBox,
    CellDimensions,
    CellLayoutResult,
    Dimensions,
    EdgePath,
    LayoutResult,
    NodeOverlap,
    NodePosition,
    Position,
    SeparatedGraphs,
)

__all__ = [
    "DUMMY_PREFIX",
    "AugmentedGraph",
    "BoundaryPositioner",
    "BoundingBox",
    "CellDimensions",
    "CellLayoutResult",
    "CellSizer",
    "Dimensions",
    "EdgePath",
    "GridLayout",
    "LayerAssignment",
    "LayoutEngine",
    "LayoutResult",
    "NodeOverlap",
    "NodePosition",
    "OverlapResolver",
    "Position",
    "SeparatedGraphs",
    "Strategies",
    "SugiyamaLayout",
    "TwoGraphStrategy",
    "ZoneAssignment",
    "assign_centers",
    "count_crossings",
    "greedy_fas_ordering",
    "insert_dummy_nodes",
    "layout_diagram",
    "minimise_crossings",
    "remove_cycles",
]
