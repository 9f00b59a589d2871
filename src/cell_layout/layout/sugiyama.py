"""Sugiyama-style layered layout for connected components of a cell.

Phases:
  1. Cycle removal (greedy-FAS)
  2. Layer assignment (longest path)
  3. Dummy node insertion
  4. Crossing minimization (barycenter)
  5. Coordinate assignment (centres, then rank-direction transform)

The result is converted to top-left corners; every downstream strategy
assumes top-left positions.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import networkx as nx

from cell_layout.config import LayoutOptions
from cell_layout.ir.diagram import LayoutEdge, LayoutNode
from cell_layout.ir.graph import GraphIR
from cell_layout.layout.types import Position
from cell_layout.types import RankDirection

logger = logging.getLogger(__name__)

DUMMY_PREFIX = "__dummy_"

MAX_CROSSING_PASSES = 24


# ─── Cycle Removal (Greedy-FAS) ─────────────────────────────────────────────


def greedy_fas_ordering(graph: nx.DiGraph) -> list[str]:
    """Compute a node ordering using the greedy-FAS heuristic.

    Candidates are scanned in graph insertion order, so the ordering is
    reproducible for a given input.
    """
    active: dict[str, None] = dict.fromkeys(graph.nodes)
    out_deg: dict[str, int] = {}
    in_deg: dict[str, int] = {}
    for node in graph.nodes:
        out_deg[node] = sum(1 for succ in graph.successors(node) if succ != node)
        in_deg[node] = sum(1 for pred in graph.predecessors(node) if pred != node)

    s1: list[str] = []
    s2: list[str] = []

    def take(node: str) -> None:
        del active[node]
        for succ in graph.successors(node):
            if succ in active:
                in_deg[succ] -= 1
        for pred in graph.predecessors(node):
            if pred in active:
                out_deg[pred] -= 1

    while active:
        changed = True
        while changed:
            changed = False
            sinks = [n for n in active if out_deg[n] == 0]
            for sink in sinks:
                changed = True
                take(sink)
                s2.append(sink)

        changed = True
        while changed:
            changed = False
            sources = [n for n in active if in_deg[n] == 0]
            for source in sources:
                changed = True
                take(source)
                s1.append(source)

        if active:
            best = max(active, key=lambda n: out_deg[n] - in_deg[n])
            take(best)
            s1.append(best)

    s2.reverse()
    s1.extend(s2)
    return s1


def remove_cycles(graph: nx.DiGraph) -> tuple[nx.DiGraph, set[tuple[str, str]]]:
    """Remove cycles using greedy-FAS. Returns (dag, reversed_edges).

    Self-loops count as reversed and are left out of the DAG.
    """
    if graph.number_of_nodes() == 0:
        return graph.copy(), set()

    ordering = greedy_fas_ordering(graph)
    position: dict[str, int] = {node: pos for pos, node in enumerate(ordering)}

    reversed_edges: set[tuple[str, str]] = set()
    for src, tgt in graph.edges():
        if src == tgt or position[src] > position[tgt]:
            reversed_edges.add((src, tgt))

    dag: nx.DiGraph = nx.DiGraph()
    for node_id in graph.nodes:
        dag.add_node(node_id, **graph.nodes[node_id])

    for src, tgt, edge_attrs in graph.edges(data=True):
        if src == tgt:
            continue
        if (src, tgt) in reversed_edges:
            if not dag.has_edge(tgt, src):
                dag.add_edge(tgt, src, **edge_attrs)
        else:
            dag.add_edge(src, tgt, **edge_attrs)

    return dag, reversed_edges


# ─── Layer Assignment ────────────────────────────────────────────────────────


class LayerAssignment:
    def __init__(self, layers: dict[str, int], layer_count: int) -> None:
        self.layers = layers
        self.layer_count = layer_count

    @classmethod
    def assign(cls, dag: nx.DiGraph) -> LayerAssignment:
        """Longest-path layering: every edge points at least one layer down."""
        layers: dict[str, int] = {node_id: 0 for node_id in dag.nodes}
        for node_id in nx.topological_sort(dag):
            for succ in dag.successors(node_id):
                if layers[succ] < layers[node_id] + 1:
                    layers[succ] = layers[node_id] + 1

        layer_count = (max(layers.values()) + 1) if layers else 1
        return cls(layers=layers, layer_count=layer_count)


# ─── Dummy Node Insertion ────────────────────────────────────────────────────


@dataclass
class AugmentedGraph:
    graph: nx.DiGraph
    layers: dict[str, int]
    layer_count: int
    dummy_ids: list[str]


def insert_dummy_nodes(dag: nx.DiGraph, la: LayerAssignment) -> AugmentedGraph:
    """Split edges spanning several layers into chains through dummy nodes."""
    g: nx.DiGraph = nx.DiGraph()
    for node_id in dag.nodes:
        g.add_node(node_id, **dag.nodes[node_id])

    layers: dict[str, int] = copy.copy(la.layers)
    dummy_ids: list[str] = []
    edge_counter = 0

    for src_id, tgt_id in dag.edges():
        span = layers[tgt_id] - layers[src_id]
        if span <= 1:
            g.add_edge(src_id, tgt_id)
            continue

        chain_prev = src_id
        for i in range(span - 1):
            dummy_id = f"{DUMMY_PREFIX}{edge_counter}_{i}"
            # Never reuse the id of a real node
            while dummy_id in g:
                dummy_id += "_"
            g.add_node(dummy_id)
            layers[dummy_id] = layers[src_id] + i + 1
            dummy_ids.append(dummy_id)
            g.add_edge(chain_prev, dummy_id)
            chain_prev = dummy_id
        g.add_edge(chain_prev, tgt_id)
        edge_counter += 1

    layer_count = (max(layers.values()) + 1) if layers else 1
    return AugmentedGraph(graph=g, layers=layers, layer_count=layer_count, dummy_ids=dummy_ids)


# ─── Crossing Minimization ───────────────────────────────────────────────────


def minimise_crossings(aug: AugmentedGraph) -> list[list[str]]:
    """Reorder layers with alternating barycenter sweeps; keep the best ordering seen."""
    ordering: list[list[str]] = [[] for _ in range(aug.layer_count)]
    for node_id in aug.graph.nodes:
        ordering[aug.layers[node_id]].append(node_id)

    best_ordering = [list(layer) for layer in ordering]
    best = count_crossings(ordering, aug.graph)

    for _pass in range(MAX_CROSSING_PASSES):
        if best == 0:
            break

        for layer_idx in range(1, aug.layer_count):
            prev = {nid: float(i) for i, nid in enumerate(ordering[layer_idx - 1])}
            _sort_layer(ordering[layer_idx], aug.graph, prev, "incoming")

        for layer_idx in range(aug.layer_count - 2, -1, -1):
            nxt = {nid: float(i) for i, nid in enumerate(ordering[layer_idx + 1])}
            _sort_layer(ordering[layer_idx], aug.graph, nxt, "outgoing")

        crossings = count_crossings(ordering, aug.graph)
        if crossings >= best:
            break
        best = crossings
        best_ordering = [list(layer) for layer in ordering]

    return best_ordering


def _sort_layer(layer: list[str], graph: nx.DiGraph, neighbor_pos: dict[str, float], direction: str) -> None:
    current = {nid: float(i) for i, nid in enumerate(layer)}
    layer.sort(key=lambda nid: _barycenter(nid, graph, neighbor_pos, direction, current[nid]))


def _barycenter(
    node_id: str,
    graph: nx.DiGraph,
    neighbor_pos: dict[str, float],
    direction: str,
    fallback: float,
) -> float:
    neighbors = graph.predecessors(node_id) if direction == "incoming" else graph.successors(node_id)
    positions = [neighbor_pos[nb] for nb in neighbors if nb in neighbor_pos]
    if not positions:
        return fallback
    return sum(positions) / len(positions)


def count_crossings(ordering: list[list[str]], graph: nx.DiGraph) -> int:
    total = 0
    for l_idx in range(len(ordering) - 1):
        tgt_pos: dict[str, int] = {nid: i for i, nid in enumerate(ordering[l_idx + 1])}
        edges: list[tuple[int, int]] = []
        for sp, src_id in enumerate(ordering[l_idx]):
            for nb in graph.successors(src_id):
                if nb in tgt_pos:
                    edges.append((sp, tgt_pos[nb]))
        for i in range(len(edges)):
            for j in range(i + 1, len(edges)):
                ei, ej = edges[i], edges[j]
                if (ei[0] < ej[0] and ei[1] > ej[1]) or (ei[0] > ej[0] and ei[1] < ej[1]):
                    total += 1
    return total


# ─── Coordinate Assignment ───────────────────────────────────────────────────


def assign_centers(
    ordering: list[list[str]],
    aug: AugmentedGraph,
    sizes: dict[str, tuple[float, float]],
    node_spacing: float,
    rank_spacing: float,
    edge_spacing: float,
    direction: RankDirection,
) -> dict[str, tuple[float, float]]:
    """Assign centre coordinates to every node, dummies included.

    Layout happens in a top-to-bottom frame where "breadth" runs along a rank
    and "depth" across ranks; ``direction`` then maps the frame onto x/y.
    """
    horizontal = direction.is_horizontal

    def breadth_depth(node_id: str) -> tuple[float, float]:
        width, height = sizes.get(node_id, (0.0, 0.0))
        return (height, width) if horizontal else (width, height)

    dummies = set(aug.dummy_ids)

    def separation(node_id: str) -> float:
        return edge_spacing if node_id in dummies else node_spacing

    band_depth = [max((breadth_depth(nid)[1] for nid in layer), default=0.0) for layer in ordering]
    band_center: list[float] = []
    depth = 0.0
    for band in band_depth:
        band_center.append(depth + band / 2)
        depth += band + rank_spacing

    breadth: dict[str, float] = {}
    layer_extent: list[float] = []
    for layer in ordering:
        cursor = 0.0
        prev: str | None = None
        for node_id in layer:
            b, _ = breadth_depth(node_id)
            if prev is not None:
                cursor += (separation(prev) + separation(node_id)) / 2
            breadth[node_id] = cursor + b / 2
            cursor += b
            prev = node_id
        layer_extent.append(cursor)

    widest = max(layer_extent, default=0.0)
    for layer, extent in zip(ordering, layer_extent):
        shift = (widest - extent) / 2
        for node_id in layer:
            breadth[node_id] += shift

    # Pull each layer towards the barycenter of the layer above, then below.
    for layer_idx in range(1, len(ordering)):
        _align_layer(ordering[layer_idx], breadth, aug.graph, "incoming")
    for layer_idx in range(len(ordering) - 2, -1, -1):
        _align_layer(ordering[layer_idx], breadth, aug.graph, "outgoing")

    centers: dict[str, tuple[float, float]] = {}
    for layer_idx, layer in enumerate(ordering):
        for node_id in layer:
            b = breadth[node_id]
            d = band_center[layer_idx]
            if direction is RankDirection.TB:
                centers[node_id] = (b, d)
            elif direction is RankDirection.BT:
                centers[node_id] = (b, -d)
            elif direction is RankDirection.LR:
                centers[node_id] = (d, b)
            else:
                centers[node_id] = (-d, b)
    return centers


def _align_layer(layer: list[str], breadth: dict[str, float], graph: nx.DiGraph, direction: str) -> None:
    own_sum = 0.0
    other_sum = 0.0
    count = 0
    for node_id in layer:
        neighbors = graph.predecessors(node_id) if direction == "incoming" else graph.successors(node_id)
        for nb in neighbors:
            own_sum += breadth[node_id]
            other_sum += breadth[nb]
            count += 1
    if count == 0:
        return
    shift = (other_sum - own_sum) / count
    for node_id in layer:
        breadth[node_id] += shift


# ─── SugiyamaLayout Engine ───────────────────────────────────────────────────


@dataclass(frozen=True)
class SugiyamaLayout:
    """Hierarchical layout of nodes joined by directed edges."""

    rank_direction: RankDirection = RankDirection.TB
    node_spacing: float = 80
    rank_spacing: float = 100
    edge_spacing: float = 50

    @classmethod
    def from_options(cls, options: LayoutOptions) -> SugiyamaLayout:
        return cls(
            rank_direction=options.rank_direction,
            node_spacing=options.node_spacing,
            rank_spacing=options.rank_spacing,
            edge_spacing=options.edge_spacing,
        )

    def layout(
        self,
        nodes: Sequence[LayoutNode],
        edges: Sequence[LayoutEdge],
        options: LayoutOptions | None = None,
    ) -> dict[str, Position]:
        """Return top-left positions for ``nodes``.

        Edges whose endpoints are not both in ``nodes`` are ignored.
        """
        if options is not None:
            return SugiyamaLayout.from_options(options).layout(nodes, edges)
        if not nodes:
            return {}

        gir = GraphIR.from_layout(nodes, edges)
        if gir.dropped_edges:
            logger.debug("ignoring %d edge(s) with an endpoint outside the node set", len(gir.dropped_edges))
        dag, reversed_edges = remove_cycles(gir.digraph)
        if reversed_edges:
            logger.debug("reversed %d edge(s) to break cycles: %s", len(reversed_edges), sorted(reversed_edges))

        la = LayerAssignment.assign(dag)
        aug = insert_dummy_nodes(dag, la)
        ordering = minimise_crossings(aug)

        sizes = {node_id: (gir.node_data(node_id).width, gir.node_data(node_id).height) for node_id in gir.digraph}
        centers = assign_centers(
            ordering,
            aug,
            sizes,
            self.node_spacing,
            self.rank_spacing,
            self.edge_spacing,
            self.rank_direction,
        )

        corners: dict[str, tuple[float, float]] = {}
        for node_id in gir.digraph.nodes:
            cx, cy = centers[node_id]
            width, height = sizes[node_id]
            corners[node_id] = (cx - width / 2, cy - height / 2)

        min_x = min(x for x, _ in corners.values())
        min_y = min(y for _, y in corners.values())
        logger.debug(
            "sugiyama: %d node(s), %d layer(s), %d dummy node(s)",
            len(corners),
            la.layer_count,
            len(aug.dummy_ids),
        )
        return {node_id: Position(x - min_x, y - min_y) for node_id, (x, y) in corners.items()}

