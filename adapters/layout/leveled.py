from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Set, Tuple

from domain.errors import CyclicGraphError
from domain.models import (
    DiagramExtent,
    EdgePlacement,
    GraphNode,
    LayoutPlan,
    Point,
    PositionedNode,
    RankedNode,
    Size,
    Spacing,
)
from domain.ports.layout import LayoutEngine

logger = logging.getLogger(__name__)

DEFAULT_NODE_SIZE = Size(100, 80)

_ON_PATH = 1
_DONE = 2


@dataclass(frozen=True)
class LayoutConfig:
    node_size: Size = DEFAULT_NODE_SIZE
    padding: Spacing = field(default_factory=Spacing)
    gutter: Spacing = field(default_factory=Spacing)


def compute_ranks(root: GraphNode) -> List[RankedNode]:
    """Assign every unique node id its longest-path distance from ``root``.

    Entries come back in first-discovery (depth-first preorder) order. Nodes
    are identified by ``id``; when several node objects share an id their
    child lists are merged in discovery order.

    Raises ``CyclicGraphError`` when a cycle is reachable from ``root``.
    """
    order, adjacency = _collect_adjacency(root)
    ranks: Dict[str, int] = {root.id: 0}
    for node_id in _topological_order(root.id, adjacency):
        next_rank = ranks[node_id] + 1
        for child_id in adjacency[node_id]:
            if ranks.get(child_id, -1) < next_rank:
                ranks[child_id] = next_rank
    return [
        RankedNode(id=node_id, child_ids=tuple(adjacency[node_id]), rank=ranks[node_id])
        for node_id in order
    ]


def group_by_rank(ranked: Sequence[RankedNode]) -> List[List[RankedNode]]:
    if not ranked:
        return []
    rows: List[List[RankedNode]] = [[] for _ in range(max(node.rank for node in ranked) + 1)]
    for node in ranked:
        rows[node.rank].append(node)
    return rows


def compute_positions(
    rows: Sequence[Sequence[RankedNode]],
    config: LayoutConfig,
    container: Size | None = None,
) -> Tuple[List[PositionedNode], DiagramExtent]:
    if not rows:
        msg = "Cannot position an empty graph"
        raise ValueError(msg)

    node_w = config.node_size.width
    node_h = config.node_size.height
    gutter = config.gutter
    padding = config.padding

    raw: List[Tuple[RankedNode, float, float]] = []
    min_x = 0.0
    last_row_y = 0.0
    for row_index, row in enumerate(rows):
        count = len(row)
        y = row_index * (node_h + gutter.y)
        last_row_y = y
        for index, node in enumerate(row):
            offset = index - count / 2
            x = offset * node_w + (offset + 0.5) * gutter.x
            min_x = min(min_x, x)
            raw.append((node, x, y))

    # Rows are symmetric around x = 0, so the leftmost edge is the half span.
    half_span = -min_x
    extent = DiagramExtent(
        width=2 * (padding.x + half_span),
        height=2 * padding.y + last_row_y + node_h,
    )

    centering = centering_offset(extent, container)
    shift_x = half_span + padding.x + centering.x
    shift_y = padding.y + centering.y

    nodes = [
        PositionedNode(
            id=node.id,
            child_ids=node.child_ids,
            rank=node.rank,
            x=x + shift_x,
            y=y + shift_y,
            width=node_w,
            height=node_h,
        )
        for node, x, y in raw
    ]
    return nodes, extent


def centering_offset(extent: DiagramExtent, container: Size | None) -> Point:
    """Shift that centers ``extent`` on every axis where it fits in ``container``."""
    if container is None:
        return Point(0, 0)
    return Point(
        x=max(container.width - extent.width, 0) / 2,
        y=max(container.height - extent.height, 0) / 2,
    )


def compute_edges(nodes: Sequence[PositionedNode]) -> List[EdgePlacement]:
    by_id = {node.id: node for node in nodes}
    edges: List[EdgePlacement] = []
    for node in nodes:
        for child_id in node.child_ids:
            child = by_id[child_id]
            edges.append(
                EdgePlacement(
                    source_id=node.id,
                    target_id=child.id,
                    start=Point(node.x + node.width / 2, node.y + node.height),
                    end=Point(child.x + child.width / 2, child.y),
                )
            )
    return edges


class LeveledLayoutEngine(LayoutEngine):
    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def build_plan(self, root: GraphNode, container: Size | None = None) -> LayoutPlan:
        ranked = compute_ranks(root)
        rows = group_by_rank(ranked)
        nodes, extent = compute_positions(rows, self.config, container)
        logger.debug(
            "Laid out %d nodes in %d rows, extent %.1fx%.1f",
            len(nodes),
            len(rows),
            extent.width,
            extent.height,
        )
        return LayoutPlan(
            nodes=nodes,
            edges=compute_edges(nodes),
            extent=extent,
            offset=centering_offset(extent, container),
        )


def _collect_adjacency(root: GraphNode) -> Tuple[List[str], Dict[str, List[str]]]:
    order: List[str] = []
    adjacency: Dict[str, List[str]] = {}
    seen: Set[int] = set()

    def visit(node: GraphNode) -> None:
        seen.add(id(node))
        if node.id not in adjacency:
            adjacency[node.id] = []
            order.append(node.id)
        targets = adjacency[node.id]
        for child in node.children:
            if child.id not in targets:
                targets.append(child.id)

    visit(root)
    stack: List[Iterator[GraphNode]] = [iter(root.children)]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue
        if id(child) in seen:
            continue
        visit(child)
        stack.append(iter(child.children))
    return order, adjacency


def _topological_order(root_id: str, adjacency: Dict[str, List[str]]) -> List[str]:
    state: Dict[str, int] = {root_id: _ON_PATH}
    path: List[str] = [root_id]
    postorder: List[str] = []
    stack: List[Iterator[str]] = [iter(adjacency[root_id])]
    while stack:
        child_id = next(stack[-1], None)
        if child_id is None:
            stack.pop()
            finished = path.pop()
            state[finished] = _DONE
            postorder.append(finished)
            continue
        status = state.get(child_id)
        if status == _ON_PATH:
            raise CyclicGraphError(path[path.index(child_id) :] + [child_id])
        if status == _DONE:
            continue
        state[child_id] = _ON_PATH
        path.append(child_id)
        stack.append(iter(adjacency[child_id]))
    postorder.reverse()
    return postorder
