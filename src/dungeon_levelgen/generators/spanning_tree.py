"""
Reduce the triangulation to the connector set used for corridors.

A Prim-style spanning tree guarantees every triangulated room is reachable;
a random share of the remaining edges is added back to create loops.
"""

from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from ..geometry import Edge, Vertex, vertex_key

logger = logging.getLogger(__name__)


@dataclass
class ConnectorGraph:
    """Selected connector edges, split by how they were chosen"""
    tree: List[Edge] = field(default_factory=list)
    extras: List[Edge] = field(default_factory=list)

    @property
    def edges(self) -> List[Edge]:
        return self.tree + self.extras

    def __len__(self) -> int:
        return len(self.tree) + len(self.extras)


def minimum_spanning_tree(edges: Sequence[Edge], start: Optional[Vertex] = None) -> List[Edge]:
    """
    Grow a minimum spanning tree from ``start`` over the candidate edges.

    Each round scans the candidates in their given order and takes the
    shortest edge with exactly one endpoint already in the tree; equal
    lengths keep the first one found. Vertices not reachable from
    ``start`` are left out.

    Args:
        edges: Candidate edges, typically from the triangulation
        start: Seed vertex; defaults to the first edge's ``u``

    Returns:
        Tree edges in the order they were added
    """
    if not edges:
        return []

    closed: Set[Tuple[float, float]] = {vertex_key(start if start is not None else edges[0].u)}
    taken = [False] * len(edges)
    tree: List[Edge] = []

    while True:
        best = -1
        best_length = math.inf
        for i, edge in enumerate(edges):
            if taken[i]:
                continue
            if (vertex_key(edge.u) in closed) == (vertex_key(edge.v) in closed):
                continue
            length = edge.length
            if length < best_length:
                best, best_length = i, length

        if best < 0:
            break

        chosen = edges[best]
        taken[best] = True
        tree.append(chosen)
        closed.add(vertex_key(chosen.u))
        closed.add(vertex_key(chosen.v))

    return tree


def reduce_graph(edges: Sequence[Edge], chance: float, rng: random.Random) -> ConnectorGraph:
    """
    Spanning tree plus randomly retained extra edges.

    Every candidate outside the tree draws once from ``rng`` (in candidate
    order) and is kept when the draw in [0, 100) falls below ``chance``.
    """
    tree = minimum_spanning_tree(edges)
    in_tree = {id(edge) for edge in tree}

    extras = []
    for edge in edges:
        if id(edge) in in_tree:
            continue
        if rng.randrange(100) < chance:
            extras.append(edge)

    logger.debug("Reduced %d candidate edges to %d tree + %d extra",
                 len(edges), len(tree), len(extras))
    return ConnectorGraph(tree=tree, extras=extras)
