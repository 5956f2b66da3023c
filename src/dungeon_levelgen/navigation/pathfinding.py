"""
A* navigation over FLOOR tiles.

The index is built once from a finished grid and never mutated: each FLOOR
tile is a node in a flat arena, a numpy table maps ``[y, x]`` to node index
(-1 for non-walkable cells), and every node lists its walkable
8-neighbours with the Euclidean step cost. Search state lives entirely
inside ``find_path`` so a single index can serve concurrent queries.
"""

import heapq
import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..geometry import Coordinate, Vertex, distance
from ..generators.layout import TileGrid, TileType

logger = logging.getLogger(__name__)

_DIAGONAL = math.sqrt(2.0)

_OFFSETS = [
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if dx or dy
]

# f values closer than this compare equal, so ties fall through to h
_F_DIGITS = 6


class NavigationIndex:
    """Read-only walkability graph over a tile grid"""

    def __init__(
        self,
        width: int,
        height: int,
        coordinates: List[Coordinate],
        node_index: np.ndarray,
        neighbors: List[List[Tuple[int, float]]],
    ):
        self.width = width
        self.height = height
        self._coordinates = coordinates
        self._node_index = node_index
        self._neighbors = neighbors
        self._centers = np.array(
            [[c.x + 0.5, c.y + 0.5] for c in coordinates], dtype=np.float64
        ).reshape(-1, 2)
        self._node_index.flags.writeable = False
        self._centers.flags.writeable = False

    @classmethod
    def from_grid(cls, grid: TileGrid) -> "NavigationIndex":
        """
        Build the index from the FLOOR tiles of ``grid``.

        Args:
            grid: Finished tile grid; only FLOOR tiles become nodes

        Returns:
            NavigationIndex with one node per FLOOR tile
        """
        coordinates = list(grid.coordinates(TileType.FLOOR))
        node_index = np.full((grid.height, grid.width), -1, dtype=np.int64)
        for i, coord in enumerate(coordinates):
            node_index[coord.y, coord.x] = i

        neighbors: List[List[Tuple[int, float]]] = []
        for coord in coordinates:
            links = []
            for dx, dy in _OFFSETS:
                nx, ny = coord.x + dx, coord.y + dy
                if 0 <= nx < grid.width and 0 <= ny < grid.height:
                    other = int(node_index[ny, nx])
                    if other >= 0:
                        links.append((other, _DIAGONAL if dx and dy else 1.0))
            neighbors.append(links)

        logger.debug("Navigation index: %d nodes", len(coordinates))
        return cls(grid.width, grid.height, coordinates, node_index, neighbors)

    # ---- Lookups ----

    @property
    def node_count(self) -> int:
        return len(self._coordinates)

    def _node_at(self, coord: Coordinate) -> Optional[int]:
        if not (0 <= coord.x < self.width and 0 <= coord.y < self.height):
            return None
        index = int(self._node_index[coord.y, coord.x])
        return index if index >= 0 else None

    def is_walkable(self, coord: Coordinate) -> bool:
        return self._node_at(coord) is not None

    def neighbors(self, coord: Coordinate) -> List[Coordinate]:
        """Walkable 8-neighbours of ``coord``; empty if it is not walkable"""
        index = self._node_at(coord)
        if index is None:
            return []
        return [self._coordinates[other] for other, _ in self._neighbors[index]]

    def nearest_node(self, position: Vertex) -> Optional[Coordinate]:
        """Walkable tile whose centre is closest to ``position``"""
        if not self._coordinates:
            return None
        deltas = self._centers - np.array([position.x, position.y])
        best = int(np.argmin(np.einsum('ij,ij->i', deltas, deltas)))
        return self._coordinates[best]

    # ---- Search ----

    def find_path(self, start: Vertex, goal: Vertex) -> List[Vertex]:
        """
        A* search between the tiles containing ``start`` and ``goal``.

        Args:
            start: Start position; truncated to its containing tile
            goal: Goal position; truncated to its containing tile

        Returns:
            Tile centres from the start tile to the goal tile inclusive, or
            an empty list when either end is not walkable or the goal is
            unreachable
        """
        source = self._node_at(start.to_coordinate())
        target = self._node_at(goal.to_coordinate())
        if source is None or target is None:
            return []

        target_center = self._coordinates[target].to_vertex()

        def heuristic(node: int) -> float:
            return distance(self._coordinates[node].to_vertex(), target_center)

        g_score: Dict[int, float] = {source: 0.0}
        came_from: Dict[int, int] = {}
        closed = set()
        counter = 0

        h = heuristic(source)
        open_heap = [(round(h, _F_DIGITS), h, counter, source)]

        while open_heap:
            _, _, _, current = heapq.heappop(open_heap)
            if current in closed:
                continue
            if current == target:
                return self._reconstruct(came_from, current)
            closed.add(current)

            base = g_score[current]
            for other, cost in self._neighbors[current]:
                if other in closed:
                    continue
                tentative = base + cost
                if tentative < g_score.get(other, math.inf):
                    g_score[other] = tentative
                    came_from[other] = current
                    h = heuristic(other)
                    counter += 1
                    heapq.heappush(open_heap, (round(tentative + h, _F_DIGITS), h, counter, other))

        return []

    def _reconstruct(self, came_from: Dict[int, int], current: int) -> List[Vertex]:
        nodes = [current]
        while current in came_from:
            current = came_from[current]
            nodes.append(current)
        nodes.reverse()
        return [self._coordinates[n].to_vertex() for n in nodes]


def path_length(path: Sequence[Vertex]) -> float:
    """Total Euclidean length along a path"""
    return sum(distance(a, b) for a, b in zip(path, path[1:]))
