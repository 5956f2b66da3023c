"""
Dungeon invariant checks.

Each check inspects one aspect of a finished Dungeon and returns a
ValidationResult; ``validate_dungeon`` runs them all.
"""

from __future__ import annotations
import logging
from collections import defaultdict, deque
from itertools import combinations
from typing import TYPE_CHECKING, Dict, Iterable, List, Set, Tuple

import numpy as np

from ..geometry import Edge, vertex_key
from ..generators.layout import TileType
from ..generators.walls import floor_adjacency
from .core import ValidationResult
from .rules import (
    CONN_001,
    CONN_002,
    CONN_003,
    GRID_001,
    GRID_002,
    NAV_001,
    NAV_002,
    ROOM_001,
    ROOM_002,
    ROOM_003,
    WALL_001,
    WALL_002,
)

if TYPE_CHECKING:
    from ..pipeline.dungeon_pipeline import Dungeon

logger = logging.getLogger(__name__)

VertexKey = Tuple[float, float]


def _reachable(edges: Iterable[Edge], start: VertexKey) -> Set[VertexKey]:
    adjacency: Dict[VertexKey, List[VertexKey]] = defaultdict(list)
    for edge in edges:
        a, b = vertex_key(edge.u), vertex_key(edge.v)
        adjacency[a].append(b)
        adjacency[b].append(a)

    seen = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for other in adjacency[current]:
            if other not in seen:
                seen.add(other)
                queue.append(other)
    return seen


# ---- Individual checks ----

def check_grid(dungeon: Dungeon) -> ValidationResult:
    result = ValidationResult()
    grid, settings = dungeon.grid, dungeon.settings
    if (grid.width, grid.height) != (settings.grid_width, settings.grid_height):
        result.add_issue(GRID_001.issue(
            width=grid.width, height=grid.height,
            expected_width=settings.grid_width, expected_height=settings.grid_height,
        ))
    known = np.isin(grid.cells, [t.value for t in TileType])
    unknown = int(np.count_nonzero(~known))
    if unknown:
        result.add_issue(GRID_002.issue(count=unknown))
    return result


def check_rooms(dungeon: Dungeon) -> ValidationResult:
    """Rooms inside the grid, pairwise separated, and fully FLOOR."""
    result = ValidationResult()
    grid = dungeon.grid
    spacing = dungeon.settings.room_spacing

    for room in dungeon.rooms:
        if not room.bounds.within(grid.width, grid.height):
            result.add_issue(ROOM_001.issue(location=f"room {room.id}", room_id=room.id))
            continue
        block = grid.cells[room.y:room.bounds.y2, room.x:room.bounds.x2]
        missing = int(np.count_nonzero(block != TileType.FLOOR.value))
        if missing:
            result.add_issue(ROOM_003.issue(location=f"room {room.id}", room_id=room.id, count=missing))

    for a, b in combinations(dungeon.rooms, 2):
        if a.intersects(b, spacing):
            result.add_issue(ROOM_002.issue(location=f"rooms {a.id},{b.id}", room_a=a.id, room_b=b.id))

    return result


def check_walls(dungeon: Dungeon) -> ValidationResult:
    result = ValidationResult()
    grid = dungeon.grid
    touched = floor_adjacency(grid)

    bare = int(np.count_nonzero(grid.mask(TileType.EMPTY) & touched))
    if bare:
        result.add_issue(WALL_001.issue(count=bare))

    floating = int(np.count_nonzero(grid.mask(TileType.WALL) & ~touched))
    if floating:
        result.add_issue(WALL_002.issue(count=floating))

    return result


def check_connectors(dungeon: Dungeon) -> ValidationResult:
    """Connectors come from the triangulation and span its start component."""
    result = ValidationResult()
    triangulation = list(dungeon.triangulation)
    if not triangulation:
        return result

    known = {edge.key() for edge in triangulation}
    for edge in dungeon.edges:
        if edge.key() not in known:
            result.add_issue(CONN_002.issue(edge=repr(edge)))

    start = vertex_key(triangulation[0].u)
    expected = _reachable(triangulation, start)
    reached = _reachable(dungeon.edges, start)
    missing = len(expected - reached)
    if missing:
        result.add_issue(CONN_001.issue(count=missing))

    return result


def check_navigation(dungeon: Dungeon) -> ValidationResult:
    result = ValidationResult()
    grid = dungeon.grid

    floor = grid.count(TileType.FLOOR)
    if dungeon.navigation.node_count != floor:
        result.add_issue(NAV_001.issue(nodes=dungeon.navigation.node_count, floor=floor))

    if dungeon.rooms:
        spawn_cell = dungeon.spawn.to_coordinate()
        if not grid.is_floor(spawn_cell.x, spawn_cell.y):
            result.add_issue(NAV_002.issue(x=dungeon.spawn.x, y=dungeon.spawn.y))

    return result


def check_reachability(dungeon: Dungeon) -> ValidationResult:
    """Rooms whose centres the connectors join should share the spawn's region."""
    result = ValidationResult()
    if not dungeon.rooms or not dungeon.edges:
        return result

    spawn_cell = dungeon.spawn.to_coordinate().as_tuple()
    region = next((r for r in dungeon.grid.get_connected_regions() if spawn_cell in r), set())
    joined = _reachable(dungeon.edges, vertex_key(dungeon.spawn))

    for room in dungeon.rooms:
        if vertex_key(room.center) not in joined:
            continue
        if room.center.to_coordinate().as_tuple() not in region:
            result.add_issue(CONN_003.issue(location=f"room {room.id}", room_id=room.id))

    return result


def validate_dungeon(dungeon: Dungeon) -> ValidationResult:
    """
    Run every invariant check against a generated dungeon.

    Args:
        dungeon: Output of the generation pipeline

    Returns:
        Combined ValidationResult; ``passed`` is False if any FAIL issue
        was found
    """
    result = ValidationResult()
    for check in (check_grid, check_rooms, check_walls, check_connectors,
                  check_navigation, check_reachability):
        result.merge(check(dungeon))

    if result.failed:
        logger.warning("Dungeon validation failed: %d error(s)", len(result.errors))
    return result
