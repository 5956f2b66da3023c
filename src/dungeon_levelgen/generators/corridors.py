"""
Corridor rasterization.

Every connector edge becomes a Hallway quad whose half-width is drawn from
the generation RNG; grid cells whose centre falls inside the quad become
FLOOR.
"""

from __future__ import annotations
import logging
import math
import random
from typing import TYPE_CHECKING, List, Sequence

from ..geometry import Coordinate, Edge, Hallway
from .layout import TileGrid, TileType

if TYPE_CHECKING:
    from ..pipeline.settings import GenerationSettings

logger = logging.getLogger(__name__)


def draw_expansion(max_expansion: int, rng: random.Random) -> int:
    """Half-width in [1, max_expansion); 1 when the range is empty"""
    if max_expansion <= 1:
        return 1
    return rng.randrange(1, max_expansion)


def rasterize_hallway(grid: TileGrid, hallway: Hallway) -> int:
    """
    Stamp FLOOR on every grid cell whose centre lies inside ``hallway``.

    Cells outside the grid are skipped.

    Returns:
        Number of cells stamped (including cells that were already FLOOR)
    """
    box = hallway.bounding_box()
    x1 = max(int(math.floor(box.min_x)), 0)
    y1 = max(int(math.floor(box.min_y)), 0)
    x2 = min(int(math.ceil(box.max_x)), grid.width - 1)
    y2 = min(int(math.ceil(box.max_y)), grid.height - 1)

    stamped = 0
    for y in range(y1, y2 + 1):
        for x in range(x1, x2 + 1):
            if hallway.contains(Coordinate(x, y).to_vertex()):
                grid.set_tile(x, y, TileType.FLOOR)
                stamped += 1
    return stamped


def carve_corridors(
    grid: TileGrid,
    edges: Sequence[Edge],
    settings: GenerationSettings,
    rng: random.Random,
) -> List[Hallway]:
    """
    Build and rasterize one hallway per connector edge.

    Args:
        grid: Grid to carve into
        edges: Selected connector edges, in order
        settings: Supplies ``max_hallway_expansion``
        rng: Generation random source; one draw per edge when the
            expansion range is non-empty

    Returns:
        The hallways, parallel to ``edges``
    """
    hallways = []
    for edge in edges:
        hallway = Hallway(edge, draw_expansion(settings.max_hallway_expansion, rng))
        stamped = rasterize_hallway(grid, hallway)
        if stamped == 0:
            logger.debug("Hallway %r stamped no cells", edge)
        hallways.append(hallway)

    logger.debug("Carved %d corridors", len(hallways))
    return hallways
