"""
Wall derivation: every EMPTY cell touching FLOOR in its 8-neighbourhood
becomes WALL.
"""

import logging

import numpy as np

from .layout import TileGrid, TileType

logger = logging.getLogger(__name__)


def floor_adjacency(grid: TileGrid) -> np.ndarray:
    """Boolean array, True where at least one 8-neighbour is FLOOR"""
    floor = grid.floor_mask()
    padded = np.pad(floor, 1, mode='constant', constant_values=False)
    h, w = floor.shape
    touched = np.zeros_like(floor)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            touched |= padded[1 + dy:1 + dy + h, 1 + dx:1 + dx + w]
    return touched


def derive_walls(grid: TileGrid) -> int:
    """
    Convert EMPTY cells adjacent to FLOOR into WALL in one pass.

    Must run after all FLOOR tiles are final; existing WALL and FLOOR
    cells are left alone.

    Returns:
        Number of walls created
    """
    walls = floor_adjacency(grid) & grid.mask(TileType.EMPTY)
    grid.cells[walls] = TileType.WALL.value
    created = int(np.count_nonzero(walls))
    logger.debug("Derived %d wall tiles", created)
    return created
