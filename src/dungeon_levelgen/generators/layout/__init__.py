"""
Layout Types Module for 2D Dungeon Generation

Tile grid and tile classification shared by every generation stage.
"""

from .layout_types import (
    TileGrid,
    TileType,
    TILE_CHARS,
)

__all__ = [
    'TileGrid',
    'TileType',
    'TILE_CHARS',
]
