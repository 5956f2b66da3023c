"""
Dungeon Level Generator

Procedural 2D dungeon layouts: rooms joined by a Delaunay-derived corridor
graph, walls around every floor tile, and an A* index for navigation.
"""

__version__ = "0.1.0"

from .geometry import Coordinate, Edge, Vertex
from .generators import Room, TileGrid, TileType
from .navigation import NavigationIndex
from .pipeline import (
    Dungeon,
    DungeonPipeline,
    GenerationError,
    GenerationSettings,
    InvalidSettingsError,
    PipelineResult,
    generate_dungeon,
)

__all__ = [
    '__version__',
    'Coordinate',
    'Edge',
    'Vertex',
    'Room',
    'TileGrid',
    'TileType',
    'NavigationIndex',
    'Dungeon',
    'DungeonPipeline',
    'GenerationError',
    'GenerationSettings',
    'InvalidSettingsError',
    'PipelineResult',
    'generate_dungeon',
]
