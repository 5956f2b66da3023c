"""
Generation stages for dungeon layouts.

Each stage mutates a shared TileGrid or produces the graph data the next
stage consumes: rooms, triangulation, connector reduction, corridors, walls.
"""

from .layout import TileGrid, TileType, TILE_CHARS
from .rooms import Room, PlacementResult, place_rooms
from .delaunay import triangulate, triangulate_triangles
from .spanning_tree import ConnectorGraph, minimum_spanning_tree, reduce_graph
from .corridors import carve_corridors, draw_expansion, rasterize_hallway
from .walls import derive_walls, floor_adjacency
from .spawn import select_spawn

__all__ = [
    'TileGrid',
    'TileType',
    'TILE_CHARS',
    'Room',
    'PlacementResult',
    'place_rooms',
    'triangulate',
    'triangulate_triangles',
    'ConnectorGraph',
    'minimum_spanning_tree',
    'reduce_graph',
    'carve_corridors',
    'draw_expansion',
    'rasterize_hallway',
    'derive_walls',
    'floor_adjacency',
    'select_spawn',
]
