"""
Geometry kernel for dungeon generation.

Vertex/edge/triangle/rectangle primitives, numeric predicates and the
oriented hallway quadrilateral used when carving corridors.
"""

from .primitives import (
    EPSILON,
    Vertex,
    Coordinate,
    Edge,
    Triangle,
    Rectangle,
    BoundingBox,
    distance,
    square_distance,
    approx_equal,
    vertex_key,
    circumcircle,
    circumcircle_contains,
    bounding_box,
    rectangles_intersect,
    rectangle_contains,
    triangle_area,
    iterate_area,
)
from .hallway import Hallway

__all__ = [
    'EPSILON',
    'Vertex',
    'Coordinate',
    'Edge',
    'Triangle',
    'Rectangle',
    'BoundingBox',
    'distance',
    'square_distance',
    'approx_equal',
    'vertex_key',
    'circumcircle',
    'circumcircle_contains',
    'bounding_box',
    'rectangles_intersect',
    'rectangle_contains',
    'triangle_area',
    'iterate_area',
    'Hallway',
]
