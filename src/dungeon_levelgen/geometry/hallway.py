"""
Oriented corridor quadrilaterals.

A hallway is the rectangle that follows a connector edge: its long axis runs
from ``edge.u`` to ``edge.v`` and it extends ``expansion`` units to either
side of the edge, perpendicular to it.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from .primitives import EPSILON, BoundingBox, Edge, Vertex, bounding_box, triangle_area


@dataclass
class Hallway:
    """Corridor region derived from one connector edge.

    Attributes:
        edge: Connector edge the hallway follows
        expansion: Half-width of the corridor in grid units
        corners: Quadrilateral corners in winding order
    """
    edge: Edge
    expansion: float
    corners: Tuple[Vertex, Vertex, Vertex, Vertex] = field(init=False)

    def __post_init__(self):
        angle = self.edge.angle
        # Unit normal to the edge, scaled to the half-width
        ox = -math.sin(angle) * self.expansion
        oy = math.cos(angle) * self.expansion

        u, v = self.edge.u, self.edge.v
        self.corners = (
            Vertex(u.x + ox, u.y + oy),
            Vertex(v.x + ox, v.y + oy),
            Vertex(v.x - ox, v.y - oy),
            Vertex(u.x - ox, u.y - oy),
        )

    @property
    def width(self) -> float:
        return self.expansion * 2.0

    @property
    def length(self) -> float:
        return self.edge.length

    @property
    def area(self) -> float:
        a, b, c, d = self.corners
        return triangle_area(a, b, c) + triangle_area(a, c, d)

    def bounding_box(self) -> BoundingBox:
        return bounding_box(*self.corners)

    def contains(self, point: Vertex) -> bool:
        """Point-in-quad test by area decomposition.

        The four triangles formed by ``point`` and each side sum to the quad's
        area exactly when the point is inside or on the boundary.
        """
        total = self.area
        if total <= EPSILON:
            return False
        a, b, c, d = self.corners
        parts = (
            triangle_area(point, a, b)
            + triangle_area(point, b, c)
            + triangle_area(point, c, d)
            + triangle_area(point, d, a)
        )
        return parts <= total + EPSILON * max(1.0, total)

    def edges(self) -> List[Edge]:
        a, b, c, d = self.corners
        return [Edge(a, b), Edge(b, c), Edge(c, d), Edge(d, a)]
