"""
Geometry primitives for 2D dungeon generation.

Vertices live in continuous grid space (room centres, corridor endpoints,
triangulation points); coordinates are discrete cell indices. Cell (x, y)
covers the half-open square [x, x + 1) x [y, y + 1) and its centre is offset
by 0.5. Vertices map to cells by truncation toward zero.

All functions here are pure. Degenerate input (collinear triangles,
zero-length edges) never raises; it is reported through return values.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

EPSILON = 1e-6

Number = Union[int, float]


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Vertex:
    """Continuous-space position."""
    x: float
    y: float

    @classmethod
    def zero(cls) -> "Vertex":
        return cls(0.0, 0.0)

    def to_coordinate(self) -> "Coordinate":
        """Cell index by truncation toward zero."""
        return Coordinate(int(self.x), int(self.y))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Coordinate:
    """Discrete grid cell index."""
    x: int
    y: int

    def to_vertex(self) -> Vertex:
        """Centre of the cell in continuous space."""
        return Vertex(self.x + 0.5, self.y + 0.5)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------

def distance(a: Vertex, b: Vertex) -> float:
    """Euclidean distance between two vertices."""
    return math.hypot(a.x - b.x, a.y - b.y)


def square_distance(a: Vertex, b: Vertex) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def _approx_equal_scalar(a: float, b: float) -> bool:
    scale = max(1.0, abs(a), abs(b))
    return abs(a - b) <= EPSILON * scale


def approx_equal(a: Union[Number, Vertex], b: Union[Number, Vertex]) -> bool:
    """Tolerance-based equality for floats or vertices.

    The tolerance grows with magnitude so that values produced by the
    triangulation arithmetic still compare equal to their source points.
    """
    if isinstance(a, Vertex) and isinstance(b, Vertex):
        return _approx_equal_scalar(a.x, b.x) and _approx_equal_scalar(a.y, b.y)
    if isinstance(a, Vertex) or isinstance(b, Vertex):
        return False
    return _approx_equal_scalar(float(a), float(b))


def vertex_key(v: Vertex, digits: int = 6) -> Tuple[float, float]:
    """Hashable key for a vertex, stable under tiny rounding noise."""
    # 0.0 and -0.0 must map to the same key
    return (round(v.x, digits) + 0.0, round(v.y, digits) + 0.0)


def triangle_area(a: Vertex, b: Vertex, c: Vertex) -> float:
    """Unsigned area of the triangle abc."""
    return abs((b.x - a.x) * (c.y - a.y) - (c.x - a.x) * (b.y - a.y)) / 2.0


def iterate_area(x1: int, y1: int, x2: int, y2: int) -> Iterator[Tuple[int, int]]:
    """Yield every cell (x, y) with x1 <= x <= x2 and y1 <= y <= y2."""
    for x in range(x1, x2 + 1):
        for y in range(y1, y2 + 1):
            yield x, y


# ---------------------------------------------------------------------------
# Edges and triangles
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class Edge:
    """Unordered pair of vertices."""
    u: Vertex
    v: Vertex

    @property
    def length(self) -> float:
        return distance(self.u, self.v)

    @property
    def angle(self) -> float:
        """Direction from u to v in radians."""
        return math.atan2(self.v.y - self.u.y, self.v.x - self.u.x)

    @property
    def midpoint(self) -> Vertex:
        return Vertex((self.u.x + self.v.x) / 2.0, (self.u.y + self.v.y) / 2.0)

    def almost_equal(self, other: "Edge") -> bool:
        """Same endpoints in either order, under approximate vertex equality."""
        return (
            (approx_equal(self.u, other.u) and approx_equal(self.v, other.v))
            or (approx_equal(self.u, other.v) and approx_equal(self.v, other.u))
        )

    def key(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Order-independent key used for de-duplication."""
        ku = vertex_key(self.u)
        kv = vertex_key(self.v)
        return (ku, kv) if ku <= kv else (kv, ku)

    def has_endpoint(self, vertex: Vertex) -> bool:
        return approx_equal(self.u, vertex) or approx_equal(self.v, vertex)

    def __repr__(self) -> str:
        return f"Edge(({self.u.x:g}, {self.u.y:g}) -> ({self.v.x:g}, {self.v.y:g}))"


@dataclass(eq=False)
class Triangle:
    """Three vertices of a triangulation face."""
    a: Vertex
    b: Vertex
    c: Vertex

    def circumcircle(self) -> Optional[Tuple[Vertex, float]]:
        """Circumcentre and squared radius, or None for a degenerate triangle."""
        return circumcircle(self.a, self.b, self.c)

    def circumcircle_contains(self, vertex: Vertex) -> bool:
        return circumcircle_contains(self, vertex)

    def contains_vertex(self, vertex: Vertex) -> bool:
        """True if ``vertex`` is one of the corners."""
        return (
            approx_equal(vertex, self.a)
            or approx_equal(vertex, self.b)
            or approx_equal(vertex, self.c)
        )

    def edges(self) -> List[Edge]:
        return [Edge(self.a, self.b), Edge(self.b, self.c), Edge(self.c, self.a)]

    @property
    def area(self) -> float:
        return triangle_area(self.a, self.b, self.c)


def circumcircle(a: Vertex, b: Vertex, c: Vertex) -> Optional[Tuple[Vertex, float]]:
    """Circumcentre (determinant form) and squared circumradius of abc.

    Returns None when the three points are (nearly) collinear.
    """
    d = 2.0 * (a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))
    scale = max(1.0, abs(a.x), abs(a.y), abs(b.x), abs(b.y), abs(c.x), abs(c.y))
    if abs(d) < EPSILON * scale:
        return None

    a_sq = a.x * a.x + a.y * a.y
    b_sq = b.x * b.x + b.y * b.y
    c_sq = c.x * c.x + c.y * c.y

    cx = (a_sq * (b.y - c.y) + b_sq * (c.y - a.y) + c_sq * (a.y - b.y)) / d
    cy = (a_sq * (c.x - b.x) + b_sq * (a.x - c.x) + c_sq * (b.x - a.x)) / d

    center = Vertex(cx, cy)
    return center, square_distance(a, center)


def circumcircle_contains(triangle: Triangle, vertex: Vertex) -> bool:
    """True if ``vertex`` lies inside or on the triangle's circumcircle.

    Degenerate triangles contain nothing.
    """
    circle = triangle.circumcircle()
    if circle is None:
        return False
    center, radius_sq = circle
    return square_distance(vertex, center) <= radius_sq


# ---------------------------------------------------------------------------
# Axis-aligned boxes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BoundingBox:
    """Float axis-aligned box, closed on all sides."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, vertex: Vertex) -> bool:
        return self.min_x <= vertex.x <= self.max_x and self.min_y <= vertex.y <= self.max_y


def bounding_box(*vertices: Vertex) -> BoundingBox:
    """Smallest box enclosing the given vertices."""
    if not vertices:
        raise ValueError("bounding_box requires at least one vertex")
    xs = [v.x for v in vertices]
    ys = [v.y for v in vertices]
    return BoundingBox(min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True)
class Rectangle:
    """Integer rectangle over grid cells, half-open on the far edges."""
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        """Right edge X coordinate (exclusive)"""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Bottom edge Y coordinate (exclusive)"""
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def intersects(self, other: "Rectangle") -> bool:
        return rectangles_intersect(self, other)

    def contains_point(self, x: Number, y: Number) -> bool:
        return rectangle_contains(self, x, y)

    def expand(self, amount: int) -> "Rectangle":
        """Return rectangle grown by ``amount`` on all sides"""
        return Rectangle(
            self.x - amount,
            self.y - amount,
            self.width + amount * 2,
            self.height + amount * 2,
        )

    def within(self, width: int, height: int) -> bool:
        """True if the rectangle lies fully inside a width x height grid."""
        return self.x >= 0 and self.y >= 0 and self.x2 <= width and self.y2 <= height


def rectangles_intersect(r1: Rectangle, r2: Rectangle) -> bool:
    """Overlap test for half-open rectangles; touching edges do not intersect."""
    return not (r1.x2 <= r2.x or r1.x >= r2.x2 or r1.y2 <= r2.y or r1.y >= r2.y2)


def rectangle_contains(rect: Rectangle, x: Number, y: Number) -> bool:
    return rect.x <= x < rect.x2 and rect.y <= y < rect.y2
