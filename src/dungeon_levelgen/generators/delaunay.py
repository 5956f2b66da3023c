"""
Bowyer-Watson Delaunay triangulation of room centres.

Points are held in a flat list and triangles as index triples into it, so
edge bookkeeping compares integers rather than floating point vertices.
A supra-triangle enclosing every point seeds the mesh; triangles touching
any of its three corners are dropped at the end.
"""

from __future__ import annotations
import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from ..geometry import (
    Edge,
    Triangle,
    Vertex,
    approx_equal,
    bounding_box,
    circumcircle,
    square_distance,
)

logger = logging.getLogger(__name__)

# How far the supra-triangle reaches past the point cloud, in multiples of
# the larger bounding-box span. Small values lose hull edges.
SUPRA_MARGIN = 32.0

IndexTriangle = Tuple[int, int, int]


def _distinct(points: Iterable[Vertex]) -> List[Vertex]:
    """Drop approximate duplicates, keeping the first occurrence"""
    unique: List[Vertex] = []
    for p in points:
        if not any(approx_equal(p, q) for q in unique):
            unique.append(p)
    return unique


def _supra_triangle(points: Sequence[Vertex]) -> Tuple[Vertex, Vertex, Vertex]:
    box = bounding_box(*points)
    delta = max(box.width, box.height, 1.0) * SUPRA_MARGIN
    return (
        Vertex(box.min_x - 1.0, box.min_y - 1.0),
        Vertex(box.min_x - 1.0, box.max_y + delta),
        Vertex(box.max_x + delta, box.min_y - 1.0),
    )


def _bowyer_watson(points: Sequence[Vertex]) -> Tuple[List[Vertex], List[IndexTriangle]]:
    """
    Run the incremental insertion over distinct ``points``.

    Returns:
        (vertices, triangles): vertices is ``points`` followed by the three
        supra corners; triangles index into it, never reference a supra
        corner and are never degenerate.
    """
    n = len(points)
    vertices = list(points) + list(_supra_triangle(points))

    triangles: List[IndexTriangle] = [(n, n + 1, n + 2)]
    circles: List[Optional[Tuple[Vertex, float]]] = [circumcircle(*vertices[n:])]

    for index in range(n):
        point = vertices[index]

        bad = []
        keep_tris, keep_circles = [], []
        for tri, circle in zip(triangles, circles):
            if circle is not None and square_distance(point, circle[0]) <= circle[1]:
                bad.append(tri)
            else:
                keep_tris.append(tri)
                keep_circles.append(circle)

        if not bad:
            logger.debug("Point %d (%g, %g) hit no circumcircle", index, point.x, point.y)
            continue

        # Edges shared by two bad triangles are interior to the cavity
        counts: Counter = Counter()
        for a, b, c in bad:
            for e in ((a, b), (b, c), (c, a)):
                counts[(min(e), max(e))] += 1

        for (a, b), seen in counts.items():
            if seen != 1:
                continue
            tri = (a, b, index)
            keep_tris.append(tri)
            keep_circles.append(circumcircle(vertices[a], vertices[b], point))

        triangles, circles = keep_tris, keep_circles

    # Collinear cavity edges can leave zero-area slivers; they carry no edges
    triangles = [t for t, circle in zip(triangles, circles) if max(t) < n and circle is not None]
    return vertices, triangles


def _collinear_chain(points: Sequence[Vertex]) -> List[Edge]:
    """Connect points that admit no triangle along their sorted line"""
    ordered = sorted(points, key=lambda p: (p.x, p.y))
    return [Edge(a, b) for a, b in zip(ordered, ordered[1:])]


def triangulate_triangles(points: Iterable[Vertex]) -> List[Triangle]:
    """Delaunay triangles over the distinct input points."""
    unique = _distinct(points)
    if len(unique) < 3:
        return []
    vertices, triangles = _bowyer_watson(unique)
    return [Triangle(vertices[a], vertices[b], vertices[c]) for a, b, c in triangles]


def triangulate(points: Iterable[Vertex]) -> List[Edge]:
    """
    Delaunay edge set over the input points.

    Args:
        points: Room centres (or any vertices); approximate duplicates are
            ignored.

    Returns:
        Unique edges in first-seen order. Fewer than two distinct points
        give no edges, two give the single edge joining them, and collinear
        input gives the chain along the line.
    """
    unique = _distinct(points)

    if len(unique) < 2:
        return []
    if len(unique) == 2:
        return [Edge(unique[0], unique[1])]

    vertices, triangles = _bowyer_watson(unique)
    if not triangles:
        logger.warning("Triangulation of %d collinear points; chaining them", len(unique))
        return _collinear_chain(unique)

    seen = set()
    edges: List[Edge] = []
    for a, b, c in triangles:
        for i, j in ((a, b), (b, c), (c, a)):
            key = (min(i, j), max(i, j))
            if key in seen:
                continue
            seen.add(key)
            edges.append(Edge(vertices[i], vertices[j]))

    logger.debug("Triangulated %d points into %d triangles, %d edges",
                 len(unique), len(triangles), len(edges))
    return edges
