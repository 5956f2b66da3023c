import math

import pytest

from dungeon_levelgen.geometry import (
    EPSILON,
    Coordinate,
    Edge,
    Hallway,
    Rectangle,
    Triangle,
    Vertex,
    approx_equal,
    bounding_box,
    circumcircle,
    circumcircle_contains,
    distance,
    iterate_area,
    rectangle_contains,
    rectangles_intersect,
    square_distance,
    triangle_area,
)


def test_distance_and_square_distance():
    a, b = Vertex(0, 0), Vertex(3, 4)
    assert distance(a, b) == pytest.approx(5.0)
    assert square_distance(a, b) == pytest.approx(25.0)


def test_approx_equal_scales_with_magnitude():
    assert approx_equal(1.0, 1.0 + EPSILON / 2)
    assert not approx_equal(1.0, 1.0 + 10 * EPSILON)
    # Relative tolerance for large values
    assert approx_equal(1e6, 1e6 + 0.5)
    assert approx_equal(Vertex(1, 2), Vertex(1 + 1e-8, 2 - 1e-8))
    assert not approx_equal(Vertex(1, 2), Vertex(1, 2.1))
    assert not approx_equal(Vertex(1, 2), 1.0)


def test_vertex_coordinate_conversion():
    assert Vertex(3.7, 2.2).to_coordinate() == Coordinate(3, 2)
    # Truncation toward zero, not floor
    assert Vertex(-0.5, 0.0).to_coordinate() == Coordinate(0, 0)
    assert Vertex(-1.5, 2.9).to_coordinate() == Coordinate(-1, 2)
    assert Coordinate(3, 2).to_vertex() == Vertex(3.5, 2.5)
    assert Coordinate(5, 6).to_vertex().to_coordinate() == Coordinate(5, 6)


def test_edge_almost_equal_ignores_direction():
    e1 = Edge(Vertex(0, 0), Vertex(1, 1))
    e2 = Edge(Vertex(1, 1), Vertex(0, 0))
    e3 = Edge(Vertex(0, 0), Vertex(1, 2))
    assert e1.almost_equal(e2)
    assert e1.key() == e2.key()
    assert not e1.almost_equal(e3)
    assert e1.length == pytest.approx(math.sqrt(2))
    assert e1.angle == pytest.approx(math.pi / 4)


def test_circumcircle_contains():
    tri = Triangle(Vertex(0, 0), Vertex(4, 0), Vertex(0, 4))
    center, radius_sq = circumcircle(tri.a, tri.b, tri.c)
    assert center == Vertex(2, 2)
    assert radius_sq == pytest.approx(8.0)
    assert circumcircle_contains(tri, Vertex(2, 2))
    assert circumcircle_contains(tri, Vertex(4, 4))  # on the circle
    assert not circumcircle_contains(tri, Vertex(5, 5))


def test_degenerate_triangle_contains_nothing():
    tri = Triangle(Vertex(0, 0), Vertex(1, 1), Vertex(2, 2))
    assert circumcircle(tri.a, tri.b, tri.c) is None
    assert not tri.circumcircle_contains(Vertex(1, 1))
    assert not tri.circumcircle_contains(Vertex(100, -3))


def test_triangle_contains_vertex_and_area():
    tri = Triangle(Vertex(0, 0), Vertex(4, 0), Vertex(0, 3))
    assert tri.contains_vertex(Vertex(4, 0))
    assert not tri.contains_vertex(Vertex(1, 1))
    assert tri.area == pytest.approx(6.0)
    assert triangle_area(Vertex(0, 0), Vertex(1, 1), Vertex(2, 2)) == 0.0


def test_bounding_box():
    box = bounding_box(Vertex(1, 5), Vertex(-2, 3), Vertex(4, -1))
    assert (box.min_x, box.min_y, box.max_x, box.max_y) == (-2, -1, 4, 5)
    assert box.contains(Vertex(0, 0))
    with pytest.raises(ValueError):
        bounding_box()


def test_rectangles_intersect_half_open():
    a = Rectangle(0, 0, 4, 4)
    assert rectangles_intersect(a, Rectangle(3, 3, 2, 2))
    # Touching edges do not overlap
    assert not rectangles_intersect(a, Rectangle(4, 0, 2, 2))
    assert a.expand(1).intersects(Rectangle(4, 0, 2, 2))
    assert rectangle_contains(a, 0, 0)
    assert not rectangle_contains(a, 4, 0)
    assert a.within(4, 4)
    assert not a.within(3, 4)


def test_iterate_area_is_inclusive():
    cells = list(iterate_area(0, 0, 1, 2))
    assert len(cells) == 6
    assert (1, 2) in cells


def test_hallway_corners_are_offset_perpendicular():
    hallway = Hallway(Edge(Vertex(0, 0), Vertex(10, 0)), 2)
    xs = sorted(round(c.x, 6) for c in hallway.corners)
    ys = sorted(round(c.y, 6) for c in hallway.corners)
    assert xs == [0, 0, 10, 10]
    assert ys == [-2, -2, 2, 2]
    assert hallway.area == pytest.approx(40.0)
    assert hallway.width == 4


def test_hallway_contains():
    hallway = Hallway(Edge(Vertex(0, 0), Vertex(10, 10)), 1)
    assert hallway.contains(Vertex(5, 5))
    assert hallway.contains(Vertex(5.5, 5))
    assert not hallway.contains(Vertex(5, 8))
    assert not hallway.contains(Vertex(12, 12))


def test_zero_length_hallway_contains_nothing():
    hallway = Hallway(Edge(Vertex(3, 3), Vertex(3, 3)), 1)
    assert not hallway.contains(Vertex(3, 3))
