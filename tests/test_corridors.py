import random
from dataclasses import replace

from dungeon_levelgen.geometry import Edge, Hallway, Vertex
from dungeon_levelgen.generators import (
    TileGrid,
    TileType,
    carve_corridors,
    draw_expansion,
    rasterize_hallway,
)
from dungeon_levelgen.pipeline import GenerationSettings


def test_horizontal_hallway_rasterizes_a_band():
    grid = TileGrid(20, 10)
    hallway = Hallway(Edge(Vertex(2, 5), Vertex(12, 5)), 1)
    stamped = rasterize_hallway(grid, hallway)
    # Cell centres at y=4.5 and y=5.5 lie within one unit of the line
    assert stamped == 20
    assert all(grid.is_floor(x, 4) and grid.is_floor(x, 5) for x in range(2, 12))
    assert not grid.is_floor(1, 5)
    assert not grid.is_floor(12, 5)
    assert not grid.is_floor(5, 3)


def test_hallway_is_clipped_to_grid():
    grid = TileGrid(6, 6)
    hallway = Hallway(Edge(Vertex(-5, 3), Vertex(20, 3)), 1)
    stamped = rasterize_hallway(grid, hallway)
    assert stamped == 12
    assert grid.count(TileType.FLOOR) == 12


def test_diagonal_hallway_is_connected():
    grid = TileGrid(30, 30)
    rasterize_hallway(grid, Hallway(Edge(Vertex(3, 3), Vertex(25, 20)), 1))
    assert grid.count(TileType.FLOOR) > 0
    assert len(grid.get_connected_regions()) == 1


def test_draw_expansion_range():
    rng = random.Random(5)
    assert draw_expansion(1, rng) == 1
    assert draw_expansion(0, rng) == 1
    draws = {draw_expansion(4, rng) for _ in range(200)}
    assert draws == {1, 2, 3}


def test_carve_corridors_one_hallway_per_edge():
    grid = TileGrid(40, 40)
    settings = replace(GenerationSettings(), grid_width=40, grid_height=40, max_hallway_expansion=3)
    edges = [Edge(Vertex(5, 5), Vertex(30, 5)), Edge(Vertex(30, 5), Vertex(30, 30))]
    hallways = carve_corridors(grid, edges, settings, random.Random(2))
    assert len(hallways) == 2
    assert [h.edge for h in hallways] == edges
    assert all(1 <= h.expansion < 3 for h in hallways)
    assert grid.is_floor(17, 5)
    assert grid.is_floor(30, 17)


def test_no_edges_carves_nothing():
    grid = TileGrid(10, 10)
    assert carve_corridors(grid, [], GenerationSettings(), random.Random(0)) == []
    assert grid.count(TileType.FLOOR) == 0
