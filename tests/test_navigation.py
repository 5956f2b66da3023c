import math
import threading

import pytest

from dungeon_levelgen.geometry import Coordinate, Vertex
from dungeon_levelgen.generators import TileGrid, TileType
from dungeon_levelgen.navigation import NavigationIndex, path_length


def test_one_node_per_floor_tile(corridor_grid):
    index = NavigationIndex.from_grid(corridor_grid)
    assert index.node_count == corridor_grid.count(TileType.FLOOR)


def test_neighbours_are_eight_connected():
    grid = TileGrid.from_ascii([
        "...",
        "...",
        "...",
    ])
    index = NavigationIndex.from_grid(grid)
    assert len(index.neighbors(Coordinate(1, 1))) == 8
    assert len(index.neighbors(Coordinate(0, 0))) == 3
    assert index.neighbors(Coordinate(5, 5)) == []


def test_straight_corridor_path(corridor_grid):
    index = NavigationIndex.from_grid(corridor_grid)
    start, goal = Vertex(2.5, 2.5), Vertex(10.5, 2.5)
    path = index.find_path(start, goal)

    assert path[0].to_coordinate() == Coordinate(2, 2)
    assert path[-1].to_coordinate() == Coordinate(10, 2)
    assert path_length(path) == pytest.approx(8.0)
    for point in path:
        assert corridor_grid.is_floor(*point.to_coordinate())


def test_path_positions_are_tile_centres(corridor_grid):
    index = NavigationIndex.from_grid(corridor_grid)
    path = index.find_path(Vertex(1.1, 1.9), Vertex(11.8, 3.2))
    assert path
    assert path[0] == Vertex(1.5, 1.5)
    assert path[-1] == Vertex(11.5, 3.5)
    for a, b in zip(path, path[1:]):
        step = math.hypot(a.x - b.x, a.y - b.y)
        assert step == pytest.approx(1.0) or step == pytest.approx(math.sqrt(2))


def test_diagonal_moves_are_used():
    grid = TileGrid.from_ascii([
        ".....",
        ".....",
        ".....",
        ".....",
        ".....",
    ])
    index = NavigationIndex.from_grid(grid)
    path = index.find_path(Vertex(0.5, 0.5), Vertex(4.5, 4.5))
    assert len(path) == 5
    assert path_length(path) == pytest.approx(4 * math.sqrt(2))


def test_unreachable_goal_gives_empty_path(split_grid):
    index = NavigationIndex.from_grid(split_grid)
    assert index.find_path(Vertex(1.5, 1.5), Vertex(7.5, 1.5)) == []


@pytest.mark.parametrize("start,goal", [
    (Vertex(0.5, 0.5), Vertex(2.5, 2.5)),     # start on empty tile
    (Vertex(2.5, 2.5), Vertex(-3.0, 2.0)),    # goal out of bounds
    (Vertex(2.5, 2.5), Vertex(100.0, 100.0)),
])
def test_non_walkable_endpoints_give_empty_path(corridor_grid, start, goal):
    index = NavigationIndex.from_grid(corridor_grid)
    assert index.find_path(start, goal) == []


def test_negative_fractional_start_truncates_into_grid():
    grid = TileGrid.from_ascii([
        "....",
        "....",
        "....",
    ])
    index = NavigationIndex.from_grid(grid)
    path = index.find_path(Vertex(-0.5, 1.5), Vertex(3.5, 1.5))
    assert path[0] == Vertex(0.5, 1.5)
    assert path[-1] == Vertex(3.5, 1.5)
    assert len(path) == 4


def test_same_tile_path():
    grid = TileGrid.from_ascii(["..."])
    index = NavigationIndex.from_grid(grid)
    assert index.find_path(Vertex(1.2, 0.3), Vertex(1.9, 0.9)) == [Vertex(1.5, 0.5)]


def test_nearest_node(corridor_grid):
    index = NavigationIndex.from_grid(corridor_grid)
    assert index.nearest_node(Vertex(6.5, 0.2)) == Coordinate(6, 2)
    assert index.is_walkable(Coordinate(6, 2))
    assert not index.is_walkable(Coordinate(6, 1))
    assert NavigationIndex.from_grid(TileGrid(3, 3)).nearest_node(Vertex(1, 1)) is None


def test_concurrent_queries_agree(corridor_grid):
    index = NavigationIndex.from_grid(corridor_grid)
    expected = index.find_path(Vertex(1.5, 1.5), Vertex(11.5, 3.5))
    results = []

    def worker():
        for _ in range(20):
            results.append(index.find_path(Vertex(1.5, 1.5), Vertex(11.5, 3.5)))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == 80
    assert all(r == expected for r in results)


def test_path_length_helper():
    assert path_length([]) == 0
    assert path_length([Vertex(0, 0), Vertex(3, 4), Vertex(3, 5)]) == pytest.approx(6.0)
