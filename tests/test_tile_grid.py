import numpy as np
import pytest

from dungeon_levelgen.geometry import Coordinate, Rectangle
from dungeon_levelgen.generators import TileGrid, TileType


def test_new_grid_is_empty():
    grid = TileGrid(8, 5)
    assert grid.cells.shape == (5, 8)
    assert grid.count(TileType.EMPTY) == 40
    assert grid.get_tile(7, 4) == TileType.EMPTY


@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 3)])
def test_non_positive_dimensions_rejected(width, height):
    with pytest.raises(ValueError):
        TileGrid(width, height)


def test_out_of_bounds_access_is_harmless():
    grid = TileGrid(4, 4)
    assert grid.set_tile(-1, 0, TileType.FLOOR) is False
    assert grid.set_tile(4, 0, TileType.FLOOR) is False
    assert grid.get_tile(100, 100) == TileType.EMPTY
    assert grid.count(TileType.FLOOR) == 0


def test_fill_rect_clips_to_grid():
    grid = TileGrid(5, 5)
    written = grid.fill_rect(Rectangle(3, 3, 4, 4), TileType.FLOOR)
    assert written == 4
    assert grid.is_floor(4, 4)
    assert not grid.is_floor(2, 2)


def test_ascii_round_trip():
    lines = [
        "#####",
        "#...#",
        "#####",
    ]
    grid = TileGrid.from_ascii(lines)
    assert grid.width == 5 and grid.height == 3
    assert grid.get_tile(1, 1) == TileType.FLOOR
    assert grid.get_tile(0, 0) == TileType.WALL
    assert grid.render_ascii().splitlines() == lines


def test_coordinates_are_row_major():
    grid = TileGrid.from_ascii([". ", " ."])
    assert list(grid.coordinates(TileType.FLOOR)) == [Coordinate(0, 0), Coordinate(1, 1)]


def test_connected_regions_use_eight_neighbourhood(split_grid):
    assert len(split_grid.get_connected_regions()) == 2
    diagonal = TileGrid.from_ascii([". ", " ."])
    assert len(diagonal.get_connected_regions()) == 1


def test_freeze_makes_cells_read_only():
    grid = TileGrid(3, 3)
    grid.freeze()
    assert grid.frozen
    with pytest.raises(ValueError):
        grid.set_tile(1, 1, TileType.FLOOR)
    clone = grid.copy()
    assert not clone.frozen
    assert clone == grid


def test_to_rows_matches_cells():
    grid = TileGrid.from_rows([[0, 1], [2, 0]])
    assert grid.to_rows() == [[0, 1], [2, 0]]
    assert np.array_equal(grid.floor_mask(), np.array([[False, True], [False, False]]))
