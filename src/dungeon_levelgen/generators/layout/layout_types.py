"""
Tile grid for 2D dungeon layouts.

The grid is a fixed-size numpy array indexed ``[y, x]`` holding ``TileType``
values. Generation stages mutate it in place; once generation completes the
grid is frozen and the underlying array becomes read-only.
"""

from typing import Iterator, List, Optional, Sequence, Set, Tuple
from dataclasses import dataclass, field
from enum import Enum
import numpy as np

from ...geometry import Coordinate, Rectangle


class TileType(Enum):
    """Types of tiles in the 2D layout grid"""
    EMPTY = 0   # Void/solid space
    FLOOR = 1   # Walkable floor
    WALL = 2    # Void adjacent to floor


# Characters used by text dumps of a grid
TILE_CHARS = {
    TileType.EMPTY: ' ',
    TileType.FLOOR: '.',
    TileType.WALL: '#',
}


@dataclass
class TileGrid:
    """
    A width x height grid of tiles.

    Out-of-bounds reads return EMPTY and out-of-bounds writes are ignored, so
    stages that stamp shapes near the border never need to clip by hand.
    """

    width: int  # Width in tiles
    height: int  # Height in tiles
    cells: np.ndarray = field(init=False, repr=False)  # 2D array of TileType values

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        self.cells = np.full((self.height, self.width), TileType.EMPTY.value, dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "TileGrid":
        """Build a grid from row-major integer tile values."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        grid = cls(width, height)
        grid.cells[:, :] = np.asarray(rows, dtype=np.int8)
        return grid

    @classmethod
    def from_ascii(cls, lines: Sequence[str]) -> "TileGrid":
        """Build a grid from text using the TILE_CHARS legend."""
        legend = {ch: tile for tile, ch in TILE_CHARS.items()}
        width = max(len(line) for line in lines)
        grid = cls(width, len(lines))
        for y, line in enumerate(lines):
            for x, ch in enumerate(line):
                grid.set_tile(x, y, legend.get(ch, TileType.EMPTY))
        return grid

    # -- access --

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_tile(self, x: int, y: int, tile_type: TileType) -> bool:
        """Set a tile in the grid; returns False when (x, y) is outside"""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y, x] = tile_type.value
            return True
        return False

    def get_tile(self, x: int, y: int) -> TileType:
        """Get tile type at position"""
        if 0 <= x < self.width and 0 <= y < self.height:
            return TileType(int(self.cells[y, x]))
        return TileType.EMPTY

    def is_floor(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y, x] == TileType.FLOOR.value

    def fill_rect(self, rect: Rectangle, tile_type: TileType) -> int:
        """Fill the part of ``rect`` that lies on the grid; returns cells written"""
        x1, y1 = max(rect.x, 0), max(rect.y, 0)
        x2, y2 = min(rect.x2, self.width), min(rect.y2, self.height)
        if x1 >= x2 or y1 >= y2:
            return 0
        self.cells[y1:y2, x1:x2] = tile_type.value
        return (x2 - x1) * (y2 - y1)

    # -- queries --

    def mask(self, tile_type: TileType) -> np.ndarray:
        """Boolean array, True where the tile equals ``tile_type``"""
        return self.cells == tile_type.value

    def floor_mask(self) -> np.ndarray:
        return self.mask(TileType.FLOOR)

    def count(self, tile_type: TileType) -> int:
        return int(np.count_nonzero(self.cells == tile_type.value))

    def coordinates(self, tile_type: TileType) -> Iterator[Coordinate]:
        """Cells of the given type in row-major order"""
        ys, xs = np.nonzero(self.cells == tile_type.value)
        for y, x in zip(ys.tolist(), xs.tolist()):
            yield Coordinate(x, y)

    def neighbors8(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """In-bounds 8-neighbourhood of (x, y)"""
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.width and 0 <= ny < self.height:
                    yield nx, ny

    def get_connected_regions(self) -> List[Set[Tuple[int, int]]]:
        """
        Find all 8-connected floor regions using flood fill.
        Returns a list of sets, each containing tile coordinates of a connected region.
        """
        visited: Set[Tuple[int, int]] = set()
        regions = []

        for coord in self.coordinates(TileType.FLOOR):
            start = coord.as_tuple()
            if start in visited:
                continue
            region = set()
            stack = [start]
            visited.add(start)
            while stack:
                x, y = stack.pop()
                region.add((x, y))
                for nx, ny in self.neighbors8(x, y):
                    if (nx, ny) not in visited and self.cells[ny, nx] == TileType.FLOOR.value:
                        visited.add((nx, ny))
                        stack.append((nx, ny))
            regions.append(region)

        return regions

    # -- lifecycle --

    def freeze(self) -> None:
        """Make the underlying array read-only"""
        self.cells.flags.writeable = False

    @property
    def frozen(self) -> bool:
        return not self.cells.flags.writeable

    def copy(self) -> "TileGrid":
        """Writable copy of this grid"""
        clone = TileGrid(self.width, self.height)
        clone.cells[:, :] = self.cells
        return clone

    # -- export --

    def to_rows(self) -> List[List[int]]:
        return self.cells.tolist()

    def render_ascii(self, overlay: Optional[dict] = None) -> str:
        """Text dump, one line per row; ``overlay`` maps (x, y) to a character"""
        overlay = overlay or {}
        lines = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                ch = overlay.get((x, y))
                if ch is None:
                    ch = TILE_CHARS[TileType(int(self.cells[y, x]))]
                row.append(ch)
            lines.append(''.join(row))
        return '\n'.join(lines)

    def __eq__(self, other):
        if not isinstance(other, TileGrid):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and np.array_equal(
            self.cells, other.cells
        )
