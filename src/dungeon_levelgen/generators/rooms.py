"""
Room placement by bounded-retry random sampling.

Each requested room gets up to ``max_room_attempts`` samples. A sample is
accepted when it lies inside the grid and, with both rectangles padded by
``room_spacing``, does not overlap any room accepted before it. A room whose
attempts run out is skipped and placement moves on to the next one.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from ..geometry import Edge, Rectangle, Vertex
from .layout import TileGrid, TileType

if TYPE_CHECKING:
    from ..pipeline.settings import GenerationSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Room:
    """Represents a placed room in grid coordinates"""
    bounds: Rectangle
    id: int = 0

    @property
    def x(self) -> int:
        return self.bounds.x

    @property
    def y(self) -> int:
        return self.bounds.y

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    @property
    def center(self) -> Vertex:
        """Centre point used for triangulation and spawning"""
        return Vertex(self.x + self.width // 2, self.y + self.height // 2)

    @property
    def corners(self) -> List[Vertex]:
        x, y, x2, y2 = self.x, self.y, self.bounds.x2, self.bounds.y2
        return [Vertex(x, y), Vertex(x, y2), Vertex(x2, y2), Vertex(x2, y)]

    @property
    def edges(self) -> List[Edge]:
        """The four boundary segments, in corner order"""
        c = self.corners
        return [Edge(c[i], c[(i + 1) % 4]) for i in range(4)]

    def cells(self) -> Iterator[Tuple[int, int]]:
        for iy in range(self.y, self.y + self.height):
            for ix in range(self.x, self.x + self.width):
                yield ix, iy

    def intersects(self, other: "Room", spacing: int = 0) -> bool:
        """True if the rooms overlap once each is padded by ``spacing`` cells"""
        return self.bounds.expand(spacing).intersects(other.bounds.expand(spacing))


@dataclass
class PlacementResult:
    rooms: List[Room] = field(default_factory=list)
    skipped: int = 0
    attempts: int = 0


def _origin(rng: random.Random, low: int, grid_size: int, max_size: int) -> int:
    """Draw from [low, grid_size - max_size), or from [0, grid_size - max_size] when that is empty"""
    high = grid_size - max_size
    if high > low:
        return rng.randrange(low, high)
    return rng.randrange(0, high + 1)


def _sample_room(settings: GenerationSettings, rng: random.Random) -> Rectangle:
    return Rectangle(
        _origin(rng, settings.min_room_width, settings.grid_width, settings.max_room_width),
        _origin(rng, settings.min_room_height, settings.grid_height, settings.max_room_height),
        rng.randint(settings.min_room_width, settings.max_room_width),
        rng.randint(settings.min_room_height, settings.max_room_height),
    )


def _find_slot(
    settings: GenerationSettings,
    rng: random.Random,
    rooms: List[Room],
) -> Tuple[Optional[Rectangle], int]:
    """Sample until a rectangle fits; returns (rectangle or None, samples used)"""
    for attempt in range(1, settings.max_room_attempts + 1):
        candidate = _sample_room(settings, rng)
        if not candidate.within(settings.grid_width, settings.grid_height):
            continue
        spacing = settings.room_spacing
        padded = candidate.expand(spacing)
        if any(padded.intersects(room.bounds.expand(spacing)) for room in rooms):
            continue
        return candidate, attempt
    return None, settings.max_room_attempts


def place_rooms(
    grid: TileGrid,
    settings: GenerationSettings,
    rng: random.Random,
) -> PlacementResult:
    """
    Place up to ``settings.room_count`` non-overlapping rooms.

    Accepted rooms are stamped onto ``grid`` as FLOOR immediately.

    Args:
        grid: Grid to stamp rooms into
        settings: Generation settings (room sizes, counts, attempts)
        rng: Seeded random source; consumed in a fixed order

    Returns:
        PlacementResult with the rooms in placement order
    """
    result = PlacementResult()

    for index in range(settings.room_count):
        bounds, used = _find_slot(settings, rng, result.rooms)
        result.attempts += used
        if bounds is None:
            result.skipped += 1
            logger.debug("Room %d skipped after %d attempts", index, used)
            continue

        room = Room(bounds=bounds, id=len(result.rooms))
        result.rooms.append(room)
        grid.fill_rect(bounds, TileType.FLOOR)
        logger.debug("Placed room %d at (%d, %d) size %dx%d",
                     room.id, bounds.x, bounds.y, bounds.width, bounds.height)

    logger.info("Placed %d/%d rooms (%d skipped)",
                len(result.rooms), settings.room_count, result.skipped)
    return result
