import os
import random
import sys

import pytest

# Ensure the src layout is importable without an install
SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from dungeon_levelgen.generators import TileGrid  # noqa: E402
from dungeon_levelgen.pipeline import GenerationSettings, generate_dungeon  # noqa: E402


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def small_settings():
    """A 64x64 layout with room for a dozen small rooms."""
    return GenerationSettings(
        seed=42,
        grid_width=64,
        grid_height=64,
        room_count=12,
        min_room_width=4,
        min_room_height=4,
        max_room_width=9,
        max_room_height=9,
        max_room_attempts=30,
        max_hallway_expansion=3,
        extra_hallway_generation_chance=15,
    )


@pytest.fixture
def scenario_settings():
    """Two small rooms on a 20x20 grid."""
    return GenerationSettings(
        seed=1,
        grid_width=20,
        grid_height=20,
        room_count=2,
        min_room_width=4,
        min_room_height=4,
        max_room_width=6,
        max_room_height=6,
        max_room_attempts=200,
    )


@pytest.fixture
def dungeon(small_settings):
    return generate_dungeon(small_settings)


@pytest.fixture
def corridor_grid():
    """Two 3x3 rooms joined by a one-tile corridor along row 2."""
    return TileGrid.from_ascii([
        "             ",
        " ...     ... ",
        " ........... ",
        " ...     ... ",
        "             ",
    ])


@pytest.fixture
def split_grid():
    """Two floor regions separated by empty space."""
    return TileGrid.from_ascii([
        "          ",
        " ...  ... ",
        " ...  ... ",
        "          ",
    ])
