"""
Spawn point selection for generated dungeons.

The spawn is the centre of a room chosen uniformly with the generation RNG.
"""

import random
from typing import Optional, Sequence

from ..geometry import Vertex
from .rooms import Room


def select_spawn(rooms: Sequence[Room], rng: random.Random) -> Optional[Vertex]:
    """Pick a spawn position.

    Args:
        rooms: Placed rooms, in placement order.
        rng: Generation random source; consumed only when rooms exist.

    Returns:
        Centre of the chosen room, or None if there are no rooms.
    """
    if not rooms:
        return None
    return rng.choice(list(rooms)).center
