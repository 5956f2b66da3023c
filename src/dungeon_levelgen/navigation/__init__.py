"""Pathfinding over generated layouts."""

from .pathfinding import NavigationIndex, path_length

__all__ = [
    'NavigationIndex',
    'path_length',
]
