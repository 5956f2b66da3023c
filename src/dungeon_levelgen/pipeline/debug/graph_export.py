"""
Graph export utilities for dungeon debugging.

Provides export functions to inspect generated dungeons in:
- DOT format (Graphviz) for visual graph inspection
- JSON format for programmatic analysis and reproducibility tracking
- ASCII for a quick look at the tile grid in a terminal
"""

from __future__ import annotations
import json
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

from ...geometry import Vertex, vertex_key
from ...generators.layout import TileGrid, TileType

if TYPE_CHECKING:
    from ..dungeon_pipeline import Dungeon

FORMAT_VERSION = '1.0'

PATH_CHAR = '*'
SPAWN_CHAR = '@'


def _room_ids_by_center(dungeon: Dungeon) -> Dict:
    return {vertex_key(room.center): room.id for room in dungeon.rooms}


def export_dungeon_dot(dungeon: Dungeon) -> str:
    """Export the room/connector graph as Graphviz DOT format.

    Tree connectors are drawn solid and extra loop connectors dashed.

    Args:
        dungeon: Generated dungeon

    Returns:
        DOT format string for visualization with Graphviz or online viewers
    """
    lines = ['graph DungeonLayout {']
    lines.append('  node [shape=box, style=filled];')
    lines.append('')

    spawn_key = vertex_key(dungeon.spawn)
    for room in dungeon.rooms:
        center = room.center
        label = '\\n'.join([
            f"id: {room.id}",
            f"pos: ({center.x:g}, {center.y:g})",
            f"size: {room.width}x{room.height}",
        ])
        color = '#90EE90' if vertex_key(center) == spawn_key else '#D3D3D3'
        lines.append(f'  room_{room.id} [label="{label}" fillcolor="{color}"];')

    lines.append('')

    ids = _room_ids_by_center(dungeon)
    tree_count = dungeon.tree_edge_count
    for index, edge in enumerate(dungeon.edges):
        a = ids.get(vertex_key(edge.u))
        b = ids.get(vertex_key(edge.v))
        if a is None or b is None:
            continue
        style = 'solid' if index < tree_count else 'dashed'
        lines.append(f'  room_{a} -- room_{b} [style={style}, label="{edge.length:.1f}"];')

    lines.append('}')
    return '\n'.join(lines)


def export_dungeon_json(dungeon: Dungeon, include_tiles: bool = True) -> str:
    """Export a dungeon as JSON with metadata.

    Args:
        dungeon: Generated dungeon
        include_tiles: Include the row-major tile values

    Returns:
        JSON string with layout and debug metadata
    """
    output: Dict[str, Any] = {
        'metadata': {
            'seed': dungeon.seed,
            'version': FORMAT_VERSION,
            'generator': 'dungeon-levelgen',
            'settings': dungeon.settings.to_dict(),
        },
        'statistics': {
            'width': dungeon.width,
            'height': dungeon.height,
            'room_count': len(dungeon.rooms),
            'connector_count': len(dungeon.edges),
            'triangulation_edge_count': len(dungeon.triangulation),
            'floor_tiles': dungeon.grid.count(TileType.FLOOR),
            'wall_tiles': dungeon.grid.count(TileType.WALL),
            'navigation_nodes': dungeon.navigation.node_count,
        },
        'spawn': [dungeon.spawn.x, dungeon.spawn.y],
        'rooms': [
            {
                'id': room.id,
                'bounds': {'x': room.x, 'y': room.y, 'width': room.width, 'height': room.height},
                'center': [room.center.x, room.center.y],
            }
            for room in dungeon.rooms
        ],
        'edges': [
            {
                'u': [edge.u.x, edge.u.y],
                'v': [edge.v.x, edge.v.y],
                'length': edge.length,
                'tree': index < dungeon.tree_edge_count,
                'expansion': hallway.expansion if hallway is not None else None,
            }
            for index, (edge, hallway) in enumerate(
                zip(dungeon.edges, _pad(dungeon.hallways, len(dungeon.edges)))
            )
        ],
    }
    if include_tiles:
        output['tiles'] = dungeon.grid.to_rows()
    return json.dumps(output, indent=2)


def _pad(items: Sequence, length: int) -> list:
    return list(items) + [None] * (length - len(items))


def render_ascii(
    grid: TileGrid,
    path: Optional[Sequence[Vertex]] = None,
    spawn: Optional[Vertex] = None,
) -> str:
    """Text dump of a grid with an optional path and spawn marker drawn over it."""
    overlay = {}
    for point in path or ():
        overlay[point.to_coordinate().as_tuple()] = PATH_CHAR
    if spawn is not None:
        overlay[spawn.to_coordinate().as_tuple()] = SPAWN_CHAR
    return grid.render_ascii(overlay)
