"""Debug utilities for the generation pipeline."""

from .graph_export import export_dungeon_dot, export_dungeon_json, render_ascii

__all__ = ['export_dungeon_dot', 'export_dungeon_json', 'render_ascii']
