"""
Command line entry point for dungeon generation.

Generates one dungeon and writes it as ASCII, JSON or Graphviz DOT to
stdout or a file.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .pipeline import (
    DungeonPipeline,
    GenerationError,
    GenerationSettings,
    load_settings,
)
from .pipeline.debug import export_dungeon_dot, export_dungeon_json, render_ascii

logger = logging.getLogger(__name__)

FORMATS = ('ascii', 'json', 'dot')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dungeon-levelgen',
        description="Generate a 2D dungeon layout from a seed.",
    )
    parser.add_argument('--settings', type=Path, help="JSON settings file")
    parser.add_argument('--seed', type=int, help="Generation seed (0 picks one from the clock)")
    parser.add_argument('--width', type=int, help="Grid width in tiles")
    parser.add_argument('--height', type=int, help="Grid height in tiles")
    parser.add_argument('--rooms', type=int, help="Number of rooms to attempt")
    parser.add_argument('--format', choices=FORMATS, default='ascii', help="Output format")
    parser.add_argument('--output', '-o', type=Path, help="Write to this file instead of stdout")
    parser.add_argument('--path', action='store_true',
                        help="Draw the path from the spawn to the farthest room (ascii only)")
    parser.add_argument('-v', '--verbose', action='store_true', help="Debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> GenerationSettings:
    """Settings file (or defaults) with command line overrides applied."""
    settings = load_settings(args.settings) if args.settings else GenerationSettings()
    overrides = {
        'seed': args.seed,
        'grid_width': args.width,
        'grid_height': args.height,
        'room_count': args.rooms,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return replace(settings, **overrides) if overrides else settings


def render(dungeon, fmt: str, show_path: bool = False) -> str:
    if fmt == 'json':
        return export_dungeon_json(dungeon)
    if fmt == 'dot':
        return export_dungeon_dot(dungeon)

    path = None
    if show_path and dungeon.rooms:
        spawn = dungeon.spawn
        farthest = max(dungeon.rooms, key=lambda r: (r.center.x - spawn.x) ** 2 + (r.center.y - spawn.y) ** 2)
        path = dungeon.find_path(spawn, farthest.center)
    return render_ascii(dungeon.grid, path=path, spawn=dungeon.spawn)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        settings = settings_from_args(args)
    except GenerationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = DungeonPipeline(settings).generate()
    for warning in result.warnings:
        logger.warning(warning)
    if not result.success:
        for error in result.errors:
            print(f"error: {error}", file=sys.stderr)
        return 1

    text = render(result.dungeon, args.format, args.path)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + '\n', encoding='utf-8')
        logger.info("Wrote %s", args.output)
    else:
        print(text)
    print(f"seed: {result.seed}", file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
