#!/usr/bin/env python3
"""
Dungeon Level Generator - Main Entry Point

Runs the command line generator; see ``python main.py --help``.
"""

import sys
from pathlib import Path


def main():
    """Main application entry point."""
    # Ensure package imports work when executed from a checkout
    src_root = Path(__file__).resolve().parent / "src"
    if str(src_root) not in sys.path:
        sys.path.insert(0, str(src_root))

    from dungeon_levelgen.cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
