#!/usr/bin/env python3
"""Terrain Tile Command-Line Interface"""
import sys

from rich.console import Console

console = Console()

try:
    from terrain_tile.cli import app
except ImportError as e:
    console.print(f"[red]Error importing terrain_tile modules: {e}[/red]")
    console.print("[yellow]Make sure terrain_tile is properly installed[/yellow]")
    sys.exit(1)


def main():
    """Run the terrain_tile CLI application."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
