#!/usr/bin/env python3
"""
UI components for the terrain_tile CLI.

Provides a themed rich console and helpers for consistent output.
"""

from typing import Any, Dict

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

tile_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "filename": "bold blue",
    "value": "green",
    "key": "cyan",
})

console = Console(theme=tile_theme)


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[warning]Warning:[/warning] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[error]Error:[/error] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/success]")


def print_properties(properties: Dict[str, Any], title: str) -> None:
    """
    Print a two-column property table.

    Args:
        properties: Mapping of property name to value
        title: Table title
    """
    table = Table(title=title, show_header=True)
    table.add_column("Property", style="key", no_wrap=True)
    table.add_column("Value", style="value")

    for key, value in properties.items():
        if isinstance(value, float):
            formatted_value = f"{value:.6g}"
        elif isinstance(value, (list, tuple)) and all(isinstance(x, (int, float)) for x in value):
            formatted_value = ", ".join(f"{x:.4g}" for x in value)
        else:
            formatted_value = str(value)
        table.add_row(str(key), formatted_value)

    console.print(table)
