"""Command-line interface for terrain_tile."""

from .app import app, create_app, main

__all__ = ['app', 'create_app', 'main']
