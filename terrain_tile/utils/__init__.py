"""Shared utilities for terrain_tile."""

from .logging import StructuredLogger, mesh_logger, elevation_logger

__all__ = [
    'StructuredLogger',
    'mesh_logger',
    'elevation_logger',
]
