#!/usr/bin/env python3
"""
Terrain Tile Exceptions

This module defines custom exceptions used throughout the terrain_tile library.
"""

class TerrainTileException(Exception):
    """Base class for all terrain_tile exceptions."""
    pass

class InvalidConfigurationError(TerrainTileException, ValueError):
    """Exception raised when a grid or elevation configuration is invalid."""
    pass

class MissingElevationDataError(TerrainTileException):
    """Exception raised when elevation mapping is requested without a raster."""
    pass

class RasterDecodeError(TerrainTileException):
    """Exception raised when raw image bytes cannot be decoded into a raster."""
    pass

class MeshValidationError(TerrainTileException):
    """Exception raised when mesh buffers fail validation."""
    pass
