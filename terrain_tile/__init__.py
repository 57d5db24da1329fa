"""
terrain_tile Package.

Builds renderable terrain meshes for web-mercator tiles from a uniform grid
and a Terrarium-encoded elevation raster.
"""

__version__ = "0.1.0"

from terrain_tile.exceptions import (
    TerrainTileException,
    InvalidConfigurationError,
    MissingElevationDataError,
    RasterDecodeError,
    MeshValidationError,
)
from terrain_tile.core import (
    GridConfig,
    ElevationConfig,
    TileConfig,
    ConfigManager,
    ScalingMode,
    NormalMode,
    TileMesh,
    ElevationRaster,
    RasterOrigin,
    build_grid,
    apply_elevation,
    decode_elevation,
    tile_size_meters,
)
from terrain_tile.tile import (
    TerrainTileData,
    TileBuild,
    ShadingSetup,
    build_tile,
    rebuild_if_changed,
)
from terrain_tile.io import decode_image, load_raster

__all__ = [
    '__version__',
    'TerrainTileException',
    'InvalidConfigurationError',
    'MissingElevationDataError',
    'RasterDecodeError',
    'MeshValidationError',
    'GridConfig',
    'ElevationConfig',
    'TileConfig',
    'ConfigManager',
    'ScalingMode',
    'NormalMode',
    'TileMesh',
    'ElevationRaster',
    'RasterOrigin',
    'build_grid',
    'apply_elevation',
    'decode_elevation',
    'tile_size_meters',
    'TerrainTileData',
    'TileBuild',
    'ShadingSetup',
    'build_tile',
    'rebuild_if_changed',
    'decode_image',
    'load_raster',
]
