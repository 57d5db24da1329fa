"""
Core terrain tile algorithms.

Grid generation, Terrarium elevation decoding and height mapping, and the
configuration and data types they share.
"""

from .config import (
    GridConfig,
    ElevationConfig,
    TileConfig,
    ConfigManager,
    ScalingMode,
    NormalMode,
    DEFAULT_OFFSET,
)
from .mesh import TileMesh, calculate_vertex_normals, calculate_face_normals
from .raster import ElevationRaster, RasterOrigin
from .grid import build_grid, build_grid_from_config, build_grid_indices
from .elevation import (
    EARTH_CIRCUMFERENCE_METERS,
    apply_elevation,
    compute_sample_coordinates,
    decode_elevation,
    decode_elevation_array,
    decode_raster,
    encode_elevation,
    encode_elevation_array,
    encode_elevation_bytes,
    meters_to_local,
    tile_size_meters,
)
from .normals import apply_normal_mode
from .synthetic import create_sample_elevation, create_sample_raster, elevation_to_raster

__all__ = [
    'GridConfig',
    'ElevationConfig',
    'TileConfig',
    'ConfigManager',
    'ScalingMode',
    'NormalMode',
    'DEFAULT_OFFSET',
    'TileMesh',
    'calculate_vertex_normals',
    'calculate_face_normals',
    'ElevationRaster',
    'RasterOrigin',
    'build_grid',
    'build_grid_from_config',
    'build_grid_indices',
    'EARTH_CIRCUMFERENCE_METERS',
    'apply_elevation',
    'compute_sample_coordinates',
    'decode_elevation',
    'decode_elevation_array',
    'decode_raster',
    'encode_elevation',
    'encode_elevation_array',
    'encode_elevation_bytes',
    'meters_to_local',
    'tile_size_meters',
    'apply_normal_mode',
    'create_sample_elevation',
    'create_sample_raster',
    'elevation_to_raster',
]
