"""
Elevation decoding and height mapping for terrain tiles.

Elevation rasters use the Terrarium encoding, where three color channels
pack a signed elevation in meters with a fixed -32768 offset:

    meters = r * 65536 + g * 256 + b - 32768

with r, g, b as normalized channel values (0.0-1.0). Byte rasters are
normalized by 1/255 before decoding. Decoded meters are converted into mesh
units by dividing by the real-world edge length of a tile at the configured
zoom level.

See https://github.com/tilezen/joerd/tree/master/docs for the tile format.
"""

import math
from typing import Tuple, Optional, Union

import numpy as np

from .config import ElevationConfig, ScalingMode, TileConfig, _coerce_enum, _validate_zoom_level
from .mesh import TileMesh, UP_AXIS
from .raster import ElevationRaster
from ..exceptions import MissingElevationDataError, MeshValidationError
from ..utils.logging import elevation_logger

EARTH_RADIUS_METERS = 6378137.0
EARTH_CIRCUMFERENCE_METERS = EARTH_RADIUS_METERS * math.pi * 2.0

ELEVATION_OFFSET_METERS = 32768.0


def decode_elevation(color) -> float:
    """
    Convert one normalized color sample to an elevation in meters.

    No clamping is applied: channel values outside 0.0-1.0 produce
    elevations outside the encodable range.

    Args:
        color: Mapping with 'r', 'g', 'b' keys, object with r/g/b
            attributes, or a sequence (r, g, b[, a])

    Returns:
        Elevation in meters
    """
    if isinstance(color, dict):
        r, g, b = color['r'], color['g'], color['b']
    elif hasattr(color, 'r'):
        r, g, b = color.r, color.g, color.b
    else:
        r, g, b = color[0], color[1], color[2]
    return float(r) * 256.0 * 256.0 + float(g) * 256.0 + float(b) - ELEVATION_OFFSET_METERS


def decode_elevation_array(rgb: np.ndarray) -> np.ndarray:
    """
    Vectorized elevation decoding over an array of samples.

    Args:
        rgb: Array of shape (..., C) with C >= 3. Integer arrays are treated
            as byte channels and normalized by 1/255.

    Returns:
        Array of shape (...) with elevations in meters
    """
    rgb = np.asarray(rgb)
    if rgb.shape[-1] < 3:
        raise ValueError(f"Expected at least 3 channels, got {rgb.shape[-1]}")
    if np.issubdtype(rgb.dtype, np.integer):
        channels = rgb[..., :3].astype(np.float64) / 255.0
    else:
        channels = rgb[..., :3].astype(np.float64)
    return (channels[..., 0] * 65536.0 + channels[..., 1] * 256.0 + channels[..., 2]
            - ELEVATION_OFFSET_METERS)


def decode_raster(raster: ElevationRaster) -> np.ndarray:
    """
    Decode a whole raster into an elevation grid.

    Args:
        raster: Elevation raster

    Returns:
        HxW array of elevations in meters, in image order
    """
    if raster is None:
        raise MissingElevationDataError("No elevation raster to decode")
    return decode_elevation_array(raster.data)


def encode_elevation(meters: float) -> Tuple[float, float, float]:
    """
    Encode an elevation into normalized channels that decode back exactly.

    Red and green land on a 1/256 lattice, blue carries the fractional meter.

    Args:
        meters: Elevation in meters, within [-32768, 32768)

    Returns:
        Tuple of normalized (r, g, b)

    Raises:
        ValueError: If the elevation is outside the encodable range
    """
    value = float(meters) + ELEVATION_OFFSET_METERS
    if not 0.0 <= value < 65536.0:
        raise ValueError(f"Elevation {meters} m is outside the encodable range [-32768, 32768)")

    high = math.floor(value / 256.0)
    remainder = value - high * 256.0
    middle = math.floor(remainder)
    return high / 256.0, middle / 256.0, remainder - middle


def encode_elevation_array(meters: np.ndarray) -> np.ndarray:
    """
    Vectorized encode_elevation.

    Args:
        meters: Array of elevations in meters, within [-32768, 32768)

    Returns:
        Array of shape (..., 3) with normalized (r, g, b) channels
    """
    value = np.asarray(meters, dtype=np.float64) + ELEVATION_OFFSET_METERS
    if np.any(value < 0.0) or np.any(value >= 65536.0):
        raise ValueError("Elevations must be within the encodable range [-32768, 32768)")

    high = np.floor(value / 256.0)
    remainder = value - high * 256.0
    middle = np.floor(remainder)
    return np.stack((high / 256.0, middle / 256.0, remainder - middle), axis=-1)


def encode_elevation_bytes(meters: np.ndarray) -> np.ndarray:
    """
    Encode elevations into byte channels for writing 8-bit images.

    Bytes are chosen so that, after normalization by 1/255, decoding lands
    within 1/255 m of the requested elevation.

    Args:
        meters: Array of elevations in meters, within [-32768, 32768)

    Returns:
        uint8 array of shape (..., 3)
    """
    value = np.asarray(meters, dtype=np.float64) + ELEVATION_OFFSET_METERS
    if np.any(value < 0.0) or np.any(value >= 65536.0):
        raise ValueError("Elevations must be within the encodable range [-32768, 32768)")

    red = np.floor(value * 255.0 / 65536.0)
    remainder = value - red * 65536.0 / 255.0
    green = np.clip(np.floor(remainder * 255.0 / 256.0), 0, 255)
    remainder = remainder - green * 256.0 / 255.0
    blue = np.clip(np.rint(remainder * 255.0), 0, 255)
    return np.stack((red, green, blue), axis=-1).astype(np.uint8)


def tile_size_meters(zoom_level: int) -> float:
    """
    Get the real-world edge length of a tile.

    Args:
        zoom_level: Web-mercator zoom level, 0 or greater

    Returns:
        Tile edge length in meters
    """
    _validate_zoom_level(zoom_level)
    return EARTH_CIRCUMFERENCE_METERS / (1 << zoom_level)


def meters_to_local(meters: Union[float, np.ndarray],
                    zoom_level: int,
                    height_scale: float = 1.0,
                    planar_extent: Optional[float] = None) -> Union[float, np.ndarray]:
    """
    Convert elevations in meters into mesh-local height units.

    Args:
        meters: Elevation value(s) in meters
        zoom_level: Zoom level that fixes the tile size
        height_scale: Extra multiplier applied last
        planar_extent: Largest planar extent of the mesh, when heights
            should be rescaled into the mesh footprint

    Returns:
        Height value(s) in mesh units
    """
    height = meters / tile_size_meters(zoom_level)
    if planar_extent is not None:
        height = height * planar_extent
    return height * height_scale


def compute_sample_coordinates(uvs: np.ndarray,
                               raster_shape: Tuple[int, int],
                               scaling_mode: ScalingMode = ScalingMode.UV_DIRECT,
                               planar_bounds: Optional[Tuple[float, float]] = None
                               ) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map vertex UVs to raster sample coordinates.

    UV_DIRECT rounds ``uv * size`` to the nearest sample (half to even).
    BOUNDS_RELATIVE divides the UV by the mesh's planar bounds before
    scaling and truncates. Both clamp to the raster so that UV = 1.0 stays
    in range.

    Args:
        uvs: Nx2 array of texture coordinates
        raster_shape: (height, width) of the raster
        scaling_mode: Sampling mode
        planar_bounds: (size_x, size_z) of the mesh bounds, required for
            BOUNDS_RELATIVE

    Returns:
        Tuple of integer (x, y) arrays in sample space
    """
    height, width = raster_shape
    uvs = np.asarray(uvs, dtype=np.float64)
    scaling_mode = _coerce_enum(ScalingMode, scaling_mode, 'scaling_mode')

    if scaling_mode == ScalingMode.BOUNDS_RELATIVE:
        if planar_bounds is None:
            raise ValueError("planar_bounds is required for bounds-relative sampling")
        size_x, size_z = planar_bounds
        if size_x <= 0 or size_z <= 0:
            raise MeshValidationError(
                f"Mesh has no planar extent (size_x={size_x}, size_z={size_z})"
            )
        x = np.trunc(uvs[:, 0] / size_x * width)
        y = np.trunc(uvs[:, 1] / size_z * height)
    else:
        x = np.rint(uvs[:, 0] * width)
        y = np.rint(uvs[:, 1] * height)

    x = np.clip(x, 0, width - 1).astype(np.intp)
    y = np.clip(y, 0, height - 1).astype(np.intp)
    return x, y


def apply_elevation(mesh: TileMesh,
                    raster: Optional[ElevationRaster],
                    config: Union[ElevationConfig, TileConfig, None] = None) -> TileMesh:
    """
    Set the height of every vertex from an elevation raster.

    Only the vertical component of the vertices is written; topology, UVs,
    normals, tangents and planar positions are left untouched. Repeating
    the call with the same raster and config gives identical heights.

    Args:
        mesh: Mesh with UV coverage 0-1, typically from build_grid
        raster: Decoded elevation raster
        config: Elevation configuration; a TileConfig is also accepted

    Returns:
        The same mesh, with updated heights

    Raises:
        MissingElevationDataError: If the raster is missing
        MeshValidationError: If bounds-relative sampling meets a degenerate mesh
    """
    if raster is None:
        raise MissingElevationDataError("Elevation raster is required to apply elevation")
    if not isinstance(raster, ElevationRaster):
        raster = ElevationRaster(raster)
    if config is None:
        config = ElevationConfig()
    elif isinstance(config, TileConfig):
        config = config.elevation_config()

    bounds = mesh.get_bounds_size()
    planar_bounds = (float(bounds[0]), float(bounds[2]))

    x, y = compute_sample_coordinates(mesh.uvs, raster.shape, config.scaling_mode, planar_bounds)
    samples = raster.data[raster.sample_rows(y), x]
    meters = decode_elevation_array(samples)

    planar_extent = None
    if config.scaling_mode == ScalingMode.BOUNDS_RELATIVE:
        planar_extent = max(planar_bounds)

    heights = meters_to_local(meters, config.zoom_level, config.height_scale, planar_extent)
    mesh.vertices[:, UP_AXIS] = heights

    elevation_logger.debug(
        "Applied elevation",
        vertices=mesh.vertex_count,
        zoom_level=config.zoom_level,
        scaling_mode=config.scaling_mode.value,
        min_meters=float(meters.min()),
        max_meters=float(meters.max()),
    )
    return mesh
