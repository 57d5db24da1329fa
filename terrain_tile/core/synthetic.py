"""
Synthetic Terrarium rasters.

Generates elevation fields for demonstrations and tests and encodes them
into rasters that decode back to the requested meters.
"""

import logging
from typing import Optional

import numpy as np

from .elevation import encode_elevation_array, encode_elevation_bytes
from .raster import ElevationRaster, RasterOrigin

logger = logging.getLogger(__name__)

PATTERNS = ("flat", "peak", "dome", "ramp", "waves", "hills")


def create_sample_elevation(width: int = 256,
                            height: int = 256,
                            pattern: str = "peak",
                            base_elevation: float = 0.0,
                            relief: float = 1000.0,
                            seed: Optional[int] = None,
                            smoothing: float = 4.0) -> np.ndarray:
    """
    Create an elevation field in meters.

    Args:
        width: Number of samples per row
        height: Number of rows
        pattern: One of "flat", "peak", "dome", "ramp", "waves", "hills"
        base_elevation: Elevation of the lowest terrain in meters
        relief: Height difference between lowest and highest terrain in meters
        seed: Random seed for the "hills" pattern
        smoothing: Gaussian sigma in samples for the "hills" pattern

    Returns:
        height x width array of elevations in meters, in image order
    """
    x = np.linspace(-5, 5, width)
    y = np.linspace(-5, 5, height)
    X, Y = np.meshgrid(x, y)

    if pattern == "flat":
        Z = np.zeros_like(X)
    elif pattern == "peak":
        Z = np.exp(-(X**2 + Y**2) / 8)
    elif pattern == "dome":
        Z = np.clip(1.0 - np.sqrt(X**2 + Y**2) / 5, 0.0, None)
    elif pattern == "ramp":
        Z = (X + 5) / 10
    elif pattern == "waves":
        Z = (np.sin(X) * np.cos(Y) + 1.0) / 2.0
    elif pattern == "hills":
        from scipy.ndimage import gaussian_filter

        rng = np.random.default_rng(seed)
        Z = gaussian_filter(rng.random((height, width)), sigma=smoothing)
        z_min, z_max = Z.min(), Z.max()
        Z = (Z - z_min) / (z_max - z_min) if z_max > z_min else np.zeros_like(Z)
    else:
        raise ValueError(f"Unknown pattern: {pattern}. Available patterns: {list(PATTERNS)}")

    return base_elevation + Z * relief


def elevation_to_raster(elevation: np.ndarray,
                        origin: RasterOrigin = RasterOrigin.BOTTOM_LEFT,
                        as_bytes: bool = False) -> ElevationRaster:
    """
    Encode an elevation grid (meters, image order) into an RGBA raster.

    Args:
        elevation: 2D array of elevations in meters
        origin: Sample origin of the returned raster
        as_bytes: Produce uint8 channels suitable for 8-bit images instead
            of exact float channels

    Returns:
        ElevationRaster whose samples decode to the given elevations
    """
    elevation = np.asarray(elevation, dtype=np.float64)
    if elevation.ndim != 2:
        raise ValueError(f"Elevation grid must be 2D, got shape {elevation.shape}")

    if as_bytes:
        rgb = encode_elevation_bytes(elevation)
        alpha = np.full(elevation.shape + (1,), 255, dtype=np.uint8)
    else:
        rgb = encode_elevation_array(elevation)
        alpha = np.ones(elevation.shape + (1,), dtype=np.float64)
    return ElevationRaster(np.concatenate((rgb, alpha), axis=-1), origin=origin)


def create_sample_raster(width: int = 256,
                         height: int = 256,
                         pattern: str = "peak",
                         as_bytes: bool = False,
                         **kwargs) -> ElevationRaster:
    """Create a Terrarium raster for one of the sample patterns."""
    elevation = create_sample_elevation(width=width, height=height, pattern=pattern, **kwargs)
    logger.debug(f"Created {pattern} sample raster {width}x{height}, "
                 f"range [{elevation.min():.1f}, {elevation.max():.1f}] m")
    return elevation_to_raster(elevation, as_bytes=as_bytes)
