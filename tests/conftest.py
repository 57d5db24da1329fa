"""
Pytest fixtures shared across test modules.
"""
import io

import numpy as np
import pytest

from terrain_tile.core.elevation import encode_elevation
from terrain_tile.core.raster import ElevationRaster
from terrain_tile.core.synthetic import create_sample_raster, elevation_to_raster


def uniform_raster(meters, width=4, height=4):
    """Raster whose every sample decodes to ``meters``."""
    return ElevationRaster.filled(width, height, encode_elevation(meters))


def png_bytes(pixels):
    """Encode a uint8 array as PNG bytes with Pillow."""
    from PIL import Image

    buffer = io.BytesIO()
    Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def zero_raster():
    """Raster where every sample decodes to 0 m."""
    return uniform_raster(0.0)


@pytest.fixture
def gradient_elevation():
    """4x4 elevation grid in image order: 100 m per column, 10 m per row."""
    rows, cols = np.mgrid[0:4, 0:4]
    return 100.0 * cols + 10.0 * rows


@pytest.fixture
def gradient_raster(gradient_elevation):
    return elevation_to_raster(gradient_elevation)


@pytest.fixture
def peak_raster():
    """Small synthetic mountain, 0-1000 m."""
    return create_sample_raster(width=32, height=32, pattern="peak", relief=1000.0)


@pytest.fixture
def peak_png(tmp_path):
    """Peak raster written as an 8-bit PNG file."""
    from terrain_tile.io.image_io import save_raster

    raster = create_sample_raster(width=32, height=32, pattern="peak", relief=1000.0, as_bytes=True)
    return save_raster(raster, tmp_path / "peak.png")


@pytest.fixture
def make_uniform_raster():
    """Factory for rasters that decode to one elevation everywhere."""
    return uniform_raster


@pytest.fixture
def make_png_bytes():
    """Factory that encodes uint8 pixel arrays as PNG bytes."""
    return png_bytes
