"""
Image I/O utilities for elevation and normal rasters.

This module decodes encoded image bytes (PNG, WebP, ...) into RGBA rasters
and writes rasters back to disk. Pillow is the default backend, OpenCV is
available as an alternative.
"""

import io
import os
import logging
from typing import Union

import numpy as np

from ..core.raster import ElevationRaster, RasterOrigin
from ..exceptions import RasterDecodeError

# Set up logging
logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ('pil', 'opencv')


def decode_image_pil(data: bytes) -> np.ndarray:
    """
    Decode image bytes into an RGBA array using PIL (Pillow).

    Args:
        data: Encoded image bytes

    Returns:
        HxWx4 uint8 array

    Raises:
        RasterDecodeError: If the bytes are not a readable image
    """
    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(io.BytesIO(data)) as img:
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            return np.array(img, dtype=np.uint8)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise RasterDecodeError(f"Error decoding image with PIL: {e}") from e


def decode_image_opencv(data: bytes) -> np.ndarray:
    """
    Decode image bytes into an RGBA array using OpenCV.

    Args:
        data: Encoded image bytes

    Returns:
        HxWx4 uint8 array

    Raises:
        RasterDecodeError: If the bytes are not a readable image
    """
    import cv2

    buffer = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED) if buffer.size else None
    if img is None:
        raise RasterDecodeError("Error decoding image with OpenCV")

    if img.dtype != np.uint8:
        # 16-bit PNGs keep their high byte
        img = (img >> 8).astype(np.uint8)
    if img.ndim == 2:
        img = cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    elif img.shape[2] == 3:
        img = cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    else:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    return img


def decode_image(data: bytes,
                 backend: str = 'pil',
                 origin: RasterOrigin = RasterOrigin.BOTTOM_LEFT) -> ElevationRaster:
    """
    Decode raw image bytes into a raster.

    Args:
        data: Encoded image bytes
        backend: 'pil' or 'opencv'
        origin: Sample origin of the returned raster

    Returns:
        ElevationRaster with uint8 RGBA channels

    Raises:
        RasterDecodeError: If decoding fails
        ValueError: If the backend is unknown
    """
    if not data:
        raise RasterDecodeError("No image data to decode")

    backend = backend.lower()
    if backend == 'pil':
        pixels = decode_image_pil(data)
    elif backend == 'opencv':
        pixels = decode_image_opencv(data)
    else:
        raise ValueError(f"Unknown image backend: {backend}. Available backends: {list(SUPPORTED_BACKENDS)}")

    logger.debug(f"Decoded {pixels.shape[1]}x{pixels.shape[0]} image with {backend}")
    return ElevationRaster(pixels, origin=origin)


def load_raster(filepath: Union[str, os.PathLike],
                backend: str = 'pil',
                origin: RasterOrigin = RasterOrigin.BOTTOM_LEFT) -> ElevationRaster:
    """
    Read an image file and decode it into a raster.

    Args:
        filepath: Path to the image file
        backend: 'pil' or 'opencv'
        origin: Sample origin of the returned raster

    Returns:
        ElevationRaster with uint8 RGBA channels
    """
    with open(filepath, 'rb') as f:
        data = f.read()
    return decode_image(data, backend=backend, origin=origin)


def save_raster(raster: ElevationRaster, filepath: Union[str, os.PathLike]) -> str:
    """
    Write a raster to an image file (format chosen by extension).

    Float channels are quantized to bytes.

    Args:
        raster: Raster to save
        filepath: Output path

    Returns:
        Path of the written file
    """
    from PIL import Image

    if raster.is_byte_encoded:
        pixels = raster.data.astype(np.uint8)
    else:
        pixels = np.clip(np.rint(raster.data * 255.0), 0, 255).astype(np.uint8)

    directory = os.path.dirname(os.path.abspath(filepath))
    os.makedirs(directory, exist_ok=True)
    Image.fromarray(pixels).save(filepath)
    logger.info(f"Saved raster to {filepath}")
    return str(filepath)
