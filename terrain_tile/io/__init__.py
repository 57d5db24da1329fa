"""Raster decoding and mesh export collaborators."""

from .image_io import decode_image, load_raster, save_raster, SUPPORTED_BACKENDS
from .obj import write_obj, export_tile_to_obj

__all__ = [
    'decode_image',
    'load_raster',
    'save_raster',
    'SUPPORTED_BACKENDS',
    'write_obj',
    'export_tile_to_obj',
]
