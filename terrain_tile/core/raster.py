"""
Decoded RGBA raster container.

Rasters hold pixel data in image order (first row is the top of the decoded
image). Sampling coordinates follow texture conventions: with the default
bottom-left origin, ``y = 0`` addresses the bottom row of the image.
"""

import enum
from typing import Dict, Any, Tuple

import numpy as np

from ..exceptions import MissingElevationDataError


class RasterOrigin(enum.Enum):
    """Location of sample row 0 within the stored image."""
    BOTTOM_LEFT = "bottom_left"
    TOP_LEFT = "top_left"


class ElevationRaster:
    """
    Width x height grid of RGB(A) samples.

    Channels are either bytes (uint8, 0-255) or normalized floats (0.0-1.0).
    """

    def __init__(self, data: np.ndarray, origin: RasterOrigin = RasterOrigin.BOTTOM_LEFT):
        """
        Initialize a raster.

        Args:
            data: HxWx3 or HxWx4 array of channel samples in image order
            origin: Which image corner sample coordinate (0, 0) refers to

        Raises:
            MissingElevationDataError: If data is None or empty
            ValueError: If data does not have an RGB(A) layout
        """
        if data is None:
            raise MissingElevationDataError("Raster data is missing")
        data = np.asarray(data)
        if data.size == 0:
            raise MissingElevationDataError("Raster data is empty")
        if data.ndim != 3 or data.shape[2] not in (3, 4):
            raise ValueError(f"Raster data must have shape (H, W, 3|4), got {data.shape}")

        self.data = data
        self.origin = RasterOrigin(origin)

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width) of the raster."""
        return self.data.shape[0], self.data.shape[1]

    @property
    def is_byte_encoded(self) -> bool:
        return np.issubdtype(self.data.dtype, np.integer)

    def normalized(self) -> np.ndarray:
        """
        Get channels as floats in the 0.0-1.0 range.

        Returns:
            HxWxC float64 array in image order
        """
        if self.is_byte_encoded:
            return self.data.astype(np.float64) / 255.0
        return self.data.astype(np.float64)

    def sample_rows(self, y: np.ndarray) -> np.ndarray:
        """Convert sample-space row coordinates into stored array rows."""
        if self.origin == RasterOrigin.BOTTOM_LEFT:
            return self.height - 1 - y
        return y

    def get_pixel(self, x: int, y: int) -> np.ndarray:
        """
        Get the normalized channels of one sample.

        Coordinates outside the raster are clamped to the nearest edge.

        Args:
            x: Column in sample space
            y: Row in sample space (measured from the origin corner)

        Returns:
            Array of 3 or 4 normalized channel values
        """
        x = int(np.clip(x, 0, self.width - 1))
        y = int(np.clip(y, 0, self.height - 1))
        pixel = self.data[self.sample_rows(y), x]
        if self.is_byte_encoded:
            return pixel.astype(np.float64) / 255.0
        return pixel.astype(np.float64)

    def get_stats(self) -> Dict[str, Any]:
        """Get basic information about the raster."""
        return {
            'width': self.width,
            'height': self.height,
            'channels': self.data.shape[2],
            'dtype': str(self.data.dtype),
            'origin': self.origin.value,
        }

    @classmethod
    def filled(cls, width: int, height: int, color, origin: RasterOrigin = RasterOrigin.BOTTOM_LEFT) -> 'ElevationRaster':
        """
        Create a raster where every sample has the same color.

        Args:
            width: Raster width in samples
            height: Raster height in samples
            color: Normalized RGB or RGBA channel values
            origin: Sample origin

        Returns:
            New float ElevationRaster
        """
        color = np.asarray(color, dtype=np.float64)
        if color.shape == (3,):
            color = np.append(color, 1.0)
        data = np.broadcast_to(color, (height, width, color.shape[0])).copy()
        return cls(data, origin=origin)

    def __repr__(self) -> str:
        return (f"ElevationRaster(width={self.width}, height={self.height}, "
                f"dtype={self.data.dtype}, origin={self.origin.value})")
