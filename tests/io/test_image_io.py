#!/usr/bin/env python3
"""
Tests for image decoding and raster files.
"""

import io
import os
import tempfile
import unittest

import numpy as np
from PIL import Image

from terrain_tile.core.elevation import decode_raster
from terrain_tile.core.raster import ElevationRaster, RasterOrigin
from terrain_tile.core.synthetic import create_sample_raster
from terrain_tile.exceptions import RasterDecodeError
from terrain_tile.io.image_io import (
    SUPPORTED_BACKENDS,
    decode_image,
    decode_image_opencv,
    decode_image_pil,
    load_raster,
    save_raster,
)


def _encode(pixels, format="PNG"):
    buffer = io.BytesIO()
    Image.fromarray(pixels).save(buffer, format=format)
    return buffer.getvalue()


class TestDecodeImage(unittest.TestCase):
    """Test cases for decoding image bytes."""

    def setUp(self):
        rng = np.random.default_rng(7)
        self.rgba = rng.integers(0, 256, size=(5, 6, 4), dtype=np.uint8)
        self.rgba[..., 3] = 255
        self.rgb = self.rgba[..., :3].copy()

    def test_pil_rgba(self):
        pixels = decode_image_pil(_encode(self.rgba))
        self.assertEqual(pixels.dtype, np.uint8)
        np.testing.assert_array_equal(pixels, self.rgba)

    def test_pil_rgb_gains_alpha(self):
        pixels = decode_image_pil(_encode(self.rgb))
        self.assertEqual(pixels.shape, (5, 6, 4))
        np.testing.assert_array_equal(pixels, self.rgba)

    def test_opencv_matches_pil(self):
        for source in (self.rgb, self.rgba):
            with self.subTest(channels=source.shape[2]):
                data = _encode(source)
                np.testing.assert_array_equal(decode_image_opencv(data), decode_image_pil(data))

    def test_opencv_grayscale(self):
        gray = np.arange(12, dtype=np.uint8).reshape(3, 4)
        pixels = decode_image_opencv(_encode(gray))
        self.assertEqual(pixels.shape, (3, 4, 4))
        np.testing.assert_array_equal(pixels[..., 0], gray)
        np.testing.assert_array_equal(pixels[..., 3], 255)

    def test_decode_image_returns_raster(self):
        for backend in SUPPORTED_BACKENDS:
            with self.subTest(backend=backend):
                raster = decode_image(_encode(self.rgba), backend=backend)
                self.assertIsInstance(raster, ElevationRaster)
                self.assertEqual(raster.shape, (5, 6))
                self.assertIs(raster.origin, RasterOrigin.BOTTOM_LEFT)

    def test_decode_image_origin(self):
        raster = decode_image(_encode(self.rgba), origin=RasterOrigin.TOP_LEFT)
        self.assertIs(raster.origin, RasterOrigin.TOP_LEFT)

    def test_invalid_bytes(self):
        for backend in SUPPORTED_BACKENDS:
            with self.subTest(backend=backend):
                with self.assertRaises(RasterDecodeError):
                    decode_image(b"\x00\x01not an image", backend=backend)

    def test_empty_bytes(self):
        with self.assertRaises(RasterDecodeError):
            decode_image(b"")

    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            decode_image(_encode(self.rgba), backend="imageio")


class TestRasterFiles(unittest.TestCase):
    """Test cases for saving and loading raster files."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_byte_raster_survives_png(self):
        raster = create_sample_raster(24, 24, pattern="waves", as_bytes=True)
        path = save_raster(raster, os.path.join(self.temp_dir.name, "waves.png"))
        loaded = load_raster(path)
        np.testing.assert_array_equal(loaded.data, raster.data)
        np.testing.assert_array_equal(decode_raster(loaded), decode_raster(raster))

    def test_float_raster_is_quantized(self):
        raster = ElevationRaster.filled(3, 3, (0.5, 0.0, 1.0))
        path = save_raster(raster, os.path.join(self.temp_dir.name, "nested", "flat.png"))
        loaded = load_raster(path, backend="opencv")
        np.testing.assert_array_equal(loaded.data[0, 0], [128, 0, 255, 255])

    def test_load_missing_file(self):
        with self.assertRaises(OSError):
            load_raster(os.path.join(self.temp_dir.name, "missing.png"))
