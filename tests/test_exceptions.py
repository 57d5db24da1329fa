#!/usr/bin/env python3
"""
Tests for terrain_tile exceptions.

This module contains unit tests for all exception classes defined in the
terrain_tile exceptions module.
"""

import pytest
from terrain_tile.exceptions import (
    TerrainTileException,
    InvalidConfigurationError,
    MissingElevationDataError,
    RasterDecodeError,
    MeshValidationError,
)


class TestTerrainTileExceptions:
    """Test cases for terrain_tile exception classes."""

    def test_base_exception(self):
        """Test that TerrainTileException can be raised and caught properly."""
        error_msg = "Base terrain tile exception"
        with pytest.raises(TerrainTileException) as excinfo:
            raise TerrainTileException(error_msg)

        assert str(excinfo.value) == error_msg
        assert isinstance(excinfo.value, Exception)

    @pytest.mark.parametrize("exc_class", [
        InvalidConfigurationError,
        MissingElevationDataError,
        RasterDecodeError,
        MeshValidationError,
    ])
    def test_subclasses_share_base(self, exc_class):
        """Every library error can be caught through the base class."""
        with pytest.raises(TerrainTileException) as excinfo:
            raise exc_class("failure")
        assert isinstance(excinfo.value, exc_class)
        assert str(excinfo.value) == "failure"

    def test_invalid_configuration_is_value_error(self):
        """Configuration errors are also ValueErrors for callers validating input."""
        with pytest.raises(ValueError):
            raise InvalidConfigurationError("resolution must be at least 1")

    def test_distinct_types(self):
        """Exception types do not catch each other."""
        with pytest.raises(RasterDecodeError):
            try:
                raise RasterDecodeError("bad image")
            except MissingElevationDataError:
                pytest.fail("RasterDecodeError caught as MissingElevationDataError")

    def test_exported_from_package(self):
        import terrain_tile

        assert terrain_tile.TerrainTileException is TerrainTileException
        assert terrain_tile.InvalidConfigurationError is InvalidConfigurationError
