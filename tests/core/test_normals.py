"""
Tests for the normal conventions applied after elevation.
"""
import numpy as np
import pytest

from terrain_tile.core.config import ElevationConfig, NormalMode
from terrain_tile.core.elevation import apply_elevation
from terrain_tile.core.grid import OBJECT_SPACE_TANGENT, UP_NORMAL, build_grid
from terrain_tile.core.normals import apply_normal_mode
from terrain_tile.exceptions import InvalidConfigurationError


@pytest.fixture
def elevated_mesh(peak_raster):
    # Low zoom keeps the relief visible relative to the tile size
    return apply_elevation(build_grid(8), peak_raster, ElevationConfig(zoom_level=14, height_scale=10.0))


class TestApplyNormalMode:
    """Test cases for apply_normal_mode."""

    def test_object_space_is_constant(self, elevated_mesh):
        apply_normal_mode(elevated_mesh, NormalMode.OBJECT_SPACE)
        count = elevated_mesh.vertex_count
        np.testing.assert_array_equal(elevated_mesh.normals, np.tile(UP_NORMAL, (count, 1)))
        np.testing.assert_array_equal(elevated_mesh.tangents, np.tile(OBJECT_SPACE_TANGENT, (count, 1)))

    def test_object_space_tangent_handedness(self, elevated_mesh):
        apply_normal_mode(elevated_mesh, "object_space")
        assert np.all(elevated_mesh.tangents[:, 3] == -1.0)

    def test_smooth_follows_relief(self, elevated_mesh):
        tangents = elevated_mesh.tangents.copy()
        apply_normal_mode(elevated_mesh, NormalMode.SMOOTH)
        normals = elevated_mesh.normals
        np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0)
        assert np.all(normals[:, 1] > 0)
        assert not np.allclose(normals, np.tile(UP_NORMAL, (elevated_mesh.vertex_count, 1)))
        np.testing.assert_array_equal(elevated_mesh.tangents, tangents)

    def test_smooth_on_flat_tile(self):
        mesh = apply_normal_mode(build_grid(3), NormalMode.SMOOTH)
        np.testing.assert_allclose(mesh.normals, np.tile(UP_NORMAL, (16, 1)), atol=1e-12)

    def test_positions_untouched(self, elevated_mesh):
        before = elevated_mesh.vertices.copy()
        apply_normal_mode(elevated_mesh, NormalMode.SMOOTH)
        np.testing.assert_array_equal(elevated_mesh.vertices, before)

    def test_unknown_mode(self):
        with pytest.raises(InvalidConfigurationError):
            apply_normal_mode(build_grid(1), "tangent_space")
