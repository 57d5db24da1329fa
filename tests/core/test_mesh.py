"""
Unit tests for the TileMesh container and normal helpers.
"""
import unittest

import numpy as np

from terrain_tile.core.grid import build_grid
from terrain_tile.core.mesh import (
    TileMesh,
    calculate_face_normals,
    calculate_vertex_normals,
    validate_faces,
    validate_vertices,
)
from terrain_tile.exceptions import MeshValidationError


def _single_triangle(**overrides):
    buffers = dict(
        vertices=[[0, 0, 0], [0, 0, 1], [1, 0, 0]],
        faces=[[0, 1, 2]],
        uvs=[[0, 0], [0, 1], [1, 0]],
        normals=[[0, 1, 0]] * 3,
        tangents=[[1, 0, 0, -1]] * 3,
    )
    buffers.update(overrides)
    return TileMesh(**buffers)


class TestTileMesh(unittest.TestCase):
    """Test cases for TileMesh."""

    def test_buffers_are_cast(self):
        mesh = _single_triangle()
        self.assertEqual(mesh.vertices.dtype, np.float64)
        self.assertEqual(mesh.faces.dtype, np.int32)
        self.assertEqual(mesh.vertex_count, 3)
        self.assertEqual(mesh.face_count, 1)
        self.assertEqual(mesh.triangle_count, 1)

    def test_shape_validation(self):
        with self.assertRaises(MeshValidationError):
            _single_triangle(vertices=[[0, 0], [0, 1], [1, 0]])
        with self.assertRaises(MeshValidationError):
            _single_triangle(faces=[[0, 1, 3]])
        with self.assertRaises(MeshValidationError):
            _single_triangle(uvs=[[0, 0]])
        with self.assertRaises(MeshValidationError):
            _single_triangle(normals=[[0, 1, 0]])
        with self.assertRaises(MeshValidationError):
            _single_triangle(tangents=[[1, 0, 0]] * 3)

    def test_heights_is_a_view(self):
        mesh = build_grid(2)
        mesh.heights[:] = 3.0
        np.testing.assert_array_equal(mesh.vertices[:, 1], 3.0)

    def test_copy_is_deep(self):
        mesh = build_grid(2)
        clone = mesh.copy()
        clone.vertices[:, 1] = 1.0
        clone.faces[0] = [0, 1, 2]
        self.assertTrue(np.all(mesh.vertices[:, 1] == 0.0))
        self.assertEqual(mesh.faces[0].tolist(), [0, 3, 1])

    def test_bounds(self):
        mesh = build_grid(4, (-0.5, 0.0, -0.5))
        mesh.vertices[0, 1] = 0.25
        min_bounds, max_bounds = mesh.get_bounding_box()
        np.testing.assert_allclose(min_bounds, [-0.5, 0.0, -0.5])
        np.testing.assert_allclose(max_bounds, [0.5, 0.25, 0.5])
        np.testing.assert_allclose(mesh.get_bounds_size(), [1.0, 0.25, 1.0])

    def test_validate(self):
        mesh = build_grid(3)
        self.assertTrue(mesh.validate())
        mesh.faces[0] = [1, 1, 2]
        self.assertFalse(mesh.validate())

    def test_validate_non_finite(self):
        mesh = build_grid(1)
        mesh.vertices[0, 1] = np.nan
        self.assertFalse(mesh.validate())

    def test_statistics(self):
        mesh = build_grid(2)
        mesh.vertices[4, 1] = 2.0
        stats = mesh.get_statistics()
        self.assertEqual(stats["vertex_count"], 9)
        self.assertEqual(stats["face_count"], 8)
        self.assertEqual(stats["height_range"], [0.0, 2.0])
        self.assertAlmostEqual(stats["mean_height"], 2.0 / 9.0)
        self.assertEqual(stats["bounding_box"]["size"], [1.0, 2.0, 1.0])

    def test_as_dict(self):
        mesh = build_grid(1)
        buffers = mesh.as_dict()
        self.assertEqual(set(buffers), {"vertices", "faces", "uvs", "normals", "tangents"})
        self.assertIs(buffers["vertices"], mesh.vertices)

    def test_repr(self):
        self.assertIn("vertices=4", repr(build_grid(1)))


class TestNormals(unittest.TestCase):
    """Test cases for normal computation."""

    def test_validators(self):
        self.assertTrue(validate_vertices(np.zeros((3, 3))))
        self.assertFalse(validate_vertices(np.zeros((3, 2))))
        self.assertFalse(validate_vertices(None))
        self.assertTrue(validate_faces(np.zeros((0, 3), dtype=np.int32), 3))
        self.assertFalse(validate_faces(np.array([[0, 1, -1]]), 3))

    def test_flat_grid_vertex_normals_point_up(self):
        mesh = build_grid(4)
        normals = calculate_vertex_normals(mesh.vertices, mesh.faces)
        np.testing.assert_allclose(normals, np.tile([0.0, 1.0, 0.0], (25, 1)), atol=1e-12)

    def test_normals_are_unit_length(self):
        mesh = build_grid(6)
        mesh.vertices[:, 1] = np.sin(mesh.vertices[:, 0] * 3.0) * 0.2
        normals = calculate_vertex_normals(mesh.vertices, mesh.faces)
        np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0)
        self.assertTrue(np.all(normals[:, 1] > 0))

    def test_slope_tilts_normals(self):
        mesh = build_grid(2)
        # Height rises along +X, so normals lean towards -X
        mesh.vertices[:, 1] = mesh.vertices[:, 0]
        normals = calculate_vertex_normals(mesh.vertices, mesh.faces)
        expected = np.array([-1.0, 1.0, 0.0]) / np.sqrt(2.0)
        np.testing.assert_allclose(normals, np.tile(expected, (9, 1)), atol=1e-12)

    def test_unreferenced_vertex_points_up(self):
        vertices = np.array([[0, 0, 0], [0, 0, 1], [1, 0, 0], [5, 5, 5]], dtype=float)
        faces = np.array([[0, 1, 2]])
        normals = calculate_vertex_normals(vertices, faces)
        np.testing.assert_array_equal(normals[3], [0.0, 1.0, 0.0])

    def test_face_normals(self):
        mesh = _single_triangle()
        np.testing.assert_allclose(calculate_face_normals(mesh.vertices, mesh.faces), [[0.0, 1.0, 0.0]])
