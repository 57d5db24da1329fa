"""
Tests for OBJ export of tile meshes.
"""
import os

import numpy as np
import pytest

from terrain_tile.core.config import TileConfig
from terrain_tile.core.grid import build_grid
from terrain_tile.io.obj import create_mtl_file, ensure_extension, export_tile_to_obj, write_obj
from terrain_tile.tile import build_tile


def _lines(path, prefix):
    with open(path) as f:
        return [line.split() for line in f if line.startswith(prefix)]


class TestWriteObj:
    """Test cases for write_obj."""

    def test_counts(self, tmp_path):
        path = write_obj(build_grid(2), str(tmp_path / "tile.obj"))
        assert len(_lines(path, "v ")) == 9
        assert len(_lines(path, "vt ")) == 9
        assert len(_lines(path, "vn ")) == 9
        assert len(_lines(path, "f ")) == 8

    def test_faces_are_one_based(self, tmp_path):
        path = write_obj(build_grid(2), str(tmp_path / "tile.obj"))
        faces = _lines(path, "f ")
        assert faces[0] == ["f", "1/1/1", "4/4/4", "2/2/2"]
        indices = [int(corner.split("/")[0]) for face in faces for corner in face[1:]]
        assert min(indices) == 1
        assert max(indices) == 9

    def test_values(self, tmp_path):
        mesh = build_grid(1)
        mesh.vertices[3, 1] = 0.125
        path = write_obj(mesh, str(tmp_path / "tile.obj"))
        vertices = np.array([[float(v) for v in line[1:]] for line in _lines(path, "v ")])
        np.testing.assert_allclose(vertices, mesh.vertices, atol=1e-6)
        uvs = np.array([[float(v) for v in line[1:]] for line in _lines(path, "vt ")])
        np.testing.assert_allclose(uvs, mesh.uvs, atol=1e-6)

    def test_extension_added(self, tmp_path):
        path = write_obj(build_grid(1), str(tmp_path / "tile"))
        assert path.endswith(".obj")
        assert os.path.exists(path)

    def test_materials(self, tmp_path):
        path = write_obj(build_grid(1), str(tmp_path / "tile.obj"), normal_map="normals.png")
        mtl_path = tmp_path / "tile.mtl"
        assert mtl_path.exists()
        assert _lines(path, "mtllib") == [["mtllib", "tile.mtl"]]
        assert _lines(path, "usemtl") == [["usemtl", "TerrainMaterial"]]
        assert _lines(str(mtl_path), "norm") == [["norm", "normals.png"]]

    def test_without_materials(self, tmp_path):
        path = write_obj(build_grid(1), str(tmp_path / "tile.obj"), include_materials=False)
        assert _lines(path, "mtllib") == []
        assert not (tmp_path / "tile.mtl").exists()

    def test_creates_directories(self, tmp_path):
        path = write_obj(build_grid(1), str(tmp_path / "a" / "b" / "tile.obj"))
        assert os.path.exists(path)


@pytest.mark.parametrize("filename, expected", [
    ("tile.obj", "tile.obj"),
    ("tile.OBJ", "tile.OBJ"),
    ("tile.txt", "tile.obj"),
    ("tile", "tile.obj"),
])
def test_ensure_extension(filename, expected):
    assert ensure_extension(filename) == expected


def test_mtl_without_normal_map(tmp_path):
    path = tmp_path / "plain.mtl"
    create_mtl_file(str(path))
    content = path.read_text()
    assert "newmtl TerrainMaterial" in content
    assert "norm" not in content


def test_export_tile_references_normal_map_only_when_used(tmp_path, peak_raster):
    normal_data = peak_raster
    with_map = build_tile(TileConfig(resolution=2), peak_raster, normal_data)
    export_tile_to_obj(with_map, str(tmp_path / "mapped.obj"), normal_map_path="n.png")
    assert _lines(str(tmp_path / "mapped.mtl"), "norm") == [["norm", "n.png"]]

    without_map = build_tile(TileConfig(resolution=2, use_normal_map=False), peak_raster)
    export_tile_to_obj(without_map, str(tmp_path / "smooth.obj"), normal_map_path="n.png")
    assert _lines(str(tmp_path / "smooth.mtl"), "norm") == []
