"""
Uniform grid generation for terrain tiles.

The grid spans 0.0-1.0 in X and Z before the offset is applied, with
``resolution + 1`` vertices on each side and two triangles per cell.
"""

from typing import Sequence

import numpy as np

from .config import GridConfig, _validate_resolution
from .mesh import TileMesh
from ..utils.logging import mesh_logger

UP_NORMAL = (0.0, 1.0, 0.0)

# Right vector with a negative binormal sign, so that with the constant up
# normal a normal map is read as object space rather than tangent space.
OBJECT_SPACE_TANGENT = (1.0, 0.0, 0.0, -1.0)


def build_grid_indices(resolution: int) -> np.ndarray:
    """
    Build the triangle index buffer for a grid with the given resolution.

    Vertex ``index = col * (resolution + 1) + row``. Each cell emits
    ``(i, i+n, i+1)`` and ``(i+1, i+n, i+n+1)`` with ``n = resolution + 1``,
    which face +Y for the flat grid.

    Args:
        resolution: Number of cells per side

    Returns:
        (2 * resolution**2) x 3 array of vertex indices
    """
    _validate_resolution(resolution)
    n = resolution + 1

    # Index of the lower corner of every cell, in emission order
    cols, rows = np.meshgrid(np.arange(resolution), np.arange(resolution), indexing='ij')
    base = (cols * n + rows).ravel()

    faces = np.empty((2 * base.size, 3), dtype=np.int32)
    faces[0::2, 0] = base
    faces[0::2, 1] = base + n
    faces[0::2, 2] = base + 1
    faces[1::2, 0] = base + 1
    faces[1::2, 1] = base + n
    faces[1::2, 2] = base + n + 1
    return faces


def build_grid(resolution: int, offset: Sequence[float] = (0.0, 0.0, 0.0)) -> TileMesh:
    """
    Generate a flat, evenly spaced grid mesh.

    Args:
        resolution: Number of subdivisions per side, at least 1
        offset: Vector added to every vertex position

    Returns:
        New TileMesh with (resolution+1)**2 vertices and 2*resolution**2 triangles

    Raises:
        InvalidConfigurationError: If resolution is not a positive integer
    """
    config = GridConfig(resolution=resolution, offset=offset)
    n = config.vertices_per_side

    steps = np.arange(n, dtype=np.float64) / resolution
    # Column-major walk: col selects Z, row selects X
    z, x = np.meshgrid(steps, steps, indexing='ij')
    x = x.ravel()
    z = z.ravel()

    vertices = np.column_stack((x, np.zeros_like(x), z)) + np.asarray(config.offset)
    uvs = np.column_stack((x, z))
    normals = np.tile(UP_NORMAL, (n * n, 1))
    tangents = np.tile(OBJECT_SPACE_TANGENT, (n * n, 1))
    faces = build_grid_indices(resolution)

    mesh = TileMesh(vertices=vertices, faces=faces, uvs=uvs, normals=normals, tangents=tangents)
    mesh_logger.debug("Built grid", resolution=resolution, vertices=mesh.vertex_count,
                      triangles=mesh.triangle_count)
    return mesh


def build_grid_from_config(config: GridConfig) -> TileMesh:
    """Generate a grid mesh from a GridConfig."""
    return build_grid(config.resolution, config.offset)
