"""Core mesh data structure for terrain tiles."""

import numpy as np
from dataclasses import dataclass
from typing import Dict, Any, Tuple
import logging

from ..exceptions import MeshValidationError

logger = logging.getLogger(__name__)

# Vertical axis of tile meshes
UP_AXIS = 1

def validate_vertices(vertices: np.ndarray) -> bool:
    """Validate vertex array."""
    if vertices is None:
        return False
    if not isinstance(vertices, np.ndarray):
        return False
    if vertices.ndim != 2:
        return False
    if vertices.shape[1] != 3:
        return False
    if vertices.size == 0:
        return False
    return True

def validate_faces(faces: np.ndarray, vertex_count: int) -> bool:
    """Validate face array."""
    if faces is None:
        return False
    if not isinstance(faces, np.ndarray):
        return False
    if faces.ndim != 2:
        return False
    if faces.shape[1] != 3:
        return False
    if faces.size == 0:
        return True  # Empty faces array is valid

    # Check that all face indices are valid
    if np.any(faces < 0) or np.any(faces >= vertex_count):
        return False

    return True

def calculate_vertex_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """
    Calculate unit normal vectors for each vertex using area-weighted face normals.

    Args:
        vertices: Nx3 array of vertex positions
        faces: Mx3 array of vertex indices

    Returns:
        Nx3 array of unit normal vectors for each vertex
    """
    normals = np.zeros(vertices.shape, dtype=np.float64)
    if len(faces) == 0:
        normals[:, UP_AXIS] = 1.0
        return normals

    v0 = vertices[faces[:, 0]]
    v1 = vertices[faces[:, 1]]
    v2 = vertices[faces[:, 2]]

    # Unnormalized cross product has length 2 * area, which gives the weighting
    face_normals = np.cross(v1 - v0, v2 - v0)
    for corner in range(3):
        np.add.at(normals, faces[:, corner], face_normals)

    norms = np.linalg.norm(normals, axis=1, keepdims=True)
    mask = norms[:, 0] > 1e-12
    normals[mask] = normals[mask] / norms[mask]

    # Vertices without any non-degenerate face point up
    if not mask.all():
        logger.debug(f"{int((~mask).sum())} vertices have no face area, using the up normal")
    normals[~mask] = 0.0
    normals[~mask, UP_AXIS] = 1.0

    return normals

def calculate_face_normals(vertices: np.ndarray, faces: np.ndarray) -> np.ndarray:
    """
    Calculate unit normal vectors for each face in a mesh.

    Args:
        vertices: Array of 3D vertices
        faces: Array of face indices

    Returns:
        Array of unit normal vectors for each face
    """
    v0 = vertices[faces[:, 0]]
    v1 = vertices[faces[:, 1]]
    v2 = vertices[faces[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)

    norms = np.linalg.norm(normals, axis=1, keepdims=True)
    norms[norms < 1e-12] = 1.0
    return normals / norms

@dataclass
class TileMesh:
    """Container for tile mesh geometry and per-vertex shading attributes."""
    vertices: np.ndarray  # Nx3 array of vertex positions
    faces: np.ndarray     # Mx3 array of vertex indices
    uvs: np.ndarray       # Nx2 array of texture coordinates
    normals: np.ndarray   # Nx3 array of vertex normals
    tangents: np.ndarray  # Nx4 array of tangents, w is binormal handedness

    def __post_init__(self):
        """Validate mesh data on creation."""
        self.vertices = np.asarray(self.vertices, dtype=np.float64)
        self.faces = np.asarray(self.faces, dtype=np.int32)
        self.uvs = np.asarray(self.uvs, dtype=np.float64)
        self.normals = np.asarray(self.normals, dtype=np.float64)
        self.tangents = np.asarray(self.tangents, dtype=np.float64)

        if not validate_vertices(self.vertices):
            raise MeshValidationError("Invalid vertex data")
        if not validate_faces(self.faces, len(self.vertices)):
            raise MeshValidationError("Invalid face data")
        if self.uvs.shape != (len(self.vertices), 2):
            raise MeshValidationError("UV array shape invalid")
        if self.normals.shape != self.vertices.shape:
            raise MeshValidationError("Normal array shape doesn't match vertices")
        if self.tangents.shape != (len(self.vertices), 4):
            raise MeshValidationError("Tangent array shape invalid")

    @property
    def vertex_count(self) -> int:
        """Get number of vertices."""
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        """Get number of faces."""
        return len(self.faces)

    @property
    def triangle_count(self) -> int:
        """Get number of triangles (alias for face_count)."""
        return self.face_count

    @property
    def heights(self) -> np.ndarray:
        """View of the vertical component of every vertex."""
        return self.vertices[:, UP_AXIS]

    def recalculate_normals(self) -> None:
        """Replace vertex normals with smooth normals computed from the faces."""
        self.normals = calculate_vertex_normals(self.vertices, self.faces)

    def get_bounding_box(self) -> Tuple[np.ndarray, np.ndarray]:
        """Get mesh bounding box."""
        min_bounds = np.min(self.vertices, axis=0)
        max_bounds = np.max(self.vertices, axis=0)
        return min_bounds, max_bounds

    def get_bounds_size(self) -> np.ndarray:
        """Get the extent of the bounding box along each axis."""
        min_bounds, max_bounds = self.get_bounding_box()
        return max_bounds - min_bounds

    def copy(self) -> 'TileMesh':
        """Create a deep copy of the mesh."""
        return TileMesh(
            vertices=self.vertices.copy(),
            faces=self.faces.copy(),
            uvs=self.uvs.copy(),
            normals=self.normals.copy(),
            tangents=self.tangents.copy()
        )

    def validate(self) -> bool:
        """Validate mesh integrity."""
        if not validate_vertices(self.vertices):
            return False
        if not validate_faces(self.faces, len(self.vertices)):
            return False
        if not np.all(np.isfinite(self.vertices)):
            return False

        # Check for degenerate faces
        if len(self.faces):
            f = self.faces
            if np.any((f[:, 0] == f[:, 1]) | (f[:, 1] == f[:, 2]) | (f[:, 2] == f[:, 0])):
                return False

        if self.normals.shape != self.vertices.shape:
            return False
        if self.uvs.shape != (len(self.vertices), 2):
            return False
        if self.tangents.shape != (len(self.vertices), 4):
            return False

        return True

    def get_statistics(self) -> Dict[str, Any]:
        """Get mesh statistics."""
        min_bounds, max_bounds = self.get_bounding_box()
        size = max_bounds - min_bounds
        heights = self.heights

        return {
            "vertex_count": self.vertex_count,
            "face_count": self.face_count,
            "triangle_count": self.triangle_count,
            "bounding_box": {
                "min": min_bounds.tolist(),
                "max": max_bounds.tolist(),
                "size": size.tolist()
            },
            "height_range": [float(heights.min()), float(heights.max())],
            "mean_height": float(heights.mean()),
        }

    def as_dict(self) -> Dict[str, np.ndarray]:
        """
        Get mesh buffers as a dictionary.

        Returns:
            Dictionary with mesh components
        """
        return {
            'vertices': self.vertices,
            'faces': self.faces,
            'uvs': self.uvs,
            'normals': self.normals,
            'tangents': self.tangents,
        }

    def __repr__(self) -> str:
        """String representation of the mesh."""
        return f"TileMesh(vertices={self.vertex_count}, faces={self.face_count})"
