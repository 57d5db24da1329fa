"""Normal and tangent conventions for tile meshes."""

import logging

import numpy as np

from .config import NormalMode, _coerce_enum
from .grid import UP_NORMAL, OBJECT_SPACE_TANGENT
from .mesh import TileMesh

logger = logging.getLogger(__name__)


def apply_normal_mode(mesh: TileMesh, mode: NormalMode) -> TileMesh:
    """
    Set the normals and tangents of a mesh for the given convention.

    OBJECT_SPACE writes the constant up normal and right tangent to every
    vertex, so a normal map bound by the renderer is interpreted in object
    space. SMOOTH recomputes area-weighted vertex normals from the current
    (elevated) faces and leaves tangents as they are.

    Args:
        mesh: Mesh to update in place
        mode: Normal convention

    Returns:
        The same mesh
    """
    mode = _coerce_enum(NormalMode, mode, 'normal_mode')
    if mode == NormalMode.OBJECT_SPACE:
        mesh.normals = np.tile(UP_NORMAL, (mesh.vertex_count, 1))
        mesh.tangents = np.tile(OBJECT_SPACE_TANGENT, (mesh.vertex_count, 1))
    else:
        mesh.recalculate_normals()
    logger.debug(f"Applied {mode.value} normals to {mesh.vertex_count} vertices")
    return mesh
