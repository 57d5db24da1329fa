"""
OBJ export for terrain tile meshes.

Writes vertex positions, texture coordinates and normals of a built tile to
Wavefront OBJ, with an optional MTL that references the normal map when the
tile is shaded with one.
"""

import os
import logging
from typing import Optional, TYPE_CHECKING

from ..core.mesh import TileMesh

if TYPE_CHECKING:
    from ..tile import TileBuild

# Set up logging
logger = logging.getLogger(__name__)

MATERIAL_NAME = "TerrainMaterial"


def ensure_extension(filename: str, ext: str = "obj") -> str:
    """Ensure filename has the given extension."""
    if not filename.lower().endswith(f".{ext}"):
        filename = f"{os.path.splitext(filename)[0]}.{ext}"
    return filename


def write_obj(mesh: TileMesh,
              filename: str,
              include_materials: bool = True,
              normal_map: Optional[str] = None,
              object_name: str = "TerrainTile") -> str:
    """
    Write mesh data to an OBJ file.

    Args:
        mesh: Mesh to write
        filename: Output filename (".obj" is appended if missing)
        include_materials: Whether to write and reference an MTL file
        normal_map: Image path referenced as the material's normal map
        object_name: Name of the OBJ object

    Returns:
        Path of the written OBJ file
    """
    filename = ensure_extension(str(filename))
    directory = os.path.dirname(os.path.abspath(filename))
    os.makedirs(directory, exist_ok=True)

    with open(filename, 'w') as f:
        f.write("# OBJ file generated by terrain_tile\n")

        if include_materials:
            mtl_filename = os.path.splitext(os.path.basename(filename))[0] + ".mtl"
            f.write(f"mtllib {mtl_filename}\n")
            create_mtl_file(os.path.join(directory, mtl_filename), normal_map)

        f.write(f"o {object_name}\n")

        for v in mesh.vertices:
            f.write(f"v {v[0]:.6f} {v[1]:.6f} {v[2]:.6f}\n")

        for uv in mesh.uvs:
            f.write(f"vt {uv[0]:.6f} {uv[1]:.6f}\n")

        for n in mesh.normals:
            f.write(f"vn {n[0]:.6f} {n[1]:.6f} {n[2]:.6f}\n")

        if include_materials:
            f.write(f"usemtl {MATERIAL_NAME}\n")

        # OBJ indices start at 1; v, vt and vn share one index per vertex
        for face in mesh.faces + 1:
            f.write(f"f {face[0]}/{face[0]}/{face[0]} "
                    f"{face[1]}/{face[1]}/{face[1]} "
                    f"{face[2]}/{face[2]}/{face[2]}\n")

    logger.info(f"Exported OBJ file to {filename}")
    return filename


def create_mtl_file(mtl_filename: str, normal_map: Optional[str] = None) -> None:
    """
    Create a simple MTL material file for the OBJ.

    Args:
        mtl_filename: Path to the MTL file
        normal_map: Optional normal map image path
    """
    with open(mtl_filename, 'w') as f:
        f.write("# MTL file generated by terrain_tile\n")
        f.write(f"newmtl {MATERIAL_NAME}\n")
        f.write("Ka 0.2 0.2 0.2\n")
        f.write("Kd 0.8 0.8 0.8\n")
        f.write("Ks 0.1 0.1 0.1\n")
        f.write("Ns 100.0\n")
        f.write("illum 2\n")
        if normal_map:
            f.write(f"norm {normal_map}\n")


def export_tile_to_obj(build: 'TileBuild',
                       filename: str,
                       normal_map_path: Optional[str] = None) -> str:
    """
    Export a built tile, referencing its normal map when one is in use.

    Args:
        build: Result of build_tile
        filename: Output filename
        normal_map_path: Image path written into the MTL when the build uses
            a normal map

    Returns:
        Path of the written OBJ file
    """
    normal_map = normal_map_path if build.shading.use_normal_map else None
    return write_obj(build.mesh, filename, include_materials=True, normal_map=normal_map)
