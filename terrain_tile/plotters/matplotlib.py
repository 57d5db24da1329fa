#!/usr/bin/env python3
"""
Matplotlib preview of terrain tile meshes.

Draws the triangulated tile as a 3D surface. Tile meshes are Y-up, so the
mesh X/Z plane is drawn as the plot's horizontal plane and mesh Y as the
plot's vertical axis.
"""

import os
import logging
from typing import Any, Optional, Tuple

import numpy as np

from ..core.mesh import TileMesh, UP_AXIS

# Set up logger
logger = logging.getLogger(__name__)

COLORBAR_LABEL = "Height (tile units)"
DEFAULT_COLORMAP = "terrain"


def plot_tile(mesh: TileMesh,
              filename: Optional[str] = None,
              cmap: str = DEFAULT_COLORMAP,
              title: str = "Terrain Tile",
              height_exaggeration: float = 1.0,
              **kwargs) -> Tuple[Any, Any]:
    """
    Plot a tile mesh as a triangulated 3D surface.

    Args:
        mesh: Mesh to draw
        filename: If given, the figure is saved there
        cmap: Colormap name
        title: Plot title
        height_exaggeration: Multiplier applied to heights for display only
        **kwargs: figsize (default (10, 8)), dpi (default 150), elev and
            azim for the camera

    Returns:
        Tuple of (figure, axes)
    """
    from matplotlib.figure import Figure
    from mpl_toolkits.mplot3d import Axes3D  # noqa: F401 (registers the 3d projection)

    fig = Figure(figsize=kwargs.get("figsize", (10, 8)))
    ax = fig.add_subplot(111, projection="3d")

    x = mesh.vertices[:, 0]
    z = mesh.vertices[:, 2]
    heights = mesh.vertices[:, UP_AXIS] * height_exaggeration

    surf = ax.plot_trisurf(x, z, heights, triangles=mesh.faces, cmap=cmap,
                           linewidth=0, antialiased=True)
    cbar = fig.colorbar(surf, ax=ax, shrink=0.5, aspect=5)
    cbar.set_label(COLORBAR_LABEL)

    ax.set_title(title)
    ax.set_xlabel("X")
    ax.set_ylabel("Z")
    ax.set_zlabel("Height")
    ax.view_init(elev=kwargs.get("elev", 35), azim=kwargs.get("azim", -60))

    # Keep flat tiles from collapsing the vertical axis
    if np.ptp(heights) == 0:
        ax.set_zlim(heights[0] - 0.5, heights[0] + 0.5)

    if filename is not None:
        filename = str(filename)
        directory = os.path.dirname(os.path.abspath(filename))
        os.makedirs(directory, exist_ok=True)
        fig.savefig(filename, dpi=kwargs.get("dpi", 150), bbox_inches="tight")
        logger.info(f"Plot saved to {filename}")

    return fig, ax
