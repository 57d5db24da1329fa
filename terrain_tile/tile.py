"""
Terrain tile construction.

Ties grid generation, elevation mapping and the normal convention together
into one build, and decides when a configuration change requires a rebuild.
The host application calls these functions on its own schedule; nothing
here polls for changes.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .core.config import TileConfig, ElevationConfig, NormalMode, ScalingMode, DEFAULT_OFFSET
from .core.elevation import apply_elevation
from .core.grid import build_grid
from .core.mesh import TileMesh
from .core.normals import apply_normal_mode
from .core.raster import ElevationRaster
from .exceptions import MissingElevationDataError
from .io.image_io import decode_image

# Set up logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShadingSetup:
    """What the renderer binds alongside the mesh buffers."""
    use_normal_map: bool
    normal_raster: Optional[ElevationRaster] = None


@dataclass
class TileBuild:
    """Result of building a tile."""
    mesh: TileMesh
    config: TileConfig
    shading: ShadingSetup

    @property
    def normal_mode(self) -> NormalMode:
        return NormalMode.OBJECT_SPACE if self.shading.use_normal_map else NormalMode.SMOOTH


class TerrainTileData:
    """
    Rasters and zoom level of one tile.

    Holds the decoded elevation and normal rasters and exposes the grid and
    elevation passes bound to this tile's zoom level.
    """

    def __init__(self, zoom_level: int,
                 elevation_raster: Optional[ElevationRaster] = None,
                 normal_raster: Optional[ElevationRaster] = None):
        # Validates the zoom level
        ElevationConfig(zoom_level=zoom_level)
        self.zoom_level = zoom_level
        self.elevation_raster = elevation_raster
        self.normal_raster = normal_raster

    def set_elevation_data(self, image_data: bytes, backend: str = 'pil') -> ElevationRaster:
        """
        Decode and store the elevation image.

        Raises:
            RasterDecodeError: If the image cannot be decoded
        """
        self.elevation_raster = decode_image(image_data, backend=backend)
        return self.elevation_raster

    def set_normal_data(self, image_data: bytes, backend: str = 'pil') -> ElevationRaster:
        """
        Decode and store the normal map image.

        Raises:
            RasterDecodeError: If the image cannot be decoded
        """
        self.normal_raster = decode_image(image_data, backend=backend)
        return self.normal_raster

    def generate_grid(self, resolution: int, offset: Sequence[float] = DEFAULT_OFFSET) -> TileMesh:
        return build_grid(resolution, offset)

    def apply_elevation(self, mesh: TileMesh,
                        height_scale: float = 1.0,
                        scaling_mode: ScalingMode = ScalingMode.BOUNDS_RELATIVE) -> TileMesh:
        """
        Elevate a mesh with this tile's elevation raster.

        Raises:
            MissingElevationDataError: If no elevation data has been set
        """
        config = ElevationConfig(
            zoom_level=self.zoom_level,
            height_scale=height_scale,
            scaling_mode=scaling_mode,
        )
        return apply_elevation(mesh, self.elevation_raster, config)


def _finish_build(mesh: TileMesh,
                  config: TileConfig,
                  normal_raster: Optional[ElevationRaster]) -> TileBuild:
    use_normal_map = config.use_normal_map
    if use_normal_map and normal_raster is None:
        logger.warning("Normal map requested but no normal raster given; using smooth normals")
        use_normal_map = False

    mode = NormalMode.OBJECT_SPACE if use_normal_map else NormalMode.SMOOTH
    apply_normal_mode(mesh, mode)

    shading = ShadingSetup(
        use_normal_map=use_normal_map,
        normal_raster=normal_raster if use_normal_map else None,
    )
    return TileBuild(mesh=mesh, config=config, shading=shading)


def build_tile(config: TileConfig,
               elevation_raster: Optional[ElevationRaster],
               normal_raster: Optional[ElevationRaster] = None) -> TileBuild:
    """
    Build a tile mesh from scratch.

    Args:
        config: Tile configuration
        elevation_raster: Decoded elevation raster
        normal_raster: Decoded normal map, used when config.use_normal_map is set

    Returns:
        TileBuild with the elevated mesh and its shading setup

    Raises:
        InvalidConfigurationError: If the configuration is invalid
        MissingElevationDataError: If the elevation raster is missing
    """
    if elevation_raster is None:
        raise MissingElevationDataError("Elevation raster is required to build a tile")

    mesh = build_grid(config.resolution, config.offset)
    apply_elevation(mesh, elevation_raster, config.elevation_config())
    build = _finish_build(mesh, config, normal_raster)

    logger.info(f"Built tile: zoom={config.zoom_level} resolution={config.resolution} "
                f"vertices={mesh.vertex_count} triangles={mesh.triangle_count} "
                f"normals={build.normal_mode.value}")
    return build


def rebuild_if_changed(current: TileConfig,
                       previous: Optional[TileConfig],
                       elevation_raster: Optional[ElevationRaster],
                       normal_raster: Optional[ElevationRaster] = None,
                       previous_build: Optional[TileBuild] = None) -> Optional[TileBuild]:
    """
    Rebuild a tile when its configuration differs from the previous one.

    When only elevation fields changed (zoom level, height scale, scaling
    mode) and the previous build is available, its topology is reused and
    only the elevation pass runs again, on a copy. Any other change is a
    full rebuild from the canonical grid.

    Callers must not overlap rebuilds of the same tile.

    Args:
        current: Configuration to build
        previous: Configuration of the last build, or None if never built
        elevation_raster: Decoded elevation raster
        normal_raster: Decoded normal map
        previous_build: Result of the last build

    Returns:
        New TileBuild, or None if the configurations are equal
    """
    if previous is not None and current == previous:
        return None

    changed = current.changed_fields(previous)
    logger.debug(f"Tile configuration changed: {list(changed)}")

    elevation_only = (
        previous is not None
        and previous_build is not None
        and all(name in TileConfig.ELEVATION_FIELDS for name in changed)
    )
    if not elevation_only:
        return build_tile(current, elevation_raster, normal_raster)

    if elevation_raster is None:
        raise MissingElevationDataError("Elevation raster is required to rebuild a tile")

    mesh = previous_build.mesh.copy()
    apply_elevation(mesh, elevation_raster, current.elevation_config())
    build = _finish_build(mesh, current, normal_raster)
    logger.info(f"Re-applied elevation to existing topology: {list(changed)}")
    return build
