"""Command implementations for the terrain_tile CLI."""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

from .ui import print_error, print_properties, print_success, print_warning
from ..core.config import ConfigManager, TileConfig
from ..core.elevation import decode_raster, tile_size_meters
from ..core.synthetic import create_sample_raster
from ..exceptions import TerrainTileException
from ..io.image_io import load_raster, save_raster
from ..io.obj import export_tile_to_obj
from ..tile import build_tile

logger = logging.getLogger(__name__)


def resolve_config(config_file: Optional[Path], overrides: Dict[str, Any]) -> TileConfig:
    """Load a config file (or defaults) and apply the options given on the command line."""
    base = ConfigManager.load_config(str(config_file)) if config_file else ConfigManager.get_default_config()
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return ConfigManager.merge_configs(base, overrides)


def build_command(
    input_file: Path,
    output_file: Path,
    config: TileConfig,
    normal_map: Optional[Path] = None,
    backend: str = "pil",
) -> bool:
    """Build a tile from an elevation image and export it as OBJ."""
    try:
        elevation = load_raster(input_file, backend=backend)
        normals = load_raster(normal_map, backend=backend) if normal_map else None

        build = build_tile(config, elevation, normals)
        if config.use_normal_map and not build.shading.use_normal_map:
            print_warning("No normal map given, falling back to smooth normals")

        path = export_tile_to_obj(
            build, str(output_file),
            normal_map_path=str(normal_map) if normal_map else None
        )

        stats = build.mesh.get_statistics()
        print_properties({
            "Zoom level": config.zoom_level,
            "Resolution": config.resolution,
            "Vertices": stats["vertex_count"],
            "Triangles": stats["face_count"],
            "Height range": stats["height_range"],
            "Normals": build.normal_mode.value,
        }, title="Tile Build")
        print_success(f"Tile exported to {path}")
        return True
    except (TerrainTileException, OSError) as e:
        logger.debug("Build failed", exc_info=True)
        print_error(str(e))
        return False


def info_command(input_file: Path, zoom_level: int, backend: str = "pil") -> bool:
    """Show raster statistics and the decoded elevation range."""
    try:
        raster = load_raster(input_file, backend=backend)
        meters = decode_raster(raster)
        tile_size = tile_size_meters(zoom_level)

        properties = {"File": str(input_file)}
        properties.update(raster.get_stats())
        properties.update({
            "Min elevation (m)": float(meters.min()),
            "Max elevation (m)": float(meters.max()),
            "Mean elevation (m)": float(meters.mean()),
            "Zoom level": zoom_level,
            "Tile size (m)": tile_size,
            "Relief (tile units)": float(meters.max() - meters.min()) / tile_size,
        })
        print_properties(properties, title="Elevation Raster")
        return True
    except (TerrainTileException, OSError) as e:
        print_error(str(e))
        return False


def sample_command(
    output_file: Path,
    pattern: str = "peak",
    size: int = 256,
    relief: float = 1000.0,
    base_elevation: float = 0.0,
    seed: Optional[int] = None,
) -> bool:
    """Write a synthetic Terrarium PNG."""
    try:
        raster = create_sample_raster(
            width=size,
            height=size,
            pattern=pattern,
            as_bytes=True,
            base_elevation=base_elevation,
            relief=relief,
            seed=seed,
        )
        path = save_raster(raster, output_file)
        print_success(f"Sample {pattern} raster saved to {path}")
        return True
    except (ValueError, OSError) as e:
        print_error(str(e))
        return False


def preview_command(
    input_file: Path,
    output_file: Path,
    config: TileConfig,
    exaggeration: float = 1.0,
    backend: str = "pil",
) -> bool:
    """Render a built tile to an image."""
    from ..plotters.matplotlib import plot_tile

    try:
        raster = load_raster(input_file, backend=backend)
        # The preview never binds a normal map
        build = build_tile(replace(config, use_normal_map=False), raster)
        plot_tile(
            build.mesh,
            filename=str(output_file),
            title=f"{Path(input_file).name} (zoom {config.zoom_level})",
            height_exaggeration=exaggeration,
        )
        print_success(f"Preview saved to {output_file}")
        return True
    except (TerrainTileException, OSError) as e:
        print_error(str(e))
        return False


def config_command(output_file: Optional[Path], config: TileConfig) -> bool:
    """Write a configuration file, or print it when no file is given."""
    try:
        if output_file is None:
            print_properties(config.as_dict(), title="Tile Configuration")
            return True
        ConfigManager.save_config(config, str(output_file))
        print_success(f"Configuration saved to {output_file}")
        return True
    except OSError as e:
        print_error(str(e))
        return False
