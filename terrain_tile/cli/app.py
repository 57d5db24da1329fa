"""Typer application for the terrain_tile command line."""
import logging
from pathlib import Path
from typing import Optional

import typer

from .commands import (
    build_command,
    config_command,
    info_command,
    preview_command,
    resolve_config,
    sample_command,
)
from .ui import print_error
from ..core.synthetic import PATTERNS
from ..exceptions import InvalidConfigurationError


def create_app() -> typer.Typer:
    """Create the terrain_tile app with all commands."""
    app = typer.Typer(
        help="Terrain Tile - Build terrain meshes from Terrarium elevation tiles",
        add_completion=False
    )

    @app.callback()
    def main_callback(
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
    ):
        """Build and inspect terrain tile meshes."""
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    @app.command("build")
    def build(
        input_file: Path = typer.Argument(..., help="Terrarium elevation image", exists=True, dir_okay=False),
        output_file: Path = typer.Argument(..., help="Output OBJ file"),
        zoom: Optional[int] = typer.Option(None, "--zoom", "-z", help="Tile zoom level"),
        resolution: Optional[int] = typer.Option(None, "--resolution", "-r", help="Grid subdivisions per side"),
        height_scale: Optional[float] = typer.Option(None, "--height-scale", help="Height multiplier"),
        scaling_mode: Optional[str] = typer.Option(None, "--scaling-mode", help="uv_direct or bounds_relative"),
        normal_map: Optional[Path] = typer.Option(None, "--normal-map", "-n", help="Object-space normal map image",
                                                  exists=True, dir_okay=False),
        config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON configuration file"),
        backend: str = typer.Option("pil", "--backend", "-b", help="Image backend (pil, opencv)"),
    ):
        """Build a tile mesh and export it as OBJ."""
        config = _load_config(config_file, {
            "zoom_level": zoom,
            "resolution": resolution,
            "height_scale": height_scale,
            "scaling_mode": scaling_mode,
            "use_normal_map": normal_map is not None,
        })
        if not build_command(input_file, output_file, config, normal_map=normal_map, backend=backend):
            raise typer.Exit(1)

    @app.command("info")
    def info(
        input_file: Path = typer.Argument(..., help="Terrarium elevation image", exists=True, dir_okay=False),
        zoom: int = typer.Option(11, "--zoom", "-z", help="Tile zoom level"),
        backend: str = typer.Option("pil", "--backend", "-b", help="Image backend (pil, opencv)"),
    ):
        """Show elevation statistics and tile size."""
        if not info_command(input_file, zoom, backend=backend):
            raise typer.Exit(1)

    @app.command("sample")
    def sample(
        output_file: Path = typer.Argument(..., help="Output PNG file"),
        pattern: str = typer.Option("peak", "--pattern", "-p", help=f"Pattern ({', '.join(PATTERNS)})"),
        size: int = typer.Option(256, "--size", "-s", help="Edge length in pixels"),
        relief: float = typer.Option(1000.0, "--relief", help="Relief in meters"),
        base: float = typer.Option(0.0, "--base", help="Base elevation in meters"),
        seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    ):
        """Write a synthetic Terrarium elevation image."""
        if not sample_command(output_file, pattern=pattern, size=size, relief=relief,
                              base_elevation=base, seed=seed):
            raise typer.Exit(1)

    @app.command("preview")
    def preview(
        input_file: Path = typer.Argument(..., help="Terrarium elevation image", exists=True, dir_okay=False),
        output_file: Path = typer.Argument(..., help="Output image file"),
        zoom: Optional[int] = typer.Option(None, "--zoom", "-z", help="Tile zoom level"),
        resolution: Optional[int] = typer.Option(None, "--resolution", "-r", help="Grid subdivisions per side"),
        exaggeration: float = typer.Option(1.0, "--exaggeration", "-e", help="Vertical exaggeration"),
        config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="JSON configuration file"),
        backend: str = typer.Option("pil", "--backend", "-b", help="Image backend (pil, opencv)"),
    ):
        """Render a tile mesh to an image with matplotlib."""
        config = _load_config(config_file, {"zoom_level": zoom, "resolution": resolution})
        if not preview_command(input_file, output_file, config, exaggeration=exaggeration, backend=backend):
            raise typer.Exit(1)

    @app.command("config")
    def config(
        output_file: Optional[Path] = typer.Argument(None, help="Output JSON file (prints when omitted)"),
        zoom: Optional[int] = typer.Option(None, "--zoom", "-z", help="Tile zoom level"),
        resolution: Optional[int] = typer.Option(None, "--resolution", "-r", help="Grid subdivisions per side"),
    ):
        """Write or show a tile configuration."""
        tile_config = _load_config(None, {"zoom_level": zoom, "resolution": resolution})
        if not config_command(output_file, tile_config):
            raise typer.Exit(1)

    return app


def _load_config(config_file, overrides):
    try:
        return resolve_config(config_file, overrides)
    except (InvalidConfigurationError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(1)


app = create_app()


def main():
    """Run the terrain_tile CLI application."""
    app()
