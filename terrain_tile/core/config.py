"""
Configuration classes for terrain tile construction.

This module provides immutable configuration value objects for grid
generation and elevation mapping, with validation, defaults, and JSON
serialization. Rebuilds are driven by comparing these objects by equality.
"""

import json
import logging
import math
from dataclasses import dataclass, asdict, fields
from enum import Enum
from typing import Dict, Any, Optional, Tuple, ClassVar

from ..exceptions import InvalidConfigurationError

# Set up logging
logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]

# Centers the unit grid on the origin in X and Z
DEFAULT_OFFSET: Vector3 = (-0.5, 0.0, -0.5)


class ScalingMode(str, Enum):
    """How vertex UVs are mapped to raster samples and heights are scaled."""
    UV_DIRECT = "uv_direct"
    BOUNDS_RELATIVE = "bounds_relative"


class NormalMode(str, Enum):
    """Per-vertex normal convention of the built mesh."""
    OBJECT_SPACE = "object_space"
    SMOOTH = "smooth"


def _coerce_enum(enum_cls, value, name: str):
    """Convert a raw value into an enum member or raise InvalidConfigurationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).replace(f"{enum_cls.__name__}.", "").lower())
    except ValueError:
        valid = [member.value for member in enum_cls]
        raise InvalidConfigurationError(f"{name} must be one of {valid}, got '{value}'")


def _coerce_offset(offset) -> Vector3:
    try:
        values = tuple(float(v) for v in offset)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"offset must be a 3-component vector, got {offset!r}")
    if len(values) != 3:
        raise InvalidConfigurationError(f"offset must have 3 components, got {len(values)}")
    return values


def _validate_resolution(resolution) -> None:
    if isinstance(resolution, bool) or not isinstance(resolution, int):
        raise InvalidConfigurationError(f"resolution must be an integer, got {resolution!r}")
    if resolution < 1:
        raise InvalidConfigurationError(f"resolution must be at least 1, got {resolution}")


def _validate_zoom_level(zoom_level) -> None:
    if isinstance(zoom_level, bool) or not isinstance(zoom_level, int):
        raise InvalidConfigurationError(f"zoom_level must be an integer, got {zoom_level!r}")
    if zoom_level < 0:
        raise InvalidConfigurationError(f"zoom_level cannot be negative, got {zoom_level}")


def _validate_height_scale(height_scale) -> None:
    if not isinstance(height_scale, (int, float)) or isinstance(height_scale, bool):
        raise InvalidConfigurationError(f"height_scale must be a number, got {height_scale!r}")
    if not math.isfinite(height_scale):
        raise InvalidConfigurationError(f"height_scale must be finite, got {height_scale}")


@dataclass(frozen=True)
class GridConfig:
    """Subdivision and placement of the flat tile grid."""
    resolution: int = 32
    offset: Vector3 = DEFAULT_OFFSET

    def __post_init__(self):
        object.__setattr__(self, 'offset', _coerce_offset(self.offset))
        _validate_resolution(self.resolution)

    @property
    def vertices_per_side(self) -> int:
        return self.resolution + 1


@dataclass(frozen=True)
class ElevationConfig:
    """Parameters for converting decoded elevation into local mesh height."""
    zoom_level: int = 11
    height_scale: float = 1.0
    scaling_mode: ScalingMode = ScalingMode.UV_DIRECT

    def __post_init__(self):
        object.__setattr__(self, 'scaling_mode',
                           _coerce_enum(ScalingMode, self.scaling_mode, 'scaling_mode'))
        _validate_zoom_level(self.zoom_level)
        _validate_height_scale(self.height_scale)


@dataclass(frozen=True)
class TileConfig:
    """
    Complete configuration for one terrain tile.

    Holds every option that influences a build. Two configurations that
    compare equal always produce identical meshes.
    """
    zoom_level: int = 11
    resolution: int = 32
    use_normal_map: bool = True
    height_scale: float = 1.0
    scaling_mode: ScalingMode = ScalingMode.UV_DIRECT
    offset: Vector3 = DEFAULT_OFFSET

    # Fields that only influence the elevation pass
    ELEVATION_FIELDS: ClassVar[Tuple[str, ...]] = ('zoom_level', 'height_scale', 'scaling_mode')

    def __post_init__(self):
        object.__setattr__(self, 'offset', _coerce_offset(self.offset))
        object.__setattr__(self, 'scaling_mode',
                           _coerce_enum(ScalingMode, self.scaling_mode, 'scaling_mode'))
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            InvalidConfigurationError: If configuration is invalid
        """
        _validate_resolution(self.resolution)
        _validate_zoom_level(self.zoom_level)
        _validate_height_scale(self.height_scale)
        if not isinstance(self.use_normal_map, bool):
            raise InvalidConfigurationError(
                f"use_normal_map must be a boolean, got {type(self.use_normal_map)}"
            )

    def grid_config(self) -> GridConfig:
        return GridConfig(resolution=self.resolution, offset=self.offset)

    def elevation_config(self) -> ElevationConfig:
        return ElevationConfig(
            zoom_level=self.zoom_level,
            height_scale=self.height_scale,
            scaling_mode=self.scaling_mode,
        )

    def normal_mode(self) -> NormalMode:
        return NormalMode.OBJECT_SPACE if self.use_normal_map else NormalMode.SMOOTH

    def changed_fields(self, other: Optional['TileConfig']) -> Tuple[str, ...]:
        """Names of the fields whose values differ from ``other``."""
        if other is None:
            return tuple(f.name for f in fields(self))
        return tuple(
            f.name for f in fields(self)
            if getattr(self, f.name) != getattr(other, f.name)
        )

    def as_dict(self) -> Dict[str, Any]:
        """
        Get configuration as a JSON-friendly dictionary.

        Returns:
            Dictionary representation of configuration
        """
        result = asdict(self)
        result['scaling_mode'] = self.scaling_mode.value
        result['offset'] = list(self.offset)
        return result

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'TileConfig':
        """
        Create configuration from a dictionary.

        Unknown keys are logged and ignored.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            New TileConfig instance
        """
        names = {f.name for f in fields(cls)}
        known_params = {k: v for k, v in config_dict.items() if k in names}
        unknown = sorted(set(config_dict) - names)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {unknown}")
        return cls(**known_params)


class ConfigManager:
    """
    Manager for storing and retrieving tile configurations.

    This class provides functionality for reading and writing configuration
    files and creating configurations from defaults plus overrides.
    """

    @classmethod
    def get_default_config(cls) -> TileConfig:
        """Get the default tile configuration."""
        return TileConfig()

    @classmethod
    def create_config(cls, **kwargs) -> TileConfig:
        """
        Create configuration with default values and overrides.

        Args:
            **kwargs: Configuration overrides

        Returns:
            TileConfig with specified values
        """
        return cls.merge_configs(cls.get_default_config(), kwargs)

    @classmethod
    def load_config(cls, config_file: str) -> TileConfig:
        """
        Load configuration from a JSON file.

        Args:
            config_file: Path to configuration file

        Returns:
            TileConfig loaded from file

        Raises:
            IOError: If file cannot be read or parsed
            InvalidConfigurationError: If configuration is invalid
        """
        try:
            with open(config_file, 'r') as f:
                config_dict = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise IOError(f"Failed to load configuration from {config_file}: {e}")

        if not isinstance(config_dict, dict):
            raise InvalidConfigurationError(
                f"Configuration file {config_file} must contain a JSON object"
            )
        return TileConfig.from_dict(config_dict)

    @classmethod
    def save_config(cls, config: TileConfig, config_file: str) -> None:
        """
        Save configuration to a JSON file.

        Args:
            config: TileConfig to save
            config_file: Path to configuration file

        Raises:
            IOError: If file cannot be written
        """
        try:
            with open(config_file, 'w') as f:
                json.dump(config.as_dict(), f, indent=2)
        except OSError as e:
            raise IOError(f"Failed to save configuration to {config_file}: {e}")

    @classmethod
    def merge_configs(cls, base_config: TileConfig, override_config: Dict[str, Any]) -> TileConfig:
        """
        Merge base configuration with override values.

        Args:
            base_config: Base configuration
            override_config: Dictionary of override values

        Returns:
            New TileConfig with merged values
        """
        config_dict = base_config.as_dict()
        config_dict.update(override_config)
        return TileConfig.from_dict(config_dict)
