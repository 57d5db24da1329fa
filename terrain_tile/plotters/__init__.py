"""Visual previews of terrain tiles."""

from .matplotlib import plot_tile

__all__ = ['plot_tile']
