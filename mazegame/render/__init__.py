"""Pillow rendering adapter for generated mazes."""

__all__ = ["TileSet", "MazeRenderer", "render_minimap"]

from .tiles import TileSet
from .renderer import MazeRenderer, render_minimap
