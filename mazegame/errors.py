"""Exception types raised by the maze core."""

from __future__ import annotations

from typing import Tuple


class MazeError(Exception):
    """Base class for maze errors."""


class OutOfBounds(MazeError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, position: Tuple[int, int], width: int, height: int) -> None:
        self.position = position
        self.width = width
        self.height = height
        super().__init__(f"Coordinate {position} out of bounds for {width}x{height} grid")


class ConfigurationError(MazeError, ValueError):
    """Generation parameters cannot be satisfied for the requested grid."""


__all__ = ["MazeError", "OutOfBounds", "ConfigurationError"]
