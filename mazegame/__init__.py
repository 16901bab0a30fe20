"""Tile-based maze game: generator, data model, session and rendering."""

__all__ = [
    "AbstractLevelGenerator",
    "AbstractLevelEvaluator",
    "ConfigurationError",
    "Direction",
    "GameSession",
    "Grid",
    "Ground",
    "LevelGenerator",
    "LevelRecord",
    "Maze",
    "MazeError",
    "MazeRenderer",
    "MoveResult",
    "OutOfBounds",
    "Reward",
    "RunEvaluator",
    "RunResult",
    "TileSet",
    "Wall",
    "WallPiece",
]

from .base import AbstractLevelGenerator, AbstractLevelEvaluator
from .errors import ConfigurationError, MazeError, OutOfBounds
from .core import Direction, Grid, Ground, Maze, Reward, Wall, WallPiece
from .game import GameSession, MoveResult
from .render import MazeRenderer, TileSet
from .level import LevelGenerator, LevelRecord, RunEvaluator, RunResult
