"""Maze data model, generator and wall classification."""

__all__ = [
    "CellState",
    "Direction",
    "Grid",
    "Ground",
    "Maze",
    "Position",
    "Reward",
    "Wall",
    "WallPiece",
    "classify",
    "classify_neighbors",
    "generate",
]

from .grid import CellState, Direction, Grid, Ground, Position, Wall
from .rewards import Reward
from .walls import WallPiece, classify, classify_neighbors
from .generator import generate
from .maze import Maze
