"""Fixed-size tile grid and cardinal directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import ConfigurationError, OutOfBounds

if TYPE_CHECKING:  # pragma: no cover
    from .walls import WallPiece

Position = Tuple[int, int]

WALL = 1
GROUND = 0


@dataclass(frozen=True)
class Wall:
    """Impassable cell; ``texture`` is filled in by the wall classifier."""

    texture: Optional["WallPiece"] = None


@dataclass(frozen=True)
class Ground:
    """Walkable cell."""


CellState = Union[Wall, Ground]


class Direction(Enum):
    """Cardinal steps on the grid (y grows downwards)."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def delta(self) -> Position:
        return _DELTAS[self]

    @property
    def reverse(self) -> "Direction":
        return _REVERSE[self]

    @classmethod
    def from_letter(cls, letter: str) -> "Direction":
        """Map ``N``/``E``/``S``/``W`` (any case) to a direction."""

        try:
            return _LETTERS[letter.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown direction letter: {letter!r}") from exc

    def step(self, position: Position, distance: int = 1) -> Position:
        dx, dy = self.delta
        x, y = position
        return x + dx * distance, y + dy * distance


_DELTAS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}
_REVERSE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}
_LETTERS = {direction.name[0]: direction for direction in Direction}


class Grid:
    """Row-major array of cell states with bounds-checked access."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells: List[CellState] = [Wall()] * (width * height)

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def in_range(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, position: Position) -> int:
        if not self.in_range(position):
            raise OutOfBounds(position, self.width, self.height)
        x, y = position
        return y * self.width + x

    def get(self, position: Position) -> CellState:
        return self._cells[self._index(position)]

    def set(self, position: Position, state: CellState) -> None:
        self._cells[self._index(position)] = state

    def wall_at(self, position: Position) -> bool:
        """True when ``position`` is inside the grid and holds a wall.

        Cells outside the grid count as open here, which is what wall
        classification needs. ``Maze.is_wall`` raises ``OutOfBounds`` instead.
        """

        return self.in_range(position) and isinstance(self.get(position), Wall)

    def positions(self) -> Iterator[Position]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def __iter__(self) -> Iterator[Tuple[Position, CellState]]:
        for position in self.positions():
            yield position, self._cells[position[1] * self.width + position[0]]

    # ------------------------------------------------------------------

    def to_rows(self) -> List[List[int]]:
        """Encode the grid as rows of ``1`` (wall) and ``0`` (ground)."""

        return [
            [WALL if isinstance(self._cells[y * self.width + x], Wall) else GROUND for x in range(self.width)]
            for y in range(self.height)
        ]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        if not rows or not rows[0]:
            raise ValueError("Grid rows must not be empty")
        width = len(rows[0])
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
            for x, value in enumerate(row):
                if int(value) == GROUND:
                    grid.set((x, y), Ground())
        return grid

    def to_array(self) -> np.ndarray:
        """Wall mask as a ``(height, width)`` uint8 array."""

        return np.asarray(self.to_rows(), dtype=np.uint8)


__all__ = [
    "CellState",
    "Direction",
    "Grid",
    "Ground",
    "Position",
    "Wall",
]
