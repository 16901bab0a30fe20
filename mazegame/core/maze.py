"""Maze aggregate: the tile grid plus its rewards."""

from __future__ import annotations

import logging
import random
from typing import Iterator, List, Optional, Tuple

from . import generator
from .grid import CellState, Grid, Position, Wall
from .rewards import Reward
from .walls import classify, reclassify_around

logger = logging.getLogger(__name__)

DEFAULT_SIZE = (21, 21)
DEFAULT_REWARD_COUNT = 6


class Maze:
    """Owns the grid and reward list and answers gameplay/rendering queries.

    Example usage:
        maze = Maze(21, 21)
        maze.generate(random.Random(7))

        if not maze.is_wall((2, 1)):
            reward = maze.mark_found((2, 1))
    """

    def __init__(
        self,
        width: int = DEFAULT_SIZE[0],
        height: int = DEFAULT_SIZE[1],
        *,
        entry: Position = generator.ENTRY,
        exit_cell: Optional[Position] = None,
    ) -> None:
        self.grid = Grid(width, height)
        self.entry = entry
        self.exit = exit_cell if exit_cell is not None else generator.default_exit(width, height)
        self.rewards: List[Reward] = []

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def generate(
        self,
        rng: random.Random,
        reward_count: int = DEFAULT_REWARD_COUNT,
        exit_cell: Optional[Position] = None,
        *,
        bonus_count: Optional[int] = None,
    ) -> None:
        """Generate a fresh maze, replacing the current grid and rewards.

        Nothing is replaced if generation raises.
        """

        exit_cell = exit_cell if exit_cell is not None else self.exit
        grid = Grid(self.width, self.height)
        rewards = generator.generate(
            grid,
            rng,
            reward_count,
            exit_cell,
            entry=self.entry,
            bonus_count=bonus_count,
        )
        classify(grid)
        self.grid = grid
        self.rewards = rewards
        self.exit = exit_cell
        logger.debug(
            "Generated %dx%d maze with %d rewards, exit at %s",
            self.width,
            self.height,
            len(rewards),
            exit_cell,
        )

    # ------------------------------------------------------------------
    # Cell queries

    def in_range(self, position: Position) -> bool:
        return self.grid.in_range(position)

    def get(self, position: Position) -> CellState:
        return self.grid.get(position)

    def set(self, position: Position, state: CellState) -> None:
        """Override a single tile and refresh the wall pieces around it."""

        self.grid.set(position, state)
        reclassify_around(self.grid, position)

    def is_wall(self, position: Position) -> bool:
        """Bounds-checked: raises ``OutOfBounds`` outside the grid.

        Callers moving a player check ``in_range`` first.
        """

        return isinstance(self.grid.get(position), Wall)

    def tiles(self) -> Iterator[Tuple[Position, CellState]]:
        return iter(self.grid)

    # ------------------------------------------------------------------
    # Rewards

    def get_reward(self, position: Position) -> Optional[Reward]:
        for reward in self.rewards:
            if reward.position == position:
                return reward
        return None

    # Rewards are plain mutable objects, so both lookups return the same one.
    get_mut_reward = get_reward

    def mark_found(self, position: Position) -> Optional[Reward]:
        """Flag the reward at ``position`` as found.

        Returns the reward the first time it is found and ``None`` otherwise,
        including when there is no reward at ``position``.
        """

        reward = self.get_reward(position)
        if reward is None or not reward.mark_found():
            return None
        return reward

    def unfound_rewards(self) -> Iterator[Reward]:
        return (reward for reward in self.rewards if not reward.found)

    @property
    def bonus_count(self) -> int:
        return sum(1 for reward in self.rewards if not reward.malus)

    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "entry": list(self.entry),
            "exit": list(self.exit),
            "grid": self.grid.to_rows(),
            "rewards": [reward.to_dict() for reward in self.rewards],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "Maze":
        """Rebuild a maze from ``to_dict`` output, re-deriving wall pieces."""

        grid = Grid.from_rows(payload["grid"])
        maze = cls(
            grid.width,
            grid.height,
            entry=tuple(map(int, payload["entry"])),
            exit_cell=tuple(map(int, payload["exit"])),
        )
        classify(grid)
        maze.grid = grid
        maze.rewards = [Reward.from_dict(item) for item in payload.get("rewards", [])]
        return maze


__all__ = ["Maze", "DEFAULT_SIZE", "DEFAULT_REWARD_COUNT"]
