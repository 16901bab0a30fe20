"""Shared scaffolding for level generators and run evaluators."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar, Union

from .core.maze import DEFAULT_REWARD_COUNT, Maze

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")

MIN_SIZE = 5


def odd_size(value: int) -> int:
    """Round a maze dimension up to the next odd number."""

    return value if value % 2 == 1 else value + 1


class AbstractLevelGenerator(ABC, Generic[RecordT]):
    """Holds the maze settings and the seed stream shared by a batch of levels.

    Every level draws its own seed from the batch generator, so any single
    level can be rebuilt later from its stored seed alone.
    """

    def __init__(
        self,
        *,
        width: int = 21,
        height: int = 21,
        reward_count: int = DEFAULT_REWARD_COUNT,
        seed: Optional[int] = None,
    ) -> None:
        if width < MIN_SIZE or height < MIN_SIZE:
            raise ValueError(f"width and height must be at least {MIN_SIZE}")
        self.width = odd_size(width)
        self.height = odd_size(height)
        self.reward_count = reward_count
        self._rng = random.Random(seed)

    def next_level_seed(self) -> int:
        return self._rng.randrange(2**32)

    def build_maze(self, level_seed: int) -> Maze:
        maze = Maze(self.width, self.height)
        maze.generate(random.Random(level_seed), self.reward_count)
        return maze

    @abstractmethod
    def create_level(self, *, level_id: Optional[str] = None) -> RecordT:
        """Create one level and write any assets it needs."""

    def create_levels(self, count: int) -> List[RecordT]:
        return [self.create_level() for _ in range(count)]


class AbstractLevelEvaluator(ABC):
    """Looks levels up by id and rebuilds their mazes for scoring."""

    def __init__(self, levels: Mapping[str, Dict[str, Any]]) -> None:
        self._levels = dict(levels)

    @property
    def level_ids(self) -> List[str]:
        return list(self._levels)

    def get_record(self, level_id: str) -> Dict[str, Any]:
        try:
            return self._levels[level_id]
        except KeyError as exc:
            raise KeyError(f"Level id '{level_id}' not found") from exc

    def load_maze(self, level_id: str) -> Maze:
        """Fresh maze for ``level_id``; every call starts with unfound rewards."""

        maze = Maze.from_dict(self.get_record(level_id)["maze"])
        for reward in maze.rewards:
            reward.found = False
        return maze

    @abstractmethod
    def evaluate(self, level_id: str, *args, **kwargs):
        """Score a run on the given level."""


__all__ = [
    "AbstractLevelGenerator",
    "AbstractLevelEvaluator",
    "PathLike",
    "odd_size",
]
