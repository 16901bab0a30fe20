"""Player movement, reward discovery and the round timer."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from ..core.grid import Direction, Position
from ..core.maze import Maze
from ..core.rewards import Reward

logger = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT = 60.0

SessionStatus = Literal["playing", "won", "lost", "timeout"]


@dataclass
class MoveResult:
    """Outcome of a single move request."""

    status: Literal["moved", "blocked", "finished"]
    position: Position
    reward: Optional[Reward] = None
    message: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "status": self.status,
            "position": list(self.position),
        }
        if self.reward is not None:
            result["reward"] = self.reward.to_dict()
        if self.message:
            result["message"] = self.message
        return result


class GameSession:
    """One round on a generated maze.

    The player wins by collecting every bonus and then standing on the exit,
    loses by stepping on a penalty, and times out when ``time_limit`` seconds
    have passed on ``clock``.
    """

    def __init__(
        self,
        maze: Maze,
        *,
        time_limit: float = DEFAULT_TIME_LIMIT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.maze = maze
        self.time_limit = time_limit
        self._clock = clock
        self._started_at = clock()
        self.position: Position = maze.entry
        self.found = 0
        self.moves = 0
        self._hit_penalty = False
        self._finished_at: Optional[float] = None

    @property
    def elapsed(self) -> float:
        end = self._finished_at if self._finished_at is not None else self._clock()
        return end - self._started_at

    @property
    def remaining_time(self) -> float:
        return max(0.0, self.time_limit - self.elapsed)

    @property
    def status(self) -> SessionStatus:
        if self._hit_penalty:
            return "lost"
        if self.found >= self.maze.bonus_count and self.position == self.maze.exit:
            return "won"
        if self.elapsed >= self.time_limit:
            return "timeout"
        return "playing"

    @property
    def is_over(self) -> bool:
        return self.status != "playing"

    def hud_text(self) -> str:
        """Found counter and seconds left, e.g. ``"2/3  41"``."""

        return f"{self.found}/{self.maze.bonus_count}  {int(self.remaining_time):02d}"

    def move(self, direction: Direction) -> MoveResult:
        if self.is_over:
            return MoveResult(
                status="finished",
                position=self.position,
                message=f"Round already over ({self.status})",
            )

        target = direction.step(self.position)
        if not self.maze.in_range(target) or self.maze.is_wall(target):
            return MoveResult(
                status="blocked",
                position=self.position,
                message=f"Cannot move {direction.value} - wall blocking",
            )

        self.position = target
        self.moves += 1
        reward = self.maze.mark_found(target)
        if reward is not None:
            if reward.malus:
                self._hit_penalty = True
                logger.info("Penalty found at %s", target)
            else:
                self.found += 1
                logger.info("Bonus found at %s (%d/%d)", target, self.found, self.maze.bonus_count)

        if self.is_over and self._finished_at is None:
            self._finished_at = self._clock()
        return MoveResult(status="moved", position=self.position, reward=reward)


__all__ = ["GameSession", "MoveResult", "SessionStatus", "DEFAULT_TIME_LIMIT"]
