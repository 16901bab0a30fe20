"""Replay recorded move sequences against stored levels."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..base import AbstractLevelEvaluator, PathLike
from ..core.grid import Direction
from ..game.session import GameSession
from .catalog import read_catalog
from .generator import LOG_FORMAT

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    level_id: str
    status: str
    found: int
    bonus_total: int
    moves_made: int
    blocked_moves: int
    final_position: Tuple[int, int]
    message: str

    def to_dict(self) -> dict:
        return {
            "level_id": self.level_id,
            "status": self.status,
            "found": self.found,
            "bonus_total": self.bonus_total,
            "moves_made": self.moves_made,
            "blocked_moves": self.blocked_moves,
            "final_position": list(self.final_position),
            "message": self.message,
        }


def parse_moves(moves: str) -> List[Direction]:
    """Turn ``"EESWN"`` style input into directions; whitespace is ignored."""

    return [Direction.from_letter(letter) for letter in moves if not letter.isspace()]


class RunEvaluator(AbstractLevelEvaluator):
    """Score a run by replaying its moves through a game session.

    Replays use a frozen clock, so time limits never expire.
    """

    def __init__(self, metadata_path: PathLike, *, base_dir: Optional[PathLike] = None) -> None:
        self.metadata_path = Path(metadata_path)
        super().__init__(read_catalog(self.metadata_path))
        self.base_dir = Path(base_dir) if base_dir is not None else self.metadata_path.parent

    def preview_path(self, level_id: str) -> Path:
        """Preview image of a level; stored paths are relative to the catalog."""

        stored = Path(self.get_record(level_id)["preview_image_path"])
        return stored if stored.is_absolute() else self.base_dir / stored

    def evaluate(self, level_id: str, moves: str) -> RunResult:
        directions = parse_moves(moves)
        maze = self.load_maze(level_id)
        session = GameSession(maze, clock=lambda: 0.0)

        blocked = 0
        for direction in directions:
            if session.is_over:
                break
            if session.move(direction).status == "blocked":
                blocked += 1

        status = session.status
        if status == "won":
            message = "Collected every bonus and reached the exit."
        elif status == "lost":
            message = "Run ended on a penalty tile."
        elif session.found < maze.bonus_count:
            message = f"Run stopped with {session.found}/{maze.bonus_count} bonuses found."
        else:
            message = "All bonuses found but the exit was not reached."
        logger.debug("Level %s replayed: %s", level_id, status)

        return RunResult(
            level_id=level_id,
            status=status,
            found=session.found,
            bonus_total=maze.bonus_count,
            moves_made=session.moves,
            blocked_moves=blocked,
            final_position=session.position,
            message=message,
        )


__all__ = ["RunEvaluator", "RunResult", "parse_moves"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate a recorded run on a maze level")
    parser.add_argument("metadata", type=Path, help="Path to levels metadata JSON")
    parser.add_argument("level_id", type=str, help="Identifier of the level to replay")
    parser.add_argument("moves", type=str, help="Move letters, e.g. 'EESSWN'")
    parser.add_argument("--base-dir", type=Path, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    evaluator = RunEvaluator(args.metadata, base_dir=args.base_dir)
    result = evaluator.evaluate(args.level_id, args.moves)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
