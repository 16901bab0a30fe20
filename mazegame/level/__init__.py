"""Level dataset generation and run evaluation package."""

__all__ = [
    "LevelGenerator",
    "LevelRecord",
    "RunEvaluator",
    "RunResult",
]

from .generator import LevelGenerator, LevelRecord
from .evaluator import RunEvaluator, RunResult
