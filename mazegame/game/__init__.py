"""Gameplay session on top of the maze core."""

__all__ = ["GameSession", "MoveResult"]

from .session import GameSession, MoveResult
