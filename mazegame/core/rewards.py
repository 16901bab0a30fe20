"""Reward tiles placed inside the maze."""

from __future__ import annotations

from dataclasses import dataclass

from .grid import Position

BONUS_ROLE = "reward_bonus"
PENALTY_ROLE = "reward_penalty"


@dataclass
class Reward:
    """A bonus (``malus=False``) or penalty (``malus=True``) bound to one cell."""

    position: Position
    malus: bool
    found: bool = False

    @property
    def role(self) -> str:
        """Tile-set role used to draw this reward."""

        return PENALTY_ROLE if self.malus else BONUS_ROLE

    def mark_found(self) -> bool:
        """Flag the reward as found. Returns False if it already was."""

        if self.found:
            return False
        self.found = True
        return True

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "malus": self.malus,
            "found": self.found,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "Reward":
        x, y = payload["position"]
        return cls(
            position=(int(x), int(y)),
            malus=bool(payload["malus"]),
            found=bool(payload.get("found", False)),
        )


__all__ = ["Reward", "BONUS_ROLE", "PENALTY_ROLE"]
