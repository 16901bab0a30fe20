"""Draws a maze from its read-only queries onto a Pillow canvas."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from PIL import Image

from ..core.grid import Ground, Position, Wall
from ..core.maze import Maze
from .tiles import GROUND_ROLE, PLAYER_ROLE, TileSet

BACKGROUND_COLOR = (25, 51, 76)
REWARD_SCALE = 0.8

MINIMAP_WALL = (0, 0, 0)
MINIMAP_PATH = (255, 255, 255)
MINIMAP_ENTRY = (220, 30, 30)
MINIMAP_EXIT = (40, 180, 80)
MINIMAP_BONUS = (240, 200, 40)
MINIMAP_PENALTY = (150, 40, 160)


class MazeRenderer:
    """Render tiles, unfound rewards and an optional player marker."""

    def __init__(
        self,
        tileset: TileSet,
        *,
        origin: Tuple[int, int] = (0, 0),
        background: Tuple[int, int, int] = BACKGROUND_COLOR,
    ) -> None:
        self.tileset = tileset
        self.origin = origin
        self.background = background

    @property
    def tile_size(self) -> int:
        return self.tileset.tile_size

    def tile_origin(self, position: Position) -> Tuple[int, int]:
        x, y = position
        ox, oy = self.origin
        return ox + x * self.tile_size, oy + y * self.tile_size

    def canvas_size(self, maze: Maze) -> Tuple[int, int]:
        ox, oy = self.origin
        return ox + maze.width * self.tile_size, oy + maze.height * self.tile_size

    def render(self, maze: Maze, *, player: Optional[Position] = None) -> Image.Image:
        canvas = Image.new("RGBA", self.canvas_size(maze), self.background + (255,))

        for position, state in maze.tiles():
            dest = self.tile_origin(position)
            if isinstance(state, Ground):
                canvas.alpha_composite(self.tileset[GROUND_ROLE], dest)
            elif isinstance(state, Wall) and state.texture is not None:
                canvas.alpha_composite(self.tileset[state.texture], dest)

        reward_size = max(1, int(round(self.tile_size * REWARD_SCALE)))
        inset = (self.tile_size - reward_size) // 2
        for reward in maze.unfound_rewards():
            sprite = self.tileset[reward.role].resize((reward_size, reward_size), Image.Resampling.NEAREST)
            x, y = self.tile_origin(reward.position)
            canvas.alpha_composite(sprite, (x + inset, y + inset))

        if player is not None:
            canvas.alpha_composite(self.tileset[PLAYER_ROLE], self.tile_origin(player))
        return canvas.convert("RGB")


def render_minimap(maze: Maze, *, scale: int = 4) -> Image.Image:
    """One coloured block per cell: walls, paths, entry, exit and rewards."""

    if scale <= 0:
        raise ValueError("scale must be positive")
    walls = maze.grid.to_array().astype(bool)
    pixels = np.where(walls[..., None], MINIMAP_WALL, MINIMAP_PATH).astype(np.uint8)
    for reward in maze.unfound_rewards():
        x, y = reward.position
        pixels[y, x] = MINIMAP_PENALTY if reward.malus else MINIMAP_BONUS
    pixels[maze.entry[1], maze.entry[0]] = MINIMAP_ENTRY
    pixels[maze.exit[1], maze.exit[0]] = MINIMAP_EXIT
    pixels = np.repeat(np.repeat(pixels, scale, axis=0), scale, axis=1)
    return Image.fromarray(pixels)


__all__ = ["MazeRenderer", "render_minimap", "REWARD_SCALE"]
