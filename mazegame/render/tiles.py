"""Tile-set: resolves wall pieces and sprite roles to Pillow images."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from PIL import Image, ImageDraw

from ..base import PathLike
from ..core.rewards import BONUS_ROLE, PENALTY_ROLE
from ..core.walls import WallPiece, classify_neighbors

GROUND_ROLE = "ground"
PLAYER_ROLE = "player"
SPRITE_ROLES = (GROUND_ROLE, BONUS_ROLE, PENALTY_ROLE, PLAYER_ROLE)

GROUND_COLOR = (86, 148, 70, 255)
WALL_COLOR = (120, 110, 100, 255)
WALL_EDGE_COLOR = (70, 62, 55, 255)
BONUS_COLOR = (210, 40, 40, 255)
PENALTY_COLOR = (40, 30, 45, 255)
PLAYER_COLOR = (40, 120, 220, 255)

Role = Union[WallPiece, str]


def _role_name(role: Role) -> str:
    return role.value if isinstance(role, WallPiece) else role


def all_roles() -> List[str]:
    return [piece.value for piece in WallPiece] + list(SPRITE_ROLES)


class TileSet:
    """Square RGBA images keyed by wall piece or sprite role.

    Construct one per renderer and pass it in; there is no global table.
    """

    def __init__(self, images: Mapping[str, Image.Image], tile_size: int) -> None:
        if tile_size <= 0:
            raise ValueError("tile_size must be positive")
        missing = [name for name in all_roles() if name not in images]
        if missing:
            raise ValueError(f"Tile-set is missing images for: {', '.join(missing)}")
        self.tile_size = tile_size
        self._images: Dict[str, Image.Image] = {
            name: self._fit(image) for name, image in images.items()
        }

    def __getitem__(self, role: Role) -> Image.Image:
        name = _role_name(role)
        try:
            return self._images[name]
        except KeyError as exc:
            raise KeyError(f"No tile for role '{name}'") from exc

    def __contains__(self, role: Role) -> bool:
        return _role_name(role) in self._images

    def _fit(self, image: Image.Image) -> Image.Image:
        image = image.convert("RGBA")
        if image.size != (self.tile_size, self.tile_size):
            image = image.resize((self.tile_size, self.tile_size), Image.Resampling.NEAREST)
        return image

    # ------------------------------------------------------------------

    @classmethod
    def from_directory(cls, directory: PathLike, tile_size: int = 32) -> "TileSet":
        """Load ``<role>.png`` for every role from ``directory``."""

        root = Path(directory)
        missing = [name for name in all_roles() if not (root / f"{name}.png").exists()]
        if missing:
            raise FileNotFoundError(f"Tile images not found in {root}: {', '.join(missing)}")
        images: Dict[str, Image.Image] = {}
        for name in all_roles():
            with Image.open(root / f"{name}.png") as image:
                images[name] = image.convert("RGBA")
        return cls(images, tile_size)

    @classmethod
    def placeholder(cls, tile_size: int = 32) -> "TileSet":
        """Flat-colour stand-ins for when no artwork is available."""

        images: Dict[str, Image.Image] = {
            GROUND_ROLE: Image.new("RGBA", (tile_size, tile_size), GROUND_COLOR),
            BONUS_ROLE: _disc(tile_size, BONUS_COLOR),
            PENALTY_ROLE: _disc(tile_size, PENALTY_COLOR, cross=True),
            PLAYER_ROLE: _disc(tile_size, PLAYER_COLOR),
        }
        for flags, piece in _piece_connections():
            images[piece.value] = _wall_piece(tile_size, *flags)
        return cls(images, tile_size)


def _piece_connections() -> Iterable[Tuple[Tuple[bool, bool, bool, bool], WallPiece]]:
    for flags in itertools.product((False, True), repeat=4):
        piece = classify_neighbors(*flags)
        if piece is not None:
            yield flags, piece


def _wall_piece(size: int, south: bool, east: bool, north: bool, west: bool) -> Image.Image:
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    low = size // 4
    high = size - low - 1
    draw.rectangle((low, low, high, high), fill=WALL_COLOR, outline=WALL_EDGE_COLOR)
    arms = (
        (south, (low, high, high, size - 1)),
        (east, (high, low, size - 1, high)),
        (north, (low, 0, high, low)),
        (west, (0, low, low, high)),
    )
    for connected, box in arms:
        if connected:
            draw.rectangle(box, fill=WALL_COLOR)
    return image


def _disc(size: int, color: Tuple[int, int, int, int], *, cross: bool = False) -> Image.Image:
    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    margin = max(1, size // 8)
    draw.ellipse((margin, margin, size - margin - 1, size - margin - 1), fill=color)
    if cross:
        low, high = size // 3, size - size // 3 - 1
        width = max(1, size // 12)
        draw.line((low, low, high, high), fill=(230, 230, 230, 255), width=width)
        draw.line((low, high, high, low), fill=(230, 230, 230, 255), width=width)
    return image


__all__ = [
    "TileSet",
    "GROUND_ROLE",
    "PLAYER_ROLE",
    "SPRITE_ROLES",
    "all_roles",
]
