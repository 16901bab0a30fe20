"""Level dataset generator: mazes, preview images and JSON metadata."""

from __future__ import annotations

import argparse
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..base import AbstractLevelGenerator, PathLike
from ..core.maze import DEFAULT_REWARD_COUNT
from ..game.session import DEFAULT_TIME_LIMIT
from ..render import MazeRenderer, TileSet, render_minimap
from .catalog import write_catalog

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class LevelRecord:
    id: str
    grid_size: Tuple[int, int]
    tile_size: int
    time_limit: float
    seed: int
    maze: dict
    preview_image_path: str
    minimap_image_path: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "grid_size": list(self.grid_size),
            "tile_size": self.tile_size,
            "time_limit": self.time_limit,
            "seed": self.seed,
            "maze": self.maze,
            "preview_image_path": self.preview_image_path,
            "minimap_image_path": self.minimap_image_path,
        }


class LevelGenerator(AbstractLevelGenerator[LevelRecord]):
    """Generate playable maze levels with rendered previews."""

    def __init__(
        self,
        output_dir: PathLike = "data/levels",
        *,
        width: int = 21,
        height: int = 21,
        reward_count: int = DEFAULT_REWARD_COUNT,
        tile_size: int = 32,
        minimap_scale: int = 4,
        time_limit: float = DEFAULT_TIME_LIMIT,
        asset_dir: Optional[PathLike] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(width=width, height=height, reward_count=reward_count, seed=seed)
        self.time_limit = time_limit
        self.minimap_scale = minimap_scale

        if asset_dir is not None:
            tileset = TileSet.from_directory(asset_dir, tile_size)
        else:
            tileset = TileSet.placeholder(tile_size)
        self.renderer = MazeRenderer(tileset)

        self.output_dir = Path(output_dir)
        self.preview_dir = self.output_dir / "previews"
        self.minimap_dir = self.output_dir / "minimaps"
        for directory in (self.preview_dir, self.minimap_dir):
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def tile_size(self) -> int:
        return self.renderer.tile_size

    def create_level(self, *, level_id: Optional[str] = None) -> LevelRecord:
        level_uuid = level_id or str(uuid.uuid4())
        level_seed = self.next_level_seed()
        maze = self.build_maze(level_seed)

        preview_path = self.preview_dir / f"{level_uuid}_preview.png"
        minimap_path = self.minimap_dir / f"{level_uuid}_minimap.png"
        self.renderer.render(maze, player=maze.entry).save(preview_path)
        render_minimap(maze, scale=self.minimap_scale).save(minimap_path)
        logger.debug("Created level %s (seed %d)", level_uuid, level_seed)

        return LevelRecord(
            id=level_uuid,
            grid_size=(self.width, self.height),
            tile_size=self.tile_size,
            time_limit=self.time_limit,
            seed=level_seed,
            maze=maze.to_dict(),
            preview_image_path=preview_path.relative_to(self.output_dir).as_posix(),
            minimap_image_path=minimap_path.relative_to(self.output_dir).as_posix(),
        )

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[LevelRecord]:
        """Create ``count`` levels and add them to the catalog at ``metadata_path``."""

        records = self.create_levels(count)
        if metadata_path is not None:
            write_catalog(metadata_path, (record.to_dict() for record in records), append=append)
        return records


__all__ = ["LevelGenerator", "LevelRecord"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate maze game levels")
    parser.add_argument("count", type=int, help="Number of levels to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/levels"), help="Where to save assets")
    parser.add_argument("--width", type=int, default=21, help="Bumped to the next odd number if even")
    parser.add_argument("--height", type=int, default=21, help="Bumped to the next odd number if even")
    parser.add_argument("--rewards", type=int, default=DEFAULT_REWARD_COUNT, help="Rewards per level, half bonuses")
    parser.add_argument("--tile-size", type=int, default=32)
    parser.add_argument("--minimap-scale", type=int, default=4)
    parser.add_argument("--time-limit", type=float, default=DEFAULT_TIME_LIMIT, help="Seconds per round")
    parser.add_argument("--asset-dir", type=Path, default=None, help="Directory of <role>.png tiles")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)
    generator = LevelGenerator(
        output_dir=args.output_dir,
        width=args.width,
        height=args.height,
        reward_count=args.rewards,
        tile_size=args.tile_size,
        minimap_scale=args.minimap_scale,
        time_limit=args.time_limit,
        asset_dir=args.asset_dir,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "levels.json"
    generator.generate_dataset(args.count, metadata_path=metadata_path)


if __name__ == "__main__":
    main()
