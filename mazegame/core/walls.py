"""Wall connector classification.

Every wall cell is drawn with a connector piece chosen from which of its four
neighbours are walls as well. Cells outside the grid count as open, so the
outer ring gets end caps and corners instead of dangling connectors. A wall
with no wall neighbour at all gets no texture and is not drawn.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

from .grid import Direction, Grid, Position, Wall


class WallPiece(Enum):
    """Connector categories, valued by their tile-set asset names."""

    CORNER_TOP_LEFT = "wall_corn_top_lft"
    CORNER_TOP_RIGHT = "wall_corn_top_rgt"
    CORNER_BOTTOM_LEFT = "wall_corn_bot_lft"
    CORNER_BOTTOM_RIGHT = "wall_corn_bot_rgt"
    CROSS = "wall_crss_all"
    T_HORIZONTAL_BOTTOM = "wall_crss_hori_bot"
    T_HORIZONTAL_TOP = "wall_crss_hori_top"
    T_VERTICAL_RIGHT = "wall_crss_vert_rgt"
    T_VERTICAL_LEFT = "wall_crss_vert_lft"
    HORIZONTAL_RIGHT = "wall_hori_rgt"
    HORIZONTAL_MID = "wall_hori_mid"
    HORIZONTAL_LEFT = "wall_hori_lft"
    VERTICAL_TOP = "wall_vert_top"
    VERTICAL_MID = "wall_vert_mid"
    VERTICAL_BOTTOM = "wall_vert_bot"


# (south, east, north, west) -> piece
_PIECES: Dict[Tuple[bool, bool, bool, bool], Optional[WallPiece]] = {
    (True, True, False, False): WallPiece.CORNER_TOP_LEFT,
    (True, False, False, True): WallPiece.CORNER_TOP_RIGHT,
    (False, True, True, False): WallPiece.CORNER_BOTTOM_LEFT,
    (False, False, True, True): WallPiece.CORNER_BOTTOM_RIGHT,
    (True, True, True, True): WallPiece.CROSS,
    (True, True, False, True): WallPiece.T_HORIZONTAL_BOTTOM,
    (False, True, True, True): WallPiece.T_HORIZONTAL_TOP,
    (True, True, True, False): WallPiece.T_VERTICAL_RIGHT,
    (True, False, True, True): WallPiece.T_VERTICAL_LEFT,
    (False, False, False, True): WallPiece.HORIZONTAL_RIGHT,
    (False, True, False, True): WallPiece.HORIZONTAL_MID,
    (False, True, False, False): WallPiece.HORIZONTAL_LEFT,
    (True, False, False, False): WallPiece.VERTICAL_TOP,
    (True, False, True, False): WallPiece.VERTICAL_MID,
    (False, False, True, False): WallPiece.VERTICAL_BOTTOM,
    (False, False, False, False): None,
}

_EVALUATION_ORDER = (Direction.SOUTH, Direction.EAST, Direction.NORTH, Direction.WEST)


def classify_neighbors(south: bool, east: bool, north: bool, west: bool) -> Optional[WallPiece]:
    return _PIECES[(south, east, north, west)]


def classify_cell(grid: Grid, position: Position) -> None:
    """Recompute the piece of one cell; ground cells are left as they are."""

    if not isinstance(grid.get(position), Wall):
        return
    flags = tuple(grid.wall_at(direction.step(position)) for direction in _EVALUATION_ORDER)
    grid.set(position, Wall(classify_neighbors(*flags)))


def reclassify_around(grid: Grid, position: Position) -> None:
    """Refresh a cell and its four neighbours after that cell changed."""

    for cell in [position] + [direction.step(position) for direction in Direction]:
        if grid.in_range(cell):
            classify_cell(grid, cell)


def classify(grid: Grid) -> None:
    """Assign a connector piece to every wall cell of ``grid`` in place."""

    for position in grid.positions():
        classify_cell(grid, position)


__all__ = ["WallPiece", "classify", "classify_cell", "classify_neighbors", "reclassify_around"]
