"""Recursive-backtracking maze carver with reward placement.

The grid uses two cells per logical unit: odd/odd cells are lattice vertices
("rooms"), the cells between them are connectors that stay walls unless a
passage is carved through them. The outer ring is never carved.

Rewards are dead ends. A branch that reaches a reward (or the exit) stops
there, and a reward is never entered from the cell directly above it.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from ..errors import ConfigurationError
from .grid import Direction, Grid, Ground, Position, Wall
from .rewards import Reward

logger = logging.getLogger(__name__)

ENTRY: Position = (1, 1)
MIN_PLACEMENT_ATTEMPTS = 100
PLACEMENT_ATTEMPTS_PER_REWARD = 50

# Directions a reward may be entered from: never moving south into it.
_REWARD_APPROACHES = (Direction.EAST, Direction.WEST, Direction.NORTH)


def default_exit(width: int, height: int) -> Position:
    return width - 2, height - 2


def is_lattice_vertex(grid: Grid, position: Position) -> bool:
    x, y = position
    return x % 2 == 1 and y % 2 == 1 and _in_interior(grid, position)


def _in_interior(grid: Grid, position: Position) -> bool:
    x, y = position
    return 1 <= x <= grid.width - 2 and 1 <= y <= grid.height - 2


def _validate(grid: Grid, entry: Position, exit_cell: Position) -> None:
    if grid.width < 5 or grid.height < 5 or grid.width % 2 == 0 or grid.height % 2 == 0:
        raise ConfigurationError(
            f"Maze dimensions must be odd and at least 5x5, got {grid.width}x{grid.height}"
        )
    for name, cell in (("entry", entry), ("exit", exit_cell)):
        if not is_lattice_vertex(grid, cell):
            raise ConfigurationError(f"The {name} cell {cell} must be an odd/odd interior cell")
    if entry == exit_cell:
        raise ConfigurationError("The exit cell must differ from the entry cell")


def generate(
    grid: Grid,
    rng: random.Random,
    reward_count: int,
    exit_cell: Optional[Position] = None,
    *,
    entry: Position = ENTRY,
    bonus_count: Optional[int] = None,
) -> List[Reward]:
    """Place rewards, then carve a perfect maze into an all-wall ``grid``.

    ``grid`` must be fresh: a grid holding any ground cell is rejected with
    ``ConfigurationError`` rather than carved on top of.
    """

    if any(not isinstance(state, Wall) for _, state in grid):
        raise ConfigurationError("generate needs an all-wall grid; pass a fresh Grid")
    if exit_cell is None:
        exit_cell = default_exit(grid.width, grid.height)
    _validate(grid, entry, exit_cell)

    rewards = place_rewards(
        grid,
        rng,
        reward_count,
        entry=entry,
        exit_cell=exit_cell,
        bonus_count=bonus_count,
    )
    grid.set(exit_cell, Ground())
    carved = carve(grid, rng, entry, exit_cell, [reward.position for reward in rewards])
    logger.debug("Carved %d lattice vertices in %dx%d grid", carved, grid.width, grid.height)
    return rewards


def place_rewards(
    grid: Grid,
    rng: random.Random,
    reward_count: int,
    *,
    entry: Position = ENTRY,
    exit_cell: Position,
    bonus_count: Optional[int] = None,
) -> List[Reward]:
    """Sample distinct lattice vertices for ``reward_count`` rewards.

    The first ``bonus_count`` rewards (half, rounded up, by default) are
    bonuses and the remainder penalties. Candidates that would cut the exit
    off from the entry or leave a reward reachable only from above are
    resampled. Raises ``ConfigurationError`` once the attempt budget runs out.
    """

    if reward_count < 0:
        raise ConfigurationError("reward_count must not be negative")
    if bonus_count is None:
        bonus_count = (reward_count + 1) // 2
    if not 0 <= bonus_count <= reward_count:
        raise ConfigurationError(f"bonus_count must be between 0 and {reward_count}, got {bonus_count}")

    budget = max(MIN_PLACEMENT_ATTEMPTS, PLACEMENT_ATTEMPTS_PER_REWARD * reward_count)
    lattice_width = (grid.width - 1) // 2
    lattice_height = (grid.height - 1) // 2
    positions: List[Position] = []
    attempts = 0
    while len(positions) < reward_count:
        if attempts >= budget:
            raise ConfigurationError(
                f"Could not place {reward_count} rewards in a {grid.width}x{grid.height} maze "
                f"after {budget} attempts"
            )
        attempts += 1
        candidate = (2 * rng.randrange(lattice_width) + 1, 2 * rng.randrange(lattice_height) + 1)
        if candidate == entry or candidate == exit_cell or candidate in positions:
            continue
        if not _keeps_level_playable(grid, entry, exit_cell, positions + [candidate]):
            logger.debug("Rejected reward candidate %s: would block the level", candidate)
            continue
        positions.append(candidate)

    logger.debug("Placed %d rewards in %d attempts", reward_count, attempts)
    return [Reward(position=position, malus=index >= bonus_count) for index, position in enumerate(positions)]


def _keeps_level_playable(
    grid: Grid,
    entry: Position,
    exit_cell: Position,
    reward_positions: Iterable[Position],
) -> bool:
    """Check that carving would still reach the exit and every reward.

    Carving spreads through every lattice vertex connected to the entry
    without passing a reward or the exit, so a breadth-first search over the
    same vertices predicts what the carver will reach.
    """

    stops = set(reward_positions) | {exit_cell}
    open_reached = {entry}
    queue = deque([entry])
    while queue:
        cell = queue.popleft()
        for direction in Direction:
            neighbor = direction.step(cell, 2)
            if neighbor in open_reached or neighbor in stops or not _in_interior(grid, neighbor):
                continue
            open_reached.add(neighbor)
            queue.append(neighbor)

    if not any(direction.step(exit_cell, 2) in open_reached for direction in Direction):
        return False
    for position in stops - {exit_cell}:
        if not any(direction.reverse.step(position, 2) in open_reached for direction in _REWARD_APPROACHES):
            return False
    return True


def carve(
    grid: Grid,
    rng: random.Random,
    entry: Position,
    exit_cell: Position,
    reward_positions: Iterable[Position],
) -> int:
    """Carve passages from ``entry`` by depth-first backtracking.

    Runs on an explicit stack but explores in the same order, and draws the
    same random numbers, as the recursive formulation: a cell's directions are
    shuffled when it is entered and tried one by one as the search returns to
    it. Returns the number of lattice vertices visited.
    """

    rewards: Set[Position] = set(reward_positions)
    visited: Set[Position] = set()
    stack: List[Tuple[Position, Iterator[Direction]]] = []

    def enter(cell: Position) -> None:
        visited.add(cell)
        grid.set(cell, Ground())
        if cell == exit_cell or cell in rewards:
            return
        directions = list(Direction)
        rng.shuffle(directions)
        stack.append((cell, iter(directions)))

    enter(entry)
    while stack:
        cell, directions = stack[-1]
        for direction in directions:
            neighbor = direction.step(cell, 2)
            if not _in_interior(grid, neighbor) or neighbor in visited:
                continue
            if neighbor in rewards and direction is Direction.SOUTH:
                continue
            grid.set(direction.step(cell), Ground())
            enter(neighbor)
            break
        else:
            stack.pop()
    return len(visited)


__all__ = [
    "ENTRY",
    "carve",
    "default_exit",
    "generate",
    "is_lattice_vertex",
    "place_rewards",
]
