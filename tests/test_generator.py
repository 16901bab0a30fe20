import random
import unittest
from collections import deque

from mazegame.core.generator import ENTRY, carve, generate, is_lattice_vertex, place_rewards
from mazegame.core.grid import Direction, Grid, Ground, Wall
from mazegame.errors import ConfigurationError

SEEDS = range(25)


def _flood_fill(grid: Grid, start):
    seen = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        for direction in Direction:
            neighbor = direction.step(cell)
            if grid.in_range(neighbor) and isinstance(grid.get(neighbor), Ground) and neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def _ground_neighbors(grid: Grid, cell):
    return [
        direction
        for direction in Direction
        if grid.in_range(direction.step(cell)) and isinstance(grid.get(direction.step(cell)), Ground)
    ]


def _generated(seed: int, width: int = 21, height: int = 21, reward_count: int = 6):
    grid = Grid(width, height)
    rewards = generate(grid, random.Random(seed), reward_count)
    return grid, rewards


class GenerateTests(unittest.TestCase):
    def test_exit_is_reachable_from_entry(self) -> None:
        for seed in SEEDS:
            grid, _ = _generated(seed)
            self.assertIn((19, 19), _flood_fill(grid, ENTRY), f"seed {seed}")

    def test_carved_lattice_is_a_tree(self) -> None:
        for seed in SEEDS:
            grid, _ = _generated(seed)
            vertices = [cell for cell in grid.positions() if is_lattice_vertex(grid, cell)
                        and isinstance(grid.get(cell), Ground)]
            edges = 0
            for x, y in vertices:
                for direction in (Direction.EAST, Direction.SOUTH):
                    between = direction.step((x, y))
                    if grid.in_range(between) and isinstance(grid.get(between), Ground):
                        edges += 1
            self.assertEqual(edges, len(vertices) - 1, f"seed {seed}")
            self.assertEqual(len(_flood_fill(grid, ENTRY)), len(vertices) + edges)

    def test_outer_ring_stays_wall(self) -> None:
        for seed in SEEDS:
            grid, _ = _generated(seed, width=15, height=11)
            for x, y in grid.positions():
                if x in (0, grid.width - 1) or y in (0, grid.height - 1):
                    self.assertIsInstance(grid.get((x, y)), Wall)

    def test_rewards_sit_on_distinct_interior_lattice_vertices(self) -> None:
        for seed in SEEDS:
            grid, rewards = _generated(seed)
            positions = [reward.position for reward in rewards]
            self.assertEqual(len(set(positions)), len(positions))
            for x, y in positions:
                self.assertEqual((x % 2, y % 2), (1, 1))
                self.assertTrue(1 <= x <= grid.width - 2 and 1 <= y <= grid.height - 2)
                self.assertNotEqual((x, y), ENTRY)
            self.assertTrue(all(not reward.found for reward in rewards))

    def test_rewards_are_dead_ends_never_entered_from_above(self) -> None:
        for seed in SEEDS:
            grid, rewards = _generated(seed)
            for reward in rewards:
                self.assertIsInstance(grid.get(reward.position), Ground)
                openings = _ground_neighbors(grid, reward.position)
                self.assertEqual(len(openings), 1, f"seed {seed} reward {reward.position}")
                self.assertNotEqual(openings[0], Direction.NORTH)

    def test_exit_is_a_dead_end(self) -> None:
        for seed in SEEDS:
            grid, _ = _generated(seed)
            self.assertEqual(len(_ground_neighbors(grid, (19, 19))), 1)

    def test_fixed_seed_scenario(self) -> None:
        grid, rewards = _generated(2024)
        self.assertEqual(sum(1 for reward in rewards if not reward.malus), 3)
        self.assertEqual(sum(1 for reward in rewards if reward.malus), 3)
        self.assertEqual([reward.malus for reward in rewards], [False, False, False, True, True, True])
        self.assertIn((19, 19), _flood_fill(grid, (1, 1)))
        for i in range(21):
            self.assertIsInstance(grid.get((i, 0)), Wall)
            self.assertIsInstance(grid.get((0, i)), Wall)

    def test_same_seed_gives_same_maze(self) -> None:
        first, first_rewards = _generated(7)
        second, second_rewards = _generated(7)
        self.assertEqual(first.to_rows(), second.to_rows())
        self.assertEqual(first_rewards, second_rewards)

    def test_custom_exit_and_bonus_split(self) -> None:
        grid = Grid(11, 11)
        rewards = generate(grid, random.Random(3), 5, (9, 1), bonus_count=1)
        self.assertEqual([reward.malus for reward in rewards], [False, True, True, True, True])
        self.assertIn((9, 1), _flood_fill(grid, ENTRY))
        self.assertNotIn((9, 1), [reward.position for reward in rewards])

    def test_odd_reward_count_rounds_bonuses_up(self) -> None:
        _, rewards = _generated(11, reward_count=5)
        self.assertEqual(sum(1 for reward in rewards if not reward.malus), 3)

    def test_no_rewards(self) -> None:
        grid, rewards = _generated(5, reward_count=0)
        self.assertEqual(rewards, [])
        self.assertIn((19, 19), _flood_fill(grid, ENTRY))


class GenerateConfigurationTests(unittest.TestCase):
    def test_infeasible_reward_count_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            generate(Grid(5, 5), random.Random(0), 2)

    def test_single_reward_fits_smallest_maze(self) -> None:
        grid = Grid(5, 5)
        rewards = generate(grid, random.Random(0), 1)
        self.assertEqual([reward.position for reward in rewards], [(3, 1)])
        self.assertIn((3, 3), _flood_fill(grid, ENTRY))

    def test_even_or_tiny_dimensions_raise(self) -> None:
        for width, height in ((20, 21), (21, 20), (3, 3)):
            with self.assertRaises(ConfigurationError):
                generate(Grid(width, height), random.Random(0), 0)

    def test_bad_exit_cell_raises(self) -> None:
        for exit_cell in ((2, 19), (1, 1), (21, 21), (0, 19)):
            with self.assertRaises(ConfigurationError):
                generate(Grid(21, 21), random.Random(0), 0, exit_cell)

    def test_used_grid_is_rejected(self) -> None:
        grid = Grid(21, 21)
        grid.set((2, 1), Ground())
        with self.assertRaises(ConfigurationError):
            generate(grid, random.Random(0), 0)

        grid, _ = _generated(4)
        with self.assertRaises(ConfigurationError):
            generate(grid, random.Random(4), 6)

    def test_bad_bonus_count_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            place_rewards(Grid(21, 21), random.Random(0), 2, exit_cell=(19, 19), bonus_count=3)


def _recursive_carve(grid, rng, cell, exit_cell, rewards, visited):
    visited.add(cell)
    grid.set(cell, Ground())
    if cell == exit_cell or cell in rewards:
        return
    directions = list(Direction)
    rng.shuffle(directions)
    for direction in directions:
        neighbor = direction.step(cell, 2)
        x, y = neighbor
        if not (1 <= x <= grid.width - 2 and 1 <= y <= grid.height - 2) or neighbor in visited:
            continue
        if neighbor in rewards and direction is Direction.SOUTH:
            continue
        grid.set(direction.step(cell), Ground())
        _recursive_carve(grid, rng, neighbor, exit_cell, rewards, visited)


class CarveOrderTests(unittest.TestCase):
    def test_explicit_stack_matches_recursive_order(self) -> None:
        for seed in range(10):
            iterative, recursive = Grid(21, 21), Grid(21, 21)
            rng_a, rng_b = random.Random(seed), random.Random(seed)
            rewards = place_rewards(iterative, rng_a, 6, exit_cell=(19, 19))
            self.assertEqual(place_rewards(recursive, rng_b, 6, exit_cell=(19, 19)), rewards)
            positions = {reward.position for reward in rewards}
            for grid in (iterative, recursive):
                grid.set((19, 19), Ground())

            carve(iterative, rng_a, ENTRY, (19, 19), positions)
            _recursive_carve(recursive, rng_b, ENTRY, (19, 19), positions, set())
            self.assertEqual(iterative.to_rows(), recursive.to_rows(), f"seed {seed}")

    def test_large_maze_does_not_hit_recursion_limit(self) -> None:
        grid = Grid(401, 401)
        generate(grid, random.Random(1), 0)
        self.assertIn((399, 399), _flood_fill(grid, ENTRY))


if __name__ == "__main__":
    unittest.main()
