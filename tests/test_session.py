import unittest

from mazegame.core.grid import Direction
from mazegame.core.maze import Maze
from mazegame.game.session import GameSession

N, E, S, W = Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST

# Entry (1, 1), exit (3, 3), bonus at (5, 1), penalty at (1, 3).
SMALL_LEVEL = {
    "width": 7,
    "height": 5,
    "entry": [1, 1],
    "exit": [3, 3],
    "grid": [
        [1, 1, 1, 1, 1, 1, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 1, 1, 1, 0, 1],
        [1, 0, 1, 0, 0, 0, 1],
        [1, 1, 1, 1, 1, 1, 1],
    ],
    "rewards": [
        {"position": [5, 1], "malus": False},
        {"position": [1, 3], "malus": True},
    ],
}


class GameSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.now = 0.0
        self.maze = Maze.from_dict(SMALL_LEVEL)
        self.session = GameSession(self.maze, time_limit=30.0, clock=lambda: self.now)

    def _play(self, *directions):
        return [self.session.move(direction) for direction in directions]

    def test_starts_on_entry(self) -> None:
        self.assertEqual(self.session.position, (1, 1))
        self.assertEqual(self.session.status, "playing")
        self.assertEqual(self.session.hud_text(), "0/1  30")

    def test_wall_blocks_move(self) -> None:
        result = self.session.move(N)
        self.assertEqual(result.status, "blocked")
        self.assertEqual(result.position, (1, 1))
        self.assertEqual(self.session.moves, 0)

    def test_collecting_bonus_then_reaching_exit_wins(self) -> None:
        results = self._play(E, E, E, E)
        self.assertIsNone(results[0].reward)
        self.assertFalse(results[-1].reward.malus)
        self.assertEqual(self.session.found, 1)
        self.assertEqual(results[-1].to_dict()["reward"]["found"], True)

        self._play(S, S, W, W)
        self.assertEqual(self.session.position, (3, 3))
        self.assertEqual(self.session.status, "won")
        self.assertEqual(self.session.move(E).status, "finished")

    def test_revisiting_bonus_does_not_count_twice(self) -> None:
        self._play(E, E, E, E, W, E)
        self.assertEqual(self.session.found, 1)

    def test_penalty_loses(self) -> None:
        results = self._play(S, S)
        self.assertTrue(results[-1].reward.malus)
        self.assertEqual(self.session.status, "lost")
        self.assertEqual(self.session.found, 0)
        self.assertEqual(self.session.move(N).status, "finished")

    def test_timer_runs_out(self) -> None:
        self.now = 12.5
        self.assertEqual(self.session.hud_text(), "0/1  17")
        self.now = 31.0
        self.assertEqual(self.session.status, "timeout")
        self.assertEqual(self.session.remaining_time, 0.0)
        self.assertEqual(self.session.move(E).status, "finished")

    def test_clock_stops_when_round_ends(self) -> None:
        self._play(S)
        self.now = 4.0
        self._play(S)
        self.now = 50.0
        self.assertEqual(self.session.status, "lost")
        self.assertEqual(self.session.elapsed, 4.0)


if __name__ == "__main__":
    unittest.main()
