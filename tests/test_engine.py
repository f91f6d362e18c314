"""Tests for game/engine.py - snake movement, food and scoring."""

import random

import pytest

from game.engine import SnakeGame, random_cells
from game.errors import BoardFullError
from game.state import DOWN, GRID_SIZE, LEFT, NO_FOOD, RIGHT, UP, FoodEaten


class TestInitialState:
    def test_starts_with_fixed_layout(self, game):
        """A new game has one segment at the centre heading right."""
        state = game.get_state()
        assert state.snake == ((10, 10),)
        assert state.direction == RIGHT
        assert state.food == (15, 15)
        assert state.score == 0
        assert state.high_score == 0
        assert state.game_over is False

    def test_rejects_board_too_small_for_layout(self):
        with pytest.raises(ValueError):
            SnakeGame(grid_size=12)


class TestMovement:
    def test_moves_one_cell_in_current_direction(self, game):
        game.advance()
        assert game.snake == [(11, 10)]

    def test_adopts_pending_direction(self, game):
        game.advance(DOWN)
        assert game.direction == DOWN
        assert game.snake == [(10, 11)]

    def test_ignores_exact_reversal(self, game):
        """Pressing left while moving right keeps moving right."""
        game.advance(LEFT)
        assert game.direction == RIGHT
        assert game.snake == [(11, 10)]

    def test_ignores_non_unit_direction(self, game):
        game.advance((2, 0))
        assert game.direction == RIGHT

    def test_wraps_left_edge(self, game):
        game.snake = [(0, 10)]
        game.direction = LEFT
        game.advance()
        assert game.snake == [(19, 10)]
        assert game.game_over is False

    def test_wraps_every_edge(self, game):
        cases = [
            ((19, 3), RIGHT, (0, 3)),
            ((3, 0), UP, (3, 19)),
            ((3, 19), DOWN, (3, 0)),
            ((0, 3), LEFT, (19, 3)),
        ]
        for start, direction, expected in cases:
            game.reset()
            game.snake = [start]
            game.direction = direction
            game.advance()
            assert game.snake[0] == expected
            assert all(0 <= c < GRID_SIZE for c in game.snake[0])

    def test_length_unchanged_without_food(self, game):
        game.snake = [(5, 5), (4, 5), (3, 5)]
        for _ in range(10):
            game.advance()
            assert len(game.snake) == 3
        assert game.snake == [(15, 5), (14, 5), (13, 5)]


class TestFood:
    def test_eating_grows_and_scores(self, game):
        game.food = (11, 10)
        event = game.advance()

        assert game.snake == [(11, 10), (10, 10)]
        assert game.score == 1
        assert game.high_score == 1
        assert game.food not in game.snake
        assert event == FoodEaten(food=(11, 10), score=1)

    def test_listener_receives_eaten_cell(self, game):
        events = []
        game.on_food_eaten(events.append)
        game.food = (11, 10)
        game.advance()
        game.advance()
        assert events == [FoodEaten(food=(11, 10), score=1)]

    def test_no_event_without_food(self, game):
        assert game.advance() is None

    def test_new_food_never_on_snake(self):
        """Food regeneration avoids every snake cell, even on a crowded board."""
        game = SnakeGame(rng=random.Random(7))
        # Fill every row except the last with a long body
        body = [(x, y) for y in range(GRID_SIZE - 1) for x in range(GRID_SIZE)]
        for _ in range(50):
            game.snake = list(body)
            food = game._spawn_food()
            assert food not in body
            assert food[1] == GRID_SIZE - 1

    def test_falls_back_to_scan_when_attempts_run_out(self):
        game = SnakeGame(rng=random.Random(3), food_max_attempts=1)
        game.snake = [(x, y) for x in range(GRID_SIZE) for y in range(GRID_SIZE) if (x, y) != (4, 4)]
        assert game._spawn_food() == (4, 4)

    def test_full_board_raises(self, game):
        game.snake = [(x, y) for x in range(GRID_SIZE) for y in range(GRID_SIZE)]
        with pytest.raises(BoardFullError):
            game._spawn_food()

    def test_random_cells_stay_on_board(self):
        cells = random_cells(random.Random(0), GRID_SIZE)
        for _ in range(500):
            x, y = next(cells)
            assert 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


class TestCollision:
    def test_single_segment_never_collides(self, game):
        for _ in range(GRID_SIZE * 3):
            game.advance()
        assert game.game_over is False

    def test_head_entering_body_ends_game(self, game):
        """Turning into the body leaves the snake where it was."""
        game.snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
        game.direction = UP
        game.advance(RIGHT)
        assert game.game_over is True
        assert game.snake == [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]

    def test_moving_into_tail_cell_collides(self, game):
        """The tail still counts as body, even though it would move away."""
        game.snake = [(5, 5), (5, 6), (6, 6), (6, 5)]
        game.direction = UP
        game.advance(RIGHT)
        assert game.game_over is True

    def test_advance_after_game_over_is_noop(self, game):
        game.snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
        game.direction = UP
        game.advance(RIGHT)
        before = game.get_state()

        for direction in (UP, DOWN, LEFT, RIGHT, None):
            assert game.advance(direction) is None

        assert game.get_state() == before

    def test_collision_tick_is_counted(self, game):
        game.snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
        game.direction = UP
        game.advance(RIGHT)
        assert game.game_over is True
        assert game.get_state().tick == 1

    def test_eating_last_free_cell_ends_round(self, game):
        """Filling the board counts the point and ends the round with no food left."""
        head = (GRID_SIZE - 1, 0)
        body = [
            (x, y)
            for y in range(GRID_SIZE)
            for x in range(GRID_SIZE)
            if (x, y) not in {(0, 0), head}
        ]
        game.snake = [head] + body
        game.direction = RIGHT
        game.food = (0, 0)

        event = game.advance()

        assert event == FoodEaten(food=(0, 0), score=1)
        assert len(game.snake) == GRID_SIZE * GRID_SIZE
        assert game.snake[0] == (0, 0)
        assert game.score == 1
        assert game.high_score == 1
        assert game.game_over is True
        assert game.food == NO_FOOD
        assert game.food not in game.snake


class TestReset:
    def test_reset_restores_initial_state(self, game):
        game.food = (11, 10)
        game.advance()
        game.advance(DOWN)
        state = game.reset()

        assert state.snake == ((10, 10),)
        assert state.direction == RIGHT
        assert state.food == (15, 15)
        assert state.score == 0
        assert state.game_over is False
        assert state.tick == 0

    def test_high_score_survives_reset(self, game):
        high_scores = []
        for round_score in (3, 1, 5, 0):
            game.reset()
            for _ in range(round_score):
                head_x, head_y = game.snake[0]
                game.food = ((head_x + 1) % GRID_SIZE, head_y)
                game.advance()
            high_scores.append(game.high_score)

        assert high_scores == [3, 3, 5, 5]
        assert high_scores == sorted(high_scores)


class TestSnapshot:
    def test_snapshot_is_independent_of_engine(self, game):
        state = game.get_state()
        game.advance()
        assert state.snake == ((10, 10),)
        assert game.get_state().snake == ((11, 10),)

    def test_to_dict(self, game):
        data = game.get_state().to_dict()
        assert data == {
            "snake": [{"x": 10, "y": 10}],
            "food": {"x": 15, "y": 15},
            "direction": "right",
            "score": 0,
            "high_score": 0,
            "game_over": False,
            "grid_size": 20,
            "tick": 0,
        }
