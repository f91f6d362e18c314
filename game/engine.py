import logging
import random
from collections.abc import Callable, Iterator
from typing import List, Optional

from .errors import BoardFullError
from .state import (
    GRID_SIZE,
    DIRECTIONS,
    INITIAL_DIRECTION,
    INITIAL_FOOD,
    INITIAL_SNAKE,
    NO_FOOD,
    Direction,
    FoodEaten,
    GameState,
    Point,
    opposite,
)

logger = logging.getLogger(__name__)

FoodListener = Callable[[FoodEaten], None]


def random_cells(rng: random.Random, grid_size: int) -> Iterator[Point]:
    """Endless stream of uniformly random grid cells."""
    while True:
        yield (rng.randrange(grid_size), rng.randrange(grid_size))


class SnakeGame:
    """Snake game engine on a wraparound (toroidal) board.

    The engine is the only thing that mutates the simulation. Consumers read
    immutable snapshots through get_state().
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        rng: Optional[random.Random] = None,
        food_max_attempts: int = 10_000,
    ):
        """Initialize the game.

        Args:
            grid_size: Board width and height in cells
            rng: Random source used for food placement
            food_max_attempts: Random candidates tried before scanning the board
        """
        if grid_size <= max(INITIAL_FOOD + INITIAL_SNAKE[0]):
            raise ValueError(f"grid_size {grid_size} is too small for the starting layout")
        self.grid_size = grid_size
        self.rng = rng or random.Random()
        self.food_max_attempts = food_max_attempts
        self.snake: List[Point] = []
        self.direction: Direction = INITIAL_DIRECTION
        self.food: Point = INITIAL_FOOD
        self.score: int = 0
        self.high_score: int = 0
        self.game_over: bool = False
        self.ticks: int = 0
        self._listeners: List[FoodListener] = []
        self.reset()

    def reset(self) -> GameState:
        """Restore the initial snake, direction, food and score.

        The high score is kept for the whole session.

        Returns:
            The initial GameState
        """
        self.snake = list(INITIAL_SNAKE)
        self.direction = INITIAL_DIRECTION
        self.food = INITIAL_FOOD
        self.score = 0
        self.game_over = False
        self.ticks = 0
        return self.get_state()

    def on_food_eaten(self, listener: FoodListener) -> None:
        """Register a callable invoked with every FoodEaten event."""
        self._listeners.append(listener)

    def _wrap(self, x: int, y: int) -> Point:
        return (x % self.grid_size, y % self.grid_size)

    def _spawn_food(self) -> Point:
        """Pick a uniformly random cell not covered by the snake."""
        occupied = set(self.snake)
        candidates = random_cells(self.rng, self.grid_size)
        for _ in range(self.food_max_attempts):
            cell = next(candidates)
            if cell not in occupied:
                return cell

        # Only reachable when the board is nearly full
        empty_cells = [
            (x, y)
            for x in range(self.grid_size)
            for y in range(self.grid_size)
            if (x, y) not in occupied
        ]
        if not empty_cells:
            raise BoardFullError(f"No empty cell left on a {self.grid_size}x{self.grid_size} board")
        logger.debug("Food placement fell back to a board scan (%d empty cells)", len(empty_cells))
        return self.rng.choice(empty_cells)

    def advance(self, pending_direction: Optional[Direction] = None) -> Optional[FoodEaten]:
        """Process one tick.

        Args:
            pending_direction: Requested direction. Ignored if None or the exact
                reverse of the current direction.

        Returns:
            The FoodEaten event if food was eaten this tick, otherwise None
        """
        if self.game_over:
            return None

        if pending_direction in DIRECTIONS.values() and pending_direction != opposite(self.direction):
            self.direction = pending_direction

        dx, dy = self.direction
        head_x, head_y = self.snake[0]
        new_head = self._wrap(head_x + dx, head_y + dy)

        self.ticks += 1

        # Body excluding the current head; empty for a single-segment snake
        if new_head in self.snake[1:]:
            self.game_over = True
            logger.debug("Game over: self-collision at %s with score %d", new_head, self.score)
            return None

        self.snake.insert(0, new_head)

        if new_head != self.food:
            self.snake.pop()
            return None

        eaten = self.food
        self.score += 1
        self.high_score = max(self.high_score, self.score)
        try:
            self.food = self._spawn_food()
        except BoardFullError:
            # Snake covers every cell: the round ends with no food on the board
            self.food = NO_FOOD
            self.game_over = True
            logger.debug("Game over: board filled with score %d", self.score)

        event = FoodEaten(food=eaten, score=self.score)
        for listener in self._listeners:
            listener(event)
        return event

    def get_state(self) -> GameState:
        """Get the current game state.

        Returns:
            Current GameState
        """
        return GameState(
            snake=tuple(self.snake),
            food=self.food,
            direction=self.direction,
            score=self.score,
            high_score=self.high_score,
            game_over=self.game_over,
            grid_size=self.grid_size,
            tick=self.ticks,
        )
