from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

GRID_SIZE = 20

Point = Tuple[int, int]  # (x, y)
Direction = Tuple[int, int]  # unit vector (dx, dy)

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)

DIRECTIONS = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}

INITIAL_SNAKE: List[Point] = [(10, 10)]
INITIAL_DIRECTION: Direction = RIGHT
INITIAL_FOOD: Point = (15, 15)
NO_FOOD: Point = (-1, -1)  # Board is full, nowhere left to place food


def opposite(direction: Direction) -> Direction:
    """Return the direction pointing the other way."""
    return (-direction[0], -direction[1])


def direction_name(direction: Direction) -> str:
    for name, vector in DIRECTIONS.items():
        if vector == direction:
            return name
    raise ValueError(f"Not a unit direction: {direction}")


@dataclass(frozen=True)
class FoodEaten:
    """Emitted when the snake eats; carries the cell the food was on."""

    food: Point
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "food_eaten",
            "food": {"x": self.food[0], "y": self.food[1]},
            "score": self.score,
        }


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a Snake game, replaced wholesale every tick."""

    snake: Tuple[Point, ...]  # head first
    food: Point
    direction: Direction = INITIAL_DIRECTION
    score: int = 0
    high_score: int = 0
    game_over: bool = False
    grid_size: int = GRID_SIZE
    tick: int = 0  # Number of ticks advanced since the last reset

    @property
    def head(self) -> Point:
        return self.snake[0]

    def to_dict(self) -> dict:
        """Convert GameState to a dictionary for JSON serialization."""
        return {
            "snake": [{"x": x, "y": y} for x, y in self.snake],
            "food": {"x": self.food[0], "y": self.food[1]},
            "direction": direction_name(self.direction),
            "score": self.score,
            "high_score": self.high_score,
            "game_over": self.game_over,
            "grid_size": self.grid_size,
            "tick": self.tick,
        }
