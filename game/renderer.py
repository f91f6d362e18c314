"""Frame composition for the browser page and the terminal."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import numpy as np

from .particles import Particle
from .state import GameState

EMPTY = 0
SNAKE = 1
FOOD = 2

CELL_COLORS = {
    EMPTY: "transparent",
    SNAKE: "green",
    FOOD: "red",
}


def render_grid(state: GameState) -> np.ndarray:
    """Convert a snapshot into a cell grid.

    Returns a (grid_size, grid_size) int8 array indexed [y, x] holding
    EMPTY, SNAKE or FOOD. A snake segment hides food on the same cell.
    """
    grid = np.full((state.grid_size, state.grid_size), EMPTY, dtype=np.int8)

    fx, fy = state.food
    if 0 <= fx < state.grid_size and 0 <= fy < state.grid_size:
        grid[fy, fx] = FOOD

    for x, y in state.snake:
        grid[y, x] = SNAKE

    return grid


def render_text(state: GameState) -> str:
    """Plain-text board: '#' head, 'o' body, '*' food, '.' empty."""
    symbols = np.array([".", "o", "*"])
    rows = symbols[render_grid(state)]
    hx, hy = state.head
    rows[hy, hx] = "#"
    return "\n".join("".join(row) for row in rows)


def build_frame(state: GameState, particles: Iterable[Particle], now: float) -> dict[str, Any]:
    """Message sent to the page after every tick."""
    return {
        "type": "state_update",
        "state": state.to_dict(),
        "cells": render_grid(state).tolist(),
        "particles": [p.to_dict(now) for p in particles],
    }
