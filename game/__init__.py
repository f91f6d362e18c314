"""Snake game core: engine, input, particles and session clock."""

from game.controls import InputController
from game.engine import SnakeGame
from game.errors import BoardFullError, ClientDisconnected, ConfigError, SnakeGameError
from game.particles import Particle, ParticleSystem
from game.session import GameSession
from game.settings import Settings, load_settings
from game.state import GRID_SIZE, FoodEaten, GameState
from game.ticker import Ticker

__all__ = [
    "GRID_SIZE",
    "BoardFullError",
    "ClientDisconnected",
    "ConfigError",
    "FoodEaten",
    "GameSession",
    "GameState",
    "InputController",
    "Particle",
    "ParticleSystem",
    "SnakeGameError",
    "Settings",
    "SnakeGame",
    "Ticker",
    "load_settings",
]
