"""Exceptions raised by the snake game package."""


class SnakeGameError(Exception):
    """Base class for game errors."""


class BoardFullError(SnakeGameError):
    """Raised when there is no empty cell left to place food on."""


class ConfigError(SnakeGameError):
    """Raised when settings cannot be loaded or fail validation."""


class ClientDisconnected(SnakeGameError):
    """Raised by a session's send callable when the client has gone away."""
