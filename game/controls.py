"""Keyboard input handling."""

from __future__ import annotations

from .state import DIRECTIONS, DOWN, LEFT, RIGHT, UP, Direction, opposite

KEY_BINDINGS: dict[str, Direction] = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
    **DIRECTIONS,
}


class InputController:
    """Turns key presses into a single pending direction.

    Reversals are judged against the direction the engine last reported, not
    against the pending value. Two keys pressed within one tick are each
    checked only against the pre-tick direction, so a quick up-then-down while
    moving right leaves "down" pending although it reverses the pending "up".
    """

    def __init__(self):
        self.pending: Direction | None = None

    @staticmethod
    def resolve(key: str) -> Direction | None:
        """Map a key name to a unit vector, or None for unbound keys."""
        return KEY_BINDINGS.get(key)

    def press(self, key: str, active_direction: Direction) -> bool:
        """Handle a key press.

        Args:
            key: Key name as reported by the browser ("ArrowUp", "w", ...)
            active_direction: Direction the snake moved on the last tick

        Returns:
            True if the key was accepted as the new pending direction
        """
        direction = self.resolve(key)
        if direction is None or direction == opposite(active_direction):
            return False
        self.pending = direction
        return True

    def take(self) -> Direction | None:
        """Return the pending direction and clear the slot."""
        direction, self.pending = self.pending, None
        return direction

    def clear(self) -> None:
        self.pending = None
