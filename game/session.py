"""One player's game: engine, input, particles and clock with a shared lifetime."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Awaitable, Callable
from typing import Any

from .controls import InputController
from .engine import SnakeGame
from .errors import ClientDisconnected
from .particles import ParticleSystem
from .renderer import build_frame
from .settings import Settings
from .ticker import Ticker

logger = logging.getLogger(__name__)

Send = Callable[[dict[str, Any]], Awaitable[None]]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameSession:
    """Manages a single game session.

    The ticker is the only caller of SnakeGame.advance. Key presses only touch
    the controller's pending slot. close() stops the ticker and detaches input
    together, so nothing fires after teardown.
    """

    def __init__(
        self,
        send: Send,
        settings: Settings | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.settings = settings or Settings()
        self.send = send
        self.clock = clock
        rng = rng or random.Random()
        self.game = SnakeGame(
            grid_size=self.settings.grid_size,
            rng=rng,
            food_max_attempts=self.settings.food_max_attempts,
        )
        self.controls = InputController()
        self.particles = ParticleSystem(
            count=self.settings.particle_count,
            cell_size=self.settings.cell_size,
            min_lifespan=self.settings.particle_min_lifespan_ms,
            max_lifespan=self.settings.particle_max_lifespan_ms,
            rng=rng,
        )
        self.ticker = Ticker(self.tick, interval=self.settings.tick_interval)
        self.closed = False

    @property
    def running(self) -> bool:
        return self.ticker.running

    def frame(self) -> dict[str, Any]:
        now = self.clock()
        self.particles.expire(now)
        return build_frame(self.game.get_state(), self.particles.active(), now)

    async def _publish(self, message: dict[str, Any]) -> bool:
        """Send one message. Returns False if the client has gone away."""
        try:
            await self.send(message)
        except ClientDisconnected:
            logger.info("Client went away mid-session")
            await self.close()
            return False
        return True

    async def start(self) -> None:
        """Publish the current state and start the clock."""
        if self.closed:
            return
        if not await self._publish(self.frame()):
            return
        self.ticker.start()
        logger.info("Session started (tick every %.3fs)", self.ticker.interval)

    def handle_key(self, key: str) -> bool:
        """Queue a direction for the next tick. Returns True if accepted."""
        if self.closed or self.game.game_over:
            return False
        return self.controls.press(key, self.game.direction)

    async def tick(self) -> None:
        """Advance one step and publish the result."""
        if self.closed or self.game.game_over:
            return

        event = self.game.advance(self.controls.take())
        if event is not None:
            self.particles.burst(event.food, self.clock())
            if not await self._publish(event.to_dict()):
                return

        if not await self._publish(self.frame()):
            return

        if self.game.game_over:
            logger.info("Game over with score %d (high score %d)", self.game.score, self.game.high_score)
            await self.ticker.stop()
            await self._publish({
                "type": "game_over",
                "final_score": self.game.score,
                "high_score": self.game.high_score,
            })

    async def reset(self) -> None:
        """Start a new round. The high score carries over."""
        if self.closed:
            return
        await self.ticker.stop()
        self.game.reset()
        self.controls.clear()
        self.particles.clear()
        logger.info("Session reset (high score %d)", self.game.high_score)
        await self.start()

    async def close(self) -> None:
        """Stop the clock and ignore any further input."""
        if self.closed:
            return
        self.closed = True
        self.controls.clear()
        await self.ticker.stop()
        logger.info("Session closed")
