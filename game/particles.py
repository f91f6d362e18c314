"""Cosmetic particle bursts spawned when food is eaten."""

from __future__ import annotations

import itertools
import random
from dataclasses import dataclass
from typing import Any

from .state import Point

CELL_SIZE = 20  # Pixels per grid cell
PARTICLE_COUNT = 20
MIN_LIFESPAN_MS = 300.0
MAX_LIFESPAN_MS = 1000.0


@dataclass(frozen=True)
class Particle:
    """A single fading dot. Positions are in pixels, times in milliseconds."""

    id: int
    x: float
    y: float
    color: str
    lifespan: float
    born_at: float

    def remaining(self, now: float) -> float:
        return max(0.0, self.born_at + self.lifespan - now)

    def is_alive(self, now: float) -> bool:
        return now < self.born_at + self.lifespan

    def to_dict(self, now: float) -> dict[str, Any]:
        return {
            "id": self.id,
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "color": self.color,
            "lifespan": round(self.lifespan, 1),
            "remaining": round(self.remaining(now), 1),
        }


class ParticleSystem:
    """Holds the particles currently on screen."""

    def __init__(
        self,
        count: int = PARTICLE_COUNT,
        cell_size: int = CELL_SIZE,
        min_lifespan: float = MIN_LIFESPAN_MS,
        max_lifespan: float = MAX_LIFESPAN_MS,
        rng: random.Random | None = None,
    ):
        if min_lifespan > max_lifespan:
            raise ValueError("min_lifespan must not exceed max_lifespan")
        self.count = count
        self.cell_size = cell_size
        self.min_lifespan = min_lifespan
        self.max_lifespan = max_lifespan
        self.rng = rng or random.Random()
        self._particles: list[Particle] = []
        self._ids = itertools.count()

    def burst(self, cell: Point, now: float) -> list[Particle]:
        """Spawn a batch of particles scattered over the given grid cell.

        Args:
            cell: Grid cell the food was eaten on
            now: Current time in milliseconds

        Returns:
            The newly created particles
        """
        x, y = cell
        spread = self.max_lifespan - self.min_lifespan
        batch = [
            Particle(
                id=next(self._ids),
                x=x * self.cell_size + self.rng.random() * self.cell_size,
                y=y * self.cell_size + self.rng.random() * self.cell_size,
                color=f"hsl({self.rng.random() * 360:.0f}, 100%, 50%)",
                lifespan=self.min_lifespan + self.rng.random() * spread,
                born_at=now,
            )
            for _ in range(self.count)
        ]
        self._particles.extend(batch)
        return batch

    def expire(self, now: float) -> int:
        """Drop faded particles. Returns how many were removed."""
        before = len(self._particles)
        self._particles = [p for p in self._particles if p.is_alive(now)]
        return before - len(self._particles)

    def active(self) -> list[Particle]:
        return list(self._particles)

    def clear(self) -> None:
        self._particles = []

    def __len__(self) -> int:
        return len(self._particles)
