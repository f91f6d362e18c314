#!/usr/bin/env python3
"""Run SnakeBurst headless in the terminal, or start the web server."""

import argparse
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from game.controls import KEY_BINDINGS, InputController  # noqa: E402
from game.engine import SnakeGame  # noqa: E402
from game.errors import ConfigError  # noqa: E402
from game.particles import ParticleSystem  # noqa: E402
from game.renderer import render_text  # noqa: E402
from game.settings import Settings, load_settings  # noqa: E402

ARROW_KEYS = [key for key in KEY_BINDINGS if key.startswith("Arrow")]


def run_headless(settings: Settings, ticks: int, seed: int | None, restart: bool = False) -> SnakeGame:
    """Play `ticks` steps with random arrow-key presses.

    Args:
        settings: Game settings
        ticks: Number of ticks to simulate
        seed: Seed for both the key presses and food placement
        restart: Reset and keep playing after a game over

    Returns:
        The engine after the last tick
    """
    rng = random.Random(seed)
    game = SnakeGame(grid_size=settings.grid_size, rng=rng, food_max_attempts=settings.food_max_attempts)
    controls = InputController()
    particles = ParticleSystem(
        count=settings.particle_count,
        cell_size=settings.cell_size,
        min_lifespan=settings.particle_min_lifespan_ms,
        max_lifespan=settings.particle_max_lifespan_ms,
        rng=rng,
    )
    tick_ms = settings.tick_interval * 1000.0
    games_played = 1

    for step in range(ticks):
        now = step * tick_ms
        if rng.random() < 0.2:
            controls.press(rng.choice(ARROW_KEYS), game.direction)

        event = game.advance(controls.take())
        if event is not None:
            particles.burst(event.food, now)
        particles.expire(now)

        if game.game_over:
            print(f"Game over at tick {step + 1}: score {game.score}")
            if not restart:
                break
            game.reset()
            controls.clear()
            particles.clear()
            games_played += 1

    state = game.get_state()
    print(render_text(state))
    print(f"Games: {games_played} | Score: {state.score} | High Score: {state.high_score}")
    return game


def main():
    parser = argparse.ArgumentParser(description="Play SnakeBurst")
    parser.add_argument("--config", type=str, help="Path to YAML config file")
    parser.add_argument("--serve", action="store_true", help="Start the web server instead")
    parser.add_argument("--port", type=int, help="Port for --serve")
    parser.add_argument("--ticks", type=int, default=500, help="Ticks to simulate headless")
    parser.add_argument("--seed", type=int, help="Random seed for headless play")
    parser.add_argument("--restart", action="store_true", help="Keep playing after game over")
    args = parser.parse_args()

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        parser.error(str(e))

    if args.serve:
        from main import serve

        serve(settings, port=args.port)
    else:
        run_headless(settings, args.ticks, args.seed, restart=args.restart)


if __name__ == "__main__":
    main()
