"""Game settings loaded from YAML with environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from .errors import ConfigError

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG = PROJECT_ROOT / "config" / "default.yaml"
ENV_PREFIX = "SNAKEBURST_"


class Settings(BaseModel):
    """Runtime settings for the game server."""

    grid_size: int = Field(default=20, ge=16, le=64)
    cell_size: int = Field(default=20, gt=0)  # Pixels per cell on the page
    tick_interval: float = Field(default=0.1, gt=0)  # Seconds between ticks
    particle_count: int = Field(default=20, ge=0)
    particle_min_lifespan_ms: float = Field(default=300.0, ge=0)
    particle_max_lifespan_ms: float = Field(default=1000.0, ge=0)
    food_max_attempts: int = Field(default=10_000, gt=0)
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=0, le=65535)
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_lifespans(self) -> Settings:
        if self.particle_min_lifespan_ms > self.particle_max_lifespan_ms:
            raise ValueError("particle_min_lifespan_ms must not exceed particle_max_lifespan_ms")
        return self


def load_config(config_path: str | Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    try:
        with open(config_path) as f:
            result = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(result, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return result


def env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect SNAKEBURST_* variables (and PORT) as setting overrides."""
    overrides = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX)
    }
    if environ.get("PORT"):
        overrides.setdefault("port", environ["PORT"])
    return overrides


def load_settings(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from a YAML file, then apply environment overrides.

    Args:
        config_path: YAML file to read. Defaults to config/default.yaml when present.
        environ: Environment to read overrides from. Defaults to os.environ
            after loading the project's .env file.

    Raises:
        ConfigError: If the file is unreadable or a value fails validation
    """
    if environ is None:
        load_dotenv(PROJECT_ROOT / ".env")
        environ = os.environ

    config: dict[str, Any] = {}
    if config_path is not None:
        config = load_config(config_path)
    elif DEFAULT_CONFIG.exists():
        config = load_config(DEFAULT_CONFIG)

    config.update(env_overrides(environ))

    unknown = sorted(set(config) - set(Settings.model_fields))
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(unknown)}")

    try:
        return Settings(**config)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
