"""Relay server configuration loader."""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from gamerelay.core.errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    win_score: int = 3  # round wins needed to take the match
    memory_reveal_delay_s: float = 1.0  # mismatched memory cards stay up this long
    dots_grid_size: int = 4  # boxes per side in dots-and-boxes
    reject_feedback: bool = False  # reply with error{} on rejected moves
    seed: int | None = None  # fixed server seed for reproducible sessions
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> ServerConfig:
    """Load server config from an optional YAML file plus environment.

    The ``PORT`` environment variable overrides the port from the file.
    """
    raw: dict = {}
    if path is not None:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"{path}: top level must be a mapping")

    server = _section(raw, "server")
    game = _section(raw, "game")

    config = ServerConfig(
        host=server.get("host", "0.0.0.0"),
        port=server.get("port", 8080),
        log_level=str(server.get("log_level", "INFO")).upper(),
        seed=server.get("seed"),
        win_score=game.get("win_score", 3),
        memory_reveal_delay_s=game.get("memory_reveal_delay_s", 1.0),
        dots_grid_size=game.get("dots_grid_size", 4),
        reject_feedback=game.get("reject_feedback", False),
    )

    env_port = os.environ.get("PORT")
    if env_port:
        try:
            config.port = int(env_port)
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got {env_port!r}") from None

    validate_config(config)
    return config


def _section(raw: dict, name: str) -> dict:
    # A section with every key commented out loads as None
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' section must be a mapping, got {type(section).__name__}")
    return section


def validate_config(config: ServerConfig) -> None:
    """Raise ConfigError on the first invalid value.

    Run again by the CLI after command-line overrides are applied.
    """
    if not isinstance(config.port, int) or not (0 <= config.port <= 65535):
        raise ConfigError(f"port out of range: {config.port!r}")
    if not isinstance(config.win_score, int) or config.win_score < 1:
        raise ConfigError(f"win_score must be a positive integer: {config.win_score!r}")
    if not isinstance(config.memory_reveal_delay_s, (int, float)) or config.memory_reveal_delay_s < 0:
        raise ConfigError(
            f"memory_reveal_delay_s must be >= 0: {config.memory_reveal_delay_s!r}"
        )
    if not isinstance(config.dots_grid_size, int) or not (1 <= config.dots_grid_size <= 10):
        raise ConfigError(f"dots_grid_size must be 1-10: {config.dots_grid_size!r}")
    if not isinstance(config.reject_feedback, bool):
        raise ConfigError(f"reject_feedback must be true or false: {config.reject_feedback!r}")
    if config.seed is not None and not isinstance(config.seed, int):
        raise ConfigError(f"seed must be an integer: {config.seed!r}")
    if config.log_level not in _LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {_LOG_LEVELS}: {config.log_level!r}")
