"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class GridConfig:
    """Tower grid geometry."""
    game_width: int       # Columns per row
    platform_blocks: int  # Width of the first platform

    @property
    def initial_position(self) -> int:
        """Left edge of the centered starting platform."""
        return (self.game_width - self.platform_blocks) // 2


@dataclass(frozen=True)
class TimingConfig:
    """Oscillation speed parameters."""
    move_interval: float   # Seconds per column step at level 0
    speed_increase: float  # Multiplier applied after each landing (< 1)


@dataclass(frozen=True)
class FallConfig:
    """Falling overhang parameters."""
    fall_speed: float  # Pixels per second


@dataclass(frozen=True)
class CameraConfig:
    """Scroll policy parameters."""
    band_fraction: float
    min_level: int
    min_rows: int


@dataclass(frozen=True)
class SessionConfig:
    """Session state machine parameters."""
    game_over_delay: float


@dataclass(frozen=True)
class WindowConfig:
    """Initial window settings for front-ends."""
    width: int
    height: int
    title: str


@dataclass(frozen=True)
class StatsConfig:
    """Statistics persistence settings."""
    path: str


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    grid: GridConfig
    timing: TimingConfig
    fall: FallConfig
    camera: CameraConfig
    session: SessionConfig
    window: WindowConfig
    stats: StatsConfig


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    grid = config.grid
    if grid.game_width <= 0:
        raise ValueError(f"grid.game_width must be positive, got {grid.game_width}")

    if not 0 < grid.platform_blocks <= grid.game_width:
        raise ValueError(
            f"grid.platform_blocks ({grid.platform_blocks}) must be in "
            f"[1, game_width={grid.game_width}]"
        )

    if config.timing.move_interval <= 0:
        raise ValueError(f"timing.move_interval must be positive, got {config.timing.move_interval}")

    if not 0 < config.timing.speed_increase <= 1:
        raise ValueError(
            f"timing.speed_increase must be in (0, 1], got {config.timing.speed_increase}"
        )

    if config.fall.fall_speed < 0:
        raise ValueError(f"fall.fall_speed must be non-negative, got {config.fall.fall_speed}")

    if not 0 <= config.camera.band_fraction < 1:
        raise ValueError(
            f"camera.band_fraction must be in [0, 1), got {config.camera.band_fraction}"
        )

    if config.session.game_over_delay < 0:
        raise ValueError(
            f"session.game_over_delay must be non-negative, got {config.session.game_over_delay}"
        )

    if config.window.width <= 0 or config.window.height <= 0:
        raise ValueError(
            f"window size must be positive, got {config.window.width}x{config.window.height}"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(raw).__name__}")

    grid_data = raw["grid"]
    grid = GridConfig(
        game_width=int(grid_data["game_width"]),
        platform_blocks=int(grid_data["platform_blocks"])
    )

    timing_data = raw["timing"]
    timing = TimingConfig(
        move_interval=float(timing_data["move_interval"]),
        speed_increase=float(timing_data["speed_increase"])
    )

    fall_data = raw.get("fall", {})
    fall = FallConfig(
        fall_speed=float(fall_data.get("fall_speed", 500.0))
    )

    camera_data = raw.get("camera", {})
    camera = CameraConfig(
        band_fraction=float(camera_data.get("band_fraction", 0.3)),
        min_level=int(camera_data.get("min_level", 4)),
        min_rows=int(camera_data.get("min_rows", 2))
    )

    session_data = raw.get("session", {})
    session = SessionConfig(
        game_over_delay=float(session_data.get("game_over_delay", 3.0))
    )

    window_data = raw.get("window", {})
    window = WindowConfig(
        width=int(window_data.get("width", 800)),
        height=int(window_data.get("height", 600)),
        title=str(window_data.get("title", "Stack Game"))
    )

    stats_data = raw.get("stats", {})
    stats = StatsConfig(
        path=str(stats_data.get("path", "game_stats.json"))
    )

    config = GameConfig(
        grid=grid,
        timing=timing,
        fall=fall,
        camera=camera,
        session=session,
        window=window,
        stats=stats
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
