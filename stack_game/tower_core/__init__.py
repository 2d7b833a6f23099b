"""
Tower Core - the stacking simulation.

This module provides the headless game session and all supporting systems
(grid, oscillation, fall physics, camera, stats).

Main exports:
- GameSession: State machine driven by update(dt) and handle_input(event)
- InputEvent: Named player intents
- TowerGrid / GridBlock: Row storage and landing logic
- GameConfig: Configuration loaded from game_config.yaml
"""

from stack_game.tower_core.config_loader import GameConfig, load_config
from stack_game.tower_core.tower_grid import GridBlock, TowerGrid, LandingResult
from stack_game.tower_core.oscillation import OscillationController
from stack_game.tower_core.fall_physics import FallPhysics, fall_opacity
from stack_game.tower_core.camera import CameraPolicy
from stack_game.tower_core.game_state import (
    InputEvent,
    GameState,
    Menu,
    Playing,
    GameOver,
    Settings,
)
from stack_game.tower_core.stats_store import GameStats, StatsStore
from stack_game.tower_core.state_snapshot import CellView, SessionSnapshot
from stack_game.tower_core.session import GameSession

__all__ = [
    "GameConfig",
    "load_config",
    "GridBlock",
    "TowerGrid",
    "LandingResult",
    "OscillationController",
    "FallPhysics",
    "fall_opacity",
    "CameraPolicy",
    "InputEvent",
    "GameState",
    "Menu",
    "Playing",
    "GameOver",
    "Settings",
    "GameStats",
    "StatsStore",
    "CellView",
    "SessionSnapshot",
    "GameSession",
]
