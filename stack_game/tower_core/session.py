"""
Game Session
============

Top-level state machine orchestrating the grid, oscillation, fall physics,
camera and stats.

States: Menu, Playing, GameOver(started_at), Settings. Input events are
dispatched to one handler per state; events a state does not understand
are ignored. The front-end drives the session with update(dt) once per
frame and handle_input(event) for key presses.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from stack_game.tower_core.camera import CameraPolicy
from stack_game.tower_core.config_loader import GameConfig, get_config
from stack_game.tower_core.fall_physics import FallPhysics
from stack_game.tower_core.game_state import (
    GameOver,
    GameState,
    InputEvent,
    Menu,
    Playing,
    Settings,
)
from stack_game.tower_core.oscillation import OscillationController
from stack_game.tower_core.state_snapshot import CellView, SessionSnapshot
from stack_game.tower_core.stats_store import GameStats, StatsStore
from stack_game.tower_core.tower_grid import LandingResult, TowerGrid

logger = logging.getLogger(__name__)


class GameSession:
    """
    One long-lived game aggregate.

    Orchestrates:
    - TowerGrid (rows, landing)
    - OscillationController (live platform movement, speed)
    - FallPhysics (cut-away blocks)
    - CameraPolicy (scroll offset)
    - StatsStore (high score, games played)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        stats_store: Optional[StatsStore] = None,
        clock: Optional[Callable[[], float]] = None,
        window_size: Optional[tuple] = None
    ):
        """
        Initialize session in the Menu state.

        Args:
            config: Game configuration. Uses default if None.
            stats_store: Stats persistence. Uses config.stats.path if None.
            clock: Monotonic clock in seconds. Uses time.monotonic if None.
            window_size: Initial (width, height). Uses config.window if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._clock = clock if clock is not None else time.monotonic
        self._stats_store = stats_store if stats_store is not None else StatsStore(config=config)
        self._game_over_delay = config.session.game_over_delay

        self._grid = TowerGrid(config)
        self._oscillation = OscillationController(config)
        self._fall = FallPhysics(config)
        self._camera = CameraPolicy(config)
        self._stats = self._stats_store.load()

        self._state: GameState = Menu()
        self._level: int = 0
        self._exit_requested: bool = False

        if window_size is None:
            window_size = (config.window.width, config.window.height)
        self._window_width = float(window_size[0])
        self._window_height = float(window_size[1])

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> GameState:
        """Current state variant."""
        return self._state

    @property
    def grid(self) -> TowerGrid:
        return self._grid

    @property
    def oscillation(self) -> OscillationController:
        return self._oscillation

    @property
    def stats(self) -> GameStats:
        return self._stats

    @property
    def level(self) -> int:
        """Successful landings in the current (or last) game."""
        return self._level

    @property
    def move_interval(self) -> float:
        return self._oscillation.move_interval

    @property
    def camera_offset_y(self) -> float:
        return self._camera.offset_y

    @property
    def exit_requested(self) -> bool:
        """True once Quit was chosen from the menu."""
        return self._exit_requested

    @property
    def window_size(self) -> tuple:
        return (self._window_width, self._window_height)

    @property
    def block_size(self) -> float:
        """Block size in pixels derived from the current window width."""
        return self._window_width / self._grid.game_width

    # ------------------------------------------------------------------
    # Driver API
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        """
        Advance the simulation by one frame.

        Args:
            dt: Elapsed seconds since the previous frame.
        """
        if isinstance(self._state, Playing):
            self._oscillation.update_movement(self._grid, dt)
            self._fall.advance(self._grid, dt)
        elif isinstance(self._state, GameOver):
            if self._clock() - self._state.started_at >= self._game_over_delay:
                self._set_state(Menu())

        self._camera.update(
            row_count=self._grid.row_count,
            block_size=self.block_size,
            viewport_height=self._window_height,
            level=self._level,
            active=isinstance(self._state, (Playing, GameOver))
        )

    def handle_input(self, event: InputEvent) -> None:
        """Dispatch a named input event to the current state's handler."""
        if isinstance(self._state, Menu):
            self._on_menu_input(event)
        elif isinstance(self._state, Playing):
            self._on_playing_input(event)
        elif isinstance(self._state, Settings):
            self._on_settings_input(event)
        # GameOver ignores input until it times out

    def resize(self, width: float, height: float) -> None:
        """Store new viewport dimensions."""
        self._window_width = float(width)
        self._window_height = float(height)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _on_menu_input(self, event: InputEvent) -> None:
        if event is InputEvent.CONFIRM:
            self.start_game()
        elif event is InputEvent.OPEN_SETTINGS:
            self._set_state(Settings())
        elif event is InputEvent.QUIT:
            logger.info("Quit requested")
            self._exit_requested = True

    def _on_playing_input(self, event: InputEvent) -> None:
        if event is InputEvent.FREEZE:
            self.freeze()

    def _on_settings_input(self, event: InputEvent) -> None:
        if event is InputEvent.CANCEL:
            self._set_state(Menu())

    def start_game(self) -> None:
        """Menu -> Playing: count the game and rebuild the tower."""
        self._set_state(Playing())
        self._level = 0
        self._camera.reset()
        self._stats.games_played += 1
        self._save_stats()
        self._oscillation.reset()
        self._grid.reset()

    def freeze(self) -> LandingResult:
        """
        Land the live platform.

        Success spawns the next row and speeds the platform up. A total miss
        records the high score and moves to GameOver.
        """
        result = self._grid.check_landing()
        if result.success:
            self._grid.add_new_row(self._level)
            self._level += 1
            interval = self._oscillation.speed_up()
            logger.debug(
                "Landed %d blocks (cut %d), level %d, interval %.4fs",
                result.landed_count, len(result.cut_columns), self._level, interval
            )
            return result

        if self._level > self._stats.high_score:
            self._stats.high_score = self._level
            self._save_stats()
        logger.info("Game over at level %d (high score %d)", self._level, self._stats.high_score)
        self._set_state(GameOver(started_at=self._clock()))
        return result

    def _set_state(self, state: GameState) -> None:
        logger.debug("State %s -> %s", self._state.tag, state.tag)
        self._state = state

    def _save_stats(self) -> None:
        try:
            self._stats_store.save(self._stats)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save game stats to %s: %s", self._stats_store.path, e)

    # ------------------------------------------------------------------
    # Render data
    # ------------------------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        """Build an immutable view of the current frame."""
        rows = tuple(
            tuple(
                CellView(
                    active=block.active,
                    landed=block.landed,
                    falling=block.falling,
                    fall_offset=block.fall_offset,
                    level=block.level
                )
                for block in row
            )
            for row in self._grid.rows
        )
        return SessionSnapshot(
            state=self._state.tag,
            rows=rows,
            base_span=self._grid.base_span,
            live_span=self._grid.live_span,
            platform_width=self._grid.platform_width,
            level=self._level,
            camera_offset_y=self._camera.offset_y,
            high_score=self._stats.high_score,
            games_played=self._stats.games_played,
            game_width=self._grid.game_width,
            window_width=self._window_width,
            window_height=self._window_height,
            block_size=self.block_size
        )
