"""
Oscillation Controller
======================

Moves the live platform one column at a time and bounces it off the grid
edges. The step period shrinks geometrically with every landing.
"""

from __future__ import annotations

from typing import Optional

from stack_game.tower_core.config_loader import GameConfig, get_config
from stack_game.tower_core.tower_grid import TowerGrid


class OscillationController:
    """
    Time-stepped left/right movement of the top row.

    A step happens whenever the accumulated time reaches move_interval.
    If the step would push the leading edge out of [0, game_width) the
    direction flips instead and the platform stays put for that period.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize controller.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._initial_interval = config.timing.move_interval
        self._speed_increase = config.timing.speed_increase

        self.move_right: bool = True
        self.move_timer: float = 0.0
        self.move_interval: float = self._initial_interval

    def reset(self) -> None:
        """Restore the level-0 step period."""
        self.move_timer = 0.0
        self.move_interval = self._initial_interval

    def speed_up(self) -> float:
        """Shrink the step period after a successful landing."""
        self.move_interval *= self._speed_increase
        return self.move_interval

    def update_movement(self, grid: TowerGrid, dt: float) -> bool:
        """
        Advance the timer and move the live platform if a step is due.

        Args:
            grid: Tower whose last row is moved.
            dt: Elapsed seconds since the last tick.

        Returns:
            True if the live row's occupancy changed.
        """
        self.move_timer += dt
        if self.move_timer < self.move_interval:
            return False
        self.move_timer = 0.0

        if grid.live_row is None:
            return False

        width = grid.platform_width
        left = grid.moving_platform_pos

        if self.move_right:
            if left + width < grid.game_width:
                grid.set_cell_active(left, False)
                grid.moving_platform_pos = left + 1
                grid.set_cell_active(left + width, True)
                return True
            self.move_right = False
        else:
            if left > 0:
                grid.set_cell_active(left + width - 1, False)
                grid.moving_platform_pos = left - 1
                grid.set_cell_active(left - 1, True)
                return True
            self.move_right = True

        return False
