"""
Fall Physics
============

Cut-away overhang drops at a constant speed and fades out. The blocks are
never removed from the grid; they are purely visual once cut.
"""

from __future__ import annotations

from typing import Optional

from stack_game.tower_core.config_loader import GameConfig, get_config
from stack_game.tower_core.tower_grid import TowerGrid


def fall_opacity(fall_offset: float, viewport_height: float) -> float:
    """
    Render opacity of a falling block.

    Fully opaque at offset 0, transparent once it has dropped half the
    viewport height.
    """
    if viewport_height <= 0:
        return 0.0
    return max(0.0, 1.0 - fall_offset / (viewport_height / 2.0))


class FallPhysics:
    """Advances fall_offset of every falling block."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._fall_speed = config.fall.fall_speed

    @property
    def fall_speed(self) -> float:
        """Pixels per second."""
        return self._fall_speed

    def advance(self, grid: TowerGrid, dt: float) -> int:
        """
        Move every falling block down by fall_speed * dt.

        Args:
            grid: Tower to update.
            dt: Elapsed seconds since the last tick.

        Returns:
            Number of blocks advanced.
        """
        step = self._fall_speed * dt
        count = 0
        for block in grid.iter_falling():
            block.fall_offset += step
            count += 1
        return count
