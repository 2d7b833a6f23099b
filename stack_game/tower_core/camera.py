"""
Camera Policy
=============

Vertical scroll that keeps the live row inside the visible band as the
tower grows. The offset is added to world Y coordinates when drawing and
only ever increases.
"""

from __future__ import annotations

from typing import Optional

from stack_game.tower_core.config_loader import GameConfig, get_config


class CameraPolicy:
    """
    Tracks camera_offset_y.

    World Y of the live row's top edge is
    ``viewport_height - row_count * block_size`` (base row sits at the
    bottom). Its screen Y is that plus the offset.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._band_fraction = config.camera.band_fraction
        self._min_level = config.camera.min_level
        self._min_rows = config.camera.min_rows

        self.offset_y: float = 0.0

    def reset(self) -> None:
        self.offset_y = 0.0

    def is_enabled(self, row_count: int, level: int) -> bool:
        """Scrolling starts once the tower is tall enough and past min_level."""
        return row_count >= self._min_rows and level >= self._min_level

    @staticmethod
    def live_row_y(row_count: int, block_size: float, viewport_height: float) -> float:
        """World Y of the top edge of the live row."""
        return viewport_height - row_count * block_size

    def update(
        self,
        row_count: int,
        block_size: float,
        viewport_height: float,
        level: int,
        active: bool = True
    ) -> float:
        """
        Recompute the offset for this frame.

        Args:
            row_count: Rows in the tower, base included.
            block_size: Block size in pixels.
            viewport_height: Viewport height in pixels.
            level: Current level.
            active: False outside Playing / GameOver.

        Returns:
            The (possibly unchanged) offset.
        """
        if not active or not self.is_enabled(row_count, level):
            return self.offset_y

        world_y = self.live_row_y(row_count, block_size, viewport_height)
        band_y = viewport_height * self._band_fraction
        if world_y + self.offset_y < band_y:
            self.offset_y = max(self.offset_y, band_y - world_y)
        return self.offset_y
