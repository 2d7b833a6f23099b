"""
State Snapshot
==============

Read-only view of a session for renderers and tools. Cells are copied into
frozen records so nothing handed out can mutate the live grid. The grid can
also be packed into fixed-width numpy arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


@dataclass(frozen=True)
class CellView:
    """Immutable copy of a GridBlock."""
    active: bool
    landed: bool
    falling: bool
    fall_offset: float
    level: int


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Everything a renderer needs for one frame.

    Spans are inclusive (first, last) column pairs.
    """
    state: str
    rows: Tuple[Tuple[CellView, ...], ...]
    base_span: Tuple[int, int]
    live_span: Tuple[int, int]
    platform_width: int
    level: int
    camera_offset_y: float
    high_score: int
    games_played: int
    game_width: int
    window_width: float
    window_height: float
    block_size: float

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """
        Pack the grid into (rows, game_width) arrays.

        Keys: active, landed, falling (bool), fall_offset (float32),
        level (int32).
        """
        shape = (len(self.rows), self.game_width)
        active = np.zeros(shape, dtype=bool)
        landed = np.zeros(shape, dtype=bool)
        falling = np.zeros(shape, dtype=bool)
        fall_offset = np.zeros(shape, dtype=np.float32)
        level = np.zeros(shape, dtype=np.int32)

        for r, row in enumerate(self.rows):
            for c, cell in enumerate(row):
                active[r, c] = cell.active
                landed[r, c] = cell.landed
                falling[r, c] = cell.falling
                fall_offset[r, c] = cell.fall_offset
                level[r, c] = cell.level

        return {
            "active": active,
            "landed": landed,
            "falling": falling,
            "fall_offset": fall_offset,
            "level": level,
        }
