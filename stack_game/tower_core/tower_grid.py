"""
Tower Grid
==========

Row storage for the tower plus spawn, landing and shrink logic.

Row 0 is the immovable base. The last row is the live platform that the
oscillation controller moves; every earlier row is resolved. Cut-away cells
stay in their row for the lifetime of the game so they can keep falling on
screen, but they never take part in a landing again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from stack_game.tower_core.config_loader import GameConfig, get_config


@dataclass
class GridBlock:
    """One cell of a row."""
    active: bool = False
    landed: bool = False
    level: int = 0
    falling: bool = False
    fall_offset: float = 0.0

    @property
    def is_solid(self) -> bool:
        """Occupied and still part of the platform (not cut away)."""
        return self.active and not self.falling


Row = List[GridBlock]


@dataclass
class LandingResult:
    """Outcome of freezing the live platform."""
    success: bool
    landed_count: int
    cut_columns: Tuple[int, ...] = field(default_factory=tuple)

    @staticmethod
    def miss(cut_columns: Tuple[int, ...]) -> "LandingResult":
        return LandingResult(False, 0, cut_columns)


class TowerGrid:
    """
    Ordered stack of rows from base to live platform.

    Owns the horizontal platform scalars:

    - platform_position / platform_width: target span for the next landing
      (the previous landed platform, recentered)
    - moving_platform_pos: left edge of the live platform
    - current_row: number of successful landings in this game
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize an empty grid.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._game_width = config.grid.game_width
        self._initial_width = config.grid.platform_blocks
        self._initial_position = config.grid.initial_position

        self.rows: List[Row] = []
        self.platform_width: int = self._initial_width
        self.platform_position: int = self._initial_position
        self.moving_platform_pos: int = self.platform_position
        self.current_row: int = 0

    @property
    def game_width(self) -> int:
        """Columns per row."""
        return self._game_width

    @property
    def row_count(self) -> int:
        """Number of rows including the base."""
        return len(self.rows)

    @property
    def live_row(self) -> Optional[Row]:
        """The most recently spawned row, or None if the grid is empty."""
        if not self.rows:
            return None
        return self.rows[-1]

    @property
    def base_span(self) -> Tuple[int, int]:
        """Target span as inclusive (first, last) columns."""
        return (self.platform_position, self.platform_position + self.platform_width - 1)

    @property
    def live_span(self) -> Tuple[int, int]:
        """Live platform span as inclusive (first, last) columns."""
        return (self.moving_platform_pos, self.moving_platform_pos + self.platform_width - 1)

    def in_bounds(self, column: int) -> bool:
        return 0 <= column < self._game_width

    def _empty_row(self, level: int) -> Row:
        return [GridBlock(level=level) for _ in range(self._game_width)]

    def reset(self) -> None:
        """Clear the tower and rebuild the base plus the first live row."""
        self.rows.clear()
        self.platform_width = self._initial_width
        self.platform_position = self._initial_position
        self.moving_platform_pos = self.platform_position
        self.current_row = 0
        self.add_base_row()
        self.add_new_row(level=0)

    def add_base_row(self) -> Row:
        """Append the fully landed base row at platform_position."""
        row = self._empty_row(level=0)
        for column in range(self.platform_position, self.platform_position + self.platform_width):
            if self.in_bounds(column):
                row[column].active = True
                row[column].landed = True
        self.rows.append(row)
        return row

    def add_new_row(self, level: int) -> Row:
        """
        Append a new live row with the platform at moving_platform_pos.

        Args:
            level: Level tag for the row (colour alternation only).

        Returns:
            The new row.
        """
        row = self._empty_row(level=level)
        for column in range(self.moving_platform_pos, self.moving_platform_pos + self.platform_width):
            if self.in_bounds(column):
                row[column].active = True
        self.rows.append(row)
        return row

    def set_cell_active(self, column: int, active: bool) -> None:
        """
        Toggle occupancy of a live-row cell.

        Out-of-range columns are an internal logic error; with assertions
        disabled the write is dropped.
        """
        assert self.in_bounds(column), f"column {column} outside [0, {self._game_width})"
        row = self.live_row
        if row is None or not self.in_bounds(column):
            return
        row[column].active = active

    def check_landing(self) -> LandingResult:
        """
        Freeze the live row against the target span.

        Cells outside the span start falling; cells inside land. On success
        the next platform takes the landed width and is recentered.

        Returns:
            LandingResult with success False on a total miss.
        """
        row = self.live_row
        if row is None:
            return LandingResult.miss(())

        span_start, span_end = self.base_span

        cut = []
        for column, block in enumerate(row):
            if block.active and not block.landed and not block.falling:
                if column < span_start or column > span_end:
                    block.falling = True
                    block.fall_offset = 0.0
                    cut.append(column)

        landed = 0
        for column in range(span_start, span_end + 1):
            if self.in_bounds(column) and row[column].is_solid:
                row[column].landed = True
                landed += 1

        if landed == 0:
            return LandingResult.miss(tuple(cut))

        self.platform_width = landed
        self.platform_position = (self._game_width - self.platform_width) // 2
        self.moving_platform_pos = self.platform_position
        self.current_row += 1
        return LandingResult(True, landed, tuple(cut))

    def iter_falling(self):
        """Yield every falling block in the tower."""
        for row in self.rows:
            for block in row:
                if block.falling:
                    yield block
