"""
Tests for tower grid rows and landing.
"""

import dataclasses

import pytest

from stack_game.tower_core.config_loader import load_config
from stack_game.tower_core.tower_grid import TowerGrid


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def grid(config):
    g = TowerGrid(config)
    g.reset()
    return g


def place_live_platform(grid, target_start, width, moving_start):
    """Rebuild the grid with a chosen target span and live platform."""
    grid.rows.clear()
    grid.platform_width = width
    grid.platform_position = target_start
    grid.add_base_row()
    grid.moving_platform_pos = moving_start
    grid.add_new_row(level=1)


def active_columns(row):
    return [i for i, block in enumerate(row) if block.active]


class TestRowConstruction:
    """Test base and live row spawning."""

    def test_reset_builds_base_and_live_row(self, grid, config):
        """Reset leaves exactly the base and one live row."""
        assert grid.row_count == 2
        assert grid.platform_width == config.grid.platform_blocks
        assert grid.platform_position == (config.grid.game_width - config.grid.platform_blocks) // 2
        assert grid.moving_platform_pos == grid.platform_position
        assert grid.current_row == 0

    def test_rows_have_game_width_cells(self, grid, config):
        """Every row holds one block per column."""
        for row in grid.rows:
            assert len(row) == config.grid.game_width

    def test_base_row_fully_landed(self, grid):
        """Base cells are active and landed at the centered span."""
        base = grid.rows[0]
        assert active_columns(base) == [5, 6, 7, 8, 9]
        for column in active_columns(base):
            assert base[column].landed

    def test_live_row_not_landed(self, grid):
        """New live row is active but not landed."""
        live = grid.live_row
        assert active_columns(live) == [5, 6, 7, 8, 9]
        assert not any(block.landed for block in live)
        assert not any(block.falling for block in live)

    def test_add_new_row_tags_level(self, grid):
        """The level tag is stored on every cell of the row."""
        row = grid.add_new_row(level=3)
        assert all(block.level == 3 for block in row)

    def test_start_position_from_config(self, config):
        """The starting platform sits at the configured centered position."""
        narrow = dataclasses.replace(
            config, grid=dataclasses.replace(config.grid, game_width=10, platform_blocks=3)
        )
        g = TowerGrid(narrow)
        g.reset()
        assert narrow.grid.initial_position == 3
        assert g.platform_position == 3
        assert g.base_span == (3, 5)
        assert g.live_span == (3, 5)

    def test_reset_clears_previous_game(self, grid):
        """Reset discards rows and restores the starting width."""
        place_live_platform(grid, 6, 3, 7)
        grid.add_new_row(level=2)
        grid.reset()
        assert grid.row_count == 2
        assert grid.platform_width == 5


class TestLanding:
    """Test the overlap / shrink algorithm."""

    def test_partial_overlap_shrinks_and_recenters(self, grid):
        """Live [7..11] over target [5..9] leaves width 3 centered at 6."""
        place_live_platform(grid, target_start=5, width=5, moving_start=7)
        live = grid.live_row

        result = grid.check_landing()

        assert result.success
        assert result.landed_count == 3
        assert grid.platform_width == 3
        assert grid.platform_position == 6
        assert grid.moving_platform_pos == 6
        assert grid.current_row == 1
        for column in (7, 8, 9):
            assert live[column].landed
            assert not live[column].falling
        for column in (10, 11):
            assert live[column].falling
            assert live[column].fall_offset == 0.0
            assert not live[column].landed
        assert result.cut_columns == (10, 11)

    def test_total_miss_reports_failure(self, grid):
        """Live [12..14] against target [6..8] is a miss and adds no row."""
        place_live_platform(grid, target_start=6, width=3, moving_start=12)
        rows_before = grid.row_count

        result = grid.check_landing()

        assert not result.success
        assert result.landed_count == 0
        assert grid.row_count == rows_before
        assert grid.platform_width == 3
        assert all(grid.live_row[c].falling for c in (12, 13, 14))

    def test_perfect_alignment_is_fixed_point(self, grid):
        """An exactly aligned drop keeps width and position."""
        width_before = grid.platform_width
        position_before = grid.platform_position

        result = grid.check_landing()

        assert result.success
        assert result.cut_columns == ()
        assert grid.platform_width == width_before
        assert grid.platform_position == position_before

    @pytest.mark.parametrize("moving_start", range(0, 11))
    def test_landed_width_equals_overlap(self, grid, moving_start):
        """New width is exactly the number of live cells inside the target span."""
        place_live_platform(grid, target_start=5, width=5, moving_start=moving_start)
        overlap = len(set(range(5, 10)) & set(range(moving_start, moving_start + 5)))

        result = grid.check_landing()

        assert result.success == (overlap > 0)
        if overlap > 0:
            assert grid.platform_width == overlap
            assert grid.platform_position == (grid.game_width - overlap) // 2

    def test_landed_and_falling_exclusive(self, grid):
        """No cell is both landed and falling after a landing."""
        place_live_platform(grid, target_start=5, width=5, moving_start=3)
        grid.check_landing()
        for row in grid.rows:
            for block in row:
                assert not (block.landed and block.falling)

    def test_falling_cells_ignored_by_later_landing(self, grid):
        """A second landing call does not revive cut cells."""
        place_live_platform(grid, target_start=5, width=5, moving_start=8)
        grid.check_landing()
        live = grid.live_row
        # Target span is now [6..7]; cut cells at 10..12 stay falling
        grid.check_landing()
        for column in (10, 11, 12):
            assert live[column].falling
            assert not live[column].landed
