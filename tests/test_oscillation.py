"""
Tests for live platform oscillation.
"""

import pytest

from stack_game.tower_core.config_loader import load_config
from stack_game.tower_core.oscillation import OscillationController
from stack_game.tower_core.tower_grid import TowerGrid


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def grid(config):
    g = TowerGrid(config)
    g.reset()
    return g


@pytest.fixture
def controller(config):
    return OscillationController(config)


def live_columns(grid):
    return [i for i, block in enumerate(grid.live_row) if block.active]


class TestStepping:
    """Test the timer-driven single-column steps."""

    def test_no_step_before_interval(self, grid, controller):
        """Time below the interval accumulates without moving."""
        moved = controller.update_movement(grid, controller.move_interval / 2)
        assert not moved
        assert grid.moving_platform_pos == 5

    def test_step_when_interval_reached(self, grid, controller):
        """Reaching the interval moves one column right and resets the timer."""
        moved = controller.update_movement(grid, controller.move_interval)
        assert moved
        assert grid.moving_platform_pos == 6
        assert live_columns(grid) == [6, 7, 8, 9, 10]
        assert controller.move_timer == 0.0

    def test_accumulates_across_ticks(self, grid, controller):
        """Several short ticks add up to one step."""
        dt = controller.move_interval / 4
        results = [controller.update_movement(grid, dt * 1.01) for _ in range(4)]
        assert results == [False, False, False, True]

    def test_only_live_row_changes(self, grid, controller):
        """Earlier rows are untouched by movement."""
        base_before = [block.active for block in grid.rows[0]]
        for _ in range(7):
            controller.update_movement(grid, controller.move_interval)
        assert [block.active for block in grid.rows[0]] == base_before

    def test_occupancy_matches_width(self, grid, controller):
        """The live row always holds exactly platform_width active cells."""
        for _ in range(40):
            controller.update_movement(grid, controller.move_interval)
            assert len(live_columns(grid)) == grid.platform_width


class TestBounds:
    """Test bouncing off the grid edges."""

    def test_reverses_at_right_edge(self, grid, controller):
        """At the right edge the direction flips without stepping out."""
        for _ in range(5):
            controller.update_movement(grid, controller.move_interval)
        assert grid.live_span == (10, 14)

        moved = controller.update_movement(grid, controller.move_interval)
        assert not moved
        assert not controller.move_right
        assert grid.live_span == (10, 14)

        controller.update_movement(grid, controller.move_interval)
        assert grid.live_span == (9, 13)

    def test_reverses_at_left_edge(self, grid, controller):
        """At column 0 the direction flips back to the right."""
        controller.move_right = False
        for _ in range(5):
            controller.update_movement(grid, controller.move_interval)
        assert grid.live_span == (0, 4)

        controller.update_movement(grid, controller.move_interval)
        assert controller.move_right
        assert grid.live_span == (0, 4)

    @pytest.mark.parametrize("width", [1, 2, 3, 5])
    def test_span_stays_in_range(self, grid, controller, width):
        """Over many ticks the live span never leaves [0, game_width)."""
        grid.rows.clear()
        grid.platform_width = width
        grid.platform_position = (grid.game_width - width) // 2
        grid.moving_platform_pos = grid.platform_position
        grid.add_base_row()
        grid.add_new_row(level=0)

        for _ in range(200):
            controller.update_movement(grid, controller.move_interval)
            first, last = grid.live_span
            assert 0 <= first <= last < grid.game_width
            assert live_columns(grid) == list(range(first, last + 1))


class TestSpeed:
    """Test interval shrink with level."""

    def test_speed_up_is_geometric(self, controller, config):
        """N speed-ups give MOVE_INTERVAL * SPEED_INCREASE ** N."""
        previous = controller.move_interval
        for n in range(1, 21):
            interval = controller.speed_up()
            assert interval < previous
            assert interval == pytest.approx(
                config.timing.move_interval * config.timing.speed_increase ** n
            )
            previous = interval

    def test_reset_restores_interval(self, controller, config):
        """Reset returns to the level-0 interval."""
        controller.speed_up()
        controller.move_timer = 0.1
        controller.reset()
        assert controller.move_interval == config.timing.move_interval
        assert controller.move_timer == 0.0
