"""
Tests for stats persistence.
"""

import json

import pytest

from stack_game.tower_core.stats_store import GameStats, StatsStore


@pytest.fixture
def stats_path(tmp_path):
    return tmp_path / "game_stats.json"


class TestLoad:
    """Test loading with fallbacks."""

    def test_missing_file_gives_defaults_and_creates_it(self, stats_path):
        """First run writes a zeroed record."""
        stats = StatsStore(stats_path).load()
        assert stats == GameStats(0, 0)
        assert json.loads(stats_path.read_text()) == {"high_score": 0, "games_played": 0}

    def test_loads_existing_record(self, stats_path):
        stats_path.write_text(json.dumps({"games_played": 7, "high_score": 12}))
        assert StatsStore(stats_path).load() == GameStats(high_score=12, games_played=7)

    @pytest.mark.parametrize("content", [
        "not json",
        "[1, 2]",
        '{"high_score": 3}',
        '{"high_score": "3", "games_played": 1}',
        '{"high_score": true, "games_played": 1}',
        '{"high_score": 2, "games_played": false}',
    ])
    def test_unparsable_file_falls_back(self, stats_path, content):
        """Bad documents never raise; they yield zeroed stats."""
        stats_path.write_text(content)
        assert StatsStore(stats_path).load() == GameStats()

    def test_unreadable_path_falls_back(self, tmp_path):
        """A directory in place of the file still loads defaults."""
        assert StatsStore(tmp_path).load() == GameStats()


class TestSave:
    """Test writing."""

    def test_save_uses_exact_keys(self, stats_path):
        StatsStore(stats_path).save(GameStats(high_score=4, games_played=9))
        assert json.loads(stats_path.read_text()) == {"high_score": 4, "games_played": 9}

    def test_save_then_load(self, stats_path):
        store = StatsStore(stats_path)
        store.save(GameStats(high_score=21, games_played=3))
        assert store.load() == GameStats(high_score=21, games_played=3)

    def test_save_error_propagates(self, tmp_path):
        """The store raises; callers decide to log and continue."""
        with pytest.raises(OSError):
            StatsStore(tmp_path).save(GameStats())
