"""
Stats Store
===========

Persists best-score statistics as a small JSON document::

    {"high_score": 12, "games_played": 40}

Loading never fails: a missing or unreadable file yields zeroed stats.
Saving raises to the caller, which decides whether the failure matters.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Union

from stack_game.tower_core.config_loader import GameConfig, get_config

logger = logging.getLogger(__name__)


@dataclass
class GameStats:
    """Persisted per-player record."""
    high_score: int = 0
    games_played: int = 0

    @staticmethod
    def from_dict(data: dict) -> "GameStats":
        """Build from a decoded document; raises on missing or non-integer keys."""
        high_score = data["high_score"]
        games_played = data["games_played"]
        for value in (high_score, games_played):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"stats fields must be integers, got {data!r}")
        return GameStats(high_score=high_score, games_played=games_played)

    def to_dict(self) -> dict:
        return asdict(self)


class StatsStore:
    """Reads and writes GameStats at a fixed path."""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize store.

        Args:
            path: Stats file location. Uses config.stats.path if None.
            config: Game configuration. Uses default if None.
        """
        if path is None:
            if config is None:
                config = get_config()
            path = config.stats.path
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> GameStats:
        """
        Load stats, falling back to defaults.

        A default record is written when the file is absent or unparsable.
        """
        if self._path.exists():
            try:
                with open(self._path, "r") as f:
                    return GameStats.from_dict(json.load(f))
            except (OSError, ValueError, KeyError, TypeError) as e:
                logger.warning("Ignoring unreadable stats file %s: %s", self._path, e)

        stats = GameStats()
        try:
            self.save(stats)
        except OSError as e:
            logger.warning("Could not create stats file %s: %s", self._path, e)
        return stats

    def save(self, stats: GameStats) -> None:
        """
        Write stats to disk.

        Raises:
            OSError: If the file cannot be written.
        """
        with open(self._path, "w") as f:
            json.dump(stats.to_dict(), f, indent=2)
