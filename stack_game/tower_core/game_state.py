"""
Game State
==========

Session states and the named input events the core reacts to.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class InputEvent(Enum):
    """Discrete player intents delivered by the front-end."""
    CONFIRM = "confirm"
    OPEN_SETTINGS = "open_settings"
    QUIT = "quit"
    FREEZE = "freeze"
    CANCEL = "cancel"


@dataclass(frozen=True)
class Menu:
    tag = "menu"


@dataclass(frozen=True)
class Playing:
    tag = "playing"


@dataclass(frozen=True)
class GameOver:
    """Game over screen; started_at is a monotonic clock reading."""
    started_at: float
    tag = "game_over"


@dataclass(frozen=True)
class Settings:
    tag = "settings"


GameState = Union[Menu, Playing, GameOver, Settings]
