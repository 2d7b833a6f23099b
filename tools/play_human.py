"""
Human Play Mode
===============

Play the stacking game in a pygame window.

Controls:
    - Enter: Start game (menu)
    - S: Settings (menu)
    - Q: Quit (menu)
    - Space: Drop the moving platform
    - ESC: Back to menu (settings)

Usage:
    python -m tools.play_human [--width WIDTH] [--height HEIGHT] [--fps FPS] [--stats PATH]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from stack_game.tower_core.config_loader import load_config, GameConfig
from stack_game.tower_core.fall_physics import fall_opacity
from stack_game.tower_core.game_state import InputEvent
from stack_game.tower_core.session import GameSession
from stack_game.tower_core.state_snapshot import CellView, SessionSnapshot
from stack_game.tower_core.stats_store import StatsStore

logger = logging.getLogger(__name__)


BLUE = (0, 0, 255)
YELLOW = (255, 255, 0)
GREEN = (0, 255, 0)
RED = (255, 0, 0)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def platform_color(level: int) -> Tuple[int, int, int]:
    """Landed rows alternate blue/yellow by level."""
    return BLUE if level % 2 == 0 else YELLOW


class TowerRenderer:
    """Draws session snapshots; never touches the session itself."""

    def __init__(self):
        pygame.font.init()
        self._font = pygame.font.Font(None, 32)
        self._font_large = pygame.font.Font(None, 64)
        self._font_huge = pygame.font.Font(None, 96)

    def render(self, screen: pygame.Surface, snap: SessionSnapshot) -> None:
        screen.fill(BLACK)
        if snap.state == "menu":
            self._draw_menu(screen, snap)
        elif snap.state == "settings":
            self._draw_settings(screen, snap)
        else:
            self._draw_tower(screen, snap)
            self._draw_level(screen, snap)
            if snap.state == "game_over":
                self._draw_game_over(screen, snap)

    def _draw_text(
        self,
        screen: pygame.Surface,
        text: str,
        pos: Tuple[float, float],
        color=WHITE,
        font: Optional[pygame.font.Font] = None
    ) -> None:
        surf = (font or self._font).render(text, True, color)
        screen.blit(surf, (int(pos[0]), int(pos[1])))

    def _draw_menu(self, screen: pygame.Surface, snap: SessionSnapshot) -> None:
        cx = snap.window_width / 2 - 50
        cy = snap.window_height / 2
        for text, y in (("Start", cy - 60), ("Settings", cy), ("Quit", cy + 60)):
            self._draw_text(screen, text, (cx, y))

        self._draw_text(screen, f"High Score: {snap.high_score}", (cx, cy + 120))
        self._draw_text(screen, f"Games Played: {snap.games_played}", (cx, cy + 150))
        if snap.level > 0:
            self._draw_text(screen, f"Last Level: {snap.level}", (cx, cy + 180))

    def _draw_settings(self, screen: pygame.Surface, snap: SessionSnapshot) -> None:
        self._draw_text(
            screen,
            "Settings (Press Esc to return)",
            (snap.window_width / 2 - 100, snap.window_height / 2)
        )

    def _draw_tower(self, screen: pygame.Surface, snap: SessionSnapshot) -> None:
        block = snap.block_size
        grid_x = (snap.window_width - snap.game_width * block) / 2

        for row_idx, row in enumerate(snap.rows):
            # Base row stays pinned to the bottom; everything above scrolls
            offset = 0.0 if row_idx == 0 else snap.camera_offset_y
            y = snap.window_height - (row_idx + 1) * block + offset
            for col_idx, cell in enumerate(row):
                if not (cell.active or cell.falling):
                    continue
                x = grid_x + col_idx * block
                self._draw_cell(screen, cell, x, y, block, snap.window_height)

    def _draw_cell(
        self,
        screen: pygame.Surface,
        cell: CellView,
        x: float,
        y: float,
        block: float,
        viewport_height: float
    ) -> None:
        size = max(1, int(block))
        if cell.falling:
            alpha = int(255 * fall_opacity(cell.fall_offset, viewport_height))
            if alpha <= 0:
                return
            surf = pygame.Surface((size, size), pygame.SRCALPHA)
            surf.fill((*RED, alpha))
            screen.blit(surf, (int(x), int(y + cell.fall_offset)))
            return

        color = platform_color(cell.level) if cell.landed else GREEN
        pygame.draw.rect(screen, color, pygame.Rect(int(x), int(y), size, size))

    def _draw_level(self, screen: pygame.Surface, snap: SessionSnapshot) -> None:
        self._draw_text(
            screen, f"Level {snap.level}",
            (snap.window_width / 2 - 50, 30),
            font=self._font_large
        )

    def _draw_game_over(self, screen: pygame.Surface, snap: SessionSnapshot) -> None:
        self._draw_text(
            screen, "Game Over!",
            (snap.window_width / 2 - 100, snap.window_height / 2),
            color=RED,
            font=self._font_huge
        )


class HumanPlayer:
    """Window, event pump and frame loop around a GameSession."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        stats_path: Optional[str] = None,
        window_width: Optional[int] = None,
        window_height: Optional[int] = None,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps
        width = window_width or config.window.width
        height = window_height or config.window.height

        self._session = GameSession(
            config=config,
            stats_store=StatsStore(stats_path, config=config),
            window_size=(width, height)
        )

        pygame.init()
        self._screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(config.window.title)
        self._clock = pygame.time.Clock()
        self._renderer = TowerRenderer()
        self._running = True

        # Physical key -> named input event
        self._keymap = {
            pygame.K_RETURN: InputEvent.CONFIRM,
            pygame.K_s: InputEvent.OPEN_SETTINGS,
            pygame.K_q: InputEvent.QUIT,
            pygame.K_SPACE: InputEvent.FREEZE,
            pygame.K_ESCAPE: InputEvent.CANCEL,
        }

    def run(self) -> int:
        """Run the game loop. Returns the high score."""
        while self._running:
            dt = self._clock.tick(self._target_fps) / 1000.0
            self._handle_events()
            if not self._running:
                break
            self._session.update(dt)
            self._renderer.render(self._screen, self._session.snapshot())
            pygame.display.flip()

        pygame.quit()
        return self._session.stats.high_score

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.VIDEORESIZE:
                self._screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self._session.resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN and event.key in self._keymap:
                self._session.handle_input(self._keymap[event.key])
                if self._session.exit_requested:
                    self._running = False


def main():
    parser = argparse.ArgumentParser(description="Play the stacking game")
    parser.add_argument("--width", type=int, default=None, help="Window width (default: config)")
    parser.add_argument("--height", type=int, default=None, help="Window height (default: config)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--stats", type=str, default=None, help="Stats file (default: config)")
    parser.add_argument("--verbose", action="store_true", help="Log state transitions")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        player = HumanPlayer(
            stats_path=args.stats,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps
        )
        high_score = player.run()
        logger.info("High score: %d", high_score)
        return 0
    except ImportError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
