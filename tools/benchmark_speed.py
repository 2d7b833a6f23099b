"""
Performance Benchmark
=====================

Runs headless sessions with a scripted player and measures tick throughput.

Usage:
    python -m tools.benchmark_speed [--games N] [--policy aligned|random] [--seed S]
"""

from __future__ import annotations

import argparse
import sys
import tempfile
import time
from pathlib import Path
from typing import Optional

import numpy as np

from stack_game.tower_core.config_loader import load_config, GameConfig
from stack_game.tower_core.game_state import InputEvent, Menu, Playing
from stack_game.tower_core.session import GameSession
from stack_game.tower_core.stats_store import StatsStore

FRAME_DT = 1.0 / 60.0


class FrameClock:
    """Simulated monotonic clock advanced by the benchmark loop."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def play_one_game(
    session: GameSession,
    clock: FrameClock,
    rng: np.random.Generator,
    policy: str,
    freeze_prob: float,
    max_ticks: int
) -> int:
    """
    Play a single game from the menu until it returns to the menu.

    Returns:
        Number of ticks simulated.
    """
    session.handle_input(InputEvent.CONFIRM)
    ticks = 0
    while ticks < max_ticks:
        clock.now += FRAME_DT
        session.update(FRAME_DT)
        ticks += 1

        if isinstance(session.state, Menu):
            break
        if not isinstance(session.state, Playing):
            continue

        if policy == "aligned":
            aligned = session.grid.live_span == session.grid.base_span
            if aligned or rng.random() < freeze_prob:
                session.handle_input(InputEvent.FREEZE)
        elif rng.random() < freeze_prob:
            session.handle_input(InputEvent.FREEZE)

    return ticks


def benchmark_sessions(
    num_games: int = 100,
    policy: str = "random",
    freeze_prob: float = 0.05,
    seed: int = 42,
    max_ticks: int = 100_000,
    config: Optional[GameConfig] = None
) -> dict:
    """
    Benchmark headless session throughput.

    Args:
        num_games: Games to play.
        policy: "aligned" freezes when the live span matches the target,
            "random" freezes at random.
        freeze_prob: Per-tick random freeze probability.
        seed: Random seed.
        max_ticks: Per-game tick cap.
        config: Game configuration. Loads default if None.

    Returns:
        Dict with timing and level results.
    """
    if config is None:
        config = load_config()

    rng = np.random.default_rng(seed)
    clock = FrameClock()

    with tempfile.TemporaryDirectory() as tmp:
        store = StatsStore(Path(tmp) / "bench_stats.json")
        session = GameSession(config=config, stats_store=store, clock=clock)

        levels = []
        total_ticks = 0
        start = time.perf_counter()
        for _ in range(num_games):
            total_ticks += play_one_game(session, clock, rng, policy, freeze_prob, max_ticks)
            levels.append(session.level)
        elapsed = time.perf_counter() - start
        high_score = session.stats.high_score

    levels = np.asarray(levels)
    return {
        "policy": policy,
        "num_games": num_games,
        "total_ticks": total_ticks,
        "elapsed_seconds": elapsed,
        "ticks_per_second": total_ticks / elapsed if elapsed > 0 else float("inf"),
        "mean_level": float(levels.mean()) if len(levels) else 0.0,
        "max_level": int(levels.max()) if len(levels) else 0,
        "high_score": high_score,
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark headless stacking sessions")
    parser.add_argument("--games", type=int, default=100, help="Games to play")
    parser.add_argument("--policy", choices=("aligned", "random"), default="random")
    parser.add_argument("--freeze-prob", type=float, default=0.05, help="Per-tick freeze chance")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args()

    results = benchmark_sessions(
        num_games=args.games,
        policy=args.policy,
        freeze_prob=args.freeze_prob,
        seed=args.seed
    )

    print("=" * 50)
    print(f"Policy:         {results['policy']}")
    print(f"Games:          {results['num_games']}")
    print(f"Ticks:          {results['total_ticks']}")
    print(f"Elapsed:        {results['elapsed_seconds']:.3f}s")
    print(f"Ticks/second:   {results['ticks_per_second']:.0f}")
    print(f"Mean level:     {results['mean_level']:.2f}")
    print(f"Max level:      {results['max_level']}")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
