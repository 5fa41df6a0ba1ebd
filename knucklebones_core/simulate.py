from __future__ import annotations

import random
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, Optional

from .ai import Strategy, strategy_min_max, strategy_random
from .config import debug
from .engine import Game


@dataclass
class TotalWins:
    """Win/tie counters for a batch of games, combined with ``+``."""
    red_wins: int = 0
    blue_wins: int = 0
    ties: int = 0

    def __add__(self, other: 'TotalWins') -> 'TotalWins':
        return TotalWins(
            red_wins=self.red_wins + other.red_wins,
            blue_wins=self.blue_wins + other.blue_wins,
            ties=self.ties + other.ties,
        )

    @property
    def total(self) -> int:
        return self.red_wins + self.blue_wins + self.ties

    def record(self, red_score: int, blue_score: int) -> None:
        if red_score > blue_score:
            self.red_wins += 1
        elif red_score < blue_score:
            self.blue_wins += 1
        else:
            self.ties += 1

    def rates(self) -> Dict[str, float]:
        """Percentages of the total; all zero for an empty tally."""
        total = self.total
        if total == 0:
            return {"red": 0.0, "blue": 0.0, "ties": 0.0}
        return {
            "red": self.red_wins / total * 100.0,
            "blue": self.blue_wins / total * 100.0,
            "ties": self.ties / total * 100.0,
        }

    def summary(self) -> str:
        r = self.rates()
        return (
            f"red wins: {self.red_wins} ({r['red']:.2f}%),\n"
            f"blue win: {self.blue_wins} ({r['blue']:.2f}%),\n"
            f"ties: {self.ties} ({r['ties']:.2f}%)"
        )


def run_games(
    times: int,
    strategy_red: Strategy = strategy_min_max,
    strategy_blue: Strategy = strategy_random,
    rng: Optional[random.Random] = None,
) -> TotalWins:
    """Plays ``times`` games sequentially, sharing one random source."""
    rng = rng if rng is not None else random.Random()
    result = TotalWins()
    for _ in range(times):
        red, blue = Game(strategy_red, strategy_blue, rng).run()
        result.record(red, blue)
    return result


def run_simulation(
    threads: int,
    games_per_thread: int,
    strategy_red: Strategy = strategy_min_max,
    strategy_blue: Strategy = strategy_random,
    seed: Optional[int] = None,
) -> TotalWins:
    """
    Spreads ``threads * games_per_thread`` games over a thread pool.

    Each worker gets its own random source (``seed + i`` when seeded) and its own
    counters; the tallies are summed once every worker is done.
    """
    if threads < 1:
        raise ValueError(f"threads must be >= 1, got {threads}")
    if games_per_thread < 0:
        raise ValueError(f"games_per_thread must be >= 0, got {games_per_thread}")

    t0 = time.time()
    result = TotalWins()
    with ThreadPoolExecutor(max_workers=threads) as executor:
        futures = [
            executor.submit(
                run_games,
                games_per_thread,
                strategy_red,
                strategy_blue,
                random.Random(seed + i if seed is not None else None),
            )
            for i in range(threads)
        ]
        for future in as_completed(futures):
            result = result + future.result()
    debug("sim", f"{result.total} games on {threads} threads in {time.time() - t0:.2f}s")
    return result
