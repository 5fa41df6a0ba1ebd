from __future__ import annotations

import argparse
from typing import List, Optional

from .ai import STRATEGIES, get_strategy
from .config import default_games_per_thread, default_threads
from .engine import Game
from .simulate import run_simulation


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Knucklebones strategy simulator')
    parser.add_argument('--threads', type=_positive_int, default=None,
                        help='Worker threads (default: KNUCKLEBONES_THREADS or 10)')
    parser.add_argument('--games', type=_non_negative_int, default=None,
                        help='Games per thread (default: KNUCKLEBONES_GAMES_PER_THREAD or 10000)')
    parser.add_argument('--red', choices=sorted(STRATEGIES), default='min_max', help='Strategy for red')
    parser.add_argument('--blue', choices=sorted(STRATEGIES), default='random', help='Strategy for blue')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for reproducible runs')
    parser.add_argument('--play', action='store_true', help='Play a single game and print every step')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    red = get_strategy(args.red)
    blue = get_strategy(args.blue)

    if args.play:
        Game(red, blue, seed=args.seed).run_and_print()
        return

    threads = args.threads if args.threads is not None else default_threads()
    games = args.games if args.games is not None else default_games_per_thread()
    print(f"Running {threads * games} games ({args.red} as red vs {args.blue} as blue)")
    result = run_simulation(threads, games, red, blue, seed=args.seed)
    print(result.summary())


if __name__ == '__main__':
    main()
