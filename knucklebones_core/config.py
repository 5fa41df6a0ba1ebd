from __future__ import annotations

import os

DEFAULT_THREADS = 10
DEFAULT_GAMES_PER_THREAD = 10000
DEFAULT_MAX_GAMES = 200000
DEFAULT_MAX_BOARD = 9


def _truthy(value: str) -> bool:
    return value.lower() in ('1', 'true', 'yes', 'on')


def debug_enabled() -> bool:
    """Set KNUCKLEBONES_DEBUG=1 to print engine and simulation traces."""
    return _truthy(os.getenv('KNUCKLEBONES_DEBUG', '0'))


def debug(tag: str, message: str) -> None:
    if debug_enabled():
        print(f"[{tag}] {message}")


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def default_threads() -> int:
    return env_int('KNUCKLEBONES_THREADS', DEFAULT_THREADS)


def default_games_per_thread() -> int:
    return env_int('KNUCKLEBONES_GAMES_PER_THREAD', DEFAULT_GAMES_PER_THREAD)


def max_games() -> int:
    return env_int('KNUCKLEBONES_MAX_GAMES', DEFAULT_MAX_GAMES)


def max_board() -> int:
    """Largest column or row count accepted from API clients."""
    return env_int('KNUCKLEBONES_MAX_BOARD', DEFAULT_MAX_BOARD)
