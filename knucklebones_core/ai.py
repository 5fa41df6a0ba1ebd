from __future__ import annotations

import random
from typing import Callable, Dict, List

from .board import Board, DieValue, Side
from .moves import apply_move, legal_columns, score_differential
from .state import TurnState, side_for_turn

# (board, turn state, roll, random source) -> column index
Strategy = Callable[[Board, TurnState, DieValue, random.Random], int]


def _legal_for_turn(board: Board, state: TurnState) -> List[int]:
    side = side_for_turn(state)
    valid = legal_columns(board, side)
    if not valid:
        raise RuntimeError(f"{side.value} has no column with free space")
    return valid


def strategy_random(board: Board, state: TurnState, roll: DieValue, rng: random.Random) -> int:
    """Picks any column with free space, uniformly at random."""
    return rng.choice(_legal_for_turn(board, state))


def strategy_min_max(board: Board, state: TurnState, roll: DieValue, rng: random.Random) -> int:
    """
    Greedy one-ply lookahead over the score differential.

    A random legal column is chosen up front. Each legal column is tried on a
    clone of the board and replaces the current pick only when its improvement in
    (own - opponent) score is strictly greater than the best so far. The best
    starts at the roll value, so a move has to gain more than the die shows to
    override the random pick.
    """
    team: Side = side_for_turn(state)
    valid = _legal_for_turn(board, state)
    best_answer = rng.choice(valid)
    best_improvement = roll
    current_diff = score_differential(board, team)

    for answer in valid:
        future_diff = score_differential(apply_move(board, team, answer, roll), team)
        improvement = future_diff - current_diff
        if improvement > best_improvement:
            best_improvement = improvement
            best_answer = answer

    return best_answer


STRATEGIES: Dict[str, Strategy] = {
    "random": strategy_random,
    "min_max": strategy_min_max,
}


def get_strategy(name: str) -> Strategy:
    try:
        return STRATEGIES[name]
    except KeyError:
        raise ValueError(f"unknown strategy {name!r}; expected one of {sorted(STRATEGIES)}") from None
