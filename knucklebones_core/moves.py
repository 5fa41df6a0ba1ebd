from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

from .board import MAX_FACE, MIN_FACE, Board, DieValue, Side


@dataclass(frozen=True)
class MoveRecord:
    """One played turn: who rolled what, where it went and how many dice it bumped."""
    side: Side
    roll: DieValue
    column: int
    bumped: int


def roll_die(rng: random.Random) -> DieValue:
    """Rolls a single fair die."""
    return rng.randint(MIN_FACE, MAX_FACE)


def legal_columns(board: Board, side: Side) -> List[int]:
    """Columns of ``side`` that still have at least one empty slot."""
    return [c for c in range(board.columns) if board.has_space(side, c)]


def score_differential(board: Board, side: Side) -> int:
    """Own total score minus the opponent's total score."""
    return board.total_score(side) - board.total_score(side.opponent())


def apply_move(board: Board, side: Side, column: int, roll: DieValue) -> Board:
    """Applies a placement to a clone of the board and returns the clone."""
    next_board = board.copy()
    next_board.insert(side, column, roll)
    return next_board
