from __future__ import annotations

import random
from typing import Callable, List, Optional, Tuple

from .ai import Strategy
from .board import Board, Side
from .config import debug
from .moves import MoveRecord, roll_die
from .state import TurnState, side_for_turn, turn_for_side

_STATUS_TEXT = {
    TurnState.NOT_STARTED: "The game is yet to start.",
    TurnState.RED_TURN: "Red to go.",
    TurnState.BLUE_TURN: "Blue to go.",
    TurnState.FINISHED: "Game is finished",
}


class Game:
    """
    One game: a board, the turn state machine and a fixed strategy per side.

    The random source drives the coin flip, the die rolls and the strategies'
    random choices. Pass a seeded ``random.Random`` (or ``seed``) to reproduce a game.
    """

    def __init__(
        self,
        strategy_red: Strategy,
        strategy_blue: Strategy,
        rng: Optional[random.Random] = None,
        *,
        seed: Optional[int] = None,
        columns: int = 3,
        rows: int = 3,
    ) -> None:
        self._board = Board.empty(columns, rows)
        self._state = TurnState.NOT_STARTED
        self._strategies = {Side.RED: strategy_red, Side.BLUE: strategy_blue}
        self._rng = rng if rng is not None else random.Random(seed)
        self.history: List[MoveRecord] = []

    @classmethod
    def from_position(
        cls,
        board: Board,
        state: TurnState,
        strategy_red: Strategy,
        strategy_blue: Strategy,
        rng: Optional[random.Random] = None,
    ) -> 'Game':
        """Resumes a game from an existing board and turn state."""
        game = cls(strategy_red, strategy_blue, rng, columns=board.columns, rows=board.rows)
        game._board = board.copy()
        game._state = state
        return game

    @property
    def board(self) -> Board:
        return self._board

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def turns_played(self) -> int:
        return len(self.history)

    def is_finished(self) -> bool:
        return self._state is TurnState.FINISHED

    def advance(self) -> Optional[MoveRecord]:
        """Performs exactly one transition. Returns the move played, if any."""
        if self._state is TurnState.NOT_STARTED:
            self._state = TurnState.RED_TURN if self._rng.random() < 0.5 else TurnState.BLUE_TURN
            debug("game", f"coin toss: {side_for_turn(self._state).value} starts")
            return None
        if self._state is TurnState.FINISHED:
            return None

        side = side_for_turn(self._state)
        roll = roll_die(self._rng)
        column = self._strategies[side](self._board, self._state, roll, self._rng)
        bumped = self._board.insert(side, column, roll)
        move = MoveRecord(side=side, roll=roll, column=column, bumped=bumped)
        self.history.append(move)
        debug("game", f"{side.value} rolled {roll} -> column {column}, bumped {bumped}")

        if self._board.is_side_filled(side):
            self._state = TurnState.FINISHED
        else:
            self._state = turn_for_side(side.opponent())
        return move

    def scores(self) -> Tuple[int, int]:
        return self._board.total_score(Side.RED), self._board.total_score(Side.BLUE)

    def winner(self) -> Optional[Side]:
        """The side with the higher total, or None on a tie."""
        red, blue = self.scores()
        if red == blue:
            return None
        return Side.RED if red > blue else Side.BLUE

    def run(self) -> Tuple[int, int]:
        """Advances until the game is finished and returns (red score, blue score)."""
        while self._state is not TurnState.FINISHED:
            self.advance()
        return self.scores()

    def run_and_print(self, out: Callable[[str], None] = print) -> Tuple[int, int]:
        while self._state is not TurnState.FINISHED:
            self.advance()
            out(str(self))
        red, blue = self.scores()
        out(f"Red scored: {red}")
        out(f"Blue scored: {blue}")
        return red, blue

    def __str__(self) -> str:
        return f"{_STATUS_TEXT[self._state]}\n------\n{self._board.pretty()}"
