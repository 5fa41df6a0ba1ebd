from __future__ import annotations

from enum import Enum

from .board import Side


class TurnState(Enum):
    """Which side is expected to move, or whether the game has not started / has ended."""

    NOT_STARTED = "not_started"
    RED_TURN = "red_turn"
    BLUE_TURN = "blue_turn"
    FINISHED = "finished"

    def is_active(self) -> bool:
        return self in (TurnState.RED_TURN, TurnState.BLUE_TURN)


def side_for_turn(state: TurnState) -> Side:
    """Maps an active turn state to the acting side."""
    if state is TurnState.RED_TURN:
        return Side.RED
    if state is TurnState.BLUE_TURN:
        return Side.BLUE
    raise ValueError(f"cannot take a turn in this game state: {state.value}")


def turn_for_side(side: Side) -> TurnState:
    return TurnState.RED_TURN if side is Side.RED else TurnState.BLUE_TURN
