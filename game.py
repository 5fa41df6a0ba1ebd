from __future__ import annotations

# Facade module that re-exports the Knucklebones core API.
# Used by the Flask app and tests; single-responsibility modules live under knucklebones_core/*.

from knucklebones_core.board import Board, Cell, DieValue, Side  # noqa: F401
from knucklebones_core.state import TurnState, side_for_turn, turn_for_side  # noqa: F401
from knucklebones_core.moves import (  # noqa: F401
    MoveRecord,
    apply_move,
    legal_columns,
    roll_die,
    score_differential,
)
from knucklebones_core.ai import (  # noqa: F401
    STRATEGIES,
    Strategy,
    get_strategy,
    strategy_min_max,
    strategy_random,
)
from knucklebones_core.engine import Game  # noqa: F401
from knucklebones_core.simulate import TotalWins, run_games, run_simulation  # noqa: F401


def main() -> None:
    # CLI driver delegated to knucklebones_core.cli
    from knucklebones_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
