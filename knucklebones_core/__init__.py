"""
Knucklebones core Python package.

This package contains the game engine for the two-sided dice placement game,
split into small single-responsibility modules:
- board.py: Board, Side, DieValue
- state.py: TurnState and turn/side helpers
- moves.py: rolling, legal columns, score differential
- ai.py: placement strategies (random, min_max)
- engine.py: Game turn state machine
- simulate.py: threaded win-rate simulation
- cli.py: command line driver
"""
