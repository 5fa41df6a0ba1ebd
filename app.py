from __future__ import annotations

import os
import random
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Board,
    Game,
    MoveRecord,
    STRATEGIES,
    Side,
    TurnState,
    get_strategy,
    legal_columns,
    run_simulation,
    side_for_turn,
)
from knucklebones_core.board import MAX_FACE, MIN_FACE
from knucklebones_core.config import debug, max_board, max_games

app = Flask(__name__)


def state_to_json(board: Board, turn: TurnState, turns_played: Optional[int] = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "columns": int(board.columns),
        "rows": int(board.rows),
        "cells": list(board.cells),
        "turn": turn.value,
        "scores": {"red": board.total_score(Side.RED), "blue": board.total_score(Side.BLUE)},
    }
    if turns_played is not None:
        out["turnsPlayed"] = int(turns_played)
    return out


def board_size(columns: Any, rows: Any) -> Tuple[int, int]:
    """Parses and bounds a client supplied board size."""
    columns, rows = int(columns), int(rows)
    limit = max_board()
    if not (1 <= columns <= limit and 1 <= rows <= limit):
        raise ValueError(f"columns and rows must be in 1..{limit}, got {columns}x{rows}")
    return columns, rows


def json_to_state(obj: Dict[str, Any]) -> Tuple[Board, TurnState]:
    columns, rows = board_size(obj["columns"], obj["rows"])
    cells = []
    for v in obj["cells"]:
        if v is None:
            cells.append(None)
            continue
        v = int(v)
        if not MIN_FACE <= v <= MAX_FACE:
            raise ValueError(f"cell value out of range: {v}")
        cells.append(v)
    board = Board(columns=columns, rows=rows, cells=cells)
    turn = TurnState(str(obj["turn"]))
    return board, turn


def move_to_json(move: Optional[MoveRecord]) -> Optional[Dict[str, Any]]:
    if move is None:
        return None
    return {"side": move.side.value, "roll": move.roll, "column": move.column, "bumped": move.bumped}


def _winner_name(game: Game) -> Optional[str]:
    w = game.winner()
    return w.value if w is not None else None


def _strategies_from(body: Dict[str, Any]):
    return get_strategy(str(body.get("red", "min_max"))), get_strategy(str(body.get("blue", "random")))


def _rng_from(body: Dict[str, Any]) -> random.Random:
    seed = body.get("seed", None)
    return random.Random(int(seed) if seed is not None else None)


@app.get("/")
def index() -> Any:
    return "Knucklebones engine API. See /api/strategies.\n", 200, {"Content-Type": "text/plain; charset=utf-8"}


@app.get("/api/strategies")
def api_strategies() -> Any:
    return jsonify({"ok": True, "strategies": sorted(STRATEGIES)})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        columns, rows = board_size(body.get("columns", 3), body.get("rows", 3))
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad board size: {e}"}), 400
    board = Board.empty(columns, rows)
    return jsonify({"ok": True, "state": state_to_json(board, TurnState.NOT_STARTED, 0)})


@app.post("/api/advance")
def api_advance() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return jsonify({"ok": False, "error": "state required"}), 400
    try:
        board, turn = json_to_state(s_in)
        red, blue = _strategies_from(body)
        rng = _rng_from(body)
        played = int(s_in.get("turnsPlayed", 0))
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad state: {e}"}), 400

    if turn.is_active() and not legal_columns(board, side_for_turn(turn)):
        return jsonify({"ok": False, "error": "side to move has no free column"}), 400

    game = Game.from_position(board, turn, red, blue, rng)
    move = game.advance()
    if move is not None:
        played += 1
    return jsonify({
        "ok": True,
        "state": state_to_json(game.board, game.state, played),
        "move": move_to_json(move),
        "winner": _winner_name(game) if game.is_finished() else None,
    })


@app.post("/api/run")
def api_run() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        red, blue = _strategies_from(body)
        rng = _rng_from(body)
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    game = Game(red, blue, rng)
    red_score, blue_score = game.run()
    debug("api", f"run finished after {game.turns_played} turns: {red_score}-{blue_score}")
    return jsonify({
        "ok": True,
        "scores": {"red": red_score, "blue": blue_score},
        "winner": _winner_name(game),
        "turnsPlayed": game.turns_played,
        "history": [move_to_json(m) for m in game.history],
        "board": game.board.pretty(),
        "state": state_to_json(game.board, game.state, game.turns_played),
    })


@app.post("/api/simulate")
def api_simulate() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        threads = int(body.get("threads", 1))
        games = int(body.get("games", 100))
        red, blue = _strategies_from(body)
        seed = body.get("seed", None)
        seed = int(seed) if seed is not None else None
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    if threads < 1 or games < 0:
        return jsonify({"ok": False, "error": "threads must be >= 1 and games >= 0"}), 400
    cap = max_games()
    if threads * games > cap:
        return jsonify({"ok": False, "error": f"too many games requested (max {cap})"}), 400

    result = run_simulation(threads, games, red, blue, seed=seed)
    return jsonify({
        "ok": True,
        "total": result.total,
        "wins": {"red": result.red_wins, "blue": result.blue_wins, "ties": result.ties},
        "rates": result.rates(),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug_flag = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug_flag)
