import json
import os
import unittest
from unittest.mock import patch

from app import app as flask_app  # noqa: E402
from app import json_to_state, state_to_json  # noqa: E402
from game import Board, Side, TurnState  # noqa: E402


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type="application/json")

    def test_given_index_when_requested_then_plain_text_banner(self):
        r = self.client.get("/")
        self.assertEqual(r.status_code, 200)
        self.assertIn(b"Knucklebones", r.data)
        self.assertIn("text/plain", r.headers.get("Content-Type", ""))

    def test_given_strategies_endpoint_when_requested_then_names_listed(self):
        r = self.client.get("/api/strategies")
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["strategies"], ["min_max", "random"])

    def test_given_new_game_when_posted_then_empty_not_started_state(self):
        r = self._post("/api/new", {})
        self.assertEqual(r.status_code, 200)
        state = r.get_json()["state"]
        self.assertEqual(state["turn"], "not_started")
        self.assertEqual(len(state["cells"]), 18)
        self.assertTrue(all(c is None for c in state["cells"]))
        self.assertEqual(state["scores"], {"red": 0, "blue": 0})
        self.assertEqual(state["turnsPlayed"], 0)

    def test_given_bad_size_when_new_then_400(self):
        r = self._post("/api/new", {"columns": 0})
        self.assertEqual(r.status_code, 400)
        self.assertFalse(r.get_json()["ok"])

    def test_given_oversized_board_when_new_then_400(self):
        for size in ({"columns": 10**6, "rows": 10**6}, {"columns": 10}, {"rows": 10}, {"rows": -1}):
            r = self._post("/api/new", size)
            self.assertEqual(r.status_code, 400)
            self.assertIn("bad board size", r.get_json()["error"])

    def test_given_size_limit_from_env_when_new_then_limit_applied(self):
        with patch.dict(os.environ, {"KNUCKLEBONES_MAX_BOARD": "4"}):
            self.assertEqual(self._post("/api/new", {"columns": 4, "rows": 4}).status_code, 200)
            self.assertEqual(self._post("/api/new", {"columns": 5, "rows": 4}).status_code, 400)

    def test_given_oversized_or_empty_board_when_advancing_then_400(self):
        states = [
            {"columns": 3 * 10**7, "rows": 0, "cells": [], "turn": "red_turn"},
            {"columns": 10**6, "rows": 10**6, "cells": [], "turn": "red_turn"},
            {"columns": 3, "rows": 0, "cells": [], "turn": "red_turn"},
            {"columns": 3, "rows": 3, "cells": [], "turn": "red_turn"},
        ]
        for state in states:
            r = self._post("/api/advance", {"state": state})
            self.assertEqual(r.status_code, 400)
            self.assertIn("bad state", r.get_json()["error"])

    def test_given_new_state_when_advancing_repeatedly_then_game_finishes(self):
        state = self._post("/api/new", {}).get_json()["state"]
        winner_seen = False
        for i in range(200):
            r = self._post("/api/advance", {"state": state, "red": "min_max", "blue": "random", "seed": i})
            self.assertEqual(r.status_code, 200)
            d = r.get_json()
            self.assertTrue(d["ok"])
            state = d["state"]
            if i == 0:
                self.assertIsNone(d["move"])
                self.assertIn(state["turn"], ("red_turn", "blue_turn"))
            if state["turn"] == "finished":
                winner_seen = True
                self.assertIn(d["winner"], ("red", "blue", None))
                break
        self.assertTrue(winner_seen)
        self.assertGreaterEqual(state["turnsPlayed"], 9)

    def test_given_missing_or_bad_state_when_advancing_then_400(self):
        r = self._post("/api/advance", {})
        self.assertEqual(r.status_code, 400)
        bad = {"columns": 3, "rows": 3, "cells": [9] + [None] * 17, "turn": "red_turn"}
        r2 = self._post("/api/advance", {"state": bad})
        self.assertEqual(r2.status_code, 400)
        self.assertIn("bad state", r2.get_json()["error"])
        bad_turn = {"columns": 3, "rows": 3, "cells": [None] * 18, "turn": "purple_turn"}
        self.assertEqual(self._post("/api/advance", {"state": bad_turn}).status_code, 400)

    def test_given_unknown_strategy_when_advancing_then_400(self):
        state = self._post("/api/new", {}).get_json()["state"]
        r = self._post("/api/advance", {"state": state, "red": "oracle"})
        self.assertEqual(r.status_code, 400)

    def test_given_filled_side_to_move_when_advancing_then_400(self):
        cells = [1, 2, 3] * 3 + [None] * 9
        state = {"columns": 3, "rows": 3, "cells": cells, "turn": "red_turn"}
        r = self._post("/api/advance", {"state": state})
        self.assertEqual(r.status_code, 400)
        self.assertIn("no free column", r.get_json()["error"])

    def test_given_seed_when_running_then_deterministic_full_game(self):
        payload = {"red": "min_max", "blue": "random", "seed": 42}
        d1 = self._post("/api/run", payload).get_json()
        d2 = self._post("/api/run", payload).get_json()
        self.assertTrue(d1["ok"])
        self.assertEqual(d1, d2)
        self.assertEqual(d1["state"]["turn"], "finished")
        self.assertEqual(len(d1["history"]), d1["turnsPlayed"])
        self.assertEqual(d1["scores"], d1["state"]["scores"])
        self.assertIn("red:", d1["board"])

    def test_given_small_simulation_when_posted_then_counts_returned(self):
        r = self._post("/api/simulate", {"threads": 2, "games": 5, "seed": 1})
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["total"], 10)
        self.assertEqual(sum(d["wins"].values()), 10)
        self.assertAlmostEqual(sum(d["rates"].values()), 100.0)

    def test_given_oversized_simulation_when_posted_then_400(self):
        with patch.dict(os.environ, {"KNUCKLEBONES_MAX_GAMES": "10"}):
            r = self._post("/api/simulate", {"threads": 2, "games": 6})
        self.assertEqual(r.status_code, 400)
        self.assertIn("too many games", r.get_json()["error"])
        r2 = self._post("/api/simulate", {"threads": 0, "games": 6})
        self.assertEqual(r2.status_code, 400)


class TestStateJson(unittest.TestCase):
    def test_given_board_when_serialised_and_parsed_then_same_position(self):
        board = Board.empty(3, 3)
        board.insert(Side.RED, 0, 5)
        board.insert(Side.BLUE, 2, 1)
        obj = state_to_json(board, TurnState.BLUE_TURN, 2)
        self.assertEqual(obj["scores"], {"red": 5, "blue": 1})
        parsed_board, turn = json_to_state(obj)
        self.assertEqual(parsed_board.cells, board.cells)
        self.assertIs(turn, TurnState.BLUE_TURN)


if __name__ == "__main__":
    unittest.main()
