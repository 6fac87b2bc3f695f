from __future__ import annotations

import sys
import unittest
from pathlib import Path
from unittest.mock import patch


BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))


from fastapi.testclient import TestClient  # noqa: E402

from checkers.board import Board  # noqa: E402
from checkers.events import PieceMoved  # noqa: E402
from checkers.pieces import Piece, Side  # noqa: E402
from checkers.player import GameMode  # noqa: E402
from server.app import create_app  # noqa: E402
from server.config import Settings  # noqa: E402
from server.schemas import AIMoveRequest, MoveRequest, NewGameRequest, SelectRequest, SquareModel  # noqa: E402
from server.serializers import sound_cue  # noqa: E402
from server.session import GameSession  # noqa: E402


def _settings(mode: GameMode = GameMode.SINGLE_PLAYER, **overrides) -> Settings:
    return Settings(default_mode=mode, ai_move_delay_ms=0, seed=11, **overrides)


def _move(start: tuple[int, int], end: tuple[int, int]) -> MoveRequest:
    return MoveRequest(
        start=SquareModel(row=start[0], col=start[1]),
        destination=SquareModel(row=end[0], col=end[1]),
    )


class GameSessionTests(unittest.TestCase):
    def test_initial_payload(self) -> None:
        session = GameSession(_settings())
        state = session.serialize()
        self.assertEqual(state["turn"], "red")
        self.assertEqual(state["mode"], "single_player")
        self.assertEqual(len(state["pieces"]), 24)
        self.assertEqual(state["pieceCounts"]["black"], {"total": 12, "kings": 0})
        self.assertEqual(state["events"], [{"type": "turnChanged", "side": "red"}])
        self.assertEqual(state["players"]["black"]["kind"], "heuristic")
        self.assertTrue(state["soundEnabled"])

        # events are handed out once
        self.assertEqual(session.serialize()["events"], [])

    def test_move_reports_events_with_sound_cues(self) -> None:
        session = GameSession(_settings(GameMode.TWO_PLAYER))
        session.serialize()
        state = session.make_move(_move((5, 0), (4, 1)))
        self.assertTrue(state["accepted"])
        self.assertEqual(state["turn"], "black")
        self.assertEqual(state["lastMove"], {"row": 4, "col": 1})
        moved, turn = state["events"]
        self.assertEqual(moved["type"], "pieceMoved")
        self.assertEqual(moved["sound"], "move")
        self.assertEqual(moved["from"], {"row": 5, "col": 0})
        self.assertEqual(turn, {"type": "turnChanged", "side": "black"})

    def test_rejected_move_changes_nothing(self) -> None:
        session = GameSession(_settings(GameMode.TWO_PLAYER))
        session.serialize()
        state = session.make_move(_move((5, 0), (3, 2)))
        self.assertFalse(state["accepted"])
        self.assertEqual(state["turn"], "red")
        self.assertEqual(state["events"], [])

    def test_select_lists_destinations(self) -> None:
        session = GameSession(_settings(GameMode.TWO_PLAYER))
        state = session.select(SelectRequest(square=SquareModel(row=5, col=2)))
        self.assertTrue(state["accepted"])
        self.assertEqual(state["phase"], "awaiting_destination")
        self.assertEqual(state["selected"], {"row": 5, "col": 2})
        self.assertEqual(state["destinations"], [{"row": 4, "col": 1}, {"row": 4, "col": 3}])

    def test_computer_move(self) -> None:
        session = GameSession(_settings())
        with self.assertRaises(RuntimeError):
            session.run_ai_move()

        session.make_move(_move((5, 0), (4, 1)))
        state = session.run_ai_move(AIMoveRequest(delayMs=0))
        self.assertEqual(state["turn"], "red")
        movers = [event["side"] for event in state["events"] if event["type"] == "pieceMoved"]
        self.assertEqual(movers, ["black"])

    def test_new_game_switches_mode(self) -> None:
        session = GameSession(_settings())
        state = session.new_game(NewGameRequest(mode="two_player"))
        self.assertEqual(state["mode"], "two_player")
        self.assertEqual(state["players"]["black"]["kind"], "human")

    def test_valid_moves_only_for_the_locked_piece_mid_chain(self) -> None:
        session = GameSession(_settings(GameMode.TWO_PLAYER))
        session.game.loadPosition(
            Board.from_pieces(
                Piece(Side.RED, 4, 3),
                Piece(Side.RED, 5, 0),
                Piece(Side.BLACK, 3, 4),
                Piece(Side.BLACK, 1, 6),
                Piece(Side.BLACK, 4, 1),
                Piece(Side.BLACK, 0, 1),
            )
        )
        self.assertEqual(session.get_valid_moves(5, 0)["destinations"], [{"row": 3, "col": 2}])

        state = session.make_move(_move((4, 3), (2, 5)))
        self.assertEqual(state["phase"], "mid_multi_jump")

        self.assertEqual(session.get_valid_moves(5, 0)["destinations"], [])
        self.assertEqual(session.get_valid_moves(2, 5)["destinations"], [{"row": 0, "col": 7}])

    def test_valid_moves_rejected_after_the_game_ends(self) -> None:
        session = GameSession(_settings(GameMode.TWO_PLAYER))
        session.forfeit()
        with self.assertRaises(ValueError):
            session.get_valid_moves(5, 0)

    def test_computer_delay_does_not_hold_the_lock(self) -> None:
        session = GameSession(_settings())
        session.make_move(_move((5, 0), (4, 1)))

        def _check_unlocked(seconds: float) -> None:
            self.assertFalse(session.lock.locked())
            self.assertEqual(seconds, 0.25)

        with patch("server.session.time.sleep", side_effect=_check_unlocked) as sleep:
            state = session.run_ai_move(AIMoveRequest(delayMs=250))
        sleep.assert_called_once()
        self.assertEqual(state["turn"], "red")

    def test_computer_move_dropped_when_game_restarts_during_delay(self) -> None:
        session = GameSession(_settings())
        session.make_move(_move((5, 0), (4, 1)))

        def _restart(_seconds: float) -> None:
            session.new_game(NewGameRequest(mode="single_player"))

        with patch("server.session.time.sleep", side_effect=_restart):
            with self.assertRaises(RuntimeError):
                session.run_ai_move(AIMoveRequest(delayMs=100))
        self.assertEqual(session.game.current_player, Side.RED)
        self.assertIsNone(session.game.board.getPiece(4, 1))
        self.assertEqual(session.game.board.getPiece(5, 0).side, Side.RED)

    def test_forfeit_reports_winner(self) -> None:
        session = GameSession(_settings())
        state = session.forfeit()
        self.assertEqual(state["outcome"], {"result": "win", "winner": "black", "reason": "forfeit"})
        self.assertEqual(state["events"][-1]["sound"], "game_over")
        self.assertFalse(session.forfeit()["accepted"])


class SoundCueTests(unittest.TestCase):
    def test_cues_follow_move_kind(self) -> None:
        simple = PieceMoved(side=Side.RED, start=(5, 0), end=(4, 1))
        capture = PieceMoved(side=Side.BLACK, start=(2, 1), end=(4, 3), captured=(3, 2))
        crowning = PieceMoved(side=Side.BLACK, start=(5, 2), end=(7, 4), captured=(6, 3), was_promotion=True)
        self.assertEqual(sound_cue(simple, GameMode.TWO_PLAYER), "move")
        self.assertEqual(sound_cue(capture, GameMode.TWO_PLAYER), "jump")
        self.assertEqual(sound_cue(capture, GameMode.SINGLE_PLAYER), "computer_jump")
        self.assertEqual(sound_cue(crowning, GameMode.SINGLE_PLAYER), "king")


class AppRouteTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app(_settings(GameMode.TWO_PLAYER, sound_enabled=False)))

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_settings(self) -> None:
        payload = self.client.get("/settings").json()
        self.assertFalse(payload["soundEnabled"])
        self.assertEqual(payload["defaultMode"], "two_player")

    def test_valid_moves(self) -> None:
        response = self.client.get("/valid-moves", params={"row": 5, "col": 0})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["destinations"], [{"row": 4, "col": 1}])

        response = self.client.get("/valid-moves", params={"row": 2, "col": 1})
        self.assertEqual(response.status_code, 400)

        response = self.client.get("/valid-moves", params={"row": 8, "col": 0})
        self.assertEqual(response.status_code, 422)

    def test_move_and_board(self) -> None:
        response = self.client.post(
            "/move",
            json={"start": {"row": 5, "col": 0}, "destination": {"row": 4, "col": 1}},
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["accepted"])
        board = self.client.get("/board").json()
        self.assertEqual(board["turn"], "black")
        self.assertEqual(board["status"], "Checkers: Player 2's Turn")

    def test_ai_move_outside_single_player_conflicts(self) -> None:
        response = self.client.post("/ai-move")
        self.assertEqual(response.status_code, 409)

    def test_forfeit_and_new_game(self) -> None:
        self.assertEqual(self.client.post("/forfeit").json()["outcome"]["winner"], "black")
        state = self.client.post("/new-game", json={"mode": "single_player"}).json()
        self.assertTrue(state["inProgress"])
        self.assertEqual(state["mode"], "single_player")


if __name__ == "__main__":
    unittest.main()
