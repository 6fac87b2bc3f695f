from __future__ import annotations

import logging
import time
from threading import Lock
from typing import Any, Optional

from checkers.events import GameEvent
from checkers.game import Game
from checkers.pieces import Piece
from checkers.player import GameMode
from opponent.agents import create_heuristic_controller

from .config import Settings, get_settings
from .schemas import AIMoveRequest, MoveRequest, NewGameRequest, SelectRequest
from .serializers import serialize_game

logger = logging.getLogger(__name__)


class GameSession:
    """Thread-safe orchestrator around a single Game instance.

    Events emitted by the game while a request is handled are collected and
    returned with that request's state payload.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.lock = Lock()
        self.settings = settings or get_settings()
        self.game = Game(opponent=create_heuristic_controller(seed=self.settings.seed))
        self._pending: list[GameEvent] = []
        self.game.subscribe(self._pending.append)
        self.game.newGame(self.settings.default_mode)

    # public API ---------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        with self.lock:
            return self._serialize_locked()

    def new_game(self, payload: Optional[NewGameRequest] = None) -> dict[str, Any]:
        with self.lock:
            mode = GameMode(payload.mode) if payload and payload.mode else self.game.mode
            self.game.newGame(mode)
            return self._serialize_locked()

    def get_valid_moves(self, row: int, col: int) -> dict[str, Any]:
        with self.lock:
            if not self.game.in_progress:
                raise ValueError("No game is in progress.")
            piece = self._require_piece(row, col)
            if piece.side != self.game.current_player:
                raise ValueError("It is not this piece's turn.")
            # only the locked piece may move while a capture chain is active
            destinations = self.game.getValidMoves().get(piece, frozenset())
            return {
                "piece": {"row": row, "col": col},
                "destinations": [{"row": r, "col": c} for r, c in sorted(destinations)],
            }

    def select(self, payload: SelectRequest) -> dict[str, Any]:
        with self.lock:
            accepted = self.game.selectPiece(payload.square.as_tuple())
            return self._serialize_locked(accepted)

    def make_move(self, payload: MoveRequest) -> dict[str, Any]:
        with self.lock:
            accepted = True
            if payload.start is not None:
                accepted = self.game.selectPiece(payload.start.as_tuple())
            if accepted:
                accepted = self.game.submitDestination(payload.destination.as_tuple())
            return self._serialize_locked(accepted)

    def run_ai_move(self, payload: Optional[AIMoveRequest] = None) -> dict[str, Any]:
        with self.lock:
            if not self.game.isAutomatedTurn():
                raise RuntimeError("It is not the computer's turn.")
        delay_ms = self.settings.ai_move_delay_ms
        if payload is not None and payload.delayMs is not None:
            delay_ms = payload.delayMs
        if delay_ms:
            time.sleep(delay_ms / 1000)

        with self.lock:
            # the game may have been restarted or forfeited during the delay
            if not self.game.isAutomatedTurn():
                raise RuntimeError("It is not the computer's turn.")
            played = self.game.playAutomatedTurn()
            logger.debug("Computer played %s", played)
            return self._serialize_locked(True)

    def forfeit(self) -> dict[str, Any]:
        with self.lock:
            accepted = self.game.forfeit()
            return self._serialize_locked(accepted)

    def settings_payload(self) -> dict[str, Any]:
        return {
            "soundEnabled": self.settings.sound_enabled,
            "aiMoveDelayMs": self.settings.ai_move_delay_ms,
            "defaultMode": self.settings.default_mode.value,
        }

    # helpers ------------------------------------------------------------

    def _serialize_locked(self, accepted: Optional[bool] = None) -> dict[str, Any]:
        events = list(self._pending)
        self._pending.clear()
        return serialize_game(
            self.game,
            sound_enabled=self.settings.sound_enabled,
            events=events,
            accepted=accepted,
        )

    def _require_piece(self, row: int, col: int) -> Piece:
        piece = self.game.board.getPiece(row, col)
        if piece is None:
            raise ValueError(f"No piece at row {row}, col {col}.")
        return piece
