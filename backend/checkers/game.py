from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .board import Board
from .events import EventListener, GameEnded, GameEvent, PieceMoved, TurnChanged
from .move import Square
from .pieces import Piece, Side
from .player import GameMode, MoveDecision, PlayerController
from .rules import captured_square, capture_destinations, is_capture_step, legal_destinations, movable_pieces
from .terminal import Draw, EndReason, Outcome, Win, check_end

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_DESTINATION = "awaiting_destination"
    MID_MULTI_JUMP = "mid_multi_jump"
    TURN_COMPLETE = "turn_complete"
    GAME_OVER = "game_over"


class Game:
    """Turn controller for one game of English draughts.

    Callers drive it with ``selectPiece`` / ``submitDestination``. Anything
    that is not a legal interaction right now is ignored and reported by a
    ``False`` return value instead of an exception. Every board mutation is
    announced as an event, both to subscribers and on ``self.events``.

    ``opponent`` is the controller installed for Black in single player mode.
    """

    def __init__(self, opponent: Optional[PlayerController] = None) -> None:
        self.opponent = opponent
        self.board = Board.empty()
        self.mode = GameMode.TWO_PLAYER
        self.current_player = Side.RED
        self.phase = Phase.IDLE
        self.in_progress = False
        self.selected_piece: Optional[Piece] = None
        self.valid_destinations: frozenset[Square] = frozenset()
        self.multi_jump_piece: Optional[Piece] = None
        self.outcome: Optional[Outcome] = None
        self.last_move: Optional[Square] = None
        self.events: list[GameEvent] = []
        self._listeners: list[EventListener] = []
        self.players: dict[Side, PlayerController] = {
            Side.RED: PlayerController.human("Player 1"),
            Side.BLACK: PlayerController.human("Player 2"),
        }

    # lifecycle ----------------------------------------------------------

    def newGame(self, mode: GameMode = GameMode.TWO_PLAYER) -> None:
        self._start(mode, Board(), Side.RED)

    def loadPosition(self, board: Board, side_to_move: Side = Side.RED, mode: Optional[GameMode] = None) -> None:
        """Start a game from an arbitrary position instead of the opening layout."""
        self._start(mode or self.mode, board, side_to_move)

    def _start(self, mode: GameMode, board: Board, side_to_move: Side) -> None:
        if mode == GameMode.SINGLE_PLAYER and self.opponent is None:
            raise ValueError("Single player mode needs an automated opponent controller.")

        self.mode = mode
        self.board = board
        self.current_player = side_to_move
        self.in_progress = True
        self.selected_piece = None
        self.valid_destinations = frozenset()
        self.multi_jump_piece = None
        self.outcome = None
        self.last_move = None
        self.events.clear()
        self.players = {
            Side.RED: PlayerController.human("Player 1"),
            Side.BLACK: self.opponent if mode == GameMode.SINGLE_PLAYER else PlayerController.human("Player 2"),
        }
        self.phase = Phase.AWAITING_SELECTION
        logger.info("New %s game started, %s to move", mode.value, side_to_move.value)
        self._emit(TurnChanged(self.current_player))

        # a loaded position may already be decided
        outcome = check_end(self.board)
        if outcome is not None:
            self._finish(outcome)

    def forfeit(self) -> bool:
        if not self.in_progress:
            return False
        self._clear_selection()
        self.multi_jump_piece = None
        loser = self.current_player
        logger.info("%s forfeits", loser.value)
        self._finish(Win(loser.opponent, EndReason.FORFEIT))
        return True

    # interaction --------------------------------------------------------

    def selectPiece(self, square: Square) -> bool:
        if not self.in_progress:
            logger.debug("Selection at %s ignored: no game in progress", square)
            return False
        row, col = square
        if not self.board.is_within_bounds(row, col):
            logger.debug("Selection at %s ignored: off the board", square)
            return False
        piece = self.board.getPiece(row, col)
        if piece is None:
            return False

        if self.multi_jump_piece is not None:
            if piece is not self.multi_jump_piece:
                logger.debug("Selection at %s ignored: capture chain is locked", square)
                return False
        elif piece.side != self.current_player:
            logger.debug("Selection at %s ignored: not %s's piece", square, piece.side.value)
            return False

        self.selected_piece = piece
        self.valid_destinations = legal_destinations(self.board, piece, self.multi_jump_piece)
        if self.multi_jump_piece is None:
            self.phase = Phase.AWAITING_DESTINATION
        return True

    def submitDestination(self, square: Square) -> bool:
        piece = self.selected_piece
        if not self.in_progress or piece is None:
            return False
        if square not in self.valid_destinations:
            logger.debug("Destination %s ignored for %r", square, piece)
            return False
        if self.multi_jump_piece is not None and piece is not self.multi_jump_piece:
            return False

        moved = self._apply_move(piece, square)
        self._emit(moved)

        if moved.was_capture:
            further = capture_destinations(self.board, piece)
            if further:
                self.multi_jump_piece = piece
                self.selected_piece = piece
                self.valid_destinations = frozenset(further)
                self.phase = Phase.MID_MULTI_JUMP
                return True

        self._complete_turn()
        return True

    def getValidMoves(self) -> dict[Piece, frozenset[Square]]:
        if not self.in_progress:
            return {}
        return movable_pieces(self.board, self.current_player, self.multi_jump_piece)

    # automated side -----------------------------------------------------

    def setPlayer(self, side: Side, controller: PlayerController) -> None:
        self.players[side] = controller

    def getPlayer(self, side: Side) -> PlayerController:
        return self.players[side]

    def currentController(self) -> PlayerController:
        return self.getPlayer(self.current_player)

    def isAutomatedTurn(self) -> bool:
        return self.in_progress and not self.currentController().is_human

    def chooseMove(self) -> MoveDecision:
        """Ask the controller on turn for a move without playing it."""
        if not self.isAutomatedTurn():
            raise RuntimeError("No automated player is on turn.")
        return self.currentController().select_move(self)

    def playAutomatedTurn(self) -> list[MoveDecision]:
        """Play the automated side's whole turn, capture chain included."""
        played: list[MoveDecision] = []
        side = self.current_player
        while self.isAutomatedTurn() and self.current_player == side:
            start, end = self.chooseMove()
            if not (self.selectPiece(start) and self.submitDestination(end)):
                raise RuntimeError(f"Automated move {start} -> {end} was rejected.")
            played.append((start, end))
        return played

    # observers ----------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def isGameOver(self) -> bool:
        return self.outcome is not None

    def getWinner(self) -> Optional[Side]:
        return self.outcome.side if isinstance(self.outcome, Win) else None

    def statusText(self) -> str:
        if isinstance(self.outcome, Draw):
            return "Game Over! It's a draw (1 Red King vs 1 Black King)."
        if isinstance(self.outcome, Win):
            return f"Game Over! {self.outcome.side.value.capitalize()} wins!"
        if not self.in_progress:
            return "Checkers"
        if self.current_player == Side.RED:
            return "Checkers: Player 1's Turn"
        if self.mode == GameMode.SINGLE_PLAYER:
            return "Checkers: Computer's Turn"
        return "Checkers: Player 2's Turn"

    # helpers ------------------------------------------------------------

    def _apply_move(self, piece: Piece, target: Square) -> PieceMoved:
        start = piece.position
        end_row, end_col = target
        if self.board.getPiece(end_row, end_col) is not None:
            raise RuntimeError(f"Destination {target} is occupied.")

        captured: Optional[Square] = None
        if is_capture_step(start, target):
            captured = captured_square(start, target)
            victim = self.board.getPiece(*captured)
            if victim is None or victim.side == piece.side:
                raise RuntimeError(f"Capture {start} -> {target} has no enemy to remove.")
            self.board.setPiece(*captured, None)

        self.board.setPiece(*start, None)
        piece.move(end_row, end_col)
        self.board.setPiece(end_row, end_col, piece)
        self.last_move = target

        promoted = end_row == piece.side.promotion_row and piece.promote()
        logger.info(
            "%s %s %s -> %s%s",
            piece.side.value,
            "captures" if captured else "moves",
            start,
            target,
            " and is crowned" if promoted else "",
        )
        return PieceMoved(
            side=piece.side,
            start=start,
            end=target,
            captured=captured,
            was_promotion=promoted,
        )

    def _complete_turn(self) -> None:
        self._clear_selection()
        self.multi_jump_piece = None
        self.current_player = self.current_player.opponent
        self.phase = Phase.TURN_COMPLETE
        logger.debug("Board after the turn:\n%s", self.board.render())
        self._emit(TurnChanged(self.current_player))

        outcome = check_end(self.board)
        if outcome is not None:
            self._finish(outcome)
            return
        self.phase = Phase.AWAITING_SELECTION

    def _finish(self, outcome: Outcome) -> None:
        self.outcome = outcome
        self.in_progress = False
        self.phase = Phase.GAME_OVER
        logger.info("Game over: %s", outcome)
        self._emit(GameEnded(outcome))

    def _clear_selection(self) -> None:
        self.selected_piece = None
        self.valid_destinations = frozenset()

    def _emit(self, event: GameEvent) -> None:
        self.events.append(event)
        for listener in list(self._listeners):
            listener(event)
