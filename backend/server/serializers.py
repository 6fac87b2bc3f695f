from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Optional

from checkers.events import GameEnded, GameEvent, PieceMoved, TurnChanged
from checkers.game import Game
from checkers.move import MoveKind, Square
from checkers.pieces import Piece, Side
from checkers.player import GameMode, PlayerController
from checkers.terminal import Draw, Outcome, Win


def _square_to_dict(square: Optional[Square]) -> Optional[dict[str, int]]:
    if square is None:
        return None
    row, col = square
    return {"row": row, "col": col}


def serialize_piece(piece: Piece) -> dict[str, Any]:
    return {
        "id": piece.id,
        "row": piece.row,
        "col": piece.col,
        "side": piece.side.value,
        "isKing": piece.is_king,
    }


def serialize_outcome(outcome: Optional[Outcome]) -> Optional[dict[str, Any]]:
    if outcome is None:
        return None
    if isinstance(outcome, Draw):
        return {"result": "draw", "winner": None, "reason": outcome.reason.value}
    if isinstance(outcome, Win):
        return {"result": "win", "winner": outcome.side.value, "reason": outcome.reason.value}
    raise TypeError(f"Unknown outcome {outcome!r}")


def sound_cue(event: PieceMoved, mode: GameMode) -> str:
    """Which sound effect the front end should play for a move."""
    kind = event.kind
    if kind == MoveKind.PROMOTION:
        return "king"
    if kind == MoveKind.CAPTURE:
        if mode == GameMode.SINGLE_PLAYER and event.side == Side.BLACK:
            return "computer_jump"
        return "jump"
    return "move"


def serialize_event(event: GameEvent, mode: GameMode) -> dict[str, Any]:
    if isinstance(event, PieceMoved):
        return {
            "type": "pieceMoved",
            "side": event.side.value,
            "from": _square_to_dict(event.start),
            "to": _square_to_dict(event.end),
            "captured": _square_to_dict(event.captured),
            "wasCapture": event.was_capture,
            "wasPromotion": event.was_promotion,
            "kind": event.kind.value,
            "sound": sound_cue(event, mode),
        }
    if isinstance(event, TurnChanged):
        return {"type": "turnChanged", "side": event.side.value}
    if isinstance(event, GameEnded):
        return {"type": "gameEnded", "outcome": serialize_outcome(event.outcome), "sound": "game_over"}
    raise TypeError(f"Unknown event {event!r}")


def serialize_controller(controller: PlayerController) -> dict[str, str]:
    return {"kind": controller.kind.value, "name": controller.name}


def serialize_game(
    game: Game,
    *,
    sound_enabled: bool,
    events: Iterable[GameEvent] = (),
    accepted: Optional[bool] = None,
) -> dict[str, Any]:
    pieces = [serialize_piece(piece) for piece in game.board.getAllPieces()]
    total_counts = Counter(piece["side"] for piece in pieces)
    king_counts = Counter(piece["side"] for piece in pieces if piece["isKing"])
    selected = game.selected_piece
    locked = game.multi_jump_piece

    return {
        "mode": game.mode.value,
        "phase": game.phase.value,
        "turn": game.current_player.value,
        "inProgress": game.in_progress,
        "status": game.statusText(),
        "automatedTurn": game.isAutomatedTurn(),
        "pieces": pieces,
        "pieceCounts": {
            side.value: {
                "total": total_counts.get(side.value, 0),
                "kings": king_counts.get(side.value, 0),
            }
            for side in (Side.RED, Side.BLACK)
        },
        "selected": _square_to_dict(selected.position) if selected else None,
        "destinations": [_square_to_dict(square) for square in sorted(game.valid_destinations)],
        "multiJump": _square_to_dict(locked.position) if locked else None,
        "movablePieces": sorted(
            (_square_to_dict(piece.position) for piece in game.getValidMoves()),
            key=lambda square: (square["row"], square["col"]),
        ),
        "lastMove": _square_to_dict(game.last_move),
        "outcome": serialize_outcome(game.outcome),
        "players": {
            "red": serialize_controller(game.getPlayer(Side.RED)),
            "black": serialize_controller(game.getPlayer(Side.BLACK)),
        },
        "soundEnabled": sound_enabled,
        "accepted": accepted,
        "events": [serialize_event(event, game.mode) for event in events],
    }
