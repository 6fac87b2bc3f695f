from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .board import Board
from .pieces import Piece, Side
from .rules import legal_destinations


class EndReason(str, Enum):
    NO_MOVES = "no_moves"
    TWO_KINGS = "two_kings"
    FORFEIT = "forfeit"


@dataclass(frozen=True, slots=True)
class Win:
    side: Side
    reason: EndReason = EndReason.NO_MOVES


@dataclass(frozen=True, slots=True)
class Draw:
    reason: EndReason = EndReason.TWO_KINGS


Outcome = Union[Win, Draw]


def is_two_kings_draw(board: Board) -> bool:
    """Exactly one red king and one black king, nothing else on the board."""
    kings = {Side.RED: 0, Side.BLACK: 0}
    total = 0
    for _, piece in board.allSquares():
        if piece is None:
            continue
        total += 1
        if total > 2:
            return False
        if piece.is_king:
            kings[piece.side] += 1
    return kings[Side.RED] == 1 and kings[Side.BLACK] == 1


def check_end(board: Board, locked: Optional[Piece] = None) -> Optional[Outcome]:
    if locked is not None:
        return None

    if is_two_kings_draw(board):
        return Draw()

    has_move = {Side.RED: False, Side.BLACK: False}
    for _, piece in board.allSquares():
        if piece is None or has_move[piece.side]:
            continue
        if legal_destinations(board, piece):
            has_move[piece.side] = True
            if has_move[Side.RED] and has_move[Side.BLACK]:
                return None

    if not has_move[Side.RED]:
        return Win(Side.BLACK)
    if not has_move[Side.BLACK]:
        return Win(Side.RED)
    return None
