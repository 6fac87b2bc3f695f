"""Legal move generation for English draughts.

Mandatory capture is enforced per piece: a piece that can jump may only jump,
but a side may still move a different piece that has no capture available.
"""

from __future__ import annotations

from typing import Iterator, Optional

from .board import Board
from .move import Square
from .pieces import Piece, Side


COLUMN_DIRECTIONS = (-1, 1)


class NoLegalMoveError(RuntimeError):
    """Raised when a move is demanded from a side that has none."""

    def __init__(self, side: Side) -> None:
        super().__init__(f"{side.value.capitalize()} has no legal move.")
        self.side = side


def _steps(piece: Piece) -> Iterator[tuple[int, int]]:
    for dr in piece.row_directions():
        for dc in COLUMN_DIRECTIONS:
            yield dr, dc


def capture_destinations(board: Board, piece: Piece) -> list[Square]:
    """Landing squares of every single jump available to ``piece``."""
    captures: list[Square] = []
    for dr, dc in _steps(piece):
        mid_r, mid_c = piece.row + dr, piece.col + dc
        end_r, end_c = piece.row + 2 * dr, piece.col + 2 * dc
        if not board.is_within_bounds(end_r, end_c):
            continue
        victim = board.getPiece(mid_r, mid_c)
        if victim is not None and victim.side != piece.side and board.getPiece(end_r, end_c) is None:
            captures.append((end_r, end_c))
    return captures


def simple_destinations(board: Board, piece: Piece) -> list[Square]:
    steps: list[Square] = []
    for dr, dc in _steps(piece):
        new_r, new_c = piece.row + dr, piece.col + dc
        if board.is_within_bounds(new_r, new_c) and board.getPiece(new_r, new_c) is None:
            steps.append((new_r, new_c))
    return steps


def legal_destinations(board: Board, piece: Piece, locked: Optional[Piece] = None) -> frozenset[Square]:
    """Destinations ``piece`` may move to.

    ``locked`` is the piece currently in the middle of a capture chain, if any.
    While a chain is active no piece may make a simple step, and the locked
    piece gets an empty set once it has nothing left to jump.
    """
    captures = capture_destinations(board, piece)
    if locked is not None and locked is piece:
        return frozenset(captures)
    if captures:
        return frozenset(captures)
    if locked is not None:
        return frozenset()
    return frozenset(simple_destinations(board, piece))


def movable_pieces(board: Board, side: Side, locked: Optional[Piece] = None) -> dict[Piece, frozenset[Square]]:
    if locked is not None:
        if locked.side != side:
            return {}
        destinations = legal_destinations(board, locked, locked)
        return {locked: destinations} if destinations else {}

    result: dict[Piece, frozenset[Square]] = {}
    for piece in board.pieces(side):
        destinations = legal_destinations(board, piece)
        if destinations:
            result[piece] = destinations
    return result


def is_capture_step(start: Square, end: Square) -> bool:
    return abs(end[0] - start[0]) == 2


def captured_square(start: Square, end: Square) -> Square:
    return ((start[0] + end[0]) // 2, (start[1] + end[1]) // 2)


def is_promotion_step(piece: Piece, end: Square) -> bool:
    return not piece.is_king and end[0] == piece.side.promotion_row


def can_be_jumped(board: Board, square: Square) -> bool:
    """True when an enemy of the piece on ``square`` could capture it next ply.

    Only enemies inside the 5x5 window around the square can reach it with a
    single jump, so the scan is limited to that window.
    """
    row, col = square
    target = board.getPiece(row, col)
    if target is None:
        return False
    for r in range(max(0, row - 2), min(board.boardSize - 1, row + 2) + 1):
        for c in range(max(0, col - 2), min(board.boardSize - 1, col + 2) + 1):
            attacker = board.getPiece(r, c)
            if attacker is None or attacker.side == target.side:
                continue
            for landing in capture_destinations(board, attacker):
                if captured_square(attacker.position, landing) == square:
                    return True
    return False
