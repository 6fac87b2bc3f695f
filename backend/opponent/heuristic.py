from __future__ import annotations

import random
from typing import Optional, Sequence

from checkers.board import Board
from checkers.move import Square
from checkers.pieces import Piece, Side
from checkers.rules import NoLegalMoveError, can_be_jumped, is_capture_step, is_promotion_step, movable_pieces


# Priority order: capture, then crowning, then squares the opponent cannot jump, then anything.
def select_move(
	board: Board,
	side: Side,
	*,
	locked: Optional[Piece] = None,
	rng: Optional[random.Random] = None,
) -> tuple[Square, Square]:
	"""Pick a move for ``side`` with a one-ply priority heuristic. The board is left untouched."""
	rng = rng or random.Random()
	candidates = movable_pieces(board, side, locked)
	if not candidates:
		raise NoLegalMoveError(side)

	tier = [piece for piece, destinations in candidates.items() if _captures(piece, destinations)]
	if not tier:
		tier = list(candidates)

	crowning = [piece for piece in tier if _promotions(piece, candidates[piece])]
	if crowning:
		tier = crowning

	piece = rng.choice(tier)
	destination = _select_destination(board, piece, candidates[piece], rng)
	return piece.position, destination


def _select_destination(board: Board, piece: Piece, destinations: frozenset[Square], rng: random.Random) -> Square:
	options = sorted(destinations)
	captures = _captures(piece, options)
	if captures:
		promoting = _promotions(piece, captures)
		if promoting:
			return promoting[0]
		return rng.choice(captures)

	promoting = _promotions(piece, options)
	if promoting:
		return promoting[0]

	safe = [square for square in options if _is_safe_landing(board, piece, square)]
	return rng.choice(safe or options)


# Simulates the step on a scratch board and asks whether an enemy could jump the piece there.
def _is_safe_landing(board: Board, piece: Piece, square: Square) -> bool:
	scratch = board.copy()
	mover = scratch.getPiece(*piece.position)
	scratch.setPiece(*piece.position, None)
	mover.move(*square)
	scratch.setPiece(*square, mover)
	return not can_be_jumped(scratch, square)


def _captures(piece: Piece, destinations: Sequence[Square] | frozenset[Square]) -> list[Square]:
	return sorted(square for square in destinations if is_capture_step(piece.position, square))


def _promotions(piece: Piece, destinations: Sequence[Square] | frozenset[Square]) -> list[Square]:
	return sorted(square for square in destinations if is_promotion_step(piece, square))
