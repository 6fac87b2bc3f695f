from __future__ import annotations

from typing import Iterator, Optional

from .move import Square
from .pieces import Piece, Side


BOARD_SIZE = 8
PIECES_PER_SIDE = 12

BoardStatePiece = tuple[int, int, str, bool, int]
BoardState = tuple[BoardStatePiece, ...]


class Board:
    """8x8 occupancy grid; the single source of truth for piece positions.

    The board only checks bounds. Rule correctness is the caller's job.
    """

    def __init__(self) -> None:
        self.board: list[list[Optional[Piece]]] = [
            [None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)
        ]
        self.boardSize = BOARD_SIZE
        self._set_start_pieces()

    @classmethod
    def empty(cls) -> "Board":
        board = cls.__new__(cls)
        board.boardSize = BOARD_SIZE
        board.board = [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
        return board

    @classmethod
    def from_pieces(cls, *pieces: Piece) -> "Board":
        board = cls.empty()
        for piece in pieces:
            board.place(piece)
        return board

    def to_state(self) -> BoardState:
        return tuple(
            (piece.row, piece.col, piece.side.value, piece.is_king, piece.id)
            for _, piece in self.allSquares()
            if piece is not None
        )

    @classmethod
    def from_state(cls, state: BoardState) -> "Board":
        board = cls.empty()
        for row, col, side_value, is_king, identifier in state:
            board.place(Piece(Side(side_value), row, col, is_king=is_king, identifier=identifier))
        return board

    def getPiece(self, row: int, col: int) -> Optional[Piece]:
        self._require_within_bounds(row, col)
        return self.board[row][col]

    def setPiece(self, row: int, col: int, piece: Optional[Piece]) -> None:
        self._require_within_bounds(row, col)
        self.board[row][col] = piece

    def place(self, piece: Piece) -> Piece:
        self.setPiece(piece.row, piece.col, piece)
        return piece

    def allSquares(self) -> Iterator[tuple[Square, Optional[Piece]]]:
        for row in range(self.boardSize):
            for col in range(self.boardSize):
                yield (row, col), self.board[row][col]

    def getAllPieces(self) -> list[Piece]:
        pieces: list[Piece] = []
        for row in range(self.boardSize):
            for col in range(self.boardSize):
                if (row + col) % 2 == 1:
                    piece = self.board[row][col]
                    if piece:
                        pieces.append(piece)
        return pieces

    def pieces(self, side: Side) -> list[Piece]:
        return [piece for piece in self.getAllPieces() if piece.side == side]

    def count(self, side: Side) -> int:
        return len(self.pieces(side))

    def copy(self) -> "Board":
        new_board = Board.empty()
        for piece in self.getAllPieces():
            new_board.place(piece.getCopy())
        return new_board

    def is_within_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.boardSize and 0 <= col < self.boardSize

    @staticmethod
    def is_playable(row: int, col: int) -> bool:
        return (row + col) % 2 == 1

    def _require_within_bounds(self, row: int, col: int) -> None:
        if not self.is_within_bounds(row, col):
            raise ValueError(f"Square ({row}, {col}) is off the board.")

    def _set_start_pieces(self) -> None:
        for side in (Side.BLACK, Side.RED):
            for row in side.home_rows:
                for col in range(self.boardSize):
                    if self.is_playable(row, col):
                        self.board[row][col] = Piece(side, row, col)

    def render(self) -> str:
        symbols = {
            (Side.RED, False): "r",
            (Side.RED, True): "R",
            (Side.BLACK, False): "b",
            (Side.BLACK, True): "B",
        }
        lines = []
        for row in range(self.boardSize):
            cells = []
            for col in range(self.boardSize):
                piece = self.board[row][col]
                cells.append(symbols[(piece.side, piece.is_king)] if piece else ".")
            lines.append(" ".join(cells))
        return "\n".join(lines)
