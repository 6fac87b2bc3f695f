from __future__ import annotations

from enum import Enum
from itertools import count
from typing import Optional

from .move import Square


_PIECE_ID_COUNTER = count()


class Side(Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Side":
        return Side.BLACK if self is Side.RED else Side.RED

    @property
    def forward(self) -> int:
        """Row delta of a man's advance: Red climbs toward row 0, Black descends toward row 7."""
        return -1 if self is Side.RED else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Side.RED else 7

    @property
    def home_rows(self) -> range:
        return range(5, 8) if self is Side.RED else range(0, 3)


class Piece:
    def __init__(self, side: Side, row: int, col: int, *, is_king: bool = False, identifier: Optional[int] = None) -> None:
        self.side = side
        self.row = row
        self.col = col
        self._is_king = is_king
        self.id = identifier if identifier is not None else next(_PIECE_ID_COUNTER)

    @property
    def is_king(self) -> bool:
        return self._is_king

    @property
    def position(self) -> Square:
        return (self.row, self.col)

    def move(self, new_row: int, new_col: int) -> None:
        self.row = new_row
        self.col = new_col

    def promote(self) -> bool:
        """Crown the piece. Returns False when it already was a king."""
        if self._is_king:
            return False
        self._is_king = True
        return True

    def row_directions(self) -> tuple[int, ...]:
        if self._is_king:
            return (-1, 1)
        return (self.side.forward,)

    def getCopy(self) -> "Piece":
        return Piece(self.side, self.row, self.col, is_king=self._is_king, identifier=self.id)

    def __repr__(self) -> str:
        piece_type = "K" if self._is_king else "M"
        return f"{piece_type}({self.side.name},{self.row},{self.col})"
