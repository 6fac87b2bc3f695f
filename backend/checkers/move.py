from __future__ import annotations

from enum import Enum

Square = tuple[int, int]


class MoveKind(str, Enum):
    SIMPLE = "simple"
    CAPTURE = "capture"
    PROMOTION = "promotion"
