"""Events the turn controller emits after each mutation, in mutation order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

from .move import MoveKind, Square
from .pieces import Side
from .terminal import Outcome


@dataclass(frozen=True, slots=True)
class PieceMoved:
    side: Side
    start: Square
    end: Square
    captured: Optional[Square] = None
    was_promotion: bool = False

    @property
    def was_capture(self) -> bool:
        return self.captured is not None

    @property
    def kind(self) -> MoveKind:
        # Promotion wins over capture when both happen in one step.
        if self.was_promotion:
            return MoveKind.PROMOTION
        if self.was_capture:
            return MoveKind.CAPTURE
        return MoveKind.SIMPLE


@dataclass(frozen=True, slots=True)
class TurnChanged:
    side: Side


@dataclass(frozen=True, slots=True)
class GameEnded:
    outcome: Outcome


GameEvent = Union[PieceMoved, TurnChanged, GameEnded]
EventListener = Callable[[GameEvent], None]
