from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING, Tuple

from .move import Square

if TYPE_CHECKING:
    from .game import Game

MoveDecision = Tuple[Square, Square]
MovePolicy = Callable[["Game"], MoveDecision]


class PlayerKind(str, Enum):
    HUMAN = "human"
    HEURISTIC = "heuristic"


class GameMode(str, Enum):
    SINGLE_PLAYER = "single_player"
    TWO_PLAYER = "two_player"


@dataclass
class PlayerController:
    kind: PlayerKind
    name: str
    policy: Optional[MovePolicy] = None

    @property
    def is_human(self) -> bool:
        return self.policy is None or self.kind == PlayerKind.HUMAN

    def select_move(self, game: "Game") -> MoveDecision:
        if self.policy is None:
            raise RuntimeError(f"{self.name} has no move policy.")
        return self.policy(game)

    @classmethod
    def human(cls, name: str) -> "PlayerController":
        return cls(kind=PlayerKind.HUMAN, name=name)
