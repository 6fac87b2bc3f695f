from __future__ import annotations

import random
from typing import Optional

from checkers.game import Game
from checkers.player import PlayerController, PlayerKind

from .heuristic import select_move

__all__ = ["create_heuristic_controller", "create_single_player_game"]


def create_heuristic_controller(name: str = "Computer", *, seed: Optional[int] = None) -> PlayerController:
    rng = random.Random(seed)

    def _policy(game: Game):
        return select_move(
            game.board,
            game.current_player,
            locked=game.multi_jump_piece,
            rng=rng,
        )

    suffix = f" (seed={seed})" if seed is not None else ""
    return PlayerController(
        kind=PlayerKind.HEURISTIC,
        name=f"{name}{suffix}",
        policy=_policy,
    )


def create_single_player_game(*, seed: Optional[int] = None) -> Game:
    return Game(opponent=create_heuristic_controller(seed=seed))
