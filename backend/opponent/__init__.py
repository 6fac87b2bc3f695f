"""Automated opponent for single player games."""

from .agents import create_heuristic_controller, create_single_player_game
from .heuristic import select_move

__all__ = ["create_heuristic_controller", "create_single_player_game", "select_move"]
