"""English draughts rules engine package."""

from .board import Board
from .events import GameEnded, GameEvent, PieceMoved, TurnChanged
from .game import Game, Phase
from .move import MoveKind, Square
from .pieces import Piece, Side
from .player import GameMode, PlayerController, PlayerKind
from .rules import NoLegalMoveError, legal_destinations
from .terminal import Draw, EndReason, Outcome, Win, check_end

__all__ = [
	"Board",
	"Game",
	"Phase",
	"MoveKind",
	"Square",
	"Side",
	"Piece",
	"GameMode",
	"PlayerController",
	"PlayerKind",
	"GameEvent",
	"PieceMoved",
	"TurnChanged",
	"GameEnded",
	"Outcome",
	"Win",
	"Draw",
	"EndReason",
	"NoLegalMoveError",
	"legal_destinations",
	"check_end",
]
