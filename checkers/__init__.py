"""Checkers package exports."""

from .checkers_ai import choose_move
from .checkers_engine import CheckersEngine
from .checkers_game import CheckersGame
from .checkers_moves import CheckersMove
from .checkers_state import CheckersObservation, CheckersState, Color, Piece

__all__ = [
    "CheckersEngine",
    "CheckersGame",
    "CheckersMove",
    "CheckersObservation",
    "CheckersState",
    "Color",
    "Piece",
    "choose_move",
]
