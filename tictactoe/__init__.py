"""Tic-tac-toe package exports."""

from .tictactoe_ai import choose_move
from .tictactoe_engine import TicTacToeEngine
from .tictactoe_game import TicTacToeGame
from .tictactoe_moves import Place
from .tictactoe_state import Mark, TicTacToeObservation, TicTacToeState

__all__ = [
    "Mark",
    "Place",
    "TicTacToeEngine",
    "TicTacToeGame",
    "TicTacToeObservation",
    "TicTacToeState",
    "choose_move",
]
