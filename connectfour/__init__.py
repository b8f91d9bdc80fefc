"""Connect-four package exports."""

from .connectfour_ai import choose_move, score_board
from .connectfour_engine import ConnectFourEngine
from .connectfour_game import ConnectFourGame
from .connectfour_moves import Drop
from .connectfour_state import COLUMNS, ROWS, ConnectFourObservation, ConnectFourState, Disc

__all__ = [
    "COLUMNS",
    "ConnectFourEngine",
    "ConnectFourGame",
    "ConnectFourObservation",
    "ConnectFourState",
    "Disc",
    "Drop",
    "ROWS",
    "choose_move",
    "score_board",
]
