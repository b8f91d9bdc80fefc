"""Chess package exports."""

from .chess_ai import choose_move
from .chess_engine import ChessEngine
from .chess_game import ChessGame
from .chess_moves import ChessMove
from .chess_state import CastlingRights, ChessObservation, ChessPiece, ChessState, Color, PieceType, Position

__all__ = [
    "CastlingRights",
    "ChessEngine",
    "ChessGame",
    "ChessMove",
    "ChessObservation",
    "ChessPiece",
    "ChessState",
    "Color",
    "PieceType",
    "Position",
    "choose_move",
]
