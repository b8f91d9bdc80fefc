"""Takeover package exports."""

from .takeover_ai import choose_move
from .takeover_engine import TakeoverEngine
from .takeover_game import TakeoverGame
from .takeover_moves import TakeoverMove
from .takeover_state import MoveKind, Side, TakeoverObservation, TakeoverState

__all__ = [
    "MoveKind",
    "Side",
    "TakeoverEngine",
    "TakeoverGame",
    "TakeoverMove",
    "TakeoverObservation",
    "TakeoverState",
    "choose_move",
]
