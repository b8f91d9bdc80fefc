"""Dots and boxes package exports."""

from .dotsandboxes_ai import choose_move
from .dotsandboxes_engine import DotsAndBoxesEngine
from .dotsandboxes_game import DotsAndBoxesGame
from .dotsandboxes_moves import DrawEdge
from .dotsandboxes_state import DotsAndBoxesObservation, DotsAndBoxesState, Player

__all__ = [
    "DotsAndBoxesEngine",
    "DotsAndBoxesGame",
    "DotsAndBoxesObservation",
    "DotsAndBoxesState",
    "DrawEdge",
    "Player",
    "choose_move",
]
