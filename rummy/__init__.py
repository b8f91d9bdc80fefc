"""Gin rummy package exports."""

from .rummy_ai import choose_move
from .rummy_engine import RummyEngine
from .rummy_game import RummyGame
from .rummy_melds import Meld, compute_layoffs, find_all_melds, find_optimal_melds
from .rummy_moves import Discard, DrawDiscard, DrawStock, Knock, NextRound, Pass
from .rummy_state import Phase, RummyObservation, RummyState

__all__ = [
    "Discard",
    "DrawDiscard",
    "DrawStock",
    "Knock",
    "Meld",
    "NextRound",
    "Pass",
    "Phase",
    "RummyEngine",
    "RummyGame",
    "RummyObservation",
    "RummyState",
    "choose_move",
    "compute_layoffs",
    "find_all_melds",
    "find_optimal_melds",
]
