"""Texas hold'em package exports."""

from .holdem_ai import choose_move, hand_strength
from .holdem_engine import HoldemEngine
from .holdem_game import HoldemGame
from .holdem_hands import HandCategory, HandEvaluation, evaluate_best_hand, evaluate_five
from .holdem_moves import AllIn, Call, Check, Fold, NextHand, RaiseTo
from .holdem_state import HoldemObservation, HoldemState, Phase

__all__ = [
    "AllIn",
    "Call",
    "Check",
    "Fold",
    "HandCategory",
    "HandEvaluation",
    "HoldemEngine",
    "HoldemGame",
    "HoldemObservation",
    "HoldemState",
    "NextHand",
    "Phase",
    "RaiseTo",
    "choose_move",
    "evaluate_best_hand",
    "evaluate_five",
    "hand_strength",
]
