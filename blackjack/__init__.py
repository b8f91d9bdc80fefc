"""Blackjack package exports."""

from .blackjack_ai import choose_move
from .blackjack_engine import BlackjackEngine
from .blackjack_game import BlackjackGame
from .blackjack_moves import DoubleDown, Hit, NewHand, PlaceBet, Stand
from .blackjack_state import BlackjackObservation, BlackjackState, HandResult, Phase, best_total, card_value

__all__ = [
    "BlackjackEngine",
    "BlackjackGame",
    "BlackjackObservation",
    "BlackjackState",
    "DoubleDown",
    "HandResult",
    "Hit",
    "NewHand",
    "Phase",
    "PlaceBet",
    "Stand",
    "best_total",
    "card_value",
    "choose_move",
]
