"""President package exports."""

from .president_ai import choose_move
from .president_engine import PresidentEngine
from .president_game import PresidentGame, exchange_cards, valid_plays
from .president_moves import NextRound, Pass, PlayCards
from .president_state import Phase, PresidentObservation, PresidentState, Title, effective_value, rank_value

__all__ = [
    "NextRound",
    "Pass",
    "Phase",
    "PlayCards",
    "PresidentEngine",
    "PresidentGame",
    "PresidentObservation",
    "PresidentState",
    "Title",
    "choose_move",
    "effective_value",
    "exchange_cards",
    "rank_value",
    "valid_plays",
]
