"""Balance package exports."""

from .balance_ai import choose_move
from .balance_engine import BalanceEngine
from .balance_game import BalanceGame
from .balance_moves import PlaceWeight
from .balance_state import BalanceObservation, BalanceState, PlacedWeight, Player, Stable, Tip

__all__ = [
    "BalanceEngine",
    "BalanceGame",
    "BalanceObservation",
    "BalanceState",
    "PlaceWeight",
    "PlacedWeight",
    "Player",
    "Stable",
    "Tip",
    "choose_move",
]
