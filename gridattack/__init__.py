"""Grid attack package exports."""

from .gridattack_ai import choose_move
from .gridattack_engine import GridAttackEngine
from .gridattack_game import GridAttackGame
from .gridattack_moves import Attack
from .gridattack_state import GridAttackObservation, GridAttackState, Seat, Ship, ShotResult

__all__ = [
    "Attack",
    "GridAttackEngine",
    "GridAttackGame",
    "GridAttackObservation",
    "GridAttackState",
    "Seat",
    "Ship",
    "ShotResult",
    "choose_move",
]
