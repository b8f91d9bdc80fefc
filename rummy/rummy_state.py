"""Phases, knock results, and immutable state for gin rummy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from framework.cards import Card
from framework.observation import Observation
from framework.state import State

from .rummy_melds import Meld

HAND_SIZE = 10
WINNING_SCORE = 100
GIN_BONUS = 25
UNDERCUT_BONUS = 25
KNOCK_THRESHOLD = 10

SEATS: tuple[str, str] = ("YOU", "OPPONENT")


def other_seat(seat: str) -> str:
    return SEATS[1] if seat == SEATS[0] else SEATS[0]


class Phase(str, Enum):
    DRAW = "DRAW"
    DISCARD = "DISCARD"
    OPPONENT_TURN = "OPPONENT_TURN"
    KNOCK_DECISION = "KNOCK_DECISION"
    ROUND_OVER = "ROUND_OVER"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class KnockReveal:
    """What the table sees after a knock: both hands' melds and final deadwood."""

    knocker: str
    gin: bool
    undercut: bool
    points: int
    scorer: str
    knocker_melds: tuple[Meld, ...]
    knocker_deadwood: tuple[Card, ...]
    defender_melds: tuple[Meld, ...]
    defender_deadwood: tuple[Card, ...]


@dataclass(frozen=True)
class RummyState(State):
    seed: int
    round_number: int
    hands: dict[str, tuple[Card, ...]]
    stock: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    current: str = SEATS[0]
    phase: Phase = Phase.DRAW
    scores: dict[str, int] = field(default_factory=lambda: {seat: 0 for seat in SEATS})
    picked_from_discard: dict[str, tuple[Card, ...]] = field(default_factory=lambda: {seat: () for seat in SEATS})
    discarded: dict[str, tuple[Card, ...]] = field(default_factory=lambda: {seat: () for seat in SEATS})
    round_message: str = ""
    reveal: KnockReveal | None = None
    turn_count: int = 0

    @property
    def discard_top(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None


@dataclass(frozen=True)
class RummyObservation(Observation):
    hand: tuple[Card, ...]
    opponent_card_count: int
    stock_count: int
    discard_top: Card | None
    phase: Phase
    scores: dict[str, int]
    picked_by_opponent: tuple[Card, ...]
    own_discards: tuple[Card, ...]
    reveal: KnockReveal | None
