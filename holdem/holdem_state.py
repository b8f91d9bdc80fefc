"""Seats, betting phases, and immutable state for Texas hold'em."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from framework.cards import Card
from framework.observation import Observation
from framework.state import State

from .holdem_hands import HandEvaluation

SEAT_NAMES: tuple[str, ...] = ("You", "Alice", "Bob", "Carol")
STARTING_CHIPS = 1000
SMALL_BLIND = 10
BIG_BLIND = 20


class Phase(str, Enum):
    PREFLOP = "PREFLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"
    HAND_OVER = "HAND_OVER"


BETTING_PHASES = (Phase.PREFLOP, Phase.FLOP, Phase.TURN, Phase.RIVER)


@dataclass(frozen=True)
class Seat:
    name: str
    chips: int = STARTING_CHIPS
    hole: tuple[Card, ...] = ()
    folded: bool = False
    bet: int = 0
    all_in: bool = False

    @property
    def can_act(self) -> bool:
        return not self.folded and not self.all_in


@dataclass(frozen=True)
class ShowdownEntry:
    name: str
    hole: tuple[Card, ...]
    evaluation: HandEvaluation


@dataclass(frozen=True)
class HoldemState(State):
    seed: int
    seats: tuple[Seat, ...]
    hand_number: int = 0
    deck: tuple[Card, ...] = ()
    community: tuple[Card, ...] = ()
    pot: int = 0
    current_bet: int = 0
    phase: Phase = Phase.PREFLOP
    dealer_index: int = 0
    active_index: int = 0
    acted: frozenset[int] = frozenset()
    message: str = ""
    showdown: tuple[ShowdownEntry, ...] = ()
    action_count: int = 0

    @property
    def hand_over(self) -> bool:
        return self.phase in (Phase.SHOWDOWN, Phase.HAND_OVER)

    @property
    def funded_seats(self) -> list[int]:
        return [index for index, seat in enumerate(self.seats) if seat.chips > 0]

    def seat_index(self, name: str) -> int:
        for index, seat in enumerate(self.seats):
            if seat.name == name:
                return index
        raise KeyError(f"Unknown seat: {name}")


@dataclass(frozen=True)
class PublicSeat:
    """A seat as the rest of the table sees it (no hole cards)."""

    name: str
    chips: int
    folded: bool
    bet: int
    all_in: bool


@dataclass(frozen=True)
class HoldemObservation(Observation):
    seat_index: int
    hole: tuple[Card, ...]
    community: tuple[Card, ...]
    seats: tuple[PublicSeat, ...]
    pot: int
    current_bet: int
    phase: Phase
    dealer_index: int
    showdown: tuple[ShowdownEntry, ...]

    @property
    def me(self) -> PublicSeat:
        return self.seats[self.seat_index]

    @property
    def to_call(self) -> int:
        return self.current_bet - self.me.bet
