"""Ranks, titles, and immutable state for President (a climbing card game)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from framework.cards import Card, Suit
from framework.observation import Observation
from framework.state import State

SEATS: tuple[str, ...] = ("You", "Alice", "Bob", "Carol")
TOP_VALUE = 12
THREE_OF_CLUBS = Card(rank=3, suit=Suit.CLUBS)


class Title(str, Enum):
    PRESIDENT = "PRESIDENT"
    VICE_PRESIDENT = "VICE_PRESIDENT"
    NEUTRAL = "NEUTRAL"
    SCUM = "SCUM"
    NONE = "NONE"

    @property
    def display(self) -> str:
        return "" if self is Title.NONE else self.value.replace("_", " ").title()


TITLE_BY_ORDER = (Title.PRESIDENT, Title.VICE_PRESIDENT, Title.NEUTRAL, Title.SCUM)
TITLE_POINTS = {Title.PRESIDENT: 3, Title.VICE_PRESIDENT: 2, Title.NEUTRAL: 1, Title.SCUM: 0, Title.NONE: 0}


class Phase(str, Enum):
    PLAYING = "PLAYING"
    ROUND_END = "ROUND_END"


def rank_value(rank: int) -> int:
    """Climbing order on ace-high ranks: 3 is 0, ace is 11, and 2 is the top card."""
    return TOP_VALUE if rank == 2 else rank - 3


def effective_value(rank: int, revolution: bool) -> int:
    value = rank_value(rank)
    return TOP_VALUE - value if revolution else value


def beats(attacker: int, defender: int, revolution: bool) -> bool:
    return effective_value(attacker, revolution) > effective_value(defender, revolution)


def sort_hand(cards, revolution: bool = False) -> tuple[Card, ...]:
    return tuple(sorted(cards, key=lambda card: (effective_value(card.rank, revolution), card.suit.value)))


@dataclass(frozen=True)
class PresidentState(State):
    seed: int
    hands: dict[str, tuple[Card, ...]]
    current: str
    round_number: int = 1
    round_limit: int = 0
    pile: tuple[Card, ...] = ()
    pass_count: int = 0
    last_played_by: str | None = None
    revolution: bool = False
    finished: tuple[str, ...] = ()
    titles: dict[str, Title] = field(default_factory=lambda: {seat: Title.NONE for seat in SEATS})
    points: dict[str, int] = field(default_factory=lambda: {seat: 0 for seat in SEATS})
    phase: Phase = Phase.PLAYING
    last_action: str = ""
    turn_count: int = 0

    @property
    def pile_count(self) -> int:
        return len(self.pile)

    @property
    def pile_rank(self) -> int | None:
        return self.pile[0].rank if self.pile else None

    @property
    def active_seats(self) -> list[str]:
        return [seat for seat in SEATS if seat not in self.finished]


@dataclass(frozen=True)
class PresidentObservation(Observation):
    hand: tuple[Card, ...]
    hand_sizes: dict[str, int]
    pile: tuple[Card, ...]
    revolution: bool
    finished: tuple[str, ...]
    titles: dict[str, Title]
    phase: Phase
