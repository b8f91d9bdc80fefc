"""Playing-card primitives shared by the card games."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence


class Suit(str, Enum):
    """French suits, in the conventional bridge order."""

    CLUBS = "CLUBS"
    DIAMONDS = "DIAMONDS"
    HEARTS = "HEARTS"
    SPADES = "SPADES"

    @property
    def symbol(self) -> str:
        return {"CLUBS": "♣", "DIAMONDS": "♦", "HEARTS": "♥", "SPADES": "♠"}[self.value]


RANK_LABELS: dict[int, str] = {1: "A", 11: "J", 12: "Q", 13: "K", 14: "A"}
DECK_SIZE = 52


@dataclass(frozen=True, order=True)
class Card:
    """A single card; rank is 1 (ace) through 13 (king) unless a game remaps it."""

    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if not 1 <= self.rank <= 14:
            raise ValueError(f"Card rank out of range: {self.rank}")

    @property
    def label(self) -> str:
        return f"{RANK_LABELS.get(self.rank, str(self.rank))}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.label


def standard_deck(*, ace_high: bool = False) -> list[Card]:
    """Return an ordered 52-card deck; aces rank 14 when `ace_high` is set."""
    ranks = range(2, 15) if ace_high else range(1, 14)
    return [Card(rank=rank, suit=suit) for suit in Suit for rank in ranks]


def shuffled_deck(rng: random.Random, *, ace_high: bool = False) -> list[Card]:
    """Return a freshly shuffled 52-card deck using the injected RNG."""
    deck = standard_deck(ace_high=ace_high)
    rng.shuffle(deck)
    return deck


def card_from_dict(data: dict) -> Card:
    """Parse a serialized card payload (`{"rank": 12, "suit": "HEARTS"}`)."""
    return Card(rank=int(data["rank"]), suit=Suit(str(data["suit"]).upper()))


def remove_cards(hand: Sequence[Card], cards: Iterable[Card]) -> tuple[Card, ...]:
    """Return `hand` without one copy of each card in `cards`."""
    remaining = list(hand)
    for card in cards:
        remaining.remove(card)
    return tuple(remaining)
