"""Card values, phases, and immutable state for blackjack against the house."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from framework.cards import Card
from framework.observation import Observation
from framework.state import State

PLAYER = "PLAYER"
STARTING_CHIPS = 1000
BLACKJACK = 21
DEALER_STANDS_ON = 17
RESHUFFLE_BELOW = 15
ACE = 14


class Phase(str, Enum):
    BETTING = "BETTING"
    PLAYER_TURN = "PLAYER_TURN"
    DEALER_TURN = "DEALER_TURN"
    RESULT = "RESULT"


class HandResult(str, Enum):
    PLAYER_BLACKJACK = "PLAYER_BLACKJACK"
    PLAYER_WIN = "PLAYER_WIN"
    DEALER_WIN = "DEALER_WIN"
    PUSH = "PUSH"
    PLAYER_BUST = "PLAYER_BUST"
    DEALER_BUST = "DEALER_BUST"

    @property
    def display(self) -> str:
        return {
            "PLAYER_BLACKJACK": "Blackjack! You win 3:2.",
            "PLAYER_WIN": "You win!",
            "DEALER_WIN": "Dealer wins.",
            "PUSH": "Push. Your bet is returned.",
            "PLAYER_BUST": "Bust! Dealer wins.",
            "DEALER_BUST": "Dealer busts! You win!",
        }[self.value]


def card_value(card: Card) -> int:
    """Aces count 11 here (see `best_total`), face cards 10."""
    if card.rank == ACE:
        return 11
    return min(card.rank, 10)


def best_total(cards: Sequence[Card]) -> int:
    """Highest total not over 21, demoting aces from 11 to 1 one at a time."""
    total = sum(card_value(card) for card in cards)
    aces = sum(1 for card in cards if card.rank == ACE)
    while total > BLACKJACK and aces:
        total -= 10
        aces -= 1
    return total


@dataclass(frozen=True)
class BlackjackState(State):
    seed: int
    deck: tuple[Card, ...]
    chips: int = STARTING_CHIPS
    current_bet: int = 0
    player_hand: tuple[Card, ...] = ()
    dealer_hand: tuple[Card, ...] = ()
    phase: Phase = Phase.BETTING
    result: HandResult | None = None
    hand_limit: int = 0
    hands_played: int = 0
    shuffle_count: int = 1
    turn_count: int = 0

    @property
    def player_total(self) -> int:
        return best_total(self.player_hand)

    @property
    def dealer_total(self) -> int:
        return best_total(self.dealer_hand)

    @property
    def dealer_card_hidden(self) -> bool:
        return self.phase is Phase.PLAYER_TURN


@dataclass(frozen=True)
class BlackjackObservation(Observation):
    chips: int
    current_bet: int
    player_hand: tuple[Card, ...]
    dealer_visible: tuple[Card, ...]
    phase: Phase
    result: HandResult | None

    @property
    def player_total(self) -> int:
        return best_total(self.player_hand)

    @property
    def dealer_total(self) -> int:
        return best_total(self.dealer_visible)
