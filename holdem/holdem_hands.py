"""Poker hand evaluation: best five of five to seven cards, totally ordered."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from typing import Sequence

from framework.cards import Card


class HandCategory(IntEnum):
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def display(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True, order=True)
class HandEvaluation:
    """Compares by category, then tiebreak ranks left to right."""

    category: HandCategory
    tiebreakers: tuple[int, ...]


WHEEL = (14, 5, 4, 3, 2)


def evaluate_five(cards: Sequence[Card]) -> HandEvaluation:
    ranks = sorted((card.rank for card in cards), reverse=True)
    is_flush = len({card.suit for card in cards}) == 1
    is_wheel = tuple(ranks) == WHEEL
    is_straight = is_wheel or (len(set(ranks)) == 5 and ranks[0] - ranks[-1] == 4)

    groups = sorted(Counter(ranks).items(), key=lambda item: (item[1], item[0]), reverse=True)
    sizes = [size for _, size in groups]
    group_ranks = tuple(rank for rank, _ in groups)
    high = 5 if is_wheel else ranks[0]

    if is_flush and is_straight and not is_wheel and ranks[0] == 14:
        return HandEvaluation(HandCategory.ROYAL_FLUSH, (14,))
    if is_flush and is_straight:
        return HandEvaluation(HandCategory.STRAIGHT_FLUSH, (high,))
    if sizes == [4, 1]:
        return HandEvaluation(HandCategory.FOUR_OF_A_KIND, group_ranks)
    if sizes == [3, 2]:
        return HandEvaluation(HandCategory.FULL_HOUSE, group_ranks)
    if is_flush:
        return HandEvaluation(HandCategory.FLUSH, tuple(ranks))
    if is_straight:
        return HandEvaluation(HandCategory.STRAIGHT, (high,))
    if sizes[0] == 3:
        return HandEvaluation(HandCategory.THREE_OF_A_KIND, group_ranks)
    if sizes == [2, 2, 1]:
        return HandEvaluation(HandCategory.TWO_PAIR, group_ranks)
    if sizes[0] == 2:
        return HandEvaluation(HandCategory.ONE_PAIR, group_ranks)
    return HandEvaluation(HandCategory.HIGH_CARD, tuple(ranks))


def evaluate_best_hand(cards: Sequence[Card]) -> HandEvaluation:
    """Best evaluation over every five-card subset (cards use ace-high ranks)."""
    if len(cards) < 5:
        raise ValueError("At least five cards are required.")
    return max(evaluate_five(combo) for combo in combinations(cards, 5))
