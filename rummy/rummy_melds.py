"""Meld search, deadwood, and layoffs for gin rummy hands."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, Sequence

from framework.cards import Card


def card_points(card: Card) -> int:
    """Ace counts 1, face cards 10."""
    return min(card.rank, 10)


def deadwood_points(cards: Iterable[Card]) -> int:
    return sum(card_points(card) for card in cards)


def sort_hand(cards: Iterable[Card]) -> tuple[Card, ...]:
    return tuple(sorted(cards, key=lambda card: (card.suit, card.rank)))


@dataclass(frozen=True)
class Meld:
    cards: tuple[Card, ...]
    is_run: bool


def find_all_melds(hand: Sequence[Card]) -> list[Meld]:
    """Every set (3 or 4 of a rank) and run (3+ consecutive in a suit) in the hand."""
    melds: list[Meld] = []
    by_rank: dict[int, list[Card]] = defaultdict(list)
    by_suit: dict[object, list[Card]] = defaultdict(list)
    for card in hand:
        by_rank[card.rank].append(card)
        by_suit[card.suit].append(card)

    for cards in by_rank.values():
        if len(cards) < 3:
            continue
        melds.extend(Meld(tuple(triple), is_run=False) for triple in combinations(cards, 3))
        if len(cards) >= 4:
            melds.append(Meld(tuple(cards), is_run=False))

    for cards in by_suit.values():
        ordered = sorted(cards, key=lambda card: card.rank)
        for start in range(len(ordered)):
            run = [ordered[start]]
            for candidate in ordered[start + 1 :]:
                if candidate.rank != run[-1].rank + 1:
                    break
                run.append(candidate)
                if len(run) >= 3:
                    melds.append(Meld(tuple(run), is_run=True))
    return melds


def find_optimal_melds(hand: Sequence[Card]) -> tuple[list[Meld], list[Card]]:
    """Non-overlapping melds minimizing deadwood, plus the leftover cards."""
    all_melds = find_all_melds(hand)
    best_melds: list[Meld] = []
    best_deadwood = deadwood_points(hand)

    def backtrack(start: int, used: frozenset[Card], current: list[Meld]) -> None:
        nonlocal best_melds, best_deadwood
        deadwood = deadwood_points(card for card in hand if card not in used)
        if deadwood < best_deadwood:
            best_deadwood = deadwood
            best_melds = list(current)
        if deadwood == 0:
            return
        for index in range(start, len(all_melds)):
            meld = all_melds[index]
            if used.isdisjoint(meld.cards):
                backtrack(index + 1, used | frozenset(meld.cards), current + [meld])

    backtrack(0, frozenset(), [])
    melded = {card for meld in best_melds for card in meld.cards}
    return best_melds, [card for card in hand if card not in melded]


def hand_deadwood(hand: Sequence[Card]) -> int:
    return deadwood_points(find_optimal_melds(hand)[1])


def can_lay_off(card: Card, meld_cards: Sequence[Card], is_run: bool) -> bool:
    if is_run:
        ordered = sorted(meld_cards, key=lambda meld_card: meld_card.rank)
        return card.suit == ordered[0].suit and card.rank in (ordered[0].rank - 1, ordered[-1].rank + 1)
    return (
        len(meld_cards) < 4
        and card.rank == meld_cards[0].rank
        and all(meld_card.suit != card.suit for meld_card in meld_cards)
    )


def compute_layoffs(deadwood: Sequence[Card], knocker_melds: Sequence[Meld]) -> list[Card]:
    """Lay defender deadwood onto the knocker's melds until nothing more fits."""
    remaining = list(deadwood)
    extended = [(list(meld.cards), meld.is_run) for meld in knocker_melds]
    changed = True
    while changed:
        changed = False
        for card in list(remaining):
            for meld_cards, is_run in extended:
                if can_lay_off(card, meld_cards, is_run):
                    meld_cards.append(card)
                    remaining.remove(card)
                    changed = True
                    break
    return remaining
