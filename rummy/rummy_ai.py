"""Gin rummy opponent: discard-pile draws, deadwood-minimizing discards, knock timing."""

from __future__ import annotations

import random
from typing import Sequence

from framework.cards import Card
from framework.difficulty import Difficulty

from .rummy_melds import hand_deadwood
from .rummy_moves import Discard, DrawDiscard, DrawStock, Knock, NextRound, Pass, RummyMove
from .rummy_state import KNOCK_THRESHOLD, RummyObservation


def would_reduce_deadwood(hand: Sequence[Card], card: Card) -> bool:
    """True when taking `card` and discarding something lowers deadwood."""
    current = hand_deadwood(hand)
    extended = list(hand) + [card]
    return any(
        hand_deadwood(extended[:index] + extended[index + 1 :]) < current for index in range(len(extended))
    )


def best_discard(hand: Sequence[Card]) -> int:
    best, best_deadwood = 0, None
    for index in range(len(hand)):
        deadwood = hand_deadwood(list(hand[:index]) + list(hand[index + 1 :]))
        if best_deadwood is None or deadwood < best_deadwood:
            best, best_deadwood = index, deadwood
    return best


def smart_discard(hand: Sequence[Card], picked_by_opponent: Sequence[Card], own_discards: Sequence[Card]) -> int:
    """Minimize deadwood, but hold cards the opponent is collecting."""
    best, best_score = 0, None
    for index, card in enumerate(hand):
        deadwood = hand_deadwood(list(hand[:index]) + list(hand[index + 1 :]))
        penalty = 0
        if any(picked.rank == card.rank for picked in picked_by_opponent):
            penalty += 20
        if any(picked.suit == card.suit and abs(picked.rank - card.rank) <= 2 for picked in picked_by_opponent):
            penalty += 15
        bonus = 10 if any(discarded.rank == card.rank for discarded in own_discards) else 0
        score = -deadwood - penalty + bonus
        if best_score is None or score > best_score:
            best, best_score = index, score
    return best


def should_knock(deadwood: int, difficulty: Difficulty, rng: random.Random) -> bool:
    if deadwood == 0:
        return True
    if deadwood > KNOCK_THRESHOLD:
        return False
    if difficulty is Difficulty.EASY:
        return True
    if difficulty is Difficulty.NORMAL:
        return deadwood <= 5 or rng.random() < 0.5
    return deadwood <= 3 or (deadwood <= 7 and rng.random() < 0.6)


def choose_move(
    observation: RummyObservation,
    legal_moves: Sequence[RummyMove],
    difficulty: Difficulty,
    rng: random.Random,
) -> RummyMove | None:
    if not legal_moves:
        return None
    moves = list(legal_moves)
    hand = observation.hand

    if NextRound() in moves:
        return NextRound()
    if Knock() in moves:
        return Knock() if should_knock(hand_deadwood(hand), difficulty, rng) else Pass()
    if DrawStock() in moves or DrawDiscard() in moves:
        top = observation.discard_top
        take_discard = (
            top is not None
            and DrawDiscard() in moves
            and difficulty is not Difficulty.EASY
            and would_reduce_deadwood(hand, top)
        )
        if take_discard or DrawStock() not in moves:
            return DrawDiscard()
        return DrawStock()

    if difficulty is Difficulty.EASY:
        return Discard(rng.choice(hand))
    if difficulty is Difficulty.NORMAL:
        return Discard(hand[best_discard(hand)])
    return Discard(hand[smart_discard(hand, observation.picked_by_opponent, observation.own_discards)])
