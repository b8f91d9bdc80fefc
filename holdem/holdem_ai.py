"""Hold'em opponents: hand-strength heuristics with pot odds and bluffing on HARD."""

from __future__ import annotations

import random
from typing import Sequence

from framework.cards import Card
from framework.difficulty import Difficulty

from .holdem_hands import HandCategory, evaluate_best_hand
from .holdem_moves import AllIn, Call, Check, Fold, HoldemMove, NextHand, RaiseTo
from .holdem_state import BIG_BLIND, HoldemObservation

_MADE_HAND_STRENGTH = {
    HandCategory.THREE_OF_A_KIND: 0.65,
    HandCategory.STRAIGHT: 0.7,
    HandCategory.FLUSH: 0.75,
    HandCategory.FULL_HOUSE: 0.85,
    HandCategory.FOUR_OF_A_KIND: 0.92,
    HandCategory.STRAIGHT_FLUSH: 0.96,
    HandCategory.ROYAL_FLUSH: 1.0,
}
_KICKER_BASE = {HandCategory.HIGH_CARD: 0.1, HandCategory.ONE_PAIR: 0.35, HandCategory.TWO_PAIR: 0.55}


def hand_strength(hole: Sequence[Card], community: Sequence[Card]) -> float:
    """Rough 0..1 strength: starting-hand formula preflop, made-hand table after."""
    if len(hole) < 2:
        return 0.0
    if not community:
        high, low = sorted((hole[0].rank, hole[1].rank), reverse=True)
        strength = 0.0
        if high == low:
            strength += 0.5 + high / 28.0
        strength += (high + low) / 28.0 * 0.4
        if hole[0].suit == hole[1].suit:
            strength += 0.1
        if abs(high - low) <= 2:
            strength += 0.05
        return min(max(strength, 0.0), 1.0)

    evaluation = evaluate_best_hand(tuple(hole) + tuple(community))
    if evaluation.category in _KICKER_BASE:
        return _KICKER_BASE[evaluation.category] + evaluation.tiebreakers[0] / 140.0
    return _MADE_HAND_STRENGTH[evaluation.category]


def _raise_by(observation: HoldemObservation, amount: int) -> HoldemMove:
    """Cover the call plus `amount`, falling back to all in when the stack runs out."""
    me = observation.me
    total = min(observation.to_call + amount, me.chips)
    if total >= me.chips:
        return AllIn()
    return RaiseTo(me.bet + total)


def _call_or_check(observation: HoldemObservation) -> HoldemMove:
    return Call() if observation.to_call > 0 else Check()


def _easy(observation: HoldemObservation, rng: random.Random) -> HoldemMove:
    roll = rng.random()
    if roll < 0.2:
        return Fold()
    if roll < 0.7 or observation.to_call == 0:
        return _call_or_check(observation)
    return _raise_by(observation, BIG_BLIND * rng.randint(1, 3))


def _normal(observation: HoldemObservation, strength: float) -> HoldemMove:
    to_call = observation.to_call
    chips = observation.me.chips
    if strength < 0.25 and to_call > 0:
        return Fold()
    if strength > 0.7:
        if chips > to_call:
            return _raise_by(observation, min(BIG_BLIND * (1 + int(strength * 3)), chips))
        return Call()
    if to_call == 0:
        return Check()
    if strength > 0.4 or to_call <= BIG_BLIND:
        return Call()
    return Fold()


def _hard(observation: HoldemObservation, strength: float, rng: random.Random) -> HoldemMove:
    to_call = observation.to_call
    chips = observation.me.chips
    seat_count = len(observation.seats)
    position = ((observation.seat_index - observation.dealer_index) % seat_count) / seat_count
    pot_odds = to_call / (observation.pot + to_call) if to_call > 0 else 0.0
    bluff = rng.random() < 0.15

    if strength > 0.65 or (bluff and chips > BIG_BLIND * 3):
        multiplier = 2 if bluff else 2 + int(strength * 4)
        raise_amount = max(min(BIG_BLIND * multiplier, chips - to_call), BIG_BLIND)
        if chips > to_call + raise_amount:
            return _raise_by(observation, raise_amount)
        return _call_or_check(observation)
    if strength > 0.4 and (pot_odds < strength + position * 0.1 or to_call == 0):
        return _call_or_check(observation)
    if to_call > 0 and pot_odds < strength:
        return Call()
    return Check() if to_call == 0 else Fold()


def choose_move(
    observation: HoldemObservation,
    legal_moves: Sequence[HoldemMove],
    difficulty: Difficulty,
    rng: random.Random,
) -> HoldemMove | None:
    if not legal_moves:
        return None
    if NextHand() in legal_moves:
        return NextHand()
    if difficulty is Difficulty.EASY:
        return _easy(observation, rng)
    strength = hand_strength(observation.hole, observation.community)
    if difficulty is Difficulty.NORMAL:
        return _normal(observation, strength)
    return _hard(observation, strength, rng)
