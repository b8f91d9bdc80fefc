"""Automatic player for blackjack seats run by the arena: the house's own hit rule."""

from __future__ import annotations

import random
from typing import Sequence

from framework.difficulty import Difficulty

from .blackjack_moves import BlackjackMove, DoubleDown, Hit, NewHand, PlaceBet, Stand
from .blackjack_state import DEALER_STANDS_ON, BlackjackObservation

BASE_BET = 25


def choose_move(
    observation: BlackjackObservation,
    legal_moves: Sequence[BlackjackMove],
    difficulty: Difficulty,
    rng: random.Random,
) -> BlackjackMove | None:
    if not legal_moves:
        return None
    if NewHand() in legal_moves:
        return NewHand()
    bets = [move for move in legal_moves if isinstance(move, PlaceBet)]
    if bets:
        return min(bets, key=lambda move: abs(move.amount - BASE_BET))
    if difficulty is Difficulty.EASY:
        return rng.choice([Hit(), Stand()])
    total = observation.player_total
    if difficulty is Difficulty.HARD and DoubleDown() in legal_moves and total in (10, 11):
        return DoubleDown()
    return Hit() if total < DEALER_STANDS_ON else Stand()
