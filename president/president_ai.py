"""President opponents: shed the lowest cards, holding back twos and aces as strength grows."""

from __future__ import annotations

import random
from typing import Sequence

from framework.difficulty import Difficulty

from .president_moves import NextRound, Pass, PlayCards, PresidentMove
from .president_state import PresidentObservation, effective_value

ACE = 14
TWO = 2


def _lowest(plays: Sequence[PlayCards], revolution: bool) -> PlayCards:
    return min(plays, key=lambda play: sum(effective_value(card.rank, revolution) for card in play.cards))


def _without(plays: Sequence[PlayCards], banned) -> list[PlayCards]:
    return [play for play in plays if not any(banned(card.rank) for card in play.cards)]


def choose_move(
    observation: PresidentObservation,
    legal_moves: Sequence[PresidentMove],
    difficulty: Difficulty,
    rng: random.Random,
) -> PresidentMove | None:
    if not legal_moves:
        return None
    if NextRound() in legal_moves:
        return NextRound()
    plays = [move for move in legal_moves if isinstance(move, PlayCards)]
    if not plays:
        return Pass()
    revolution = observation.revolution
    leading = not observation.pile

    if difficulty is Difficulty.EASY or (difficulty is Difficulty.NORMAL and leading):
        return _lowest(plays, revolution)
    if difficulty is Difficulty.NORMAL:
        return _lowest(_without(plays, lambda rank: rank == TWO) or plays, revolution)

    hand_size = len(observation.hand)
    bomb = next((play for play in plays if len(play.cards) == 4), None)
    if bomb is not None and hand_size > 8:
        return bomb
    if leading:
        low = _without(plays, lambda rank: rank in (TWO, ACE))
        return _lowest(low or plays, revolution)
    saved = _without(plays, lambda rank: rank == TWO or (rank == ACE and hand_size > 4))
    return _lowest(saved or plays, revolution)
