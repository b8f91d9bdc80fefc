"""Balance opponent: keep torque low, and on HARD squeeze the opponent's options."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Sequence

from framework.difficulty import Difficulty

from .balance_moves import PlaceWeight
from .balance_state import SAFE_TORQUE_LIMIT, SLOT_POSITIONS, BalanceObservation, compute_torque

NO_REPLY_PRESSURE = 180.0


def score_placement(torque: int, slot: int, weight: int) -> tuple[int, int]:
    """Return (risk score, next torque); lower scores are safer."""
    next_torque = torque + slot * weight
    overflow = max(0, abs(next_torque) - SAFE_TORQUE_LIMIT)
    if overflow == 0:
        return abs(next_torque), next_torque
    return 100 + overflow * 20 + abs(next_torque), next_torque


@dataclass(frozen=True)
class _Candidate:
    slot: int
    weight: int
    score: int
    next_torque: int


def choose_move(
    observation: BalanceObservation,
    legal_moves: Sequence[PlaceWeight],
    difficulty: Difficulty,
    rng: random.Random,
) -> PlaceWeight | None:
    if not legal_moves:
        return None
    torque = compute_torque(observation.placements)
    occupied = {placed.slot for placed in observation.placements}
    candidates = []
    for move in legal_moves:
        score, next_torque = score_placement(torque, move.slot, move.weight)
        candidates.append(_Candidate(move.slot, move.weight, score, next_torque))

    if difficulty is Difficulty.EASY:
        ranked = sorted(candidates, key=lambda candidate: candidate.score)
        pool = ranked[len(ranked) // 2 :] or ranked
        pick = rng.choice(pool)
        return PlaceWeight(pick.slot, pick.weight)

    if difficulty is Difficulty.HARD:
        best: tuple[_Candidate, float] | None = None
        for candidate in candidates:
            remaining = [slot for slot in SLOT_POSITIONS if slot not in occupied and slot != candidate.slot]
            reply_best = math.inf
            for weight in observation.opponent_weights:
                for slot in remaining:
                    reply_best = min(reply_best, score_placement(candidate.next_torque, slot, weight)[0])
            pressure = reply_best if math.isfinite(reply_best) else NO_REPLY_PRESSURE
            value = pressure - candidate.score * 1.2
            if best is None:
                best = (candidate, value)
                continue
            incumbent, incumbent_value = best
            if (
                value > incumbent_value
                or (value == incumbent_value and candidate.score < incumbent.score)
                or (value == incumbent_value and candidate.score == incumbent.score and abs(candidate.slot) < abs(incumbent.slot))
            ):
                best = (candidate, value)
        if best is not None:
            return PlaceWeight(best[0].slot, best[0].weight)

    chosen = candidates[0]
    for candidate in candidates:
        if candidate.score < chosen.score or (candidate.score == chosen.score and abs(candidate.slot) < abs(chosen.slot)):
            chosen = candidate
    return PlaceWeight(chosen.slot, chosen.weight)
