"""Dots and boxes opponent: take boxes, avoid third edges, minimize risk."""

from __future__ import annotations

import random
from typing import Mapping, Sequence

from framework.difficulty import Difficulty

from .dotsandboxes_moves import DrawEdge
from .dotsandboxes_state import BOXES_BY_ID, EDGES, EDGES_BY_ID, DotsAndBoxesObservation, Player


def _drawn_count(box_edges: Sequence[str], drawn: Mapping[str, Player], extra: str) -> int:
    return sum(1 for edge_id in box_edges if edge_id == extra or edge_id in drawn)


def future_safe_edges(drawn: Mapping[str, Player], claimed: Mapping[str, Player]) -> int:
    """Count undrawn edges that would not hand the opponent a box."""
    safe = 0
    for candidate in EDGES:
        if candidate.id in drawn:
            continue
        creates_risk = any(
            box_id not in claimed and _drawn_count(BOXES_BY_ID[box_id].edge_ids, drawn, candidate.id) == 3
            for box_id in candidate.adjacent_boxes
        )
        if not creates_risk:
            safe += 1
    return safe


def choose_edge(
    drawn: Mapping[str, Player],
    claimed: Mapping[str, Player],
    me: Player,
    difficulty: Difficulty,
    rng: random.Random,
) -> str | None:
    available = [edge.id for edge in EDGES if edge.id not in drawn]
    if not available:
        return None
    if difficulty is Difficulty.EASY:
        return rng.choice(available)

    best_completing: tuple[str, int] | None = None
    safe: list[str] = []
    hard_fallback: tuple[str, int] | None = None
    for edge_id in available:
        completed = risk = 0
        for box_id in EDGES_BY_ID[edge_id].adjacent_boxes:
            if box_id in claimed:
                continue
            count = _drawn_count(BOXES_BY_ID[box_id].edge_ids, drawn, edge_id)
            if count == 4:
                completed += 1
            elif count == 3:
                risk += 1
        if completed:
            if best_completing is None or completed > best_completing[1] or (
                completed == best_completing[1] and edge_id < best_completing[0]
            ):
                best_completing = (edge_id, completed)
            continue
        if risk == 0:
            safe.append(edge_id)
        elif difficulty is Difficulty.HARD:
            if hard_fallback is None or risk < hard_fallback[1] or (
                risk == hard_fallback[1] and edge_id < hard_fallback[0]
            ):
                hard_fallback = (edge_id, risk)

    if best_completing is not None:
        return best_completing[0]
    if difficulty is Difficulty.HARD and safe:
        best_safe: tuple[str, int] | None = None
        for edge_id in safe:
            simulated = dict(drawn)
            simulated[edge_id] = me
            future = future_safe_edges(simulated, claimed)
            if best_safe is None or future > best_safe[1] or (future == best_safe[1] and edge_id < best_safe[0]):
                best_safe = (edge_id, future)
        if best_safe is not None:
            return best_safe[0]
    if difficulty is Difficulty.HARD and hard_fallback is not None:
        return hard_fallback[0]
    return min(safe or available)


def choose_move(
    observation: DotsAndBoxesObservation,
    legal_moves: Sequence[DrawEdge],
    difficulty: Difficulty,
    rng: random.Random,
) -> DrawEdge | None:
    if not legal_moves:
        return None
    edge_id = choose_edge(observation.drawn_edges, observation.claimed_boxes, observation.player, difficulty, rng)
    return DrawEdge(edge_id) if edge_id is not None else None
