"""Takeover opponent: conversion-greedy scoring with an opponent-reply penalty."""

from __future__ import annotations

import math
import random
from typing import Sequence

from framework.difficulty import Difficulty

from .takeover_moves import TakeoverMove
from .takeover_rules import apply_on_board, generate_moves, resolve_turn
from .takeover_state import Board, MoveKind, Side, TakeoverObservation, count_pieces

TERMINAL_BONUS = 500.0


def score_move(board: Board, move: TakeoverMove, side: Side) -> tuple[float, Board] | None:
    """Base score: conversions, a clone bonus, and a tenth of the piece lead."""
    result = apply_on_board(board, move, side)
    if result is None:
        return None
    control = count_pieces(result.board, side) - count_pieces(result.board, side.other)
    clone_bonus = 2 if move.kind is MoveKind.CLONE else 0
    return len(result.converted) * 4 + clone_bonus + control * 0.1, result.board


def hard_score(score: float, next_board: Board, side: Side) -> float:
    opponent = side.other
    opponent_moves = generate_moves(next_board, opponent)
    own_mobility = len(generate_moves(next_board, side))
    best_reply = 0.0
    for reply in opponent_moves:
        evaluation = score_move(next_board, reply, opponent)
        if evaluation is not None and evaluation[0] > best_reply:
            best_reply = evaluation[0]

    terminal = 0.0
    if resolve_turn(next_board, opponent).is_over:
        own, theirs = count_pieces(next_board, side), count_pieces(next_board, opponent)
        if own > theirs:
            terminal = TERMINAL_BONUS
        elif own < theirs:
            terminal = -TERMINAL_BONUS

    return (
        score * 1.4
        + (own_mobility - len(opponent_moves)) * 0.35
        - best_reply * 0.9
        + (8.0 if not opponent_moves else 0.0)
        + terminal
    )


def choose_move(
    observation: TakeoverObservation,
    legal_moves: Sequence[TakeoverMove],
    difficulty: Difficulty,
    rng: random.Random,
) -> TakeoverMove | None:
    if not legal_moves:
        return None
    board, side = observation.board, observation.side
    scored = []
    for move in legal_moves:
        evaluation = score_move(board, move, side)
        if evaluation is not None:
            scored.append((move, evaluation[0], evaluation[1]))
    if not scored:
        return legal_moves[0]

    if difficulty is Difficulty.EASY:
        weaker = sorted(scored, key=lambda item: item[1])
        weaker = weaker[: max(1, math.ceil(len(weaker) / 2))]
        return rng.choice(weaker)[0]

    if difficulty is Difficulty.HARD:
        best_move, best_hard, best_base = scored[0][0], -math.inf, -math.inf
        for move, score, next_board in scored:
            value = hard_score(score, next_board, side)
            if value > best_hard or (value == best_hard and score > best_base):
                best_move, best_hard, best_base = move, value, score
        return best_move

    best_move, best_score = scored[0][0], -math.inf
    for move, score, _ in scored:
        if score > best_score:
            best_move, best_score = move, score
    return best_move
