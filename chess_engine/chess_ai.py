"""Chess opponent: random, two-ply greedy, and three-ply alpha-beta search."""

from __future__ import annotations

import math
import random
from typing import Sequence

from framework.difficulty import Difficulty

from .chess_moves import ChessMove
from .chess_rules import advance, evaluate, evaluate_simple, generate_moves, is_in_check
from .chess_state import Color, Position

MATE_SCORE = 20000
NORMAL_DEPTH = 2
HARD_DEPTH = 3


def _relative(score: int, side: Color) -> int:
    return score if side is Color.WHITE else -score


def _child(position: Position, move: ChessMove) -> Position:
    # En passant is only generated at the root.
    return advance(position, move, track_en_passant=False)


def _no_moves_score(position: Position, depth: int, max_depth: int) -> int:
    if is_in_check(position.board, position.side):
        return -MATE_SCORE + (max_depth - depth) * 100
    return 0


def minimax_simple(position: Position, depth: int) -> int:
    """Negamax on the simple evaluation, scored for the side to move."""
    if depth == 0:
        return _relative(evaluate_simple(position.board), position.side)
    moves = generate_moves(position)
    if not moves:
        return _no_moves_score(position, depth, NORMAL_DEPTH)
    return max(-minimax_simple(_child(position, move), depth - 1) for move in moves)


def alpha_beta(position: Position, depth: int, alpha: float, beta: float) -> float:
    """Fail-hard negamax alpha-beta on material plus piece-square tables."""
    if depth == 0:
        return _relative(evaluate(position.board), position.side)
    moves = generate_moves(position)
    if not moves:
        return _no_moves_score(position, depth, HARD_DEPTH)
    for move in moves:
        score = -alpha_beta(_child(position, move), depth - 1, -beta, -alpha)
        alpha = max(alpha, score)
        if alpha >= beta:
            break
    return alpha


def normal_move(position: Position, moves: Sequence[ChessMove]) -> ChessMove:
    best, best_score = moves[0], -math.inf
    for move in moves:
        score = -minimax_simple(advance(position, move), NORMAL_DEPTH - 1)
        if score > best_score:
            best, best_score = move, score
    return best


def hard_move(position: Position, moves: Sequence[ChessMove]) -> ChessMove:
    best, best_score = moves[0], -math.inf
    alpha = -math.inf
    for move in moves:
        score = -alpha_beta(advance(position, move), HARD_DEPTH - 1, -math.inf, -alpha)
        if score > best_score:
            best, best_score = move, score
        alpha = max(alpha, score)
    return best


def choose_move(observation, legal_moves: Sequence[ChessMove], difficulty: Difficulty, rng: random.Random) -> ChessMove | None:
    if not legal_moves:
        return None
    moves = list(legal_moves)
    if difficulty is Difficulty.EASY:
        return rng.choice(moves)
    if difficulty is Difficulty.NORMAL:
        return normal_move(observation.position, moves)
    return hard_move(observation.position, moves)
