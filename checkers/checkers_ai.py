"""Checkers opponent: random, greedy capture, and reply-aware scoring."""

from __future__ import annotations

import random
from typing import Sequence

from framework.difficulty import Difficulty

from .checkers_moves import CheckersMove
from .checkers_rules import apply_on_board, generate_moves, should_promote
from .checkers_state import BOARD_SIZE, Board, CheckersObservation, Color, row_of


def normal_score(board: Board, move: CheckersMove) -> int:
    piece = board[move.from_index]
    promotes = piece is not None and should_promote(piece, row_of(move.to_index))
    return len(move.captured) * 100 + (20 if promotes else 0)


def hard_score(board: Board, move: CheckersMove) -> float:
    """Score a move by its gains minus what the opponent can do in reply."""
    piece = board[move.from_index]
    if piece is None:
        return float("-inf")
    transition = apply_on_board(board, move)
    continuation = len(transition.continuation)
    opponent_moves = generate_moves(transition.board, piece.color.other)
    opponent_captures = [reply for reply in opponent_moves if reply.is_capture]
    exposed = any(move.to_index in reply.captured for reply in opponent_captures)

    dest_row = row_of(move.to_index)
    if piece.king:
        advancement = 0
    elif piece.color is Color.BLACK:
        advancement = dest_row
    else:
        advancement = BOARD_SIZE - 1 - dest_row

    return (
        len(move.captured) * 140
        + (70 if transition.promoted else 0)
        + continuation * 45
        + advancement * 3
        - len(opponent_moves) * 3
        - len(opponent_captures) * 35
        - (60 if exposed else 0)
    )


def _best(moves: Sequence[CheckersMove], score) -> CheckersMove:
    # Highest score first, lower destination index breaks ties.
    return min(moves, key=lambda move: (-score(move), move.to_index))


def choose_move(
    observation: CheckersObservation,
    legal_moves: Sequence[CheckersMove],
    difficulty: Difficulty,
    rng: random.Random,
) -> CheckersMove | None:
    if not legal_moves:
        return None
    if difficulty is Difficulty.EASY:
        return rng.choice(list(legal_moves))
    if difficulty is Difficulty.NORMAL:
        return _best(legal_moves, lambda move: normal_score(observation.board, move))
    return _best(legal_moves, lambda move: hard_score(observation.board, move))
