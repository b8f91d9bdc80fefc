"""Difficulty-tiered tic-tac-toe opponent."""

from __future__ import annotations

import random
from functools import lru_cache
from typing import Sequence

from framework.difficulty import Difficulty

from .tictactoe_moves import Place
from .tictactoe_state import Board, Mark, TicTacToeObservation, winner_of

CORNERS = (0, 2, 6, 8)
SIDES = (1, 3, 5, 7)
EASY_RANDOM_RATE = 0.7


def winning_cell(board: Board, mark: Mark) -> int | None:
    """Return the first empty cell that completes a line for `mark`."""
    for index, cell in enumerate(board):
        if cell is not None:
            continue
        trial = list(board)
        trial[index] = mark
        if winner_of(trial) is mark:
            return index
    return None


def normal_cell(board: Board, mark: Mark) -> int | None:
    """Win, else block, else centre, else a corner, else a side."""
    for candidate in (winning_cell(board, mark), winning_cell(board, mark.other)):
        if candidate is not None:
            return candidate
    if board[4] is None:
        return 4
    for group in (CORNERS, SIDES):
        for index in group:
            if board[index] is None:
                return index
    return None


@lru_cache(maxsize=None)
def _minimax(board: Board, me: Mark, to_move: Mark, depth: int) -> int:
    winner = winner_of(board)
    if winner is me:
        return 10 - depth
    if winner is me.other:
        return depth - 10
    empties = [index for index, cell in enumerate(board) if cell is None]
    if not empties:
        return 0
    scores = []
    for index in empties:
        trial = list(board)
        trial[index] = to_move
        scores.append(_minimax(tuple(trial), me, to_move.other, depth + 1))
    return max(scores) if to_move is me else min(scores)


def hard_cell(board: Board, mark: Mark) -> int | None:
    """Full minimax; ties keep the lowest index."""
    best_index: int | None = None
    best_score = -(10**9)
    for index, cell in enumerate(board):
        if cell is not None:
            continue
        trial = list(board)
        trial[index] = mark
        score = _minimax(tuple(trial), mark, mark.other, 1)
        if score > best_score:
            best_index, best_score = index, score
    return best_index


def choose_move(
    observation: TicTacToeObservation,
    legal_moves: Sequence[Place],
    difficulty: Difficulty,
    rng: random.Random,
) -> Place | None:
    """Pick a cell for the observing mark."""
    if not legal_moves:
        return None
    board, mark = observation.board, observation.mark
    if difficulty is Difficulty.EASY:
        random_pick = rng.choice(list(legal_moves))
        if rng.random() < EASY_RANDOM_RATE:
            return random_pick
        index = normal_cell(board, mark)
        return Place(index=index) if index is not None else random_pick
    index = hard_cell(board, mark) if difficulty is Difficulty.HARD else normal_cell(board, mark)
    return Place(index=index) if index is not None else None
