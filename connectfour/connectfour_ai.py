"""Window-scoring heuristic and alpha-beta search for connect-four."""

from __future__ import annotations

import math
import random
from typing import Sequence

from framework.difficulty import Difficulty

from .connectfour_moves import Drop
from .connectfour_state import (
    COLUMNS,
    ROWS,
    WIN_LENGTH,
    Board,
    ConnectFourObservation,
    Disc,
    available_columns,
    cell_index,
    find_winner,
    simulate_drop,
)

HARD_SEARCH_DEPTH = 5
EASY_RANDOM_RATE = 0.75
WIN_SCORE = 1_000_000


def _windows() -> list[tuple[int, ...]]:
    windows: list[tuple[int, ...]] = []
    span = range(WIN_LENGTH)
    for row in range(ROWS):
        for column in range(COLUMNS - WIN_LENGTH + 1):
            windows.append(tuple(cell_index(row, column + step) for step in span))
    for column in range(COLUMNS):
        for row in range(ROWS - WIN_LENGTH + 1):
            windows.append(tuple(cell_index(row + step, column) for step in span))
    for row in range(ROWS - WIN_LENGTH + 1):
        for column in range(COLUMNS - WIN_LENGTH + 1):
            windows.append(tuple(cell_index(row + step, column + step) for step in span))
    for row in range(ROWS - WIN_LENGTH + 1):
        for column in range(WIN_LENGTH - 1, COLUMNS):
            windows.append(tuple(cell_index(row + step, column - step) for step in span))
    return windows


WINDOWS = tuple(_windows())


def score_window(cells: Sequence[Disc | None], me: Disc) -> int:
    mine = sum(1 for cell in cells if cell is me)
    theirs = sum(1 for cell in cells if cell is me.other)
    empty = len(cells) - mine - theirs
    if mine == 4:
        return 100_000
    if theirs == 4:
        return -100_000
    score = 0
    if mine == 3 and empty == 1:
        score += 120
    elif mine == 2 and empty == 2:
        score += 18
    if theirs == 3 and empty == 1:
        score -= 110
    elif theirs == 2 and empty == 2:
        score -= 14
    return score


def score_board(board: Board, me: Disc) -> int:
    """Static evaluation from `me`'s point of view."""
    center = math.floor(COLUMNS / 2)
    score = sum(9 for row in range(ROWS) if board[cell_index(row, center)] is me)
    for window in WINDOWS:
        score += score_window([board[index] for index in window], me)
    return score


def winning_column(board: Board, disc: Disc) -> int | None:
    """Lowest-numbered column that wins immediately for `disc`."""
    for column in range(COLUMNS):
        dropped = simulate_drop(board, column, disc)
        if dropped is None:
            continue
        found = find_winner(dropped[0])
        if found is not None and found[0] is disc:
            return column
    return None


def normal_column(board: Board, me: Disc) -> int | None:
    for candidate in (winning_column(board, me), winning_column(board, me.other)):
        if candidate is not None:
            return candidate
    columns = available_columns(board)
    return columns[0] if columns else None


def minimax(board: Board, depth: int, alpha: float, beta: float, maximizing: bool, me: Disc) -> float:
    found = find_winner(board)
    if found is not None:
        return WIN_SCORE + depth if found[0] is me else -WIN_SCORE - depth
    columns = available_columns(board)
    if depth == 0 or not columns:
        return score_board(board, me)

    if maximizing:
        value = -math.inf
        for column in columns:
            dropped = simulate_drop(board, column, me)
            if dropped is None:
                continue
            value = max(value, minimax(dropped[0], depth - 1, alpha, beta, False, me))
            alpha = max(alpha, value)
            if alpha >= beta:
                break
        return value

    value = math.inf
    for column in columns:
        dropped = simulate_drop(board, column, me.other)
        if dropped is None:
            continue
        value = min(value, minimax(dropped[0], depth - 1, alpha, beta, True, me))
        beta = min(beta, value)
        if alpha >= beta:
            break
    return value


def hard_column(board: Board, me: Disc, depth: int = HARD_SEARCH_DEPTH) -> int | None:
    columns = available_columns(board)
    if not columns:
        return None
    for candidate in (winning_column(board, me), winning_column(board, me.other)):
        if candidate is not None:
            return candidate
    best_column, best_score = columns[0], -math.inf
    for column in columns:
        dropped = simulate_drop(board, column, me)
        if dropped is None:
            continue
        score = minimax(dropped[0], depth - 1, -math.inf, math.inf, False, me)
        if score > best_score:
            best_column, best_score = column, score
    return best_column


def choose_move(
    observation: ConnectFourObservation,
    legal_moves: Sequence[Drop],
    difficulty: Difficulty,
    rng: random.Random,
) -> Drop | None:
    """Pick a column for the observing disc."""
    if not legal_moves:
        return None
    board, me = observation.board, observation.disc
    if difficulty is Difficulty.EASY:
        random_column = rng.choice(available_columns(board))
        if rng.random() < EASY_RANDOM_RATE:
            return Drop(column=random_column)
        column = normal_column(board, me)
        return Drop(column=column if column is not None else random_column)
    column = hard_column(board, me) if difficulty is Difficulty.HARD else normal_column(board, me)
    return Drop(column=column) if column is not None else None
