"""Board model, drop simulation, and four-in-a-row detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from framework.observation import Observation
from framework.state import State

ROWS = 6
COLUMNS = 7
WIN_LENGTH = 4
DIRECTIONS: tuple[tuple[int, int], ...] = ((1, 0), (0, 1), (1, 1), (1, -1))
CENTER_PRIORITY_COLUMNS: tuple[int, ...] = (3, 2, 4, 1, 5, 0, 6)


class Disc(str, Enum):
    """Disc colours; red drops first."""

    RED = "RED"
    YELLOW = "YELLOW"

    @property
    def other(self) -> "Disc":
        return Disc.YELLOW if self is Disc.RED else Disc.RED


Board = tuple[Disc | None, ...]


def cell_index(row: int, column: int) -> int:
    return row * COLUMNS + column


def empty_board() -> Board:
    return (None,) * (ROWS * COLUMNS)


def drop_row(board: Sequence[Disc | None], column: int) -> int:
    """Lowest empty row in `column`, or -1 when the column is full."""
    for row in range(ROWS - 1, -1, -1):
        if board[cell_index(row, column)] is None:
            return row
    return -1


def simulate_drop(board: Board, column: int, disc: Disc) -> tuple[Board, int] | None:
    """Return the board after dropping `disc` and the landing index, or None if full."""
    row = drop_row(board, column)
    if row < 0:
        return None
    index = cell_index(row, column)
    next_board = list(board)
    next_board[index] = disc
    return tuple(next_board), index


def available_columns(board: Board) -> list[int]:
    """Playable columns in centre-first priority order."""
    return [column for column in CENTER_PRIORITY_COLUMNS if drop_row(board, column) >= 0]


def find_winner(board: Sequence[Disc | None]) -> tuple[Disc, tuple[int, ...]] | None:
    """Return the winning disc and its four cells, scanning row-major."""
    for row in range(ROWS):
        for column in range(COLUMNS):
            disc = board[cell_index(row, column)]
            if disc is None:
                continue
            for row_step, column_step in DIRECTIONS:
                cells = [cell_index(row, column)]
                for step in range(1, WIN_LENGTH):
                    next_row = row + row_step * step
                    next_column = column + column_step * step
                    if not (0 <= next_row < ROWS and 0 <= next_column < COLUMNS):
                        break
                    if board[cell_index(next_row, next_column)] is not disc:
                        break
                    cells.append(cell_index(next_row, next_column))
                if len(cells) == WIN_LENGTH:
                    return disc, tuple(cells)
    return None


@dataclass(frozen=True)
class ConnectFourState(State):
    """Immutable 6x7 board with the side to move and terminal flags."""

    seed: int
    board: Board
    current: Disc = Disc.RED
    winner: Disc | None = None
    winning_cells: tuple[int, ...] = ()
    is_draw: bool = False
    last_drop_index: int = -1
    turn_index: int = 0


@dataclass(frozen=True)
class ConnectFourObservation(Observation):
    """Full-information view of the board."""

    disc: Disc
    board: Board
    current: Disc
    winner: Disc | None
