"""Pieces, board layout, and immutable state for checkers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from framework.observation import Observation
from framework.state import State

BOARD_SIZE = 8
TOTAL_CELLS = BOARD_SIZE * BOARD_SIZE
STARTING_PIECES = 12


class Color(str, Enum):
    """Sides; black starts on rows 0-2 and moves first."""

    BLACK = "BLACK"
    RED = "RED"

    @property
    def other(self) -> "Color":
        return Color.RED if self is Color.BLACK else Color.BLACK

    @property
    def label(self) -> str:
        return self.value.title()


@dataclass(frozen=True)
class Piece:
    """A man or a crowned king."""

    color: Color
    king: bool = False

    def crowned(self) -> "Piece":
        return Piece(color=self.color, king=True)


Board = tuple[Piece | None, ...]


def cell_index(row: int, col: int) -> int:
    return row * BOARD_SIZE + col


def row_of(index: int) -> int:
    return index // BOARD_SIZE


def col_of(index: int) -> int:
    return index % BOARD_SIZE


def is_playable(row: int, col: int) -> bool:
    return (row + col) % 2 == 1


def initial_board() -> Board:
    board: list[Piece | None] = [None] * TOTAL_CELLS
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if not is_playable(row, col):
                continue
            if row < 3:
                board[cell_index(row, col)] = Piece(Color.BLACK)
            elif row >= BOARD_SIZE - 3:
                board[cell_index(row, col)] = Piece(Color.RED)
    return tuple(board)


def count_pieces(board: Board, color: Color, *, kings_only: bool = False) -> int:
    return sum(1 for piece in board if piece is not None and piece.color is color and (piece.king or not kings_only))


@dataclass(frozen=True)
class CheckersState(State):
    """Board, side to move, and the multi-jump lock."""

    seed: int
    board: Board
    current: Color = Color.BLACK
    forced_from_index: int | None = None
    winner: Color | None = None
    is_draw: bool = False
    move_count: int = 0
    last_move: dict | None = None


@dataclass(frozen=True)
class CheckersObservation(Observation):
    """Full-information view; `forced_from_index` pins a capturing piece mid-chain."""

    color: Color
    board: Board
    current: Color
    forced_from_index: int | None
