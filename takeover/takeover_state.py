"""Board, moves, and immutable state for the takeover territory game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from framework.observation import Observation
from framework.state import State

BOARD_SIZE = 7
TOTAL_CELLS = BOARD_SIZE * BOARD_SIZE
MOVE_RANGE = 2
NEIGHBOURS: tuple[tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


class Side(str, Enum):
    B = "B"
    O = "O"

    @property
    def other(self) -> "Side":
        return Side.O if self is Side.B else Side.B

    @property
    def label(self) -> str:
        return "Blue" if self is Side.B else "Orange"


class MoveKind(str, Enum):
    CLONE = "CLONE"
    JUMP = "JUMP"


Board = tuple[Side | None, ...]


def cell_index(row: int, col: int) -> int:
    return row * BOARD_SIZE + col


def row_of(index: int) -> int:
    return index // BOARD_SIZE


def col_of(index: int) -> int:
    return index % BOARD_SIZE


def is_inside(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def initial_board() -> Board:
    board: list[Side | None] = [None] * TOTAL_CELLS
    board[cell_index(0, 0)] = Side.B
    board[cell_index(BOARD_SIZE - 1, BOARD_SIZE - 1)] = Side.B
    board[cell_index(0, BOARD_SIZE - 1)] = Side.O
    board[cell_index(BOARD_SIZE - 1, 0)] = Side.O
    return tuple(board)


def count_pieces(board: Board, side: Side) -> int:
    return sum(1 for cell in board if cell is side)


@dataclass(frozen=True)
class TakeoverState(State):
    seed: int
    board: Board
    current: Side = Side.B
    is_over: bool = False
    pass_message: str | None = None
    last_move: dict | None = None
    last_converted: tuple[int, ...] = ()
    move_count: int = 0

    @property
    def winner(self) -> Side | None:
        if not self.is_over:
            return None
        blue, orange = count_pieces(self.board, Side.B), count_pieces(self.board, Side.O)
        if blue > orange:
            return Side.B
        if orange > blue:
            return Side.O
        return None


@dataclass(frozen=True)
class TakeoverObservation(Observation):
    side: Side
    board: Board
    current: Side
