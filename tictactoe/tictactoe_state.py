"""State and win detection for tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from framework.observation import Observation
from framework.state import State

WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Mark(str, Enum):
    """Player marks; X always moves first."""

    X = "X"
    O = "O"

    @property
    def other(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


Board = tuple[Mark | None, ...]


def empty_board() -> Board:
    return (None,) * 9


def find_winning_line(board: Sequence[Mark | None]) -> tuple[int, int, int] | None:
    """Return the first completed line, if any."""
    for a, b, c in WINNING_LINES:
        mark = board[a]
        if mark is not None and mark == board[b] and mark == board[c]:
            return (a, b, c)
    return None


def winner_of(board: Sequence[Mark | None]) -> Mark | None:
    line = find_winning_line(board)
    return board[line[0]] if line is not None else None


@dataclass(frozen=True)
class TicTacToeState(State):
    """Immutable 3x3 board plus turn and terminal flags."""

    seed: int
    board: Board
    current: Mark = Mark.X
    winner: Mark | None = None
    is_draw: bool = False
    winning_line: tuple[int, int, int] | None = None
    turn_index: int = 0

    def available(self) -> list[int]:
        return [index for index, mark in enumerate(self.board) if mark is None]


@dataclass(frozen=True)
class TicTacToeObservation(Observation):
    """Full-information view of the board."""

    mark: Mark
    board: Board
    current: Mark
    winner: Mark | None
    is_draw: bool
