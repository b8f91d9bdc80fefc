"""Pure move generation, conversion, and turn resolution for takeover."""

from __future__ import annotations

from dataclasses import dataclass

from .takeover_moves import TakeoverMove
from .takeover_state import (
    MOVE_RANGE,
    NEIGHBOURS,
    TOTAL_CELLS,
    Board,
    MoveKind,
    Side,
    cell_index,
    col_of,
    is_inside,
    row_of,
)


def moves_from_cell(board: Board, source: int, side: Side) -> list[TakeoverMove]:
    if board[source] is not side:
        return []
    row, col = row_of(source), col_of(source)
    moves = []
    for d_row in range(-MOVE_RANGE, MOVE_RANGE + 1):
        for d_col in range(-MOVE_RANGE, MOVE_RANGE + 1):
            distance = max(abs(d_row), abs(d_col))
            if distance == 0:
                continue
            target_row, target_col = row + d_row, col + d_col
            if not is_inside(target_row, target_col):
                continue
            target = cell_index(target_row, target_col)
            if board[target] is not None:
                continue
            moves.append(TakeoverMove(source, target, MoveKind.CLONE if distance == 1 else MoveKind.JUMP))
    return moves


def generate_moves(board: Board, side: Side) -> list[TakeoverMove]:
    moves: list[TakeoverMove] = []
    for index in range(TOTAL_CELLS):
        moves.extend(moves_from_cell(board, index, side))
    return moves


@dataclass(frozen=True)
class ApplyResult:
    board: Board
    converted: tuple[int, ...]


def apply_on_board(board: Board, move: TakeoverMove, side: Side) -> ApplyResult | None:
    """Place the piece and flip every adjacent opponent piece; None when not applicable."""
    if board[move.from_index] is not side or board[move.to_index] is not None:
        return None
    snapshot = list(board)
    if move.kind is MoveKind.JUMP:
        snapshot[move.from_index] = None
    snapshot[move.to_index] = side
    converted = []
    row, col = row_of(move.to_index), col_of(move.to_index)
    for d_row, d_col in NEIGHBOURS:
        if not is_inside(row + d_row, col + d_col):
            continue
        neighbour = cell_index(row + d_row, col + d_col)
        if snapshot[neighbour] is side.other:
            snapshot[neighbour] = side
            converted.append(neighbour)
    return ApplyResult(board=tuple(snapshot), converted=tuple(converted))


@dataclass(frozen=True)
class TurnResolution:
    next_side: Side
    pass_message: str | None
    is_over: bool


def resolve_turn(board: Board, candidate: Side) -> TurnResolution:
    """Decide who moves next after a move; the candidate passes when blocked."""
    if all(cell is not None for cell in board):
        return TurnResolution(candidate, None, True)
    if generate_moves(board, candidate):
        return TurnResolution(candidate, None, False)
    other = candidate.other
    if generate_moves(board, other):
        return TurnResolution(other, f"{candidate.label} has no legal moves. {other.label} plays.", False)
    return TurnResolution(candidate, "Neither player can make a legal move.", True)
