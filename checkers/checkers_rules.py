"""Pure move generation and board transitions for checkers."""

from __future__ import annotations

from dataclasses import dataclass

from .checkers_moves import CheckersMove
from .checkers_state import (
    BOARD_SIZE,
    Board,
    Color,
    Piece,
    cell_index,
    col_of,
    count_pieces,
    row_of,
)

KING_DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
MAN_DIRECTIONS: dict[Color, tuple[tuple[int, int], ...]] = {
    Color.BLACK: ((1, -1), (1, 1)),
    Color.RED: ((-1, -1), (-1, 1)),
}


def _inside(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def directions(piece: Piece) -> tuple[tuple[int, int], ...]:
    return KING_DIRECTIONS if piece.king else MAN_DIRECTIONS[piece.color]


def should_promote(piece: Piece, dest_row: int) -> bool:
    if piece.king:
        return False
    return dest_row == (BOARD_SIZE - 1 if piece.color is Color.BLACK else 0)


def capture_moves_for(board: Board, index: int) -> list[CheckersMove]:
    """Single jumps available to the piece on `index`."""
    piece = board[index]
    if piece is None:
        return []
    row, col = row_of(index), col_of(index)
    moves: list[CheckersMove] = []
    for d_row, d_col in directions(piece):
        mid_row, mid_col = row + d_row, col + d_col
        land_row, land_col = row + 2 * d_row, col + 2 * d_col
        if not (_inside(mid_row, mid_col) and _inside(land_row, land_col)):
            continue
        mid_index, land_index = cell_index(mid_row, mid_col), cell_index(land_row, land_col)
        mid_piece = board[mid_index]
        if mid_piece is not None and mid_piece.color is not piece.color and board[land_index] is None:
            moves.append(CheckersMove(from_index=index, to_index=land_index, captured=(mid_index,)))
    return moves


def step_moves_for(board: Board, index: int) -> list[CheckersMove]:
    """Non-capturing diagonal steps for the piece on `index`."""
    piece = board[index]
    if piece is None:
        return []
    row, col = row_of(index), col_of(index)
    moves: list[CheckersMove] = []
    for d_row, d_col in directions(piece):
        dest_row, dest_col = row + d_row, col + d_col
        if _inside(dest_row, dest_col) and board[cell_index(dest_row, dest_col)] is None:
            moves.append(CheckersMove(from_index=index, to_index=cell_index(dest_row, dest_col)))
    return moves


def generate_moves(board: Board, color: Color, forced_from_index: int | None = None) -> list[CheckersMove]:
    """Legal moves; captures anywhere on the board make steps illegal."""
    if forced_from_index is not None:
        piece = board[forced_from_index]
        if piece is None or piece.color is not color:
            return []
        return capture_moves_for(board, forced_from_index)

    captures: list[CheckersMove] = []
    steps: list[CheckersMove] = []
    for index, piece in enumerate(board):
        if piece is None or piece.color is not color:
            continue
        captures.extend(capture_moves_for(board, index))
        steps.extend(step_moves_for(board, index))
    return captures if captures else steps


@dataclass(frozen=True)
class Transition:
    """Result of applying one move to a board."""

    board: Board
    promoted: bool
    continuation: tuple[CheckersMove, ...]


def apply_on_board(board: Board, move: CheckersMove) -> Transition:
    """Return a fresh board with the move applied plus its side effects."""
    piece = board[move.from_index]
    if piece is None:
        raise ValueError(f"No piece on cell {move.from_index}.")
    snapshot = list(board)
    snapshot[move.from_index] = None
    for captured in move.captured:
        snapshot[captured] = None
    promoted = should_promote(piece, row_of(move.to_index))
    snapshot[move.to_index] = piece.crowned() if promoted else piece
    next_board = tuple(snapshot)
    continuation = tuple(capture_moves_for(next_board, move.to_index)) if move.captured else ()
    return Transition(board=next_board, promoted=promoted, continuation=continuation)


def round_result(board: Board, mover: Color) -> tuple[Color | None, bool] | None:
    """Terminal check after `mover` finished its turn: (winner, is_draw) or None."""
    opponent = mover.other
    if count_pieces(board, opponent) == 0 or not generate_moves(board, opponent):
        if count_pieces(board, mover) == 0:
            return None, True
        return mover, False
    return None
