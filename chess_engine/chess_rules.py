"""Pure chess move generation, attack detection, transitions, and evaluation."""

from __future__ import annotations

from typing import Iterator

from .chess_moves import PROMOTION_CHOICES, ChessMove
from .chess_state import (
    BOARD_SIZE,
    Board,
    CastlingRights,
    ChessPiece,
    Color,
    PieceType,
    Position,
    col_of,
    in_bounds,
    row_of,
    square,
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS = BISHOP_DIRS + ROOK_DIRS
KING_STEPS: tuple[tuple[int, int], ...] = tuple(
    (d_row, d_col) for d_row in (-1, 0, 1) for d_col in (-1, 0, 1) if (d_row, d_col) != (0, 0)
)
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
)

# Piece-square tables, White's perspective (row 0 is Black's back rank).
PAWN_PST = (
    0, 0, 0, 0, 0, 0, 0, 0,
    50, 50, 50, 50, 50, 50, 50, 50,
    10, 10, 20, 30, 30, 20, 10, 10,
    5, 5, 10, 25, 25, 10, 5, 5,
    0, 0, 0, 20, 20, 0, 0, 0,
    5, -5, -10, 0, 0, -10, -5, 5,
    5, 10, 10, -20, -20, 10, 10, 5,
    0, 0, 0, 0, 0, 0, 0, 0,
)
KNIGHT_PST = (
    -50, -40, -30, -30, -30, -30, -40, -50,
    -40, -20, 0, 0, 0, 0, -20, -40,
    -30, 0, 10, 15, 15, 10, 0, -30,
    -30, 5, 15, 20, 20, 15, 5, -30,
    -30, 0, 15, 20, 20, 15, 0, -30,
    -30, 5, 10, 15, 15, 10, 5, -30,
    -40, -20, 0, 5, 5, 0, -20, -40,
    -50, -40, -30, -30, -30, -30, -40, -50,
)
BISHOP_PST = (
    -20, -10, -10, -10, -10, -10, -10, -20,
    -10, 0, 0, 0, 0, 0, 0, -10,
    -10, 0, 10, 10, 10, 10, 0, -10,
    -10, 5, 5, 10, 10, 5, 5, -10,
    -10, 0, 10, 10, 10, 10, 0, -10,
    -10, 10, 10, 10, 10, 10, 10, -10,
    -10, 5, 0, 0, 0, 0, 5, -10,
    -20, -10, -10, -10, -10, -10, -10, -20,
)
ROOK_PST = (
    0, 0, 0, 0, 0, 0, 0, 0,
    5, 10, 10, 10, 10, 10, 10, 5,
    -5, 0, 0, 0, 0, 0, 0, -5,
    -5, 0, 0, 0, 0, 0, 0, -5,
    -5, 0, 0, 0, 0, 0, 0, -5,
    -5, 0, 0, 0, 0, 0, 0, -5,
    -5, 0, 0, 0, 0, 0, 0, -5,
    0, 0, 0, 5, 5, 0, 0, 0,
)
QUEEN_PST = (
    -20, -10, -10, -5, -5, -10, -10, -20,
    -10, 0, 0, 0, 0, 0, 0, -10,
    -10, 0, 5, 5, 5, 5, 0, -10,
    -5, 0, 5, 5, 5, 5, 0, -5,
    0, 0, 5, 5, 5, 5, 0, -5,
    -10, 5, 5, 5, 5, 5, 0, -10,
    -10, 0, 5, 0, 0, 0, 0, -10,
    -20, -10, -10, -5, -5, -10, -10, -20,
)
KING_PST = (
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -30, -40, -40, -50, -50, -40, -40, -30,
    -20, -30, -30, -40, -40, -30, -30, -20,
    -10, -20, -20, -20, -20, -20, -20, -10,
    20, 20, 0, 0, 0, 0, 20, 20,
    20, 30, 10, 0, 0, 10, 30, 20,
)
PIECE_SQUARE_TABLES: dict[PieceType, tuple[int, ...]] = {
    PieceType.PAWN: PAWN_PST,
    PieceType.KNIGHT: KNIGHT_PST,
    PieceType.BISHOP: BISHOP_PST,
    PieceType.ROOK: ROOK_PST,
    PieceType.QUEEN: QUEEN_PST,
    PieceType.KING: KING_PST,
}


def piece_square_value(piece: ChessPiece, row: int, col: int) -> int:
    index = square(row, col) if piece.color is Color.WHITE else square(BOARD_SIZE - 1 - row, col)
    return PIECE_SQUARE_TABLES[piece.type][index]


# -- attacks ---------------------------------------------------------------


def is_square_attacked(board: Board, row: int, col: int, by: Color) -> bool:
    for d_row, d_col in KNIGHT_OFFSETS:
        r, c = row + d_row, col + d_col
        if in_bounds(r, c):
            piece = board[square(r, c)]
            if piece is not None and piece.color is by and piece.type is PieceType.KNIGHT:
                return True

    pawn_row = row + (1 if by is Color.WHITE else -1)
    for d_col in (-1, 1):
        if in_bounds(pawn_row, col + d_col):
            piece = board[square(pawn_row, col + d_col)]
            if piece is not None and piece.color is by and piece.type is PieceType.PAWN:
                return True

    for d_row, d_col in KING_STEPS:
        r, c = row + d_row, col + d_col
        if in_bounds(r, c):
            piece = board[square(r, c)]
            if piece is not None and piece.color is by and piece.type is PieceType.KING:
                return True

    for dirs, sliders in (
        (BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
        (ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for d_row, d_col in dirs:
            r, c = row + d_row, col + d_col
            while in_bounds(r, c):
                piece = board[square(r, c)]
                if piece is not None:
                    if piece.color is by and piece.type in sliders:
                        return True
                    break
                r, c = r + d_row, c + d_col
    return False


def find_king(board: Board, color: Color) -> int | None:
    for index, piece in enumerate(board):
        if piece is not None and piece.type is PieceType.KING and piece.color is color:
            return index
    return None


def is_in_check(board: Board, color: Color) -> bool:
    king = find_king(board, color)
    if king is None:
        return False
    return is_square_attacked(board, row_of(king), col_of(king), color.other)


# -- move generation -------------------------------------------------------


def _pawn_moves(board: Board, index: int, color: Color, ep_target: int | None) -> Iterator[ChessMove]:
    row, col = row_of(index), col_of(index)
    direction = -1 if color is Color.WHITE else 1
    start_row = 6 if color is Color.WHITE else 1
    promotion_row = 0 if color is Color.WHITE else BOARD_SIZE - 1
    ahead = row + direction

    if in_bounds(ahead, col) and board[square(ahead, col)] is None:
        if ahead == promotion_row:
            for promotion in PROMOTION_CHOICES:
                yield ChessMove(index, square(ahead, col), promotion=promotion)
        else:
            yield ChessMove(index, square(ahead, col))
        two_ahead = row + 2 * direction
        if row == start_row and board[square(two_ahead, col)] is None:
            yield ChessMove(index, square(two_ahead, col))

    for d_col in (-1, 1):
        target_col = col + d_col
        if not in_bounds(ahead, target_col):
            continue
        target_index = square(ahead, target_col)
        target = board[target_index]
        if target is not None and target.color is not color:
            if ahead == promotion_row:
                for promotion in PROMOTION_CHOICES:
                    yield ChessMove(index, target_index, promotion=promotion, captured=target)
            else:
                yield ChessMove(index, target_index, captured=target)
        if ep_target is not None and target_index == ep_target:
            yield ChessMove(index, target_index, is_en_passant=True, captured=board[square(row, target_col)])


def _step_moves(board: Board, index: int, color: Color, offsets: tuple[tuple[int, int], ...]) -> Iterator[ChessMove]:
    row, col = row_of(index), col_of(index)
    for d_row, d_col in offsets:
        r, c = row + d_row, col + d_col
        if not in_bounds(r, c):
            continue
        target = board[square(r, c)]
        if target is None or target.color is not color:
            yield ChessMove(index, square(r, c), captured=target)


def _sliding_moves(board: Board, index: int, color: Color, dirs: tuple[tuple[int, int], ...]) -> Iterator[ChessMove]:
    row, col = row_of(index), col_of(index)
    for d_row, d_col in dirs:
        r, c = row + d_row, col + d_col
        while in_bounds(r, c):
            target = board[square(r, c)]
            if target is None:
                yield ChessMove(index, square(r, c))
            else:
                if target.color is not color:
                    yield ChessMove(index, square(r, c), captured=target)
                break
            r, c = r + d_row, c + d_col


def _castling_moves(board: Board, color: Color, rights: CastlingRights) -> Iterator[ChessMove]:
    if rights.king_moved:
        return
    row = color.home_row
    enemy = color.other
    king = board[square(row, 4)]
    if king is None or king.type is not PieceType.KING or king.color is not color:
        return
    if is_square_attacked(board, row, 4, enemy):
        return

    def _rook_home(col: int) -> bool:
        rook = board[square(row, col)]
        return rook is not None and rook.type is PieceType.ROOK and rook.color is color

    if (
        not rights.rook_h_moved
        and _rook_home(7)
        and board[square(row, 5)] is None
        and board[square(row, 6)] is None
        and not is_square_attacked(board, row, 5, enemy)
        and not is_square_attacked(board, row, 6, enemy)
    ):
        yield ChessMove(square(row, 4), square(row, 6), is_castle=True)
    if (
        not rights.rook_a_moved
        and _rook_home(0)
        and all(board[square(row, col)] is None for col in (1, 2, 3))
        and not is_square_attacked(board, row, 3, enemy)
        and not is_square_attacked(board, row, 2, enemy)
    ):
        yield ChessMove(square(row, 4), square(row, 2), is_castle=True)


def pseudo_legal_moves(position: Position) -> list[ChessMove]:
    board, color = position.board, position.side
    moves: list[ChessMove] = []
    for index, piece in enumerate(board):
        if piece is None or piece.color is not color:
            continue
        if piece.type is PieceType.PAWN:
            moves.extend(_pawn_moves(board, index, color, position.ep_target))
        elif piece.type is PieceType.KNIGHT:
            moves.extend(_step_moves(board, index, color, KNIGHT_OFFSETS))
        elif piece.type is PieceType.BISHOP:
            moves.extend(_sliding_moves(board, index, color, BISHOP_DIRS))
        elif piece.type is PieceType.ROOK:
            moves.extend(_sliding_moves(board, index, color, ROOK_DIRS))
        elif piece.type is PieceType.QUEEN:
            moves.extend(_sliding_moves(board, index, color, QUEEN_DIRS))
        else:
            moves.extend(_step_moves(board, index, color, KING_STEPS))
            moves.extend(_castling_moves(board, color, position.rights(color)))
    return moves


def generate_moves(position: Position) -> list[ChessMove]:
    """Legal moves for the side to move: pseudo-legal moves that keep its king safe."""
    return [
        move
        for move in pseudo_legal_moves(position)
        if not is_in_check(apply_on_board(position.board, move), position.side)
    ]


# -- transitions -----------------------------------------------------------


def apply_on_board(board: Board, move: ChessMove) -> Board:
    """Return a new board with the move played; castling also moves the rook."""
    piece = board[move.from_index]
    if piece is None:
        return board
    snapshot = list(board)
    snapshot[move.from_index] = None
    to_row, to_col = row_of(move.to_index), col_of(move.to_index)
    if move.is_en_passant:
        snapshot[square(row_of(move.from_index), to_col)] = None
    if move.is_castle:
        rook_from, rook_to = (7, 5) if to_col == 6 else (0, 3)
        snapshot[square(to_row, rook_to)] = snapshot[square(to_row, rook_from)]
        snapshot[square(to_row, rook_from)] = None
    snapshot[move.to_index] = ChessPiece(move.promotion, piece.color) if move.promotion is not None else piece
    return tuple(snapshot)


def captured_piece(board: Board, move: ChessMove) -> ChessPiece | None:
    if move.is_en_passant:
        return board[square(row_of(move.from_index), col_of(move.to_index))]
    return board[move.to_index]


def _updated_rights(rights: CastlingRights, color: Color, piece: ChessPiece, move: ChessMove) -> CastlingRights:
    home = color.home_row
    king_moved = rights.king_moved or (piece.color is color and piece.type is PieceType.KING)
    rook_a_moved = rights.rook_a_moved or move.to_index == square(home, 0)
    rook_h_moved = rights.rook_h_moved or move.to_index == square(home, 7)
    if piece.color is color and piece.type is PieceType.ROOK:
        rook_a_moved = rook_a_moved or move.from_index == square(home, 0)
        rook_h_moved = rook_h_moved or move.from_index == square(home, 7)
    return CastlingRights(king_moved=king_moved, rook_a_moved=rook_a_moved, rook_h_moved=rook_h_moved)


def advance(position: Position, move: ChessMove, *, track_en_passant: bool = True) -> Position:
    """Play a move and update the side table (castling rights, en passant target)."""
    piece = position.board[move.from_index]
    if piece is None:
        raise ValueError(f"No piece on square {move.from_index}.")
    ep_target = None
    if track_en_passant and piece.type is PieceType.PAWN and abs(row_of(move.to_index) - row_of(move.from_index)) == 2:
        ep_target = square((row_of(move.from_index) + row_of(move.to_index)) // 2, col_of(move.from_index))
    return Position(
        board=apply_on_board(position.board, move),
        side=position.side.other,
        white_rights=_updated_rights(position.white_rights, Color.WHITE, piece, move),
        black_rights=_updated_rights(position.black_rights, Color.BLACK, piece, move),
        ep_target=ep_target,
    )


# -- evaluation ------------------------------------------------------------


def evaluate(board: Board) -> int:
    """Material plus piece-square bonus, positive when White is ahead."""
    score = 0
    for index, piece in enumerate(board):
        if piece is None:
            continue
        sign = 1 if piece.color is Color.WHITE else -1
        score += sign * (piece.value + piece_square_value(piece, row_of(index), col_of(index)))
    return score


def evaluate_simple(board: Board) -> int:
    """Material plus a small centre bonus, positive when White is ahead."""
    score = 0
    for index, piece in enumerate(board):
        if piece is None:
            continue
        sign = 1 if piece.color is Color.WHITE else -1
        score += sign * piece.value
        row, col = row_of(index), col_of(index)
        if 3 <= row <= 4 and 3 <= col <= 4:
            score += sign * 10
        elif 2 <= row <= 5 and 2 <= col <= 5:
            score += sign * 5
    return score
