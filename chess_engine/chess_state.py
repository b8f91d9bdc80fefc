"""Pieces, positions, and immutable game state for chess."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from framework.observation import Observation
from framework.state import State

BOARD_SIZE = 8
TOTAL_SQUARES = BOARD_SIZE * BOARD_SIZE
FIFTY_MOVE_LIMIT = 100


class Color(str, Enum):
    WHITE = "WHITE"
    BLACK = "BLACK"

    @property
    def other(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def label(self) -> str:
        return self.value.title()

    @property
    def home_row(self) -> int:
        return BOARD_SIZE - 1 if self is Color.WHITE else 0


class PieceType(str, Enum):
    PAWN = "P"
    KNIGHT = "N"
    BISHOP = "B"
    ROOK = "R"
    QUEEN = "Q"
    KING = "K"


PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20000,
}

_SYMBOLS: dict[PieceType, tuple[str, str]] = {
    PieceType.KING: ("♔", "♚"),
    PieceType.QUEEN: ("♕", "♛"),
    PieceType.ROOK: ("♖", "♜"),
    PieceType.BISHOP: ("♗", "♝"),
    PieceType.KNIGHT: ("♘", "♞"),
    PieceType.PAWN: ("♙", "♟"),
}


@dataclass(frozen=True)
class ChessPiece:
    type: PieceType
    color: Color

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.type]

    @property
    def symbol(self) -> str:
        white, black = _SYMBOLS[self.type]
        return white if self.color is Color.WHITE else black

    @property
    def letter(self) -> str:
        return self.type.value if self.color is Color.WHITE else self.type.value.lower()


Board = tuple[ChessPiece | None, ...]

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def square(row: int, col: int) -> int:
    return row * BOARD_SIZE + col


def row_of(index: int) -> int:
    return index // BOARD_SIZE


def col_of(index: int) -> int:
    return index % BOARD_SIZE


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def initial_board() -> Board:
    board: list[ChessPiece | None] = [None] * TOTAL_SQUARES
    for col, piece_type in enumerate(BACK_RANK):
        board[square(0, col)] = ChessPiece(piece_type, Color.BLACK)
        board[square(1, col)] = ChessPiece(PieceType.PAWN, Color.BLACK)
        board[square(6, col)] = ChessPiece(PieceType.PAWN, Color.WHITE)
        board[square(7, col)] = ChessPiece(piece_type, Color.WHITE)
    return tuple(board)


@dataclass(frozen=True)
class CastlingRights:
    """Per-colour flags; any True flag permanently removes that castling option."""

    king_moved: bool = False
    rook_a_moved: bool = False
    rook_h_moved: bool = False


@dataclass(frozen=True)
class Position:
    """Board plus the side table that move generation depends on."""

    board: Board
    side: Color = Color.WHITE
    white_rights: CastlingRights = CastlingRights()
    black_rights: CastlingRights = CastlingRights()
    ep_target: int | None = None

    def rights(self, color: Color) -> CastlingRights:
        return self.white_rights if color is Color.WHITE else self.black_rights


def initial_position() -> Position:
    return Position(board=initial_board())


@dataclass(frozen=True)
class ChessState(State):
    seed: int
    position: Position
    half_move_clock: int = 0
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    is_draw: bool = False
    winner: Color | None = None
    move_count: int = 0
    last_move: dict | None = None
    captured_by_white: tuple[ChessPiece, ...] = ()
    captured_by_black: tuple[ChessPiece, ...] = ()

    @property
    def current(self) -> Color:
        return self.position.side

    @property
    def is_over(self) -> bool:
        return self.is_checkmate or self.is_stalemate or self.is_draw


@dataclass(frozen=True)
class ChessObservation(Observation):
    color: Color
    position: Position
    is_check: bool
    half_move_clock: int
