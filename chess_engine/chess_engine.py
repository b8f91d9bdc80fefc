"""Chess engine facade: human plays WHITE against the AI's BLACK."""

from __future__ import annotations

from typing import Any, Mapping

from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .chess_ai import choose_move
from .chess_game import ChessGame
from .chess_moves import ChessMove
from .chess_state import Board, ChessState, Color, PieceType, square

PROMOTION_LABELS = frozenset({PieceType.QUEEN.value, PieceType.ROOK.value, PieceType.BISHOP.value, PieceType.KNIGHT.value})


class ChessEngine(GameEngine[ChessState, ChessMove]):
    """UI-facing chess session with square selection."""

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        vs_ai: bool = True,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.selected_square: int | None = None
        super().__init__(
            ChessGame(),
            policy=choose_move,
            ai_players=(Color.BLACK.value,) if vs_ai else (),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def reset(self) -> None:
        self.selected_square = None
        super().reset()

    @property
    def board(self) -> Board:
        return self.state.position.board

    @property
    def movable_pieces(self) -> set[int]:
        return {move.from_index for move in self.legal_moves()}

    def selected_moves(self) -> list[ChessMove]:
        if self.selected_square is None:
            return []
        return [move for move in self.legal_moves() if move.from_index == self.selected_square]

    def destinations(self) -> set[int]:
        return {move.to_index for move in self.selected_moves()}

    def move(self, from_index: int, to_index: int, promotion: PieceType | str | None = None) -> bool:
        """Play a legal move; promotions default to a queen when not specified."""
        if self.is_ai_turn():
            return False
        seat = self.game.current_player(self.state)
        wanted: PieceType | None = None
        if promotion is not None:
            label = promotion.value if isinstance(promotion, PieceType) else str(promotion).strip().upper()
            if label not in PROMOTION_LABELS:
                self._reject(seat, {"from_index": from_index, "to_index": to_index, "promotion": promotion}, "Unknown promotion piece.")
                return False
            wanted = PieceType(label)
        candidates = [
            move
            for move in self.legal_moves()
            if move.from_index == from_index and move.to_index == to_index
        ]
        if any(move.promotion is not None for move in candidates):
            wanted = wanted or PieceType.QUEEN
            candidates = [move for move in candidates if move.promotion is wanted]
        if not candidates:
            self._reject(seat, {"from_index": from_index, "to_index": to_index}, "No such move.")
            return False
        self.selected_square = None
        return self.play(candidates[0])

    def select_square(self, row: int, col: int) -> bool:
        """Toggle selection of an own movable piece, or move the selection there."""
        if self.is_over or self.is_ai_turn() or not (0 <= row < 8 and 0 <= col < 8):
            return False
        index = square(row, col)
        piece = self.board[index]
        if piece is not None and piece.color is self.state.current:
            if index not in self.movable_pieces:
                return False
            self.selected_square = None if self.selected_square == index else index
            return True
        if self.selected_square is None or index not in self.destinations():
            return False
        return self.move(self.selected_square, index)

    def perform_ai_move(self) -> bool:
        played = super().perform_ai_move()
        if played:
            self.selected_square = None
        return played
