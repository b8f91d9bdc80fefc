"""Move definition for chess."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from framework.move import Move

from .chess_state import TOTAL_SQUARES, ChessPiece, Color, PieceType

PROMOTION_CHOICES: tuple[PieceType, ...] = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)


@dataclass(frozen=True)
class ChessMove(Move):
    """One move; `captured` is informational and ignored by equality."""

    from_index: int
    to_index: int
    promotion: PieceType | None = None
    is_castle: bool = False
    is_en_passant: bool = False
    captured: ChessPiece | None = field(default=None, compare=False)
    move_type = "ChessMove"

    def __post_init__(self) -> None:
        if not (0 <= self.from_index < TOTAL_SQUARES and 0 <= self.to_index < TOTAL_SQUARES):
            raise ValueError("Chess square index out of range.")
        if self.promotion is not None and self.promotion not in PROMOTION_CHOICES:
            raise ValueError(f"Cannot promote to {self.promotion!r}.")


def move_from_dict(data: Mapping[str, Any]) -> ChessMove:
    """Parse a chess move payload; `promotion` takes a piece letter (Q/R/B/N)."""
    move_type = data.get("type") or data.get("move_type")
    if move_type not in (None, ChessMove.move_type):
        raise ValueError(f"Unknown chess move type: {move_type!r}")
    promotion = data.get("promotion")
    captured = data.get("captured")
    return ChessMove(
        from_index=int(data["from_index"]),
        to_index=int(data["to_index"]),
        promotion=PieceType(str(promotion).upper()) if promotion else None,
        is_castle=bool(data.get("is_castle", False)),
        is_en_passant=bool(data.get("is_en_passant", False)),
        captured=ChessPiece(PieceType(captured["type"]), Color(captured["color"])) if captured else None,
    )
