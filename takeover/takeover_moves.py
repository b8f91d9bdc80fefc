"""Move definition for takeover."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move

from .takeover_state import TOTAL_CELLS, MoveKind


@dataclass(frozen=True)
class TakeoverMove(Move):
    """Clone to an adjacent cell, or jump two cells away vacating the source."""

    from_index: int
    to_index: int
    kind: MoveKind
    move_type = "TakeoverMove"

    def __post_init__(self) -> None:
        if not (0 <= self.from_index < TOTAL_CELLS and 0 <= self.to_index < TOTAL_CELLS):
            raise ValueError("Takeover cell index out of range.")
        object.__setattr__(self, "kind", MoveKind(self.kind))


def move_from_dict(data: Mapping[str, Any]) -> TakeoverMove:
    move_type = data.get("type") or data.get("move_type")
    if move_type not in (None, TakeoverMove.move_type):
        raise ValueError(f"Unknown takeover move type: {move_type!r}")
    return TakeoverMove(from_index=int(data["from_index"]), to_index=int(data["to_index"]), kind=MoveKind(data["kind"]))
