"""Move definitions for tic-tac-toe."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move


@dataclass(frozen=True)
class Place(Move):
    """Place the mover's mark on an empty cell (0..8, row-major)."""

    index: int
    move_type = "Place"

    def __post_init__(self) -> None:
        if not 0 <= self.index < 9:
            raise ValueError("Cell index must be in 0..8.")


def move_from_dict(data: Mapping[str, Any]) -> Place:
    """Parse a tic-tac-toe move payload."""
    move_type = data.get("type") or data.get("move_type")
    if move_type not in (None, Place.move_type):
        raise ValueError(f"Unknown tic-tac-toe move type: {move_type!r}")
    return Place(index=int(data["index"]))
