"""Move definitions for connect-four."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move

from .connectfour_state import COLUMNS


@dataclass(frozen=True)
class Drop(Move):
    """Drop the mover's disc into a column."""

    column: int
    move_type = "Drop"

    def __post_init__(self) -> None:
        if not 0 <= self.column < COLUMNS:
            raise ValueError(f"Column must be in 0..{COLUMNS - 1}.")


def move_from_dict(data: Mapping[str, Any]) -> Drop:
    """Parse a connect-four move payload."""
    move_type = data.get("type") or data.get("move_type")
    if move_type not in (None, Drop.move_type):
        raise ValueError(f"Unknown connect-four move type: {move_type!r}")
    return Drop(column=int(data["column"]))
