"""Move definition for grid attack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move

from .gridattack_state import CELL_COUNT


@dataclass(frozen=True)
class Attack(Move):
    cell: int
    move_type = "Attack"

    def __post_init__(self) -> None:
        if not 0 <= self.cell < CELL_COUNT:
            raise ValueError("Grid cell out of range.")


def move_from_dict(data: Mapping[str, Any]) -> Attack:
    move_type = data.get("type") or data.get("move_type")
    if move_type not in (None, Attack.move_type):
        raise ValueError(f"Unknown grid attack move type: {move_type!r}")
    return Attack(cell=int(data["cell"]))
