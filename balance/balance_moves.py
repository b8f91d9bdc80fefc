"""Move definition for the balance puzzle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move

from .balance_state import SLOT_POSITIONS


@dataclass(frozen=True)
class PlaceWeight(Move):
    slot: int
    weight: int
    move_type = "PlaceWeight"

    def __post_init__(self) -> None:
        if self.slot not in SLOT_POSITIONS:
            raise ValueError(f"Unknown slot: {self.slot}")


def move_from_dict(data: Mapping[str, Any]) -> PlaceWeight:
    move_type = data.get("type") or data.get("move_type")
    if move_type not in (None, PlaceWeight.move_type):
        raise ValueError(f"Unknown balance move type: {move_type!r}")
    return PlaceWeight(slot=int(data["slot"]), weight=int(data["weight"]))
