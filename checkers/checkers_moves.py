"""Move definition for checkers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move

from .checkers_state import TOTAL_CELLS


@dataclass(frozen=True)
class CheckersMove(Move):
    """A diagonal step, or a single jump listing the captured cell."""

    from_index: int
    to_index: int
    captured: tuple[int, ...] = ()
    move_type = "CheckersMove"

    def __post_init__(self) -> None:
        if not (0 <= self.from_index < TOTAL_CELLS and 0 <= self.to_index < TOTAL_CELLS):
            raise ValueError("Checkers cell index out of range.")
        object.__setattr__(self, "captured", tuple(self.captured))

    @property
    def is_capture(self) -> bool:
        return bool(self.captured)


def move_from_dict(data: Mapping[str, Any]) -> CheckersMove:
    """Parse a checkers move payload (`captured` is optional)."""
    move_type = data.get("type") or data.get("move_type")
    if move_type not in (None, CheckersMove.move_type):
        raise ValueError(f"Unknown checkers move type: {move_type!r}")
    return CheckersMove(
        from_index=int(data["from_index"]),
        to_index=int(data["to_index"]),
        captured=tuple(int(index) for index in data.get("captured", ())),
    )
