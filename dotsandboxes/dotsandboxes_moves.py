"""Move definition for dots and boxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move

from .dotsandboxes_state import EDGES_BY_ID


@dataclass(frozen=True)
class DrawEdge(Move):
    edge_id: str
    move_type = "DrawEdge"

    def __post_init__(self) -> None:
        if self.edge_id not in EDGES_BY_ID:
            raise ValueError(f"Unknown edge id: {self.edge_id!r}")


def move_from_dict(data: Mapping[str, Any]) -> DrawEdge:
    move_type = data.get("type") or data.get("move_type")
    if move_type not in (None, DrawEdge.move_type):
        raise ValueError(f"Unknown dots-and-boxes move type: {move_type!r}")
    return DrawEdge(edge_id=str(data["edge_id"]))
