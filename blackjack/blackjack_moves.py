"""Player actions for blackjack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move


@dataclass(frozen=True)
class PlaceBet(Move):
    amount: int
    move_type = "PlaceBet"


@dataclass(frozen=True)
class Hit(Move):
    move_type = "Hit"


@dataclass(frozen=True)
class Stand(Move):
    move_type = "Stand"


@dataclass(frozen=True)
class DoubleDown(Move):
    move_type = "DoubleDown"


@dataclass(frozen=True)
class NewHand(Move):
    move_type = "NewHand"


BlackjackMove = PlaceBet | Hit | Stand | DoubleDown | NewHand

_SIMPLE: dict[str, type[Move]] = {cls.move_type: cls for cls in (Hit, Stand, DoubleDown, NewHand)}


def move_from_dict(data: Mapping[str, Any]) -> Move:
    move_type = data.get("type") or data.get("move_type")
    if move_type == PlaceBet.move_type:
        return PlaceBet(amount=int(data["amount"]))
    move_cls = _SIMPLE.get(str(move_type))
    if move_cls is None:
        raise ValueError(f"Unknown blackjack move type: {move_type!r}")
    return move_cls()
