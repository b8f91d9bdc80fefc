"""Move definitions for gin rummy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.cards import Card, card_from_dict
from framework.move import Move


@dataclass(frozen=True)
class DrawStock(Move):
    move_type = "DrawStock"


@dataclass(frozen=True)
class DrawDiscard(Move):
    move_type = "DrawDiscard"


@dataclass(frozen=True)
class Discard(Move):
    card: Card
    move_type = "Discard"


@dataclass(frozen=True)
class Knock(Move):
    move_type = "Knock"


@dataclass(frozen=True)
class Pass(Move):
    """Decline to knock."""

    move_type = "Pass"


@dataclass(frozen=True)
class NextRound(Move):
    move_type = "NextRound"


RummyMove = DrawStock | DrawDiscard | Discard | Knock | Pass | NextRound

_SIMPLE: dict[str, type[Move]] = {
    cls.move_type: cls for cls in (DrawStock, DrawDiscard, Knock, Pass, NextRound)
}


def move_from_dict(data: Mapping[str, Any]) -> Move:
    move_type = data.get("type") or data.get("move_type")
    if move_type == Discard.move_type:
        return Discard(card=card_from_dict(data["card"]))
    move_cls = _SIMPLE.get(str(move_type))
    if move_cls is None:
        raise ValueError(f"Unknown rummy move type: {move_type!r}")
    return move_cls()
