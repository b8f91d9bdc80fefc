"""Betting actions for Texas hold'em."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.move import Move


@dataclass(frozen=True)
class Fold(Move):
    move_type = "Fold"


@dataclass(frozen=True)
class Check(Move):
    move_type = "Check"


@dataclass(frozen=True)
class Call(Move):
    move_type = "Call"


@dataclass(frozen=True)
class RaiseTo(Move):
    """Raise so the seat's total bet this street equals `amount`."""

    amount: int
    move_type = "RaiseTo"


@dataclass(frozen=True)
class AllIn(Move):
    move_type = "AllIn"


@dataclass(frozen=True)
class NextHand(Move):
    move_type = "NextHand"


HoldemMove = Fold | Check | Call | RaiseTo | AllIn | NextHand

_SIMPLE: dict[str, type[Move]] = {cls.move_type: cls for cls in (Fold, Check, Call, AllIn, NextHand)}


def move_from_dict(data: Mapping[str, Any]) -> Move:
    move_type = data.get("type") or data.get("move_type")
    if move_type == RaiseTo.move_type:
        return RaiseTo(amount=int(data["amount"]))
    move_cls = _SIMPLE.get(str(move_type))
    if move_cls is None:
        raise ValueError(f"Unknown hold'em move type: {move_type!r}")
    return move_cls()
