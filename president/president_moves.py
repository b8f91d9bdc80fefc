"""Move definitions for President."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from framework.cards import Card, card_from_dict
from framework.move import Move


@dataclass(frozen=True)
class PlayCards(Move):
    """One to four cards of a single rank, kept in hand order."""

    cards: tuple[Card, ...]
    move_type = "PlayCards"


@dataclass(frozen=True)
class Pass(Move):
    move_type = "Pass"


@dataclass(frozen=True)
class NextRound(Move):
    move_type = "NextRound"


PresidentMove = PlayCards | Pass | NextRound


def move_from_dict(data: Mapping[str, Any]) -> Move:
    move_type = data.get("type") or data.get("move_type")
    if move_type == PlayCards.move_type:
        return PlayCards(cards=tuple(card_from_dict(card) for card in data["cards"]))
    if move_type == Pass.move_type:
        return Pass()
    if move_type == NextRound.move_type:
        return NextRound()
    raise ValueError(f"Unknown president move type: {move_type!r}")
