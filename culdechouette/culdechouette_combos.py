"""Scoring combinations for three dice."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class ComboType(str, Enum):
    CUL_DE_CHOUETTE = "CUL_DE_CHOUETTE"
    CHOUETTE_VELUTE = "CHOUETTE_VELUTE"
    VELUTE = "VELUTE"
    CHOUETTE = "CHOUETTE"
    SUITE = "SUITE"
    NEANT = "NEANT"

    @property
    def needs_reaction(self) -> bool:
        return self in (ComboType.SUITE, ComboType.CHOUETTE_VELUTE)


@dataclass(frozen=True)
class Combo:
    type: ComboType
    points: int
    text: str


def format_dice(dice: Sequence[int]) -> str:
    return "-".join(str(value) for value in sorted(dice))


def evaluate_combo(dice: Sequence[int]) -> Combo:
    """Classify a roll; checks run in priority order, so a pair that is also a velute is a chouette-velute."""
    a, b, c = sorted(dice)
    has_pair = a == b or b == c
    is_velute = a + b == c
    if a == b == c:
        return Combo(ComboType.CUL_DE_CHOUETTE, 40 + 10 * a, f"Cul de Chouette de {a}!")
    if has_pair and is_velute:
        return Combo(ComboType.CHOUETTE_VELUTE, 2 * c * c, f"Chouette-Velute de {c}!")
    if is_velute:
        return Combo(ComboType.VELUTE, 2 * c * c, f"Velute de {c}!")
    if c - b == 1 and b - a == 1:
        return Combo(ComboType.SUITE, 0, f"Suite {a}-{b}-{c}! Grelotte ça picote!")
    if has_pair:
        return Combo(ComboType.CHOUETTE, b * b, f"Chouette de {b}!")
    return Combo(ComboType.NEANT, 0, "Néant!")
