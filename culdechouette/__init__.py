"""Cul de chouette package exports."""

from .culdechouette_combos import Combo, ComboType, evaluate_combo
from .culdechouette_engine import WINNING_SCORE, CulDeChouetteEngine, DicePlayer, Phase

__all__ = ["Combo", "ComboType", "CulDeChouetteEngine", "DicePlayer", "Phase", "WINNING_SCORE", "evaluate_combo"]
