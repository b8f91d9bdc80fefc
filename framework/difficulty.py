"""Opponent difficulty tiers shared by every game."""

from __future__ import annotations

from enum import Enum
from typing import Any


class Difficulty(str, Enum):
    """Selects which opponent policy tier runs for AI seats."""

    EASY = "EASY"
    NORMAL = "NORMAL"
    HARD = "HARD"

    @classmethod
    def parse(cls, raw: Any, default: "Difficulty | None" = None) -> "Difficulty":
        """Parse an enum member, value, or case-insensitive name."""
        if raw is None:
            if default is None:
                raise ValueError("Difficulty is required.")
            return default
        if isinstance(raw, Difficulty):
            return raw
        value = str(raw).strip().upper()
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Invalid difficulty: {raw!r}. Expected one of {[d.value for d in cls]}.") from exc


DEFAULT_DIFFICULTY = Difficulty.NORMAL
