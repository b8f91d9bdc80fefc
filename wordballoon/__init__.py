"""Word balloon package exports."""

from .wordballoon_engine import MAX_WRONG_GUESSES, WORD_BANK, WORD_GROUPS, RoundStatus, WordBalloonEngine, WordEntry

__all__ = ["MAX_WRONG_GUESSES", "RoundStatus", "WORD_BANK", "WORD_GROUPS", "WordBalloonEngine", "WordEntry"]
