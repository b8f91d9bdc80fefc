"""Word balloon: guess the hidden word letter by letter before six misses."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from framework.arcade import ArcadeEngine
from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty

WORD_GROUPS: dict[str, tuple[str, ...]] = {
    "Animals": ("PANTHER", "DOLPHIN", "GIRAFFE", "KOALA"),
    "Space": ("GALAXY", "COMET", "NEBULA", "ASTRONAUT"),
    "Food": ("PANCAKE", "NOODLES", "AVOCADO", "BISCUIT"),
}
MAX_WRONG_GUESSES = 6
MASK = "•"
ALPHABET = tuple(string.ascii_uppercase)


class RoundStatus(str, Enum):
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


@dataclass(frozen=True)
class WordEntry:
    category: str
    word: str


WORD_BANK: tuple[WordEntry, ...] = tuple(
    WordEntry(category, word) for category, words in WORD_GROUPS.items() for word in words
)


class WordBalloonEngine(ArcadeEngine):
    """Each reset draws a word different from the last one; wins carry over."""

    game_name = "wordballoon"
    actions = ("guess_letter",)

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.wins = 0
        self.target: WordEntry | None = None
        super().__init__(difficulty, seed=seed, config=config)

    def _new_session(self) -> None:
        previous = self.target.word if self.target is not None else None
        candidates = [entry for entry in WORD_BANK if entry.word != previous] or list(WORD_BANK)
        self.target = self.rng.choice(candidates)
        self.guessed: list[str] = []
        self.wrong_guesses = 0
        self.round_status = RoundStatus.PLAYING

    @property
    def word(self) -> str:
        return self.target.word

    @property
    def category(self) -> str:
        return self.target.category

    @property
    def is_over(self) -> bool:
        return self.round_status is not RoundStatus.PLAYING

    @property
    def misses(self) -> list[str]:
        return [letter for letter in self.guessed if letter not in self.word]

    @property
    def masked_word(self) -> str:
        reveal = self.round_status is RoundStatus.LOST
        return "".join(letter if reveal or letter in self.guessed else MASK for letter in self.word)

    @property
    def mistakes_left(self) -> int:
        return MAX_WRONG_GUESSES - self.wrong_guesses

    def status_text(self) -> str:
        if self.round_status is RoundStatus.WON:
            return f'Great flight! You solved "{self.word}".'
        if self.round_status is RoundStatus.LOST:
            return f'Balloon popped! The word was "{self.word}".'
        return f"Category: {self.category} • {self.mistakes_left} mistakes left."

    def guess_letter(self, letter: str) -> bool:
        """Guess one letter; repeats, non-letters, and guesses after the round ends are ignored."""
        if self.is_over:
            return False
        guess = str(letter).strip().upper()
        if len(guess) != 1 or guess not in ALPHABET or guess in self.guessed:
            self._reject({"letter": letter}, "Not a new letter.")
            return False
        self.guessed.append(guess)
        if guess in self.word:
            if set(self.word) <= set(self.guessed):
                self.round_status = RoundStatus.WON
                self.wins += 1
        else:
            self.wrong_guesses += 1
            if self.wrong_guesses >= MAX_WRONG_GUESSES:
                self.round_status = RoundStatus.LOST
        self._record("guess_letter", {"letter": guess, "hit": guess in self.word})
        return True

    def snapshot(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "masked_word": self.masked_word,
            "guessed": list(self.guessed),
            "misses": self.misses,
            "mistakes_left": self.mistakes_left,
            "round_status": self.round_status.value,
            "wins": self.wins,
        }
