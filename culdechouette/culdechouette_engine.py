"""Cul de chouette: roll three dice against one to three AI players, first to 343 wins."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from framework.arcade import ArcadeEngine
from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty

from .culdechouette_combos import Combo, ComboType, evaluate_combo, format_dice

WINNING_SCORE = 343
REACTION_TIMEOUT_MS = 3000
SUITE_PENALTY = 10

AI_COUNT = {Difficulty.EASY: 1, Difficulty.NORMAL: 2, Difficulty.HARD: 3}
AI_REACTION_MS = {Difficulty.EASY: (800, 1500), Difficulty.NORMAL: (400, 900), Difficulty.HARD: (200, 500)}


class Phase(str, Enum):
    WAITING_TO_ROLL = "WAITING_TO_ROLL"
    SHOWING_CHOUETTES = "SHOWING_CHOUETTES"
    SHOWING_CUL = "SHOWING_CUL"
    REACTION_CHALLENGE = "REACTION_CHALLENGE"
    SHOWING_RESULT = "SHOWING_RESULT"
    AI_TURN = "AI_TURN"
    GAME_OVER = "GAME_OVER"


@dataclass
class DicePlayer:
    name: str
    is_human: bool
    score: int = 0


class CulDeChouetteEngine(ArcadeEngine):
    """
    The human rolls the two chouettes then the cul; AI players roll all three at once.

    A suite or chouette-velute on the human's roll opens a reaction challenge
    decided by comparing the human's reaction time with a sampled AI time.
    """

    game_name = "culdechouette"
    actions = ("roll_chouettes", "roll_cul", "react_to_challenge", "advance_phase", "process_ai_turn")

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._clock = clock
        super().__init__(difficulty, seed=seed, config=config)

    def _new_session(self) -> None:
        self.players = [DicePlayer("You", is_human=True)]
        self.players += [DicePlayer(f"AI {n}", is_human=False) for n in range(1, AI_COUNT[self.difficulty] + 1)]
        self.current_index = 0
        self.phase = Phase.WAITING_TO_ROLL
        self.dice = [0, 0, 0]
        self.combo: Combo | None = None
        self.combo_text = ""
        self.reaction_time_ms = 0
        self.reaction_winner_index: int | None = None
        self.winner_index: int | None = None
        self._challenge_started = 0.0

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    @property
    def current_points(self) -> int:
        return self.combo.points if self.combo is not None else 0

    def status_text(self) -> str:
        if self.winner_index is not None:
            return f"{self.players[self.winner_index].name} wins with {self.players[self.winner_index].score} points!"
        if self.phase is Phase.REACTION_CHALLENGE:
            return f"{self.combo_text} React now!"
        if self.phase is Phase.AI_TURN:
            return f"{self.players[self.current_index].name} is rolling."
        if self.combo_text and self.phase in (Phase.SHOWING_CUL, Phase.SHOWING_RESULT):
            return self.combo_text
        return f"{self.players[self.current_index].name}: roll the dice."

    # -- human turn ----------------------------------------------------

    def roll_chouettes(self) -> bool:
        if self.phase is not Phase.WAITING_TO_ROLL:
            return False
        self.dice = [self._roll_die(), self._roll_die(), 0]
        self.phase = Phase.SHOWING_CHOUETTES
        self._record("roll_chouettes", {"dice": list(self.dice)})
        return True

    def roll_cul(self) -> bool:
        if self.phase is not Phase.SHOWING_CHOUETTES:
            return False
        self.dice = [self.dice[0], self.dice[1], self._roll_die()]
        self._evaluate()
        if self.combo.type.needs_reaction:
            self._challenge_started = self._clock()
            self.phase = Phase.REACTION_CHALLENGE
        else:
            self._apply_points(self.current_index)
            self.phase = Phase.SHOWING_CUL
        self._record("roll_cul", {"dice": list(self.dice), "combo": self.combo.type})
        return True

    def react_to_challenge(self, elapsed_ms: int | None = None) -> bool:
        """Resolve the challenge; `elapsed_ms` defaults to time since the cul was rolled."""
        if self.phase is not Phase.REACTION_CHALLENGE:
            return False
        if elapsed_ms is None:
            elapsed_ms = int((self._clock() - self._challenge_started) * 1000)
        self.reaction_time_ms = elapsed_ms
        human_won = elapsed_ms <= REACTION_TIMEOUT_MS and elapsed_ms <= self._ai_reaction_time()
        self._resolve_reaction(human_won)
        self.phase = Phase.SHOWING_CUL
        self._record("react_to_challenge", {"elapsed_ms": elapsed_ms, "won": human_won})
        return True

    def advance_phase(self) -> bool:
        if self.phase is Phase.SHOWING_CUL:
            self.phase = Phase.SHOWING_RESULT
            return True
        if self.phase not in (Phase.SHOWING_RESULT, Phase.AI_TURN):
            return False
        if self._check_game_over():
            self._record("advance_phase", {"winner": self.players[self.winner_index].name})
            return True
        self.current_index = (self.current_index + 1) % len(self.players)
        self.phase = Phase.WAITING_TO_ROLL if self.players[self.current_index].is_human else Phase.AI_TURN
        return True

    # -- AI turn -------------------------------------------------------

    def process_ai_turn(self) -> int:
        """Roll all three dice for the AI to move; returns the points it scored."""
        if self.phase is not Phase.AI_TURN:
            return 0
        self.dice = [self._roll_die() for _ in range(3)]
        self._evaluate()
        points = self.current_points
        if self.combo.type is ComboType.SUITE:
            self.reaction_winner_index = self.current_index
            loser = self._pick_suite_loser(self.current_index)
            self.players[loser].score -= SUITE_PENALTY
            self.combo_text = f"Suite {format_dice(self.dice)}! {self.players[loser].name} loses {SUITE_PENALTY} pts!"
            points = 0
        else:
            if self.combo.type is ComboType.CHOUETTE_VELUTE:
                self.reaction_winner_index = self.current_index
            self._apply_points(self.current_index)
        self._record("process_ai_turn", {"player": self.players[self.current_index].name, "dice": list(self.dice)})
        return points

    # -- internals -----------------------------------------------------

    def _evaluate(self) -> None:
        self.combo = evaluate_combo(self.dice)
        self.combo_text = self.combo.text

    def _apply_points(self, index: int) -> None:
        if self.current_points > 0:
            self.players[index].score += self.current_points

    def _resolve_reaction(self, human_won: bool) -> None:
        dice = format_dice(self.dice)
        if self.combo.type is ComboType.SUITE:
            if human_won:
                loser = self._pick_suite_loser(0)
                self.players[loser].score -= SUITE_PENALTY
                self.reaction_winner_index = 0
                self.combo_text = f"Suite {dice}! {self.players[loser].name} loses {SUITE_PENALTY} pts!"
            else:
                self.players[0].score -= SUITE_PENALTY
                self.reaction_winner_index = self._pick_ai_index()
                self.combo_text = f"Suite {dice}! You lose {SUITE_PENALTY} pts!"
            self.combo = Combo(ComboType.SUITE, 0, self.combo.text)
            return
        if human_won:
            self.reaction_winner_index = 0
            self._apply_points(0)
            self.combo_text = f"{self.combo_text} You grab it!"
        else:
            winner = self._pick_ai_index()
            self.reaction_winner_index = winner
            self._apply_points(winner)
            self.combo_text = f"{self.combo_text} {self.players[winner].name} grabs it!"

    def _ai_reaction_time(self) -> int:
        low, high = AI_REACTION_MS[self.difficulty]
        return self.rng.randint(low, high)

    def _pick_suite_loser(self, exclude: int) -> int:
        return self.rng.choice([index for index in range(len(self.players)) if index != exclude])

    def _pick_ai_index(self) -> int:
        return self.rng.choice([index for index, player in enumerate(self.players) if not player.is_human])

    def _check_game_over(self) -> bool:
        for index, player in enumerate(self.players):
            if player.score >= WINNING_SCORE:
                self.winner_index = index
                self.phase = Phase.GAME_OVER
                return True
        return False

    def _roll_die(self) -> int:
        return self.rng.randint(1, 6)

    def snapshot(self) -> dict[str, Any]:
        return {
            "players": [{"name": p.name, "is_human": p.is_human, "score": p.score} for p in self.players],
            "current_index": self.current_index,
            "phase": self.phase.value,
            "dice": list(self.dice),
            "combo": self.combo.type.value if self.combo else None,
            "current_points": self.current_points,
            "combo_text": self.combo_text,
            "reaction_time_ms": self.reaction_time_ms,
            "reaction_winner_index": self.reaction_winner_index,
            "winner_index": self.winner_index,
        }
