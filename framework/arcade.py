"""Base facade for the real-time and single-action arcade games (no `Game` rules object)."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, Mapping

from .difficulty import DEFAULT_DIFFICULTY, Difficulty
from .events import EventType, MatchEvent
from .serialize import stable_seed, to_serializable


class ArcadeEngine(ABC):
    """
    Owns mutable state for one arcade session, driven by `tick` or named actions.

    Like `GameEngine`, actions that fail validation are silent no-ops that
    return False and leave a REJECTED_ACTION event behind. Randomness comes
    from `self.rng`, reseeded from the session seed on every reset.
    """

    game_name: str = "arcade"
    #: Method names a remote shell may invoke through `perform`.
    actions: tuple[str, ...] = ()

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.config = dict(config or {})
        self.events: list[MatchEvent] = []
        self.rng = random.Random()
        self._difficulty = Difficulty.parse(difficulty)
        self._base_seed = seed if seed is not None else random.SystemRandom().randrange(1, 2**31)
        self._round = 0
        self._turn = 0
        self.reset()

    @property
    def game_id(self) -> str:
        return f"{self.game_name}-{self._base_seed}-{self._round}"

    @property
    def seed(self) -> int:
        return stable_seed(self._base_seed, self._round)

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    def reset(self) -> None:
        self._round += 1
        self._turn = 0
        self.rng.seed(self.seed)
        self._new_session()
        self._emit(
            EventType.RESET if self._round > 1 else EventType.MATCH_START,
            {"seed": self.seed, "difficulty": self._difficulty.value},
        )

    def set_difficulty(self, difficulty: Difficulty | str) -> None:
        self._difficulty = Difficulty.parse(difficulty)
        self.reset()

    @abstractmethod
    def _new_session(self) -> None:
        """Rebuild every piece of session state from scratch."""

    @property
    @abstractmethod
    def is_over(self) -> bool:
        """Whether the session has ended and only `reset` does anything."""

    @abstractmethod
    def status_text(self) -> str:
        """One status line for the shell."""

    @abstractmethod
    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of everything the shell renders."""

    def perform(self, action: str, params: Mapping[str, Any] | None = None) -> bool:
        """Invoke a whitelisted action by name; unknown actions are rejected."""
        if action not in self.actions:
            self._reject({"action": action}, f"Unknown action {action!r}.")
            return False
        result = getattr(self, action)(**dict(params or {}))
        return bool(result) if result is not None else True

    def _record(self, action: str, payload: Mapping[str, Any]) -> None:
        self._turn += 1
        self._emit(EventType.TURN, {"action": action, **to_serializable(dict(payload))})
        if self.is_over:
            self._emit(EventType.TERMINAL, {"status": self.status_text()})

    def _reject(self, payload: Any, reason: str) -> None:
        self._emit(EventType.REJECTED_ACTION, {"move": to_serializable(payload), "reason": reason})

    def _emit(self, event_type: EventType, payload: dict[str, Any]) -> None:
        self.events.append(MatchEvent.create(event_type=event_type, game_id=self.game_id, turn=self._turn, payload=payload))
