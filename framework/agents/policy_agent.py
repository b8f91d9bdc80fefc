"""Agent wrapper around a game's difficulty-tiered opponent policy."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from typing import Any

from ..difficulty import DEFAULT_DIFFICULTY, Difficulty
from ..move import Move
from ..observation import Observation
from ..player import Agent
from ..serialize import stable_seed

Policy = Callable[[Observation, Sequence[Move], Difficulty, random.Random], Move | None]


class PolicyAgent(Agent):
    """Delegates move choice to `policy(observation, legal_moves, difficulty, rng)`."""

    def __init__(
        self,
        agent_id: str,
        policy: Policy,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        rng: random.Random | None = None,
    ):
        super().__init__(agent_id=agent_id)
        self.policy = policy
        self.difficulty = Difficulty.parse(difficulty)
        self._rng = rng or random.Random()
        self._last_choice: dict[str, Any] | None = None

    def reset(
        self,
        game_id: str,
        player_id: str,
        role: str | None,
        seed: int,
        config: dict[str, Any] | None,
    ) -> None:
        """Reseed per match and adopt a difficulty override from the match config."""
        self._rng.seed(stable_seed(seed, game_id, self.agent_id, player_id))
        if config and config.get("difficulty") is not None:
            self.difficulty = Difficulty.parse(config["difficulty"])
        self._last_choice = None

    def act(self, observation: Observation, legal_moves_spec: Sequence[Move]) -> Move | None:
        """Run the policy; returns None (a pass) when nothing is legal."""
        options = list(legal_moves_spec)
        if not options:
            self._last_choice = None
            return None
        move = self.policy(observation, options, self.difficulty, self._rng)
        self._last_choice = {
            "difficulty": self.difficulty.value,
            "candidates": len(options),
            "move": move.to_dict() if move is not None else None,
        }
        return move

    def debug_context(self) -> dict[str, Any] | None:
        return self._last_choice
