"""Random baseline agent."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Any

from ..move import Move
from ..player import Agent
from ..serialize import stable_seed


class RandomAgent(Agent):
    """Chooses uniformly from the legal moves; passes when there are none."""

    def __init__(self, agent_id: str):
        super().__init__(agent_id=agent_id)
        self._rng = random.Random()

    def reset(
        self,
        game_id: str,
        player_id: str,
        role: str | None,
        seed: int,
        config: dict[str, Any] | None,
    ) -> None:
        """Reseed per match and seat so series are reproducible."""
        self._rng.seed(stable_seed(seed, game_id, self.agent_id, player_id))

    def act(self, observation: Any, legal_moves_spec: Sequence[Move]) -> Move | None:
        """Pick a random legal move."""
        options = list(legal_moves_spec)
        if not options:
            return None
        return self._rng.choice(options)
