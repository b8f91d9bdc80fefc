"""Dots and boxes engine facade: human is player A, the AI is player B."""

from __future__ import annotations

from typing import Any, Mapping

from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .dotsandboxes_ai import choose_move
from .dotsandboxes_game import DotsAndBoxesGame
from .dotsandboxes_moves import DrawEdge
from .dotsandboxes_state import EDGES_BY_ID, DotsAndBoxesState, Player


class DotsAndBoxesEngine(GameEngine[DotsAndBoxesState, DrawEdge]):
    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        vs_ai: bool = True,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        super().__init__(
            DotsAndBoxesGame(),
            policy=choose_move,
            ai_players=(Player.B.value,) if vs_ai else (),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def select_edge(self, edge_id: str) -> bool:
        """Draw an edge for the seat to move; drawn or unknown edges are ignored."""
        if edge_id not in EDGES_BY_ID:
            return False
        return self.play(DrawEdge(edge_id))

    @property
    def score_a(self) -> int:
        return self.state.score(Player.A)

    @property
    def score_b(self) -> int:
        return self.state.score(Player.B)
