"""Connect-four engine facade: human plays red against the AI's yellow."""

from __future__ import annotations

from typing import Any, Mapping

from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .connectfour_ai import choose_move
from .connectfour_game import ConnectFourGame
from .connectfour_moves import Drop
from .connectfour_state import COLUMNS, ConnectFourState, Disc, drop_row


class ConnectFourEngine(GameEngine[ConnectFourState, Drop]):
    """UI-facing connect-four session."""

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        vs_ai: bool = True,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        super().__init__(
            ConnectFourGame(),
            policy=choose_move,
            ai_players=(Disc.YELLOW.value,) if vs_ai else (),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def drop_disc(self, column: int) -> bool:
        """Drop into `column`; full or out-of-range columns are ignored."""
        if not 0 <= column < COLUMNS:
            return False
        return self.play(Drop(column=column))

    def is_column_full(self, column: int) -> bool:
        return drop_row(self.state.board, column) < 0

    @property
    def last_drop_index(self) -> int:
        return self.state.last_drop_index
