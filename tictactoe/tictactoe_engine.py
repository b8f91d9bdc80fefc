"""Tic-tac-toe engine facade: human plays X against the AI's O."""

from __future__ import annotations

from typing import Any, Mapping

from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .tictactoe_ai import choose_move
from .tictactoe_game import TicTacToeGame
from .tictactoe_moves import Place
from .tictactoe_state import Mark, TicTacToeState


class TicTacToeEngine(GameEngine[TicTacToeState, Place]):
    """UI-facing tic-tac-toe session."""

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        vs_ai: bool = True,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        super().__init__(
            TicTacToeGame(),
            policy=choose_move,
            ai_players=(Mark.O.value,) if vs_ai else (),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def select_cell(self, index: int) -> bool:
        """Mark a cell for the seat to move; ignored when occupied or out of range."""
        if not 0 <= index < 9:
            return False
        return self.play(Place(index=index))

    @property
    def board(self) -> tuple[Mark | None, ...]:
        return self.state.board

    @property
    def winning_line(self) -> tuple[int, int, int] | None:
        return self.state.winning_line
