"""Checkers engine facade: human plays BLACK against the AI's RED."""

from __future__ import annotations

from typing import Any, Mapping

from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .checkers_ai import choose_move
from .checkers_game import CheckersGame
from .checkers_moves import CheckersMove
from .checkers_state import Board, CheckersState, Color


class CheckersEngine(GameEngine[CheckersState, CheckersMove]):
    """UI-facing checkers session with click-to-select piece handling."""

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        vs_ai: bool = True,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.selected_index: int | None = None
        super().__init__(
            CheckersGame(),
            policy=choose_move,
            ai_players=(Color.RED.value,) if vs_ai else (),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def reset(self) -> None:
        self.selected_index = None
        super().reset()

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def forced_from_index(self) -> int | None:
        return self.state.forced_from_index

    @property
    def capture_required(self) -> bool:
        return any(move.is_capture for move in self.legal_moves())

    def moves_from(self, index: int) -> list[CheckersMove]:
        return [move for move in self.legal_moves() if move.from_index == index]

    def move(self, from_index: int, to_index: int) -> bool:
        """Play the legal move between two cells; ignored if none matches."""
        if self.is_ai_turn():
            return False
        for candidate in self.moves_from(from_index):
            if candidate.to_index == to_index:
                played = self.play(candidate)
                if played:
                    self.selected_index = self.state.forced_from_index
                return played
        self._reject(self.game.current_player(self.state), {"from_index": from_index, "to_index": to_index}, "No such move.")
        return False

    def handle_cell_click(self, index: int) -> bool:
        """Select a movable piece, or move the selected piece to `index`."""
        if self.is_over or self.is_ai_turn() or not 0 <= index < len(self.board):
            return False
        forced = self.state.forced_from_index
        if self.moves_from(index) and (forced is None or index == forced):
            # A piece pinned mid-capture stays selected.
            self.selected_index = None if forced is None and self.selected_index == index else index
            return True
        if self.selected_index is None:
            return False
        return self.move(self.selected_index, index)

    def perform_ai_move(self) -> bool:
        played = super().perform_ai_move()
        if played:
            self.selected_index = None
        return played
