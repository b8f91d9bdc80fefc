"""Takeover engine facade: human plays Blue against the AI's Orange."""

from __future__ import annotations

from typing import Any, Mapping

from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .takeover_ai import choose_move
from .takeover_game import TakeoverGame
from .takeover_moves import TakeoverMove
from .takeover_state import Board, MoveKind, Side, TakeoverState, count_pieces


class TakeoverEngine(GameEngine[TakeoverState, TakeoverMove]):
    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        vs_ai: bool = True,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.selected_source: int | None = None
        super().__init__(
            TakeoverGame(),
            policy=choose_move,
            ai_players=(Side.O.value,) if vs_ai else (),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def reset(self) -> None:
        self.selected_source = None
        super().reset()

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def blue_count(self) -> int:
        return count_pieces(self.board, Side.B)

    @property
    def orange_count(self) -> int:
        return count_pieces(self.board, Side.O)

    @property
    def selectable_sources(self) -> set[int]:
        return {move.from_index for move in self.legal_moves()}

    @property
    def selected_targets(self) -> dict[int, MoveKind]:
        if self.selected_source is None:
            return {}
        return {move.to_index: move.kind for move in self.legal_moves() if move.from_index == self.selected_source}

    def handle_cell_click(self, index: int) -> bool:
        """Select, reselect, or deselect a source, or move the selection to a target."""
        if self.is_over or self.is_ai_turn() or not 0 <= index < len(self.board):
            return False
        if self.selected_source is None:
            if index in self.selectable_sources:
                self.selected_source = index
                return True
            return False
        if index == self.selected_source:
            self.selected_source = None
            return True
        if index in self.selectable_sources:
            self.selected_source = index
            return True
        kind = self.selected_targets.get(index)
        if kind is None:
            return False
        played = self.play(TakeoverMove(self.selected_source, index, kind))
        if played:
            self.selected_source = None
        return played
