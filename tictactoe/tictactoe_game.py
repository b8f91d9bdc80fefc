"""Tic-tac-toe rules."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from framework.game import Game
from framework.result import MatchResult

from .tictactoe_moves import Place, move_from_dict
from .tictactoe_state import Mark, TicTacToeObservation, TicTacToeState, empty_board, find_winning_line


class TicTacToeGame(Game[TicTacToeState, Place, TicTacToeObservation]):
    """Classic 3x3 game; X moves first."""

    game_name = "tictactoe"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> TicTacToeState:
        return TicTacToeState(seed=seed, board=empty_board())

    def player_ids(self, state: TicTacToeState) -> Sequence[str]:
        return (Mark.X.value, Mark.O.value)

    def current_player(self, state: TicTacToeState) -> str:
        return state.current.value

    def legal_moves(self, state: TicTacToeState, player_id: str) -> list[Place]:
        if self.is_terminal(state) or player_id != state.current.value:
            return []
        return [Place(index=index) for index in state.available()]

    def apply_move(self, state: TicTacToeState, player_id: str, move: Place) -> TicTacToeState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")

        board = list(state.board)
        board[move.index] = state.current
        line = find_winning_line(board)
        next_state = state.evolve(board=tuple(board), turn_index=state.turn_index + 1)
        if line is not None:
            return next_state.evolve(winner=state.current, winning_line=line)
        if all(cell is not None for cell in board):
            return next_state.evolve(is_draw=True)
        return next_state.evolve(current=state.current.other)

    def is_terminal(self, state: TicTacToeState) -> bool:
        return state.winner is not None or state.is_draw

    def outcome(self, state: TicTacToeState) -> MatchResult:
        winner = state.winner.value if state.winner is not None else None
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner,
            scores={mark.value: 1.0 if state.winner is mark else 0.0 for mark in Mark},
            turns=state.turn_index,
            details="three_in_a_row" if winner else "board_full",
            state_digest=state.state_digest(),
        )

    def observation(self, state: TicTacToeState, player_id: str) -> TicTacToeObservation:
        return TicTacToeObservation(
            player_id=player_id,
            mark=Mark(player_id),
            board=state.board,
            current=state.current,
            winner=state.winner,
            is_draw=state.is_draw,
        )

    def render(self, state: TicTacToeState, player_id: str | None = None) -> str:
        cells = [mark.value if mark is not None else str(index) for index, mark in enumerate(state.board)]
        rows = [" | ".join(cells[row : row + 3]) for row in range(0, 9, 3)]
        return "\n---------\n".join(rows)

    def status_text(self, state: TicTacToeState) -> str:
        if state.winner is not None:
            return f"{state.winner.value} wins!"
        if state.is_draw:
            return "It's a draw!"
        return f"{state.current.value}'s turn."

    def parse_move(self, data: Mapping[str, Any]) -> Place:
        return move_from_dict(data)
