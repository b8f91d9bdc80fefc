"""Checkers rules with board-global forced captures and multi-jump chains."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from framework.game import Game
from framework.result import MatchResult

from .checkers_moves import CheckersMove, move_from_dict
from .checkers_rules import apply_on_board, generate_moves, round_result
from .checkers_state import (
    BOARD_SIZE,
    CheckersObservation,
    CheckersState,
    Color,
    count_pieces,
    initial_board,
)


class CheckersGame(Game[CheckersState, CheckersMove, CheckersObservation]):
    """Two-seat checkers; BLACK moves first."""

    game_name = "checkers"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> CheckersState:
        return CheckersState(seed=seed, board=initial_board())

    def player_ids(self, state: CheckersState) -> Sequence[str]:
        return (Color.BLACK.value, Color.RED.value)

    def current_player(self, state: CheckersState) -> str:
        return state.current.value

    def legal_moves(self, state: CheckersState, player_id: str) -> list[CheckersMove]:
        if self.is_terminal(state) or player_id != state.current.value:
            return []
        return generate_moves(state.board, state.current, state.forced_from_index)

    def apply_move(self, state: CheckersState, player_id: str, move: CheckersMove) -> CheckersState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")

        transition = apply_on_board(state.board, move)
        next_state = state.evolve(
            board=transition.board,
            move_count=state.move_count + 1,
            last_move=move.to_dict(),
        )
        if transition.continuation:
            return next_state.evolve(forced_from_index=move.to_index)

        next_state = next_state.evolve(forced_from_index=None)
        result = round_result(transition.board, state.current)
        if result is not None:
            winner, is_draw = result
            return next_state.evolve(winner=winner, is_draw=is_draw)
        return next_state.evolve(current=state.current.other)

    def is_terminal(self, state: CheckersState) -> bool:
        return state.winner is not None or state.is_draw

    def outcome(self, state: CheckersState) -> MatchResult:
        winner = state.winner.value if state.winner is not None else None
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner,
            scores={color.value: float(count_pieces(state.board, color)) for color in Color},
            turns=state.move_count,
            details="opponent_blocked_or_captured" if winner else "no_pieces_left",
            state_digest=state.state_digest(),
        )

    def observation(self, state: CheckersState, player_id: str) -> CheckersObservation:
        return CheckersObservation(
            player_id=player_id,
            color=Color(player_id),
            board=state.board,
            current=state.current,
            forced_from_index=state.forced_from_index,
        )

    def render(self, state: CheckersState, player_id: str | None = None) -> str:
        rows = []
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                piece = state.board[row * BOARD_SIZE + col]
                if piece is None:
                    cells.append(".")
                else:
                    symbol = "b" if piece.color is Color.BLACK else "r"
                    cells.append(symbol.upper() if piece.king else symbol)
            rows.append(" ".join(cells))
        return "\n".join(rows)

    def status_text(self, state: CheckersState) -> str:
        if state.winner is not None:
            return f"Game over! {state.winner.label} wins."
        if state.is_draw:
            return "Game over! It's a draw."
        if state.forced_from_index is not None:
            return f"{state.current.label} must continue capturing with the selected piece."
        moves = generate_moves(state.board, state.current)
        if any(move.is_capture for move in moves):
            return f"{state.current.label} to move. Capture required."
        return f"{state.current.label} to move."

    def parse_move(self, data: Mapping[str, Any]) -> CheckersMove:
        return move_from_dict(data)
