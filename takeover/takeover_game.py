"""Takeover rules: clone or jump, convert neighbours, majority wins."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from framework.game import Game
from framework.result import MatchResult

from .takeover_moves import TakeoverMove, move_from_dict
from .takeover_rules import apply_on_board, generate_moves, resolve_turn
from .takeover_state import (
    BOARD_SIZE,
    Side,
    TakeoverObservation,
    TakeoverState,
    count_pieces,
    initial_board,
)


class TakeoverGame(Game[TakeoverState, TakeoverMove, TakeoverObservation]):
    """7x7 territory game; Blue (B) moves first."""

    game_name = "takeover"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> TakeoverState:
        return TakeoverState(seed=seed, board=initial_board())

    def player_ids(self, state: TakeoverState) -> Sequence[str]:
        return (Side.B.value, Side.O.value)

    def current_player(self, state: TakeoverState) -> str:
        return state.current.value

    def legal_moves(self, state: TakeoverState, player_id: str) -> list[TakeoverMove]:
        if state.is_over or player_id != state.current.value:
            return []
        return generate_moves(state.board, state.current)

    def apply_move(self, state: TakeoverState, player_id: str, move: TakeoverMove) -> TakeoverState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        result = apply_on_board(state.board, move, state.current)
        if result is None:
            raise ValueError("Move does not apply to this board.")
        turn = resolve_turn(result.board, state.current.other)
        return state.evolve(
            board=result.board,
            current=turn.next_side,
            is_over=turn.is_over,
            pass_message=turn.pass_message,
            last_move=move.to_dict(),
            last_converted=result.converted,
            move_count=state.move_count + 1,
        )

    def is_terminal(self, state: TakeoverState) -> bool:
        return state.is_over

    def outcome(self, state: TakeoverState) -> MatchResult:
        winner = state.winner
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner.value if winner is not None else None,
            scores={side.value: float(count_pieces(state.board, side)) for side in Side},
            turns=state.move_count,
            details="majority" if winner is not None else "equal_counts",
            state_digest=state.state_digest(),
        )

    def observation(self, state: TakeoverState, player_id: str) -> TakeoverObservation:
        return TakeoverObservation(player_id=player_id, side=Side(player_id), board=state.board, current=state.current)

    def render(self, state: TakeoverState, player_id: str | None = None) -> str:
        rows = []
        for row in range(BOARD_SIZE):
            cells = state.board[row * BOARD_SIZE : (row + 1) * BOARD_SIZE]
            rows.append(" ".join(cell.value if cell is not None else "." for cell in cells))
        return "\n".join(rows)

    def status_text(self, state: TakeoverState) -> str:
        blue, orange = count_pieces(state.board, Side.B), count_pieces(state.board, Side.O)
        if state.is_over:
            winner = state.winner
            if winner is not None:
                return f"Game over! {winner.label} wins {blue}-{orange}."
            return f"Game over! Draw at {blue}-{orange}."
        move_count = len(generate_moves(state.board, state.current))
        suffix = "" if move_count == 1 else "s"
        line = f"{state.current.label} to move ({move_count} legal move{suffix})."
        if state.pass_message:
            return f"Pass: {state.pass_message} {line}"
        return line

    def parse_move(self, data: Mapping[str, Any]) -> TakeoverMove:
        return move_from_dict(data)
