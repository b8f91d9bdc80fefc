"""Chess rules: check, checkmate, stalemate, and the fifty-move draw."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from framework.game import Game
from framework.result import MatchResult

from .chess_moves import ChessMove, move_from_dict
from .chess_rules import advance, captured_piece, generate_moves, is_in_check
from .chess_state import (
    BOARD_SIZE,
    FIFTY_MOVE_LIMIT,
    ChessObservation,
    ChessState,
    Color,
    PieceType,
    Position,
    initial_position,
)


class ChessGame(Game[ChessState, ChessMove, ChessObservation]):
    """Standard chess without repetition draws; WHITE moves first."""

    game_name = "chess"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> ChessState:
        return ChessState(seed=seed, position=initial_position())

    def from_position(self, position: Position, *, seed: int = 0, half_move_clock: int = 0) -> ChessState:
        """Build a state from an arbitrary position, resolving check and game end."""
        return self._settle(ChessState(seed=seed, position=position, half_move_clock=half_move_clock))

    def player_ids(self, state: ChessState) -> Sequence[str]:
        return (Color.WHITE.value, Color.BLACK.value)

    def current_player(self, state: ChessState) -> str:
        return state.current.value

    def legal_moves(self, state: ChessState, player_id: str) -> list[ChessMove]:
        if state.is_over or player_id != state.current.value:
            return []
        return generate_moves(state.position)

    def apply_move(self, state: ChessState, player_id: str, move: ChessMove) -> ChessState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")

        board = state.position.board
        piece = board[move.from_index]
        captured = captured_piece(board, move)
        mover = state.current
        captures = {"captured_by_white": state.captured_by_white, "captured_by_black": state.captured_by_black}
        if captured is not None:
            key = "captured_by_white" if mover is Color.WHITE else "captured_by_black"
            captures[key] = captures[key] + (captured,)

        resets_clock = captured is not None or (piece is not None and piece.type is PieceType.PAWN)
        next_state = state.evolve(
            position=advance(state.position, move),
            half_move_clock=0 if resets_clock else state.half_move_clock + 1,
            move_count=state.move_count + 1,
            last_move={"from_index": move.from_index, "to_index": move.to_index, "token": state.move_count + 1},
            **captures,
        )
        return self._settle(next_state)

    def _settle(self, state: ChessState) -> ChessState:
        side = state.position.side
        in_check = is_in_check(state.position.board, side)
        has_moves = bool(generate_moves(state.position))
        if not has_moves and in_check:
            return state.evolve(is_check=True, is_checkmate=True, winner=side.other)
        if not has_moves:
            return state.evolve(is_check=False, is_stalemate=True)
        if state.half_move_clock >= FIFTY_MOVE_LIMIT:
            return state.evolve(is_check=in_check, is_draw=True)
        return state.evolve(is_check=in_check)

    def is_terminal(self, state: ChessState) -> bool:
        return state.is_over

    def outcome(self, state: ChessState) -> MatchResult:
        winner = state.winner.value if state.winner is not None else None
        if state.is_checkmate:
            details = "checkmate"
        elif state.is_stalemate:
            details = "stalemate"
        else:
            details = "fifty_move_rule"
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner,
            scores={color.value: 1.0 if state.winner is color else 0.0 for color in Color},
            turns=state.move_count,
            details=details,
            state_digest=state.state_digest(),
        )

    def observation(self, state: ChessState, player_id: str) -> ChessObservation:
        return ChessObservation(
            player_id=player_id,
            color=Color(player_id),
            position=state.position,
            is_check=state.is_check,
            half_move_clock=state.half_move_clock,
        )

    def render(self, state: ChessState, player_id: str | None = None) -> str:
        rows = []
        for row in range(BOARD_SIZE):
            cells = state.position.board[row * BOARD_SIZE : (row + 1) * BOARD_SIZE]
            rows.append(f"{BOARD_SIZE - row} " + " ".join(piece.letter if piece else "." for piece in cells))
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    def status_text(self, state: ChessState) -> str:
        if state.is_checkmate and state.winner is not None:
            return f"Checkmate! {state.winner.label} wins."
        if state.is_stalemate:
            return "Stalemate! It's a draw."
        if state.is_draw:
            return "Draw by 50-move rule."
        if state.is_check:
            return f"{state.current.label} is in check!"
        return f"{state.current.label} to move."

    def parse_move(self, data: Mapping[str, Any]) -> ChessMove:
        return move_from_dict(data)
