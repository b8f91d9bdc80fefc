"""Connect-four rules."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from framework.game import Game
from framework.result import MatchResult

from .connectfour_moves import Drop, move_from_dict
from .connectfour_state import (
    COLUMNS,
    ROWS,
    ConnectFourObservation,
    ConnectFourState,
    Disc,
    available_columns,
    cell_index,
    empty_board,
    find_winner,
    simulate_drop,
)


class ConnectFourGame(Game[ConnectFourState, Drop, ConnectFourObservation]):
    """Six rows by seven columns; red drops first."""

    game_name = "connectfour"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> ConnectFourState:
        return ConnectFourState(seed=seed, board=empty_board())

    def player_ids(self, state: ConnectFourState) -> Sequence[str]:
        return (Disc.RED.value, Disc.YELLOW.value)

    def current_player(self, state: ConnectFourState) -> str:
        return state.current.value

    def legal_moves(self, state: ConnectFourState, player_id: str) -> list[Drop]:
        if self.is_terminal(state) or player_id != state.current.value:
            return []
        return [Drop(column=column) for column in sorted(available_columns(state.board))]

    def apply_move(self, state: ConnectFourState, player_id: str, move: Drop) -> ConnectFourState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        dropped = simulate_drop(state.board, move.column, state.current)
        if dropped is None:
            raise ValueError("Illegal move: column is full.")
        board, index = dropped
        next_state = state.evolve(board=board, last_drop_index=index, turn_index=state.turn_index + 1)
        found = find_winner(board)
        if found is not None:
            return next_state.evolve(winner=found[0], winning_cells=found[1])
        if all(cell is not None for cell in board):
            return next_state.evolve(is_draw=True)
        return next_state.evolve(current=state.current.other)

    def is_terminal(self, state: ConnectFourState) -> bool:
        return state.winner is not None or state.is_draw

    def outcome(self, state: ConnectFourState) -> MatchResult:
        winner = state.winner.value if state.winner is not None else None
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner,
            scores={disc.value: 1.0 if state.winner is disc else 0.0 for disc in Disc},
            turns=state.turn_index,
            details="four_in_a_row" if winner else "board_full",
            state_digest=state.state_digest(),
        )

    def observation(self, state: ConnectFourState, player_id: str) -> ConnectFourObservation:
        return ConnectFourObservation(
            player_id=player_id,
            disc=Disc(player_id),
            board=state.board,
            current=state.current,
            winner=state.winner,
        )

    def render(self, state: ConnectFourState, player_id: str | None = None) -> str:
        symbols = {None: ".", Disc.RED: "R", Disc.YELLOW: "Y"}
        rows = [
            " ".join(symbols[state.board[cell_index(row, column)]] for column in range(COLUMNS))
            for row in range(ROWS)
        ]
        return "\n".join(rows + [" ".join(str(column) for column in range(COLUMNS))])

    def status_text(self, state: ConnectFourState) -> str:
        if state.winner is not None:
            return f"Winner: {state.winner.value.title()}"
        if state.is_draw:
            return "It's a draw!"
        return f"Turn: {state.current.value.title()}"

    def parse_move(self, data: Mapping[str, Any]) -> Drop:
        return move_from_dict(data)
