"""Dots and boxes rules: completing a box scores it and keeps the turn."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from framework.game import Game
from framework.result import MatchResult

from .dotsandboxes_moves import DrawEdge, move_from_dict
from .dotsandboxes_state import (
    BOXES_BY_ID,
    BOXES_PER_SIDE,
    EDGES,
    EDGES_BY_ID,
    DotsAndBoxesObservation,
    DotsAndBoxesState,
    Player,
    box_id,
    horizontal_edge_id,
    vertical_edge_id,
)


def completed_boxes(drawn: Mapping[str, Player], claimed: Mapping[str, Player], edge_id: str) -> list[str]:
    """Unclaimed boxes next to `edge_id` whose four edges are all drawn."""
    return [
        candidate
        for candidate in EDGES_BY_ID[edge_id].adjacent_boxes
        if candidate not in claimed and all(edge in drawn for edge in BOXES_BY_ID[candidate].edge_ids)
    ]


class DotsAndBoxesGame(Game[DotsAndBoxesState, DrawEdge, DotsAndBoxesObservation]):
    """5x5 dots; player A draws first."""

    game_name = "dotsandboxes"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> DotsAndBoxesState:
        return DotsAndBoxesState(seed=seed)

    def player_ids(self, state: DotsAndBoxesState) -> Sequence[str]:
        return (Player.A.value, Player.B.value)

    def current_player(self, state: DotsAndBoxesState) -> str:
        return state.current.value

    def legal_moves(self, state: DotsAndBoxesState, player_id: str) -> list[DrawEdge]:
        if self.is_terminal(state) or player_id != state.current.value:
            return []
        return [DrawEdge(edge.id) for edge in EDGES if edge.id not in state.drawn_edges]

    def apply_move(self, state: DotsAndBoxesState, player_id: str, move: DrawEdge) -> DotsAndBoxesState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        drawn = dict(state.drawn_edges)
        drawn[move.edge_id] = state.current
        completed = completed_boxes(drawn, state.claimed_boxes, move.edge_id)
        claimed = dict(state.claimed_boxes)
        for completed_id in completed:
            claimed[completed_id] = state.current
        return state.evolve(
            drawn_edges=drawn,
            claimed_boxes=claimed,
            current=state.current if completed else state.current.other,
            last_edge_id=move.edge_id,
            last_claimed_box_ids=tuple(completed),
        )

    def is_terminal(self, state: DotsAndBoxesState) -> bool:
        return state.edges_remaining == 0

    def outcome(self, state: DotsAndBoxesState) -> MatchResult:
        score_a, score_b = state.score(Player.A), state.score(Player.B)
        winner = None
        if score_a != score_b:
            winner = Player.A.value if score_a > score_b else Player.B.value
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner,
            scores={Player.A.value: float(score_a), Player.B.value: float(score_b)},
            turns=len(state.drawn_edges),
            details="most_boxes" if winner else "tie",
            state_digest=state.state_digest(),
        )

    def observation(self, state: DotsAndBoxesState, player_id: str) -> DotsAndBoxesObservation:
        return DotsAndBoxesObservation(
            player_id=player_id,
            player=Player(player_id),
            drawn_edges=dict(state.drawn_edges),
            claimed_boxes=dict(state.claimed_boxes),
            current=state.current,
        )

    def render(self, state: DotsAndBoxesState, player_id: str | None = None) -> str:
        lines = []
        for row in range(BOXES_PER_SIDE + 1):
            top = "o"
            for col in range(BOXES_PER_SIDE):
                top += "---o" if horizontal_edge_id(row, col) in state.drawn_edges else "   o"
            lines.append(top)
            if row == BOXES_PER_SIDE:
                break
            middle = ""
            for col in range(BOXES_PER_SIDE + 1):
                middle += "|" if vertical_edge_id(row, col) in state.drawn_edges else " "
                if col < BOXES_PER_SIDE:
                    owner = state.claimed_boxes.get(box_id(row, col))
                    middle += f" {owner.value} " if owner is not None else "   "
            lines.append(middle)
        return "\n".join(lines)

    def status_text(self, state: DotsAndBoxesState) -> str:
        score_a, score_b = state.score(Player.A), state.score(Player.B)
        if self.is_terminal(state):
            if score_a == score_b:
                return f"Game over! Tie game at {score_a}-{score_b}."
            leader = "A" if score_a > score_b else "B"
            return f"Game over! Player {leader} wins {max(score_a, score_b)}-{min(score_a, score_b)}."
        remaining = state.edges_remaining
        return f"Turn: Player {state.current.value}. {remaining} edge{'' if remaining == 1 else 's'} left."

    def parse_move(self, data: Mapping[str, Any]) -> DrawEdge:
        return move_from_dict(data)
