"""Balance rules: alternate placing weights; whoever tips the beam loses."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from framework.game import Game
from framework.result import MatchResult

from .balance_moves import PlaceWeight, move_from_dict
from .balance_state import (
    SAFE_TORQUE_LIMIT,
    SLOT_POSITIONS,
    BalanceObservation,
    BalanceState,
    PlacedWeight,
    Player,
    Stable,
    Tip,
    compute_torque,
    format_torque,
    slot_label,
)


class BalanceGame(Game[BalanceState, PlaceWeight, BalanceObservation]):
    """One round of the beam puzzle; `starting_player` config picks who opens."""

    game_name = "balance"
    default_config = {"starting_player": Player.A.value}

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> BalanceState:
        starter = Player(self.resolve_config(config)["starting_player"])
        return BalanceState(seed=seed, starting_player=starter, current=starter)

    def player_ids(self, state: BalanceState) -> Sequence[str]:
        return (Player.A.value, Player.B.value)

    def current_player(self, state: BalanceState) -> str:
        return state.current.value

    def legal_moves(self, state: BalanceState, player_id: str) -> list[PlaceWeight]:
        if state.result is not None or player_id != state.current.value:
            return []
        occupied = state.occupied_slots
        return [
            PlaceWeight(slot=slot, weight=weight)
            for weight in dict.fromkeys(state.weight_pool[state.current])
            for slot in SLOT_POSITIONS
            if slot not in occupied
        ]

    def apply_move(self, state: BalanceState, player_id: str, move: PlaceWeight) -> BalanceState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        mover = state.current
        placements = state.placements + (PlacedWeight(move.slot, move.weight, mover),)
        remaining = list(state.weight_pool[mover])
        remaining.remove(move.weight)
        pool = dict(state.weight_pool)
        pool[mover] = tuple(remaining)
        next_state = state.evolve(placements=placements, weight_pool=pool)

        torque = compute_torque(placements)
        if abs(torque) > SAFE_TORQUE_LIMIT:
            return next_state.evolve(result=Tip(winner=mover.other, loser=mover, final_torque=torque))
        if len(placements) == len(SLOT_POSITIONS):
            return next_state.evolve(result=Stable(final_torque=torque))
        return next_state.evolve(current=mover.other)

    def is_terminal(self, state: BalanceState) -> bool:
        return state.result is not None

    def outcome(self, state: BalanceState) -> MatchResult:
        winner = state.result.winner.value if isinstance(state.result, Tip) else None
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner,
            scores={player.value: 1.0 if winner == player.value else 0.0 for player in Player},
            turns=len(state.placements),
            details="tipped" if winner else "stable",
            state_digest=state.state_digest(),
        )

    def observation(self, state: BalanceState, player_id: str) -> BalanceObservation:
        player = Player(player_id)
        return BalanceObservation(
            player_id=player_id,
            player=player,
            placements=state.placements,
            own_weights=state.weight_pool[player],
            opponent_weights=state.weight_pool[player.other],
        )

    def render(self, state: BalanceState, player_id: str | None = None) -> str:
        by_slot = {placed.slot: placed for placed in state.placements}
        cells = []
        for slot in SLOT_POSITIONS:
            placed = by_slot.get(slot)
            cells.append(f"{slot_label(slot)}:{placed.weight}{placed.player.value}" if placed else f"{slot_label(slot)}:-")
        return f"{' '.join(cells)}\ntorque {format_torque(state.torque)}"

    def status_text(self, state: BalanceState) -> str:
        if isinstance(state.result, Tip):
            return (
                f"Player {state.result.loser.value} tipped the beam ({format_torque(state.result.final_torque)}). "
                f"Player {state.result.winner.value} wins."
            )
        if isinstance(state.result, Stable):
            return f"All slots filled at torque {format_torque(state.result.final_torque)}. Draw round."
        return (
            f"Player {state.current.value} to move · Torque {format_torque(state.torque)} "
            f"(limit ±{SAFE_TORQUE_LIMIT})."
        )

    def parse_move(self, data: Mapping[str, Any]) -> PlaceWeight:
        return move_from_dict(data)
