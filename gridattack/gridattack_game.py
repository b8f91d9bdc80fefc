"""Grid attack rules: alternate shots until one fleet is fully sunk."""

from __future__ import annotations

import random
from typing import Any, Mapping, Sequence

from framework.game import Game
from framework.result import MatchResult

from .gridattack_moves import Attack, move_from_dict
from .gridattack_state import (
    CELL_COUNT,
    GRID_SIZE,
    GridAttackObservation,
    GridAttackState,
    Seat,
    ShotResult,
    apply_attack,
    fleet_cells,
    format_cell,
    random_fleet,
    sunk_cells,
)


def _describe(seat: Seat, result: ShotResult, sunk_size: int | None, coord: str) -> str:
    if seat is Seat.PLAYER:
        if sunk_size is not None:
            return f"You sunk an enemy {sunk_size}-cell ship at {coord}."
        return f"Direct hit at {coord}." if result is ShotResult.HIT else f"Shot missed at {coord}."
    if sunk_size is not None:
        return f"CPU sunk your {sunk_size}-cell ship at {coord}."
    return f"CPU hit your ship at {coord}." if result is ShotResult.HIT else f"CPU missed at {coord}."


class GridAttackGame(Game[GridAttackState, Attack, GridAttackObservation]):
    """Battleship on a 6x6 grid; PLAYER fires first."""

    game_name = "gridattack"

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> GridAttackState:
        rng = random.Random(seed)
        return GridAttackState(seed=seed, fleets={Seat.PLAYER: random_fleet(rng), Seat.CPU: random_fleet(rng)})

    def player_ids(self, state: GridAttackState) -> Sequence[str]:
        return (Seat.PLAYER.value, Seat.CPU.value)

    def current_player(self, state: GridAttackState) -> str:
        return state.turn.value

    def legal_moves(self, state: GridAttackState, player_id: str) -> list[Attack]:
        if state.winner is not None or player_id != state.turn.value:
            return []
        fired = state.shots[state.turn]
        return [Attack(cell) for cell in range(CELL_COUNT) if cell not in fired]

    def apply_move(self, state: GridAttackState, player_id: str, move: Attack) -> GridAttackState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        attacker = state.turn
        defender = attacker.other
        outcome = apply_attack(state.fleets[defender], state.shots[attacker], move.cell)
        fleets = {**state.fleets, defender: outcome.fleet}
        shots = {**state.shots, attacker: outcome.shots}
        next_state = state.evolve(fleets=fleets, shots=shots, turn_count=state.turn_count + 1)
        if outcome.all_sunk:
            event = "You destroyed the entire enemy fleet." if attacker is Seat.PLAYER else "CPU destroyed your fleet."
            return next_state.evolve(winner=attacker, last_event=event)
        return next_state.evolve(
            turn=defender,
            last_event=_describe(attacker, outcome.result, outcome.sunk_ship_size, format_cell(move.cell)),
        )

    def is_terminal(self, state: GridAttackState) -> bool:
        return state.winner is not None

    def outcome(self, state: GridAttackState) -> MatchResult:
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=state.winner.value if state.winner is not None else None,
            scores={
                seat.value: float(sum(1 for result in state.shots[seat].values() if result is ShotResult.HIT))
                for seat in Seat
            },
            turns=state.turn_count,
            details="fleet_destroyed",
            state_digest=state.state_digest(),
        )

    def observation(self, state: GridAttackState, player_id: str) -> GridAttackObservation:
        seat = Seat(player_id)
        return GridAttackObservation(
            player_id=player_id,
            seat=seat,
            own_fleet=state.fleets[seat],
            shots_fired=dict(state.shots[seat]),
            shots_received=dict(state.shots[seat.other]),
            enemy_sunk_cells=sunk_cells(state.fleets[seat.other]),
        )

    def render(self, state: GridAttackState, player_id: str | None = None) -> str:
        seat = Seat(player_id) if player_id else Seat.PLAYER
        ships = fleet_cells(state.fleets[seat])
        received = state.shots[seat.other]
        fired = state.shots[seat]
        lines = []
        for row in range(GRID_SIZE):
            own, enemy = [], []
            for col in range(GRID_SIZE):
                cell = row * GRID_SIZE + col
                if cell in received:
                    own.append("X" if received[cell] is ShotResult.HIT else "o")
                else:
                    own.append("#" if cell in ships else ".")
                if cell in fired:
                    enemy.append("X" if fired[cell] is ShotResult.HIT else "o")
                else:
                    enemy.append(".")
            lines.append(f"{' '.join(own)}   {' '.join(enemy)}")
        return "\n".join(lines)

    def status_text(self, state: GridAttackState) -> str:
        if state.winner is Seat.PLAYER:
            return f"Victory! {state.last_event}"
        if state.winner is Seat.CPU:
            return f"Defeat. {state.last_event}"
        if state.turn is Seat.PLAYER:
            return f"Your turn. {state.last_event}"
        return f"CPU turn. {state.last_event}"

    def parse_move(self, data: Mapping[str, Any]) -> Attack:
        return move_from_dict(data)
