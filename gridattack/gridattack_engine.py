"""Grid attack engine facade: the human fires at the CPU fleet, then the CPU replies."""

from __future__ import annotations

from typing import Any, Mapping

from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .gridattack_ai import choose_move
from .gridattack_game import GridAttackGame
from .gridattack_moves import Attack
from .gridattack_state import CELL_COUNT, GridAttackState, Seat, ShotResult, fleet_cells, sunk_cells


class GridAttackEngine(GameEngine[GridAttackState, Attack]):
    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.player_wins = 0
        super().__init__(
            GridAttackGame(),
            policy=choose_move,
            ai_players=(Seat.CPU.value,),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def attack_enemy(self, cell: int) -> bool:
        """Fire at the CPU grid; ignored off-turn, after the end, or on a repeated cell."""
        if not 0 <= cell < CELL_COUNT:
            return False
        played = self.play(Attack(cell), Seat.PLAYER.value)
        if played and self.winner == Seat.PLAYER.value:
            self.player_wins += 1
        return played

    def execute_cpu_turn(self) -> bool:
        return self.perform_ai_move()

    @property
    def can_target_enemy(self) -> bool:
        return not self.is_over and self.state.turn is Seat.PLAYER

    @property
    def player_ship_cells(self) -> frozenset[int]:
        return fleet_cells(self.state.fleets[Seat.PLAYER])

    @property
    def enemy_sunk_cells(self) -> frozenset[int]:
        return sunk_cells(self.state.fleets[Seat.CPU])

    def hits(self, seat: Seat) -> int:
        return sum(1 for result in self.state.shots[seat].values() if result is ShotResult.HIT)

    def misses(self, seat: Seat) -> int:
        return sum(1 for result in self.state.shots[seat].values() if result is ShotResult.MISS)
