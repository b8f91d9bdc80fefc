"""Balance engine facade with a multi-round session and alternating starter."""

from __future__ import annotations

from typing import Any, Mapping

from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .balance_ai import choose_move
from .balance_game import BalanceGame
from .balance_moves import PlaceWeight
from .balance_state import INITIAL_WEIGHTS, SAFE_TORQUE_LIMIT, BalanceState, Player, Stable, Tip

MAX_BEAM_ANGLE = 16.0
TIPPED_BEAM_ANGLE = 22.0


class BalanceEngine(GameEngine[BalanceState, PlaceWeight]):
    """Human is player A; the AI plays B."""

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        vs_ai: bool = True,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.round_number = 1
        self.session_wins: dict[Player, int] = {Player.A: 0, Player.B: 0}
        self.draw_rounds = 0
        self.selected_weight: dict[Player, int] = {player: INITIAL_WEIGHTS[0] for player in Player}
        self._recorded = False
        super().__init__(
            BalanceGame(),
            policy=choose_move,
            ai_players=(Player.B.value,) if vs_ai else (),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def reset(self) -> None:
        self.selected_weight = {player: INITIAL_WEIGHTS[0] for player in Player}
        self._recorded = False
        super().reset()

    def reset_session(self) -> None:
        """Clear the scoreboard and start round 1 with player A."""
        self.round_number = 1
        self.session_wins = {Player.A: 0, Player.B: 0}
        self.draw_rounds = 0
        self.config["starting_player"] = Player.A.value
        self.reset()

    def start_next_round(self) -> bool:
        """Begin the next round with the other starter; only after a round ends."""
        if not self.is_over:
            return False
        self.round_number += 1
        self.config["starting_player"] = self.state.starting_player.other.value
        self.reset()
        return True

    def select_weight(self, weight: int) -> bool:
        current = self.state.current
        if weight not in self.state.weight_pool[current]:
            return False
        self.selected_weight[current] = weight
        return True

    def place_weight(self, slot: int, weight: int | None = None) -> bool:
        """Place the given (or selected) weight on a free slot for the seat to move."""
        current = self.state.current
        chosen = weight if weight is not None else self.selected_weight[current]
        try:
            move = PlaceWeight(slot=slot, weight=chosen)
        except ValueError:
            return False
        return self.play(move)

    def _apply(self, seat: str, move: PlaceWeight) -> bool:
        played = super()._apply(seat, move)
        if played:
            mover = Player(seat)
            remaining = self.state.weight_pool[mover]
            self.selected_weight[mover] = remaining[0] if remaining else INITIAL_WEIGHTS[0]
            self._record_result()
        return played

    def _record_result(self) -> None:
        result = self.state.result
        if result is None or self._recorded:
            return
        self._recorded = True
        if isinstance(result, Tip):
            self.session_wins[result.winner] += 1
        else:
            self.draw_rounds += 1

    @property
    def torque(self) -> int:
        return self.state.torque

    @property
    def beam_angle(self) -> float:
        result = self.state.result
        if isinstance(result, Tip):
            return TIPPED_BEAM_ANGLE if result.final_torque > 0 else -TIPPED_BEAM_ANGLE
        scaled = self.state.torque / SAFE_TORQUE_LIMIT * 14.0
        return max(-MAX_BEAM_ANGLE, min(MAX_BEAM_ANGLE, scaled))

    def status_text(self) -> str:
        return f"Round {self.round_number}: {super().status_text()}"

    @property
    def is_stable(self) -> bool:
        return isinstance(self.state.result, Stable)
