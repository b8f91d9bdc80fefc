"""Hold'em engine facade: the human sits in seat "You" against three AI seats."""

from __future__ import annotations

from typing import Any, Mapping

from framework.cards import Card
from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .holdem_ai import choose_move, hand_strength
from .holdem_game import HoldemGame
from .holdem_moves import AllIn, Call, Check, Fold, HoldemMove, NextHand, RaiseTo
from .holdem_state import SEAT_NAMES, HoldemState, Phase, Seat, ShowdownEntry

HUMAN = SEAT_NAMES[0]
AI_SEATS = SEAT_NAMES[1:]


class HoldemEngine(GameEngine[HoldemState, HoldemMove]):
    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        super().__init__(
            HoldemGame(),
            policy=choose_move,
            ai_players=AI_SEATS,
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def pot(self) -> int:
        return self.state.pot

    @property
    def community(self) -> tuple[Card, ...]:
        return self.state.community

    @property
    def seats(self) -> tuple[Seat, ...]:
        return self.state.seats

    @property
    def player(self) -> Seat:
        return self.state.seats[0]

    @property
    def to_call(self) -> int:
        return max(self.state.current_bet - self.player.bet, 0)

    @property
    def is_human_turn(self) -> bool:
        return not self.is_over and not self.state.hand_over and self.current_player == HUMAN

    @property
    def player_strength(self) -> float:
        return hand_strength(self.player.hole, self.state.community)

    @property
    def showdown(self) -> tuple[ShowdownEntry, ...]:
        return self.state.showdown

    @property
    def message(self) -> str:
        return self.state.message

    def fold(self) -> bool:
        return self.play(Fold(), HUMAN)

    def check(self) -> bool:
        return self.play(Check(), HUMAN)

    def call(self) -> bool:
        return self.play(Call(), HUMAN)

    def raise_to(self, amount: int) -> bool:
        """Raise to a total street bet; an amount covering the whole stack goes all in."""
        if self.is_human_turn and amount - self.player.bet >= self.player.chips:
            return self.all_in()
        return self.play(RaiseTo(amount), HUMAN)

    def all_in(self) -> bool:
        return self.play(AllIn(), HUMAN)

    def next_hand(self) -> bool:
        """Deal the next hand; when the human has busted an AI seat deals instead."""
        if not self.state.hand_over or self.is_over:
            return False
        if self.current_player in self.ai_players:
            return self.perform_ai_move()
        return self.play(NextHand(), HUMAN)
