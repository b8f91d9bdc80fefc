"""Gin rummy engine facade: the human is YOU, the AI is OPPONENT."""

from __future__ import annotations

from typing import Any, Mapping

from framework.cards import Card
from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .rummy_ai import choose_move
from .rummy_game import RummyGame, can_knock
from .rummy_melds import Meld, deadwood_points, find_optimal_melds
from .rummy_moves import Discard, DrawDiscard, DrawStock, Knock, NextRound, Pass, RummyMove
from .rummy_state import HAND_SIZE, SEATS, Phase, RummyState

HUMAN, AI = SEATS


class RummyEngine(GameEngine[RummyState, RummyMove]):
    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        self.selected_card_index: int | None = None
        super().__init__(
            RummyGame(),
            policy=choose_move,
            ai_players=(AI,),
            difficulty=difficulty,
            seed=seed,
            config=config,
        )

    def reset(self) -> None:
        self.selected_card_index = None
        super().reset()

    # -- derived views -------------------------------------------------

    @property
    def phase(self) -> Phase:
        """Phase as seen by the human; AI turns read as OPPONENT_TURN."""
        phase = self.state.phase
        if self.state.current == AI and phase in (Phase.DRAW, Phase.DISCARD, Phase.KNOCK_DECISION):
            return Phase.OPPONENT_TURN
        return phase

    @property
    def player_hand(self) -> tuple[Card, ...]:
        return self.state.hands[HUMAN]

    @property
    def opponent_card_count(self) -> int:
        return len(self.state.hands[AI])

    @property
    def stock_count(self) -> int:
        return len(self.state.stock)

    @property
    def discard_top(self) -> Card | None:
        return self.state.discard_top

    @property
    def player_melds(self) -> list[Meld]:
        return find_optimal_melds(self.player_hand)[0]

    @property
    def player_deadwood(self) -> int:
        return deadwood_points(find_optimal_melds(self.player_hand)[1])

    @property
    def can_knock(self) -> bool:
        return can_knock(self.player_hand)

    @property
    def is_gin(self) -> bool:
        return len(self.player_hand) == HAND_SIZE and self.player_deadwood == 0

    @property
    def scores(self) -> tuple[int, int]:
        return self.state.scores[HUMAN], self.state.scores[AI]

    @property
    def round_message(self) -> str:
        return self.state.round_message

    # -- actions -------------------------------------------------------

    def draw_from_stock(self) -> bool:
        return self.play(DrawStock(), HUMAN)

    def draw_from_discard(self) -> bool:
        return self.play(DrawDiscard(), HUMAN)

    def select_card(self, index: int) -> bool:
        if self.phase is not Phase.DISCARD or not 0 <= index < len(self.player_hand):
            return False
        self.selected_card_index = None if self.selected_card_index == index else index
        return True

    def discard(self, index: int) -> bool:
        """Discard the card at `index` of the sorted hand."""
        if not 0 <= index < len(self.player_hand):
            return False
        played = self.play(Discard(self.player_hand[index]), HUMAN)
        if played:
            self.selected_card_index = None
        return played

    def knock(self) -> bool:
        return self.play(Knock(), HUMAN)

    def pass_knock(self) -> bool:
        return self.play(Pass(), HUMAN)

    def new_round(self) -> bool:
        return self.play(NextRound(), HUMAN)

    def trigger_ai_turn(self) -> int:
        """Play the whole AI turn (draw, discard, knock decision)."""
        return self.run_ai_turns()
