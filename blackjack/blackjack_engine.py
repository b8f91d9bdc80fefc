"""Blackjack engine facade for a single human seat."""

from __future__ import annotations

from typing import Any, Mapping

from framework.cards import Card
from framework.difficulty import DEFAULT_DIFFICULTY, Difficulty
from framework.engine import GameEngine

from .blackjack_ai import choose_move
from .blackjack_game import BlackjackGame
from .blackjack_moves import BlackjackMove, DoubleDown, Hit, NewHand, PlaceBet, Stand
from .blackjack_state import PLAYER, BlackjackState, HandResult, Phase, best_total


class BlackjackEngine(GameEngine[BlackjackState, BlackjackMove]):
    """The dealer plays inside the rules; there is no AI seat unless `autoplay` is set."""

    def __init__(
        self,
        difficulty: Difficulty | str = DEFAULT_DIFFICULTY,
        *,
        autoplay: bool = False,
        seed: int | None = None,
        config: Mapping[str, Any] | None = None,
    ):
        super().__init__(
            BlackjackGame(),
            policy=choose_move,
            ai_players=(PLAYER,) if autoplay else (),
            difficulty=difficulty,
            seed=seed,
            config={"hands": 0, **(config or {})},
        )

    @property
    def chips(self) -> int:
        return self.state.chips

    @property
    def current_bet(self) -> int:
        return self.state.current_bet

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def result(self) -> HandResult | None:
        return self.state.result

    @property
    def player_hand(self) -> tuple[Card, ...]:
        return self.state.player_hand

    @property
    def dealer_hand(self) -> tuple[Card, ...]:
        """Dealer cards the table can see; the hole card stays down on the player's turn."""
        if self.state.dealer_card_hidden:
            return self.state.dealer_hand[:1]
        return self.state.dealer_hand

    @property
    def player_total(self) -> int:
        return self.state.player_total

    @property
    def dealer_total(self) -> int:
        return best_total(self.dealer_hand)

    @property
    def dealer_card_hidden(self) -> bool:
        return self.state.dealer_card_hidden

    def place_bet(self, amount: int) -> bool:
        return self.play(PlaceBet(amount), PLAYER)

    def hit(self) -> bool:
        return self.play(Hit(), PLAYER)

    def stand(self) -> bool:
        return self.play(Stand(), PLAYER)

    def double_down(self) -> bool:
        return self.play(DoubleDown(), PLAYER)

    def new_hand(self) -> bool:
        return self.play(NewHand(), PLAYER)
