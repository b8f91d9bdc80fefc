"""Blackjack rules: one player against a dealer who hits below 17."""

from __future__ import annotations

import random
from typing import Any, Mapping, Sequence

from framework.cards import Card, shuffled_deck
from framework.game import Game
from framework.result import MatchResult
from framework.serialize import stable_seed

from .blackjack_moves import BlackjackMove, DoubleDown, Hit, NewHand, PlaceBet, Stand, move_from_dict
from .blackjack_state import (
    BLACKJACK,
    DEALER_STANDS_ON,
    PLAYER,
    RESHUFFLE_BELOW,
    STARTING_CHIPS,
    BlackjackObservation,
    BlackjackState,
    HandResult,
    Phase,
    best_total,
)

BET_SIZES = (10, 25, 50, 100)


def fresh_shoe(seed: int, shuffle_count: int) -> tuple[Card, ...]:
    return tuple(shuffled_deck(random.Random(stable_seed(seed, "shoe", shuffle_count)), ace_high=True))


def draw(state: BlackjackState) -> tuple[Card, BlackjackState]:
    """Take the top card, reshuffling a full deck first when the shoe is empty."""
    if not state.deck:
        count = state.shuffle_count + 1
        state = state.evolve(deck=fresh_shoe(state.seed, count), shuffle_count=count)
    return state.deck[0], state.evolve(deck=state.deck[1:])


class BlackjackGame(Game[BlackjackState, BlackjackMove, BlackjackObservation]):
    """
    Single seat against the house.

    `hands` in the config ends the match after that many settled hands
    (0 keeps dealing until reset).
    """

    game_name = "blackjack"
    default_config = {"hands": 5}

    def new_game(self, seed: int, config: dict[str, Any] | None = None) -> BlackjackState:
        resolved = self.resolve_config(config)
        return BlackjackState(seed=seed, deck=fresh_shoe(seed, 1), hand_limit=int(resolved["hands"]))

    def player_ids(self, state: BlackjackState) -> Sequence[str]:
        return (PLAYER,)

    def current_player(self, state: BlackjackState) -> str:
        return PLAYER

    def legal_moves(self, state: BlackjackState, player_id: str) -> list[BlackjackMove]:
        if self.is_terminal(state) or player_id != PLAYER:
            return []
        if state.phase is Phase.BETTING:
            amounts = [amount for amount in BET_SIZES if amount <= state.chips]
            if state.chips not in amounts:
                amounts.append(state.chips)
            return [PlaceBet(amount) for amount in amounts]
        if state.phase is Phase.PLAYER_TURN:
            moves: list[BlackjackMove] = [Hit(), Stand()]
            if len(state.player_hand) == 2 and state.chips >= state.current_bet:
                moves.append(DoubleDown())
            return moves
        if state.phase is Phase.RESULT:
            return [NewHand()]
        return []

    def is_legal(self, state: BlackjackState, player_id: str, move: BlackjackMove) -> tuple[bool, str | None]:
        if isinstance(move, PlaceBet) and not self.is_terminal(state) and state.phase is Phase.BETTING:
            if not 0 < move.amount <= state.chips:
                return False, f"Bet must be between 1 and {state.chips}."
            return True, None
        return super().is_legal(state, player_id, move)

    def apply_move(self, state: BlackjackState, player_id: str, move: BlackjackMove) -> BlackjackState:
        legal, reason = self.is_legal(state, player_id, move)
        if not legal:
            raise ValueError(f"Illegal move: {reason}")
        state = state.evolve(turn_count=state.turn_count + 1)

        if isinstance(move, PlaceBet):
            return self._deal(state.evolve(current_bet=move.amount, chips=state.chips - move.amount))
        if isinstance(move, Hit):
            return self._player_draws(state)
        if isinstance(move, Stand):
            return self._play_dealer(state)
        if isinstance(move, DoubleDown):
            doubled = state.evolve(chips=state.chips - state.current_bet, current_bet=state.current_bet * 2)
            after = self._player_draws(doubled)
            return after if after.phase is Phase.RESULT else self._play_dealer(after)
        return self._new_hand(state)

    def _deal(self, state: BlackjackState) -> BlackjackState:
        player: list[Card] = []
        dealer: list[Card] = []
        for hand in (player, dealer, player, dealer):
            card, state = draw(state)
            hand.append(card)
        state = state.evolve(player_hand=tuple(player), dealer_hand=tuple(dealer), phase=Phase.PLAYER_TURN)
        if state.player_total != BLACKJACK:
            return state
        if state.dealer_total == BLACKJACK:
            return self._settle(state, HandResult.PUSH, state.current_bet)
        return self._settle(state, HandResult.PLAYER_BLACKJACK, state.current_bet + state.current_bet * 3 // 2)

    def _player_draws(self, state: BlackjackState) -> BlackjackState:
        card, state = draw(state)
        state = state.evolve(player_hand=state.player_hand + (card,))
        if state.player_total > BLACKJACK:
            return self._settle(state, HandResult.PLAYER_BUST, 0)
        return state

    def _play_dealer(self, state: BlackjackState) -> BlackjackState:
        state = state.evolve(phase=Phase.DEALER_TURN)
        while state.dealer_total < DEALER_STANDS_ON:
            card, state = draw(state)
            state = state.evolve(dealer_hand=state.dealer_hand + (card,))
        player, dealer, bet = state.player_total, state.dealer_total, state.current_bet
        if dealer > BLACKJACK:
            return self._settle(state, HandResult.DEALER_BUST, bet * 2)
        if player > dealer:
            return self._settle(state, HandResult.PLAYER_WIN, bet * 2)
        if player == dealer:
            return self._settle(state, HandResult.PUSH, bet)
        return self._settle(state, HandResult.DEALER_WIN, 0)

    @staticmethod
    def _settle(state: BlackjackState, result: HandResult, payout: int) -> BlackjackState:
        return state.evolve(
            phase=Phase.RESULT,
            result=result,
            chips=state.chips + payout,
            hands_played=state.hands_played + 1,
        )

    @staticmethod
    def _new_hand(state: BlackjackState) -> BlackjackState:
        cleared = state.evolve(player_hand=(), dealer_hand=(), current_bet=0, result=None, phase=Phase.BETTING)
        if state.chips <= 0:
            count = state.shuffle_count + 1
            return cleared.evolve(chips=STARTING_CHIPS, deck=fresh_shoe(state.seed, count), shuffle_count=count)
        if len(state.deck) < RESHUFFLE_BELOW:
            count = state.shuffle_count + 1
            return cleared.evolve(deck=fresh_shoe(state.seed, count), shuffle_count=count)
        return cleared

    def is_terminal(self, state: BlackjackState) -> bool:
        return state.phase is Phase.RESULT and 0 < state.hand_limit <= state.hands_played

    def outcome(self, state: BlackjackState) -> MatchResult:
        if state.chips > STARTING_CHIPS:
            winner, details = PLAYER, f"Finished up {state.chips - STARTING_CHIPS} chips."
        else:
            winner, details = None, f"Finished with {state.chips} chips."
        return MatchResult.for_state(
            game_name=self.game_name,
            seed=state.seed,
            winner=winner,
            scores={PLAYER: float(state.chips)},
            turns=state.turn_count,
            details=details,
            state_digest=state.state_digest(),
        )

    def observation(self, state: BlackjackState, player_id: str) -> BlackjackObservation:
        dealer = state.dealer_hand[:1] if state.dealer_card_hidden else state.dealer_hand
        return BlackjackObservation(
            player_id=player_id,
            chips=state.chips,
            current_bet=state.current_bet,
            player_hand=state.player_hand,
            dealer_visible=dealer,
            phase=state.phase,
            result=state.result,
        )

    def render(self, state: BlackjackState, player_id: str | None = None) -> str:
        dealer = state.dealer_hand[:1] if state.dealer_card_hidden else state.dealer_hand
        hidden = " ??" if state.dealer_card_hidden else ""
        return "\n".join(
            [
                f"phase {state.phase.value} chips {state.chips} bet {state.current_bet}",
                f"dealer: {' '.join(card.label for card in dealer)}{hidden} ({best_total(dealer)})",
                f"player: {' '.join(card.label for card in state.player_hand)} ({state.player_total})",
            ]
        )

    def status_text(self, state: BlackjackState) -> str:
        if state.phase is Phase.BETTING:
            return f"Place your bet. You have {state.chips} chips."
        if state.phase is Phase.PLAYER_TURN:
            return f"You have {state.player_total}. Hit or stand?"
        if state.result is not None:
            return state.result.display
        return "Dealer's turn."

    def parse_move(self, data: Mapping[str, Any]) -> BlackjackMove:
        return move_from_dict(data)
