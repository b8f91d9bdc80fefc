"""Hand totals, payouts, and dealer play tests for blackjack."""

from __future__ import annotations

import random

import pytest

from blackjack.blackjack_ai import choose_move
from blackjack.blackjack_engine import BlackjackEngine
from blackjack.blackjack_game import BlackjackGame, draw
from blackjack.blackjack_moves import DoubleDown, Hit, NewHand, PlaceBet, Stand
from blackjack.blackjack_state import PLAYER, STARTING_CHIPS, BlackjackState, HandResult, Phase, best_total
from framework.cards import Card, Suit
from framework.difficulty import Difficulty

_RANKS = {"A": 14, "K": 13, "Q": 12, "J": 11}


def _cards(text: str) -> tuple[Card, ...]:
    return tuple(Card(_RANKS.get(label) or int(label), Suit.SPADES) for label in text.split())


def _dealt(deck: str, bet: int = 100, **changes) -> BlackjackState:
    """Deal from a stacked deck: player, dealer, player, dealer, then hits."""
    game = BlackjackGame()
    state = BlackjackState(seed=0, deck=_cards(deck), **changes)
    return game.apply_move(state, PLAYER, PlaceBet(bet))


@pytest.mark.parametrize(
    ("hand", "total"),
    [("A 6 5", 12), ("A A 9", 21), ("A K", 21), ("K Q 5", 25), ("A A A A", 14)],
)
def test_best_total_demotes_aces_one_at_a_time(hand: str, total: int) -> None:
    assert best_total(_cards(hand)) == total


def test_natural_pays_three_to_two() -> None:
    state = _dealt("A 9 K 7")
    assert state.result is HandResult.PLAYER_BLACKJACK
    assert state.chips == STARTING_CHIPS - 100 + 250
    assert BlackjackGame().status_text(state) == "Blackjack! You win 3:2."


def test_two_naturals_push() -> None:
    state = _dealt("A A K Q")
    assert state.result is HandResult.PUSH
    assert state.chips == STARTING_CHIPS


def test_dealer_draws_to_seventeen_and_wins() -> None:
    game = BlackjackGame()
    state = _dealt("10 9 9 7 5")
    assert state.phase is Phase.PLAYER_TURN
    assert state.dealer_card_hidden
    state = game.apply_move(state, PLAYER, Stand())
    assert state.dealer_total == 21
    assert state.result is HandResult.DEALER_WIN
    assert state.chips == STARTING_CHIPS - 100


def test_player_bust_loses_the_bet() -> None:
    game = BlackjackGame()
    state = game.apply_move(_dealt("10 9 6 7 K"), PLAYER, Hit())
    assert state.result is HandResult.PLAYER_BUST
    assert state.chips == STARTING_CHIPS - 100


def test_dealer_bust_pays_even_money() -> None:
    game = BlackjackGame()
    state = game.apply_move(_dealt("10 10 8 6 K"), PLAYER, Stand())
    assert state.result is HandResult.DEALER_BUST
    assert state.chips == STARTING_CHIPS + 100


def test_double_down_doubles_the_bet_and_draws_once() -> None:
    game = BlackjackGame()
    state = _dealt("5 9 6 7 10 2")
    assert DoubleDown() in game.legal_moves(state, PLAYER)
    state = game.apply_move(state, PLAYER, DoubleDown())
    assert len(state.player_hand) == 3
    assert state.current_bet == 200
    assert state.result is HandResult.PLAYER_WIN
    assert state.chips == STARTING_CHIPS + 200


def test_double_down_only_on_the_first_two_cards() -> None:
    game = BlackjackGame()
    state = game.apply_move(_dealt("2 9 3 7 4"), PLAYER, Hit())
    assert game.legal_moves(state, PLAYER) == [Hit(), Stand()]


def test_bet_sizes_include_the_whole_stack() -> None:
    game = BlackjackGame()
    state = BlackjackState(seed=0, deck=(), chips=30)
    assert game.legal_moves(state, PLAYER) == [PlaceBet(10), PlaceBet(25), PlaceBet(30)]
    assert game.is_legal(state, PLAYER, PlaceBet(17))[0]
    assert not game.is_legal(state, PLAYER, PlaceBet(31))[0]
    assert not game.is_legal(state, PLAYER, PlaceBet(0))[0]


def test_hand_limit_ends_the_match() -> None:
    game = BlackjackGame()
    state = game.apply_move(_dealt("10 10 8 6 K", hand_limit=1), PLAYER, Stand())
    assert game.is_terminal(state)
    assert game.outcome(state).winner == PLAYER
    assert game.legal_moves(state, PLAYER) == []


def test_broke_player_is_restaked_on_new_hand() -> None:
    game = BlackjackGame()
    state = game.apply_move(_dealt("10 9 6 7 K", bet=1000), PLAYER, Hit())
    assert state.chips == 0
    state = game.apply_move(state, PLAYER, NewHand())
    assert state.phase is Phase.BETTING
    assert state.chips == STARTING_CHIPS
    assert state.player_hand == ()


def test_empty_shoe_is_reshuffled_before_drawing() -> None:
    card, state = draw(BlackjackState(seed=0, deck=()))
    assert state.shuffle_count == 2
    assert len(state.deck) == 51
    assert card not in state.deck


def test_autoplayer_hits_below_seventeen() -> None:
    game = BlackjackGame()
    state = _dealt("10 9 5 7 K")
    observation = game.observation(state, PLAYER)
    assert observation.dealer_visible == _cards("9")
    assert choose_move(observation, game.legal_moves(state, PLAYER), Difficulty.NORMAL, random.Random(0)) == Hit()


def test_engine_hides_hole_card_until_the_player_stands() -> None:
    engine = BlackjackEngine(seed=3)
    assert engine.hit() is False
    assert engine.place_bet(STARTING_CHIPS + 1) is False
    assert engine.place_bet(25)
    if engine.phase is Phase.PLAYER_TURN:
        assert len(engine.dealer_hand) == 1
        assert engine.stand()
    assert engine.phase is Phase.RESULT
    assert len(engine.dealer_hand) >= 2
    assert engine.new_hand()
    assert engine.phase is Phase.BETTING
