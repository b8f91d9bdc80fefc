"""Hand ranking, betting, and pot tests for Texas hold'em."""

from __future__ import annotations

import pytest

from framework.cards import Card, Suit
from framework.difficulty import Difficulty
from holdem.holdem_ai import hand_strength
from holdem.holdem_engine import HoldemEngine
from holdem.holdem_game import HoldemGame
from holdem.holdem_hands import HandCategory, evaluate_best_hand, evaluate_five
from holdem.holdem_moves import AllIn, Call, Check, Fold, NextHand, RaiseTo, move_from_dict
from holdem.holdem_state import BIG_BLIND, SEAT_NAMES, STARTING_CHIPS, HoldemState, Phase, Seat

_RANKS = {"A": 14, "K": 13, "Q": 12, "J": 11, "T": 10}
_SUITS = {"c": Suit.CLUBS, "d": Suit.DIAMONDS, "h": Suit.HEARTS, "s": Suit.SPADES}


def _cards(text: str) -> tuple[Card, ...]:
    return tuple(Card(_RANKS.get(label[0]) or int(label[0]), _SUITS[label[1]]) for label in text.split())


def _total_chips(state: HoldemState) -> int:
    return sum(seat.chips for seat in state.seats) + state.pot


def test_wheel_is_the_lowest_straight() -> None:
    wheel = evaluate_five(_cards("Ac 2d 3h 4s 5c"))
    six_high = evaluate_five(_cards("2d 3h 4s 5c 6d"))
    assert wheel.category is HandCategory.STRAIGHT
    assert wheel.tiebreakers == (5,)
    assert wheel < six_high


def test_royal_flush_beats_straight_flush() -> None:
    royal = evaluate_five(_cards("As Ks Qs Js Ts"))
    straight_flush = evaluate_five(_cards("9h Th Jh Qh Kh"))
    assert royal.category is HandCategory.ROYAL_FLUSH
    assert straight_flush.category is HandCategory.STRAIGHT_FLUSH
    assert royal > straight_flush


@pytest.mark.parametrize(
    ("better", "worse"),
    [
        ("Kc Kd Kh 2s 2c", "Ac Ad Qh Qs Jc"),
        ("9c 9d 5h 5s Ac", "9h 9s 5c 5d 2c"),
        ("Ac Ad 7h 6s 3c", "Ah As 7c 6d 2c"),
        ("2c 4c 6c 8c Tc", "9d Td Jh Qs Kc"),
    ],
)
def test_category_and_kicker_ordering(better: str, worse: str) -> None:
    assert evaluate_five(_cards(better)) > evaluate_five(_cards(worse))


def test_identical_ranks_in_different_suits_tie() -> None:
    assert evaluate_five(_cards("Ac Kd Qh 9s 7c")) == evaluate_five(_cards("Ad Kh Qs 9c 7d"))


def test_best_hand_picks_the_flush_from_seven_cards() -> None:
    evaluation = evaluate_best_hand(_cards("2h 9h Kh 4h 7h 9c 9d"))
    assert evaluation.category is HandCategory.FLUSH
    assert evaluation.tiebreakers == (13, 9, 7, 4, 2)
    with pytest.raises(ValueError):
        evaluate_best_hand(_cards("2h 9h Kh 4h"))


def test_first_hand_posts_blinds_and_conserves_the_deck() -> None:
    game = HoldemGame()
    state = game.new_game(seed=11)
    assert state.seats[state.dealer_index].name == "Alice"
    assert [seat.bet for seat in state.seats] == [0, 0, 10, 20]
    assert state.pot == 30
    assert game.current_player(state) == "You"
    cards = [card for seat in state.seats for card in seat.hole] + list(state.deck)
    assert len(cards) == 52
    assert len(set(cards)) == 52
    assert _total_chips(state) == STARTING_CHIPS * len(SEAT_NAMES)


def test_legal_moves_offer_representative_raises() -> None:
    game = HoldemGame()
    state = game.new_game(seed=11)
    assert game.legal_moves(state, "You") == [Fold(), Call(), RaiseTo(40), RaiseTo(60), RaiseTo(50), AllIn()]
    assert game.legal_moves(state, "Alice") == []
    assert game.is_legal(state, "You", RaiseTo(45))[0]
    assert not game.is_legal(state, "You", RaiseTo(2 * BIG_BLIND - 1))[0]
    assert not game.is_legal(state, "You", RaiseTo(STARTING_CHIPS))[0]
    assert not game.is_legal(state, "You", Check())[0]


def test_folding_round_awards_the_pot_to_the_big_blind() -> None:
    game = HoldemGame()
    state = game.new_game(seed=11)
    for seat in ("You", "Alice", "Bob"):
        state = game.apply_move(state, seat, Fold())
    assert state.phase is Phase.HAND_OVER
    assert state.seats[3].chips == STARTING_CHIPS - 20 + 30
    assert state.message == "Carol wins the pot of 30!"
    assert game.legal_moves(state, "You") == [NextHand()]

    state = game.apply_move(state, "You", NextHand())
    assert state.hand_number == 2
    assert state.seats[state.dealer_index].name == "Bob"
    assert _total_chips(state) == STARTING_CHIPS * len(SEAT_NAMES)


def test_checking_down_reaches_showdown_and_conserves_chips() -> None:
    game = HoldemGame()
    state = game.new_game(seed=4)
    while not state.hand_over:
        seat = game.current_player(state)
        move = Check() if Check() in game.legal_moves(state, seat) else Call()
        state = game.apply_move(state, seat, move)
    assert state.phase is Phase.SHOWDOWN
    assert len(state.community) == 5
    assert len(state.showdown) == 4
    assert state.pot == 0
    assert _total_chips(state) == STARTING_CHIPS * len(SEAT_NAMES)


def test_tied_showdown_splits_and_remainder_goes_to_first_winner() -> None:
    game = HoldemGame()
    holes = ("2c 3c", "2d 3d", "2h 3h", "4c 4d")
    state = HoldemState(
        seed=0,
        seats=tuple(Seat(name, 990, _cards(hole)) for name, hole in zip(SEAT_NAMES, holes)),
        hand_number=1,
        community=_cards("As Ks Qs Js Ts"),
        pot=41,
        phase=Phase.RIVER,
        dealer_index=2,
        active_index=3,
        acted=frozenset({0, 1, 2}),
    )
    state = game.apply_move(state, "Carol", Check())
    assert state.phase is Phase.SHOWDOWN
    assert [seat.chips for seat in state.seats] == [1001, 1000, 1000, 1000]
    assert state.message == "You and Alice and Bob and Carol split the pot of 41 with Royal Flush!"


def test_match_ends_when_one_seat_holds_every_chip() -> None:
    game = HoldemGame()
    seats = (Seat("You", 4000),) + tuple(Seat(name, 0, folded=True) for name in SEAT_NAMES[1:])
    state = HoldemState(seed=0, seats=seats, phase=Phase.HAND_OVER)
    assert game.is_terminal(state)
    assert game.outcome(state).winner == "You"
    assert game.status_text(state) == "Game over! You has all the chips."


def test_pocket_aces_outrank_seven_deuce() -> None:
    assert hand_strength(_cards("Ah As"), ()) > hand_strength(_cards("7c 2d"), ())
    assert hand_strength(_cards("Ah As"), _cards("Ad Kc 4s")) == pytest.approx(0.65)


def test_raise_payload_parses_amount() -> None:
    assert move_from_dict({"type": "RaiseTo", "amount": "80"}) == RaiseTo(80)
    with pytest.raises(ValueError):
        move_from_dict({"type": "Bet"})


def test_engine_human_acts_then_ai_seats_follow() -> None:
    engine = HoldemEngine(Difficulty.NORMAL, seed=2)
    assert engine.is_human_turn
    assert engine.to_call == 20
    assert engine.raise_to(25) is False
    assert engine.fold()
    assert not engine.is_human_turn
    assert engine.check() is False
    engine.run_ai_turns()
    assert engine.state.hand_over
    assert engine.next_hand()
    assert engine.state.hand_number == 2
