"""Climbing, passing, revolution, and title tests for President."""

from __future__ import annotations

import random

import pytest

from framework.cards import Card, Suit
from framework.difficulty import Difficulty
from president.president_ai import choose_move
from president.president_engine import PresidentEngine
from president.president_game import PresidentGame, deal, exchange_cards, valid_plays
from president.president_moves import NextRound, Pass, PlayCards, move_from_dict
from president.president_state import SEATS, THREE_OF_CLUBS, Phase, PresidentState, Title, beats, rank_value

_RANKS = {"A": 14, "K": 13, "Q": 12, "J": 11}
_SUITS = {"C": Suit.CLUBS, "D": Suit.DIAMONDS, "H": Suit.HEARTS, "S": Suit.SPADES}


def _cards(text: str) -> tuple[Card, ...]:
    return tuple(Card(_RANKS.get(label[:-1]) or int(label[:-1]), _SUITS[label[-1]]) for label in text.split())


def _state(hands: dict[str, str], current: str = "You", **changes) -> PresidentState:
    state = PresidentState(seed=0, hands={seat: _cards(hands.get(seat, "")) for seat in SEATS}, current=current)
    return state.evolve(**changes) if changes else state


def test_deal_gives_thirteen_cards_each_and_three_of_clubs_leads() -> None:
    hands = deal(seed=5, round_number=1)
    assert all(len(hand) == 13 for hand in hands.values())
    assert len({card for hand in hands.values() for card in hand}) == 52
    game = PresidentGame()
    state = game.new_game(seed=5)
    assert THREE_OF_CLUBS in state.hands[game.current_player(state)]
    assert Pass() not in game.legal_moves(state, state.current)


def test_twos_are_high_until_a_revolution() -> None:
    assert rank_value(3) == 0
    assert rank_value(14) == 11
    assert rank_value(2) == 12
    assert beats(2, 14, revolution=False)
    assert not beats(2, 14, revolution=True)
    assert beats(3, 4, revolution=True)


def test_valid_plays_match_pile_size_and_climb() -> None:
    hand = _cards("3C 3D 5H 9S 9H")
    assert len(valid_plays(hand, (), revolution=False)) == 2 + 1 + 1 + 2 + 1
    assert valid_plays(hand, _cards("4S"), revolution=False) == [_cards("5H"), _cards("9H"), _cards("9S")]
    assert valid_plays(hand, _cards("8C 8D"), revolution=False) == [_cards("9H 9S")]
    assert valid_plays(hand, _cards("4S"), revolution=True) == [_cards("3C"), _cards("3D")]


def test_four_of_a_kind_starts_a_revolution() -> None:
    game = PresidentGame()
    state = _state({"You": "7C 7D 7H 7S 3C", "Alice": "4D", "Bob": "5D", "Carol": "6D"})
    state = game.apply_move(state, "You", PlayCards(_cards("7S 7C 7H 7D")))
    assert state.revolution
    assert state.pile == _cards("7C 7D 7H 7S")
    assert game.current_player(state) == "Alice"
    assert game.status_text(state).endswith("Revolution!")


def test_all_others_passing_clears_the_pile_for_the_last_player() -> None:
    game = PresidentGame()
    state = _state(
        {"You": "5C 9D", "Alice": "6C KD", "Bob": "4D", "Carol": "7H 8H"},
        current="Bob",
        pile=_cards("9S"),
        last_played_by="Alice",
    )
    for seat in ("Bob", "Carol", "You"):
        state = game.apply_move(state, seat, Pass())
    assert state.pile == ()
    assert game.current_player(state) == "Alice"
    assert Pass() not in game.legal_moves(state, "Alice")


def test_last_card_out_finishes_round_with_titles_and_points() -> None:
    game = PresidentGame()
    state = _state(
        {"You": "9C", "Carol": "3D 4D"},
        finished=("Alice", "Bob"),
        round_limit=1,
    )
    state = game.apply_move(state, "You", PlayCards(_cards("9C")))
    assert state.phase is Phase.ROUND_END
    assert state.titles == {
        "Alice": Title.PRESIDENT,
        "Bob": Title.VICE_PRESIDENT,
        "You": Title.NEUTRAL,
        "Carol": Title.SCUM,
    }
    assert state.points == {"Alice": 3, "Bob": 2, "You": 1, "Carol": 0}
    assert game.is_terminal(state)
    assert game.outcome(state).winner == "Alice"
    assert game.status_text(state) == "Round 1 complete! Alice is President."


def _finished_round() -> PresidentState:
    game = PresidentGame()
    state = _state({"You": "9C", "Carol": "3D 4D"}, finished=("Alice", "Bob"))
    return game.apply_move(state, "You", PlayCards(_cards("9C")))


def test_next_round_exchanges_cards_and_three_of_clubs_leads() -> None:
    game = PresidentGame()
    state = _finished_round()
    assert not game.is_terminal(state)
    state = game.apply_move(state, "You", NextRound())
    assert state.round_number == 2
    assert state.phase is Phase.PLAYING
    assert THREE_OF_CLUBS in state.hands[game.current_player(state)]
    assert all(len(hand) == 13 for hand in state.hands.values())


def test_later_round_lead_follows_the_card_not_the_scum(monkeypatch) -> None:
    rigged = {seat: list(hand) for seat, hand in deal(seed=0, round_number=2).items()}
    holder = next(seat for seat, hand in rigged.items() if THREE_OF_CLUBS in hand)
    if holder != "You":
        position = rigged[holder].index(THREE_OF_CLUBS)
        rigged[holder][position] = rigged["You"][0]
        rigged["You"][0] = THREE_OF_CLUBS
    monkeypatch.setattr(
        "president.president_game.deal",
        lambda seed, round_number: {seat: tuple(hand) for seat, hand in rigged.items()},
    )

    game = PresidentGame()
    state = _finished_round()
    assert state.titles["Carol"] is Title.SCUM
    assert state.titles["You"] is Title.NEUTRAL
    state = game.apply_move(state, "You", NextRound())
    assert THREE_OF_CLUBS in state.hands["You"]
    assert game.current_player(state) == "You"


def test_exchange_moves_best_cards_up_and_worst_down() -> None:
    hands = {"You": _cards("3C 4C 5C 2H"), "Carol": _cards("2S AS 6D 7D")}
    result = exchange_cards(hands, {"You": Title.PRESIDENT, "Carol": Title.SCUM})
    assert set(result["You"]) == set(_cards("5C 2H 2S AS"))
    assert set(result["Carol"]) == set(_cards("3C 4C 6D 7D"))


def test_out_of_order_cards_are_accepted() -> None:
    game = PresidentGame()
    state = _state({"You": "3C 8D 8H", "Alice": "4D"})
    assert game.is_legal(state, "You", PlayCards(_cards("8H 8D")))[0]
    with pytest.raises(ValueError):
        game.apply_move(state, "You", PlayCards(_cards("8H 3C")))


def test_normal_ai_saves_twos_when_following() -> None:
    game = PresidentGame()
    state = _state({"You": "5C", "Alice": "2D 9H"}, current="Alice", pile=_cards("5S"), last_played_by="Bob")
    legal = game.legal_moves(state, "Alice")
    move = choose_move(game.observation(state, "Alice"), legal, Difficulty.NORMAL, random.Random(0))
    assert move == PlayCards(_cards("9H"))


def test_play_payload_parses_cards() -> None:
    move = move_from_dict({"type": "PlayCards", "cards": [{"rank": 8, "suit": "DIAMONDS"}]})
    assert move == PlayCards(_cards("8D"))


def test_engine_waits_for_ai_seats_then_accepts_human_action() -> None:
    engine = PresidentEngine(Difficulty.EASY, seed=9)
    assert engine.select_card(99) is False
    engine.run_ai_turns()
    assert engine.current_player == "You"
    assert engine.playable_indices or engine.pile
    assert engine.pass_turn() or engine.play_cards([min(engine.playable_indices)])
