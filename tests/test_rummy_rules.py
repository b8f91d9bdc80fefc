"""Meld search, knock scoring, and engine tests for gin rummy."""

from __future__ import annotations

import random

from framework.cards import Card, Suit
from framework.difficulty import Difficulty
from rummy.rummy_ai import best_discard, should_knock, would_reduce_deadwood
from rummy.rummy_engine import RummyEngine
from rummy.rummy_game import STOCK_EXHAUSTED, RummyGame, can_knock, deal_round
from rummy.rummy_melds import can_lay_off, compute_layoffs, deadwood_points, find_optimal_melds, hand_deadwood
from rummy.rummy_moves import Discard, DrawStock, Knock, Pass, move_from_dict
from rummy.rummy_state import GIN_BONUS, HAND_SIZE, UNDERCUT_BONUS, Phase, RummyState

_RANKS = {"A": 1, "J": 11, "Q": 12, "K": 13}
_SUITS = {"C": Suit.CLUBS, "D": Suit.DIAMONDS, "H": Suit.HEARTS, "S": Suit.SPADES}


def _cards(text: str) -> tuple[Card, ...]:
    return tuple(Card(_RANKS.get(label[:-1]) or int(label[:-1]), _SUITS[label[-1]]) for label in text.split())


KNOCKER_GIN = "AH 2H 3H 4C 4D 4S 9S 10S JS QS"
KNOCKER_FIVE = "AH 2H 3H 4C 4D 4S 5D 9S 10S JS"
LOOSE_HAND = "KC QD 2C 6D 8H 5C 7S 3D JH AC"


def _knock_state(you: str, opponent: str, **changes) -> RummyState:
    state = RummyState(
        seed=0,
        round_number=1,
        hands={"YOU": _cards(you), "OPPONENT": _cards(opponent)},
        stock=_cards("9D 9C"),
        discard_pile=_cards("6H"),
        phase=Phase.KNOCK_DECISION,
    )
    return state.evolve(**changes) if changes else state


def test_face_cards_count_ten_and_aces_one() -> None:
    assert deadwood_points(_cards("KC QD JH AC 7S")) == 10 + 10 + 10 + 1 + 7


def test_optimal_melds_split_a_long_run_to_make_a_set() -> None:
    melds, deadwood = find_optimal_melds(_cards("4H 5H 6H 7H 7C 7D"))
    assert deadwood == []
    assert sorted(meld.is_run for meld in melds) == [False, True]


def test_unmeldable_hand_is_all_deadwood() -> None:
    hand = _cards(LOOSE_HAND)
    melds, deadwood = find_optimal_melds(hand)
    assert melds == []
    assert hand_deadwood(hand) == 62
    assert len(deadwood) == HAND_SIZE


def test_layoffs_extend_runs_and_sets() -> None:
    run = _cards("5H 6H 7H")
    assert can_lay_off(_cards("8H")[0], run, is_run=True)
    assert can_lay_off(_cards("4H")[0], run, is_run=True)
    assert not can_lay_off(_cards("8S")[0], run, is_run=True)
    assert can_lay_off(_cards("9C")[0], _cards("9H 9D 9S"), is_run=False)
    assert not can_lay_off(_cards("9C")[0], _cards("9H 9D 9S 9C"), is_run=False)

    melds, _ = find_optimal_melds(_cards("5H 6H 7H"))
    assert compute_layoffs(_cards("8H 9H KC"), melds) == list(_cards("KC"))


def test_deal_uses_every_card_once() -> None:
    hands, stock, discard = deal_round(seed=7, round_number=1)
    assert all(len(hand) == HAND_SIZE for hand in hands.values())
    cards = [card for hand in hands.values() for card in hand] + list(stock) + list(discard)
    assert len(cards) == 52
    assert len(set(cards)) == 52


def test_gin_scores_bonus_plus_defender_deadwood() -> None:
    game = RummyGame()
    state = game.apply_move(_knock_state(KNOCKER_GIN, LOOSE_HAND), "YOU", Knock())
    assert state.reveal is not None and state.reveal.gin
    assert state.scores["YOU"] == GIN_BONUS + 62
    assert state.phase is Phase.ROUND_OVER
    assert state.round_message == "GIN! YOU scores 87 points."


def test_knock_lets_defender_lay_off() -> None:
    game = RummyGame()
    defender = "QS KC 2C 6D 8H 5C 7S 3D JH AC"
    state = game.apply_move(_knock_state(KNOCKER_FIVE, defender), "YOU", Knock())
    assert state.reveal is not None
    assert not state.reveal.gin and not state.reveal.undercut
    assert _cards("QS")[0] not in state.reveal.defender_deadwood
    assert state.scores == {"YOU": (62 - 10) - 5, "OPPONENT": 0}


def test_low_defender_deadwood_undercuts_the_knocker() -> None:
    game = RummyGame()
    defender = "6C 7C 8C 2D 2S 2C KH KD KS AD"
    state = game.apply_move(_knock_state(KNOCKER_FIVE, defender), "YOU", Knock())
    assert state.reveal is not None and state.reveal.undercut
    assert state.scores["OPPONENT"] == UNDERCUT_BONUS + 4
    assert state.round_message.startswith("UNDERCUT!")


def test_reaching_one_hundred_ends_the_game() -> None:
    game = RummyGame()
    state = _knock_state(KNOCKER_GIN, LOOSE_HAND, scores={"YOU": 90, "OPPONENT": 40})
    state = game.apply_move(state, "YOU", Knock())
    assert game.is_terminal(state)
    assert game.outcome(state).winner == "YOU"
    assert state.round_message.endswith("YOU won the game!")


def test_knockable_discard_offers_the_decision_and_pass_ends_turn() -> None:
    game = RummyGame()
    state = _knock_state(KNOCKER_FIVE + " KC", LOOSE_HAND.replace("KC", "QC"), phase=Phase.DISCARD)
    state = game.apply_move(state, "YOU", Discard(_cards("KC")[0]))
    assert state.phase is Phase.KNOCK_DECISION
    assert game.legal_moves(state, "YOU") == [Knock(), Pass()]
    state = game.apply_move(state, "YOU", Pass())
    assert state.phase is Phase.DRAW
    assert game.current_player(state) == "OPPONENT"


def test_empty_stock_after_discard_is_a_drawn_round() -> None:
    game = RummyGame()
    state = _knock_state("KC QD 2C 6D 8H 5C 7S 3D JH AC 9H", KNOCKER_GIN, phase=Phase.DISCARD, stock=())
    state = game.apply_move(state, "YOU", Discard(_cards("9H")[0]))
    assert state.phase is Phase.ROUND_OVER
    assert state.round_message == STOCK_EXHAUSTED
    assert state.scores == {"YOU": 0, "OPPONENT": 0}


def test_can_knock_needs_ten_cards_and_low_deadwood() -> None:
    assert can_knock(_cards(KNOCKER_FIVE))
    assert not can_knock(_cards(LOOSE_HAND))
    assert not can_knock(_cards(KNOCKER_FIVE)[:9])


def test_ai_discards_the_highest_loose_card() -> None:
    hand = _cards(KNOCKER_FIVE + " KC")
    assert hand[best_discard(hand)] == _cards("KC")[0]
    assert would_reduce_deadwood(_cards(KNOCKER_FIVE), _cards("AS")[0])
    assert not would_reduce_deadwood(_cards(KNOCKER_GIN), _cards("KC")[0])


def test_knock_timing_by_difficulty() -> None:
    rng = random.Random(0)
    assert should_knock(0, Difficulty.HARD, rng)
    assert not should_knock(11, Difficulty.EASY, rng)
    assert should_knock(10, Difficulty.EASY, rng)
    assert should_knock(3, Difficulty.HARD, rng)


def test_move_payloads_parse() -> None:
    assert move_from_dict({"type": "DrawStock"}) == DrawStock()
    assert move_from_dict({"type": "Discard", "card": {"rank": 12, "suit": "hearts"}}) == Discard(Card(12, Suit.HEARTS))


def test_engine_turn_flow_hands_over_to_the_ai() -> None:
    engine = RummyEngine(Difficulty.NORMAL, seed=3)
    assert engine.phase is Phase.DRAW
    assert engine.select_card(0) is False
    assert engine.knock() is False
    assert engine.draw_from_stock()
    assert len(engine.player_hand) == HAND_SIZE + 1
    assert engine.select_card(2)
    assert engine.selected_card_index == 2
    assert engine.discard(2)
    assert engine.selected_card_index is None
    if engine.phase is Phase.KNOCK_DECISION:
        assert engine.pass_knock()
    assert engine.phase is Phase.OPPONENT_TURN
    assert engine.draw_from_stock() is False
    assert engine.trigger_ai_turn() >= 2
    assert engine.phase is not Phase.OPPONENT_TURN
