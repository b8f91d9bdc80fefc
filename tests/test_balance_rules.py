"""Rule, AI, and session tests for the balance puzzle."""

from __future__ import annotations

import random

import pytest

from balance.balance_ai import choose_move, score_placement
from balance.balance_engine import BalanceEngine
from balance.balance_game import BalanceGame
from balance.balance_moves import PlaceWeight
from balance.balance_state import SLOT_POSITIONS, Player, Stable, Tip
from framework.difficulty import Difficulty


def _place(game: BalanceGame, state, *moves: tuple[int, int]):
    for slot, weight in moves:
        state = game.apply_move(state, game.current_player(state), PlaceWeight(slot=slot, weight=weight))
    return state


def test_torque_past_the_limit_tips_against_the_mover() -> None:
    game = BalanceGame()
    state = _place(game, game.new_game(seed=0), (4, 4))
    assert isinstance(state.result, Tip)
    assert state.result.loser is Player.A
    assert state.result.final_torque == 16
    assert game.outcome(state).winner == "B"


def test_exactly_the_limit_does_not_tip() -> None:
    game = BalanceGame()
    state = _place(game, game.new_game(seed=0), (4, 3), (2, 1))
    assert state.torque == 14
    assert state.result is None


def test_filling_every_slot_is_a_stable_draw() -> None:
    game = BalanceGame()
    state = _place(
        game,
        game.new_game(seed=0),
        (-4, 1), (4, 1), (-3, 2), (3, 2), (-2, 3), (2, 3), (-1, 4), (1, 4),
    )
    assert state.result == Stable(final_torque=0)
    assert game.outcome(state).winner is None


def test_a_weight_can_only_be_used_once() -> None:
    game = BalanceGame()
    state = _place(game, game.new_game(seed=0), (-1, 1), (1, 1))
    assert PlaceWeight(slot=2, weight=1) not in game.legal_moves(state, "A")
    with pytest.raises(ValueError):
        game.apply_move(state, "A", PlaceWeight(slot=2, weight=1))


def test_occupied_slot_is_not_offered() -> None:
    game = BalanceGame()
    state = _place(game, game.new_game(seed=0), (-1, 1))
    assert all(move.slot != -1 for move in game.legal_moves(state, "B"))
    assert len(game.legal_moves(state, "B")) == 4 * (len(SLOT_POSITIONS) - 1)


def test_starting_player_config_opens_for_b() -> None:
    game = BalanceGame()
    state = game.new_game(seed=0, config={"starting_player": "B"})
    assert game.current_player(state) == "B"


def test_placement_score_penalises_overflow() -> None:
    assert score_placement(0, -1, 1) == (1, -1)
    assert score_placement(12, 1, 4) == (100 + 2 * 20 + 16, 16)


def test_normal_ai_keeps_the_beam_level() -> None:
    game = BalanceGame()
    state = _place(game, game.new_game(seed=0), (4, 3))
    move = choose_move(game.observation(state, "B"), game.legal_moves(state, "B"), Difficulty.NORMAL, random.Random(0))
    assert move == PlaceWeight(slot=-3, weight=4)


def test_engine_tracks_session_wins_and_alternates_starter() -> None:
    engine = BalanceEngine(vs_ai=False, seed=1)
    assert engine.start_next_round() is False
    assert engine.place_weight(4, 4)
    assert engine.is_over
    assert engine.session_wins[Player.B] == 1
    assert engine.start_next_round()
    assert engine.round_number == 2
    assert engine.current_player == "B"
    engine.reset_session()
    assert engine.round_number == 1
    assert engine.session_wins == {Player.A: 0, Player.B: 0}
    assert engine.current_player == "A"


def test_engine_rejects_weights_not_in_the_pool() -> None:
    engine = BalanceEngine(vs_ai=False, seed=1)
    assert engine.select_weight(7) is False
    assert engine.place_weight(5) is False
    assert engine.place_weight(1, 9) is False
    assert engine.torque == 0
