"""Rule and AI tests for dots and boxes."""

from __future__ import annotations

import random

import pytest

from dotsandboxes.dotsandboxes_ai import choose_edge
from dotsandboxes.dotsandboxes_engine import DotsAndBoxesEngine
from dotsandboxes.dotsandboxes_game import DotsAndBoxesGame
from dotsandboxes.dotsandboxes_moves import DrawEdge
from dotsandboxes.dotsandboxes_state import EDGES, Player, box_id
from framework.difficulty import Difficulty


def _draw(game: DotsAndBoxesGame, state, *edge_ids: str):
    for edge_id in edge_ids:
        state = game.apply_move(state, game.current_player(state), DrawEdge(edge_id))
    return state


def test_board_has_forty_edges() -> None:
    game = DotsAndBoxesGame()
    state = game.new_game(seed=0)
    assert len(EDGES) == 40
    assert len(game.legal_moves(state, "A")) == 40
    assert game.legal_moves(state, "B") == []


def test_turn_passes_when_no_box_is_completed() -> None:
    game = DotsAndBoxesGame()
    state = _draw(game, game.new_game(seed=0), "h-0-0")
    assert game.current_player(state) == "B"


def test_completing_a_box_scores_and_keeps_the_turn() -> None:
    game = DotsAndBoxesGame()
    state = _draw(game, game.new_game(seed=0), "h-0-0", "h-1-0", "v-0-0")
    assert game.current_player(state) == "B"
    state = _draw(game, state, "v-0-1")
    assert state.claimed_boxes == {box_id(0, 0): Player.B}
    assert state.last_claimed_box_ids == (box_id(0, 0),)
    assert game.current_player(state) == "B"
    assert state.score(Player.B) == 1


def test_shared_edge_can_complete_two_boxes() -> None:
    game = DotsAndBoxesGame()
    state = _draw(game, game.new_game(seed=0), "h-0-0", "h-1-0", "v-0-0", "h-0-1", "h-1-1", "v-0-2")
    mover = Player(game.current_player(state))
    state = _draw(game, state, "v-0-1")
    assert state.score(mover) == 2


def test_drawn_edge_cannot_be_redrawn() -> None:
    game = DotsAndBoxesGame()
    state = _draw(game, game.new_game(seed=0), "h-0-0")
    with pytest.raises(ValueError):
        game.apply_move(state, "B", DrawEdge("h-0-0"))
    with pytest.raises(ValueError):
        DrawEdge("h-9-9")


def test_ai_completes_an_available_box() -> None:
    drawn = {"h-0-0": Player.A, "h-1-0": Player.B, "v-0-0": Player.A}
    assert choose_edge(drawn, {}, Player.B, Difficulty.NORMAL, random.Random(0)) == "v-0-1"


def test_normal_ai_avoids_giving_away_a_box() -> None:
    drawn = {"h-0-0": Player.A, "h-1-0": Player.B}
    edge = choose_edge(drawn, {}, Player.B, Difficulty.NORMAL, random.Random(0))
    assert edge not in {"v-0-0", "v-0-1"}


def test_full_game_ends_with_sixteen_boxes_claimed() -> None:
    game = DotsAndBoxesGame()
    state = _draw(game, game.new_game(seed=0), *(edge.id for edge in EDGES))
    assert game.is_terminal(state)
    assert state.score(Player.A) + state.score(Player.B) == 16


def test_engine_ignores_unknown_and_drawn_edges() -> None:
    engine = DotsAndBoxesEngine(Difficulty.HARD, seed=0)
    assert engine.select_edge("nope") is False
    assert engine.select_edge("h-0-0")
    assert engine.is_ai_turn()
    assert engine.select_edge("h-0-1") is False
    assert engine.perform_ai_move()
