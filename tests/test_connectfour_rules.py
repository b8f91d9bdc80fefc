"""Rule and AI tests for connect four."""

from __future__ import annotations

import random

import pytest

from connectfour.connectfour_ai import choose_move, hard_column, winning_column
from connectfour.connectfour_engine import ConnectFourEngine
from connectfour.connectfour_game import ConnectFourGame
from connectfour.connectfour_moves import Drop
from connectfour.connectfour_state import ROWS, Disc, cell_index, drop_row, empty_board
from framework.difficulty import Difficulty


def _play(game: ConnectFourGame, columns: list[int]):
    state = game.new_game(seed=1)
    for column in columns:
        state = game.apply_move(state, game.current_player(state), Drop(column=column))
    return state


def test_discs_stack_from_the_bottom() -> None:
    game = ConnectFourGame()
    state = _play(game, [3, 3])
    assert state.board[cell_index(ROWS - 1, 3)] is Disc.RED
    assert state.board[cell_index(ROWS - 2, 3)] is Disc.YELLOW
    assert state.last_drop_index == cell_index(ROWS - 2, 3)


def test_horizontal_four_wins_for_red() -> None:
    game = ConnectFourGame()
    state = _play(game, [0, 0, 1, 1, 2, 2, 3])
    assert game.is_terminal(state)
    assert state.winner is Disc.RED
    assert len(state.winning_cells) == 4
    assert game.outcome(state).winner == "RED"


def test_vertical_four_wins_for_yellow() -> None:
    game = ConnectFourGame()
    state = _play(game, [0, 1, 2, 1, 2, 1, 3, 1])
    assert state.winner is Disc.YELLOW


def test_full_column_is_not_a_legal_move() -> None:
    game = ConnectFourGame()
    state = _play(game, [0] * ROWS)
    assert drop_row(state.board, 0) == -1
    moves = game.legal_moves(state, game.current_player(state))
    assert Drop(column=0) not in moves
    with pytest.raises(ValueError):
        game.apply_move(state, game.current_player(state), Drop(column=0))


def test_ai_takes_a_winning_drop() -> None:
    game = ConnectFourGame()
    state = _play(game, [0, 6, 1, 6, 2, 5])
    assert winning_column(state.board, Disc.RED) == 3
    move = choose_move(game.observation(state, "RED"), game.legal_moves(state, "RED"), Difficulty.NORMAL, random.Random(0))
    assert move == Drop(column=3)


def test_hard_blocks_an_open_three() -> None:
    game = ConnectFourGame()
    state = _play(game, [0, 6, 1, 6, 2])
    assert hard_column(state.board, Disc.YELLOW) == 3


def test_empty_board_has_seven_columns() -> None:
    game = ConnectFourGame()
    state = game.new_game(seed=0)
    assert state.board == empty_board()
    assert [move.column for move in game.legal_moves(state, "RED")] == list(range(7))


def test_engine_ignores_out_of_range_and_ai_turn_input() -> None:
    engine = ConnectFourEngine(Difficulty.EASY, seed=4)
    assert engine.drop_disc(9) is False
    assert engine.drop_disc(3)
    assert engine.current_player == "YELLOW"
    assert engine.drop_disc(2) is False
    assert engine.perform_ai_move()
    assert engine.current_player == "RED"
