"""Rule tests for takeover: clone/jump moves, conversion, passing, game end."""

from __future__ import annotations

import random

from framework.difficulty import Difficulty
from takeover.takeover_ai import choose_move
from takeover.takeover_engine import TakeoverEngine
from takeover.takeover_game import TakeoverGame
from takeover.takeover_moves import TakeoverMove
from takeover.takeover_state import TOTAL_CELLS, MoveKind, Side, TakeoverState, cell_index, count_pieces


def _state(cells: dict[int, Side | None], fill: Side | None = None, current: Side = Side.B) -> TakeoverState:
    board = [fill] * TOTAL_CELLS
    for index, side in cells.items():
        board[index] = side
    return TakeoverState(seed=0, board=tuple(board), current=current)


def test_opening_position_gives_blue_sixteen_moves() -> None:
    game = TakeoverGame()
    state = game.new_game(seed=0)
    assert count_pieces(state.board, Side.B) == 2
    assert count_pieces(state.board, Side.O) == 2
    moves = game.legal_moves(state, "B")
    assert len(moves) == 16
    assert sum(move.kind is MoveKind.CLONE for move in moves) == 6


def test_clone_keeps_source_and_jump_vacates_it() -> None:
    game = TakeoverGame()
    state = game.new_game(seed=0)
    cloned = game.apply_move(state, "B", TakeoverMove(0, cell_index(1, 1), MoveKind.CLONE))
    assert cloned.board[0] is Side.B
    assert count_pieces(cloned.board, Side.B) == 3

    jumped = game.apply_move(state, "B", TakeoverMove(0, cell_index(2, 2), MoveKind.JUMP))
    assert jumped.board[0] is None
    assert count_pieces(jumped.board, Side.B) == 2


def test_landing_converts_adjacent_opponent_pieces() -> None:
    game = TakeoverGame()
    state = _state({0: Side.B, cell_index(1, 2): Side.O, cell_index(6, 6): Side.O})
    state = game.apply_move(state, "B", TakeoverMove(0, cell_index(0, 1), MoveKind.CLONE))
    assert state.board[cell_index(1, 2)] is Side.B
    assert state.last_converted == (cell_index(1, 2),)
    assert game.current_player(state) == "O"


def test_blocked_side_passes_back_to_mover() -> None:
    game = TakeoverGame()
    state = _state({0: Side.O, cell_index(6, 5): None, cell_index(6, 6): None}, fill=Side.B)
    state = game.apply_move(state, "B", TakeoverMove(cell_index(5, 5), cell_index(6, 6), MoveKind.CLONE))
    assert not state.is_over
    assert game.current_player(state) == "B"
    assert state.pass_message is not None
    assert state.pass_message.startswith("Orange has no legal moves.")


def test_full_board_ends_with_majority_winner() -> None:
    game = TakeoverGame()
    state = _state({0: Side.O, cell_index(6, 6): None}, fill=Side.B)
    state = game.apply_move(state, "B", TakeoverMove(cell_index(5, 5), cell_index(6, 6), MoveKind.CLONE))
    assert game.is_terminal(state)
    assert game.outcome(state).winner == "B"
    assert game.status_text(state).startswith("Game over! Blue wins")


def test_normal_ai_prefers_the_converting_move() -> None:
    game = TakeoverGame()
    state = _state({0: Side.B, cell_index(1, 2): Side.O, cell_index(6, 6): Side.O})
    move = choose_move(game.observation(state, "B"), game.legal_moves(state, "B"), Difficulty.NORMAL, random.Random(0))
    assert move is not None
    assert game.apply_move(state, "B", move).last_converted


def test_engine_click_flow_selects_then_moves() -> None:
    engine = TakeoverEngine(Difficulty.EASY, seed=5)
    assert engine.handle_cell_click(0)
    assert engine.selected_source == 0
    assert engine.handle_cell_click(0)
    assert engine.selected_source is None
    engine.handle_cell_click(0)
    assert engine.handle_cell_click(cell_index(1, 1))
    assert engine.blue_count == 3
    assert engine.is_ai_turn()
    assert engine.perform_ai_move()
    assert engine.current_player == "B"
