"""Rule and search tests for chess."""

from __future__ import annotations

import random

import pytest

from chess_engine.chess_ai import hard_move, normal_move
from chess_engine.chess_engine import ChessEngine
from chess_engine.chess_game import ChessGame
from chess_engine.chess_moves import ChessMove, move_from_dict
from chess_engine.chess_rules import advance, generate_moves, is_in_check, is_square_attacked
from chess_engine.chess_state import (
    TOTAL_SQUARES,
    CastlingRights,
    ChessPiece,
    Color,
    PieceType,
    Position,
    col_of,
    row_of,
    square,
)
from framework.difficulty import Difficulty
from framework.events import EventType

MOVED = CastlingRights(king_moved=True, rook_a_moved=True, rook_h_moved=True)


def _position(pieces: dict[int, tuple[PieceType, Color]], side: Color = Color.WHITE, **rights: CastlingRights) -> Position:
    board: list[ChessPiece | None] = [None] * TOTAL_SQUARES
    for index, (piece_type, color) in pieces.items():
        board[index] = ChessPiece(piece_type, color)
    return Position(
        board=tuple(board),
        side=side,
        white_rights=rights.get("white", MOVED),
        black_rights=rights.get("black", MOVED),
    )


def _play(game: ChessGame, state, *moves: tuple[int, int]):
    for from_index, to_index in moves:
        state = game.apply_move(state, game.current_player(state), ChessMove(from_index, to_index))
    return state


def test_initial_position_has_twenty_moves() -> None:
    game = ChessGame()
    state = game.new_game(seed=0)
    assert game.current_player(state) == "WHITE"
    assert len(game.legal_moves(state, "WHITE")) == 20


def test_fools_mate_is_checkmate_for_black() -> None:
    game = ChessGame()
    state = _play(
        game,
        game.new_game(seed=0),
        (square(6, 5), square(5, 5)),
        (square(1, 4), square(3, 4)),
        (square(6, 6), square(4, 6)),
        (square(0, 3), square(4, 7)),
    )
    assert state.is_checkmate
    assert game.is_terminal(state)
    assert game.outcome(state).winner == "BLACK"
    assert game.status_text(state) == "Checkmate! Black wins."


def test_cornered_king_with_no_moves_is_stalemate() -> None:
    game = ChessGame()
    position = _position(
        {
            square(0, 0): (PieceType.KING, Color.BLACK),
            square(2, 1): (PieceType.QUEEN, Color.WHITE),
            square(7, 7): (PieceType.KING, Color.WHITE),
        },
        side=Color.BLACK,
    )
    state = game.from_position(position)
    assert state.is_stalemate
    assert not state.is_check
    assert game.outcome(state).winner is None


def test_pinned_piece_cannot_leave_the_line() -> None:
    position = _position(
        {
            square(7, 4): (PieceType.KING, Color.WHITE),
            square(6, 4): (PieceType.BISHOP, Color.WHITE),
            square(0, 4): (PieceType.ROOK, Color.BLACK),
            square(0, 0): (PieceType.KING, Color.BLACK),
        }
    )
    assert all(move.from_index != square(6, 4) for move in generate_moves(position))


def test_castling_kingside_moves_the_rook() -> None:
    game = ChessGame()
    position = _position(
        {
            square(7, 4): (PieceType.KING, Color.WHITE),
            square(7, 7): (PieceType.ROOK, Color.WHITE),
            square(0, 0): (PieceType.KING, Color.BLACK),
        },
        white=CastlingRights(),
    )
    state = game.from_position(position)
    castle = ChessMove(square(7, 4), square(7, 6), is_castle=True)
    assert castle in game.legal_moves(state, "WHITE")
    state = game.apply_move(state, "WHITE", castle)
    assert state.position.board[square(7, 5)] == ChessPiece(PieceType.ROOK, Color.WHITE)
    assert state.position.board[square(7, 7)] is None
    assert state.position.white_rights.king_moved


def test_castling_through_an_attacked_square_is_illegal() -> None:
    position = _position(
        {
            square(7, 4): (PieceType.KING, Color.WHITE),
            square(7, 7): (PieceType.ROOK, Color.WHITE),
            square(0, 5): (PieceType.ROOK, Color.BLACK),
            square(0, 0): (PieceType.KING, Color.BLACK),
        },
        white=CastlingRights(),
    )
    assert not any(move.is_castle for move in generate_moves(position))


def test_en_passant_removes_the_passed_pawn() -> None:
    game = ChessGame()
    position = _position(
        {
            square(7, 4): (PieceType.KING, Color.WHITE),
            square(3, 4): (PieceType.PAWN, Color.WHITE),
            square(1, 3): (PieceType.PAWN, Color.BLACK),
            square(0, 0): (PieceType.KING, Color.BLACK),
        },
        side=Color.BLACK,
    )
    state = _play(game, game.from_position(position), (square(1, 3), square(3, 3)))
    assert state.position.ep_target == square(2, 3)
    capture = ChessMove(square(3, 4), square(2, 3), is_en_passant=True)
    assert capture in game.legal_moves(state, "WHITE")
    state = game.apply_move(state, "WHITE", capture)
    assert state.position.board[square(3, 3)] is None
    assert state.captured_by_white == (ChessPiece(PieceType.PAWN, Color.BLACK),)


def test_pawn_on_seventh_rank_offers_four_promotions() -> None:
    position = _position(
        {
            square(7, 4): (PieceType.KING, Color.WHITE),
            square(1, 7): (PieceType.PAWN, Color.WHITE),
            square(0, 0): (PieceType.KING, Color.BLACK),
        }
    )
    promotions = {move.promotion for move in generate_moves(position) if move.from_index == square(1, 7)}
    assert promotions == {PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT}


@pytest.mark.parametrize("search", [normal_move, hard_move])
def test_search_finds_back_rank_mate(search) -> None:
    position = _position(
        {
            square(7, 6): (PieceType.KING, Color.WHITE),
            square(7, 0): (PieceType.ROOK, Color.WHITE),
            square(0, 6): (PieceType.KING, Color.BLACK),
            square(1, 5): (PieceType.PAWN, Color.BLACK),
            square(1, 6): (PieceType.PAWN, Color.BLACK),
            square(1, 7): (PieceType.PAWN, Color.BLACK),
        }
    )
    move = search(position, generate_moves(position))
    assert (move.from_index, move.to_index) == (square(7, 0), square(0, 0))


def test_move_payload_accepts_promotion_letter() -> None:
    move = move_from_dict({"type": "ChessMove", "from_index": 15, "to_index": 7, "promotion": "q"})
    assert move.promotion is PieceType.QUEEN
    with pytest.raises(ValueError):
        ChessMove(square(1, 0), square(0, 0), promotion=PieceType.KING)


def test_engine_rejects_moves_on_the_ai_turn() -> None:
    engine = ChessEngine(Difficulty.EASY, seed=1)
    assert engine.move(square(6, 4), square(4, 4))
    assert engine.current_player == "BLACK"
    assert engine.move(square(1, 4), square(3, 4)) is False
    assert engine.perform_ai_move()
    assert engine.current_player == "WHITE"


def test_fiftieth_quiet_move_draws_the_game() -> None:
    game = ChessGame()
    position = _position(
        {
            square(7, 4): (PieceType.KING, Color.WHITE),
            square(7, 0): (PieceType.ROOK, Color.WHITE),
            square(0, 4): (PieceType.KING, Color.BLACK),
        }
    )
    state = game.from_position(position, half_move_clock=99)
    assert not game.is_terminal(state)
    state = _play(game, state, (square(7, 0), square(6, 0)))
    assert state.half_move_clock == 100
    assert state.is_draw
    assert game.is_terminal(state)
    assert game.status_text(state) == "Draw by 50-move rule."
    result = game.outcome(state)
    assert result.winner is None
    assert result.details == "fifty_move_rule"


@pytest.mark.parametrize(
    ("pieces", "move"),
    [
        ({square(3, 0): (PieceType.ROOK, Color.BLACK)}, (square(7, 0), square(3, 0))),
        ({square(6, 1): (PieceType.PAWN, Color.WHITE)}, (square(6, 1), square(5, 1))),
    ],
)
def test_capture_or_pawn_move_resets_the_clock(pieces, move) -> None:
    game = ChessGame()
    position = _position(
        {
            square(7, 4): (PieceType.KING, Color.WHITE),
            square(7, 0): (PieceType.ROOK, Color.WHITE),
            square(0, 7): (PieceType.KING, Color.BLACK),
            **pieces,
        }
    )
    state = _play(game, game.from_position(position, half_move_clock=99), move)
    assert state.half_move_clock == 0
    assert not state.is_draw


@pytest.mark.parametrize("seed", [3, 17, 42])
def test_random_playouts_never_leave_the_mover_in_check(seed: int) -> None:
    game = ChessGame()
    rng = random.Random(seed)
    state = game.new_game(seed=seed)
    for _ in range(120):
        if game.is_terminal(state):
            break
        position = state.position
        mover = position.side
        moves = game.legal_moves(state, mover.value)
        for move in moves:
            assert not is_in_check(advance(position, move).board, mover)
            if move.is_castle:
                row = row_of(move.from_index)
                step = 1 if col_of(move.to_index) > col_of(move.from_index) else -1
                for col in range(col_of(move.from_index), col_of(move.to_index) + step, step):
                    assert not is_square_attacked(position.board, row, col, mover.other)
        state = game.apply_move(state, mover.value, rng.choice(moves))


@pytest.mark.parametrize(
    ("attacker_col", "queenside_legal"),
    [(1, True), (2, False), (3, False), (4, False)],
)
def test_queenside_castling_checks_the_king_path_only(attacker_col: int, queenside_legal: bool) -> None:
    position = _position(
        {
            square(7, 4): (PieceType.KING, Color.WHITE),
            square(7, 0): (PieceType.ROOK, Color.WHITE),
            square(0, attacker_col): (PieceType.ROOK, Color.BLACK),
            square(0, 7): (PieceType.KING, Color.BLACK),
        },
        white=CastlingRights(),
    )
    castles = [move for move in generate_moves(position) if move.is_castle]
    assert (ChessMove(square(7, 4), square(7, 2), is_castle=True) in castles) is queenside_legal


@pytest.mark.parametrize("promotion", ["x", "K", "P", 7])
def test_engine_rejects_unknown_promotion_without_raising(promotion) -> None:
    engine = ChessEngine(Difficulty.EASY, vs_ai=False, seed=1)
    before = engine.state
    assert engine.move(square(6, 4), square(4, 4), promotion) is False
    assert engine.state is before
    assert engine.events[-1].event_type is EventType.REJECTED_ACTION


def test_engine_promotion_letter_is_case_insensitive() -> None:
    engine = ChessEngine(Difficulty.EASY, vs_ai=False, seed=1)
    state = engine.game.from_position(
        _position(
            {
                square(7, 4): (PieceType.KING, Color.WHITE),
                square(1, 7): (PieceType.PAWN, Color.WHITE),
                square(0, 0): (PieceType.KING, Color.BLACK),
            }
        )
    )
    engine._state = state
    assert engine.move(square(1, 7), square(0, 7), "n")
    assert engine.board[square(0, 7)] == ChessPiece(PieceType.KNIGHT, Color.WHITE)


@pytest.mark.parametrize(("row", "col"), [(8, 0), (-1, 4), (0, 8), (3, -1)])
def test_select_square_off_the_board_is_ignored(row: int, col: int) -> None:
    engine = ChessEngine(Difficulty.EASY, vs_ai=False, seed=1)
    before = engine.state
    assert engine.select_square(row, col) is False
    assert engine.selected_square is None
    assert engine.state is before
