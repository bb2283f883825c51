"""Unit tests for /src/engine/legality.py"""

from unittest.mock import patch

import pytest

import src.engine.legality as lg
from src.engine.board import Board, relocate
from src.engine.castling import CastlingRights
from src.engine.legality import (
    all_legal_moves,
    has_legal_move,
    is_checkmate,
    is_move_legal_and_safe,
    is_stalemate,
)
from src.engine.pieces import Color


def fools_mate_board() -> Board:
    board = Board.initial()
    for from_sq, to_sq in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
        relocate(board, from_sq, to_sq)
    return board


def test_opening_moves() -> None:
    """16 pawn moves and 4 knight moves"""
    moves = all_legal_moves(Board.initial(), Color.WHITE, CastlingRights())
    assert len(moves) == 20
    assert {move.to_uci() for move in moves} >= {"e2e4", "e2e3", "g1f3", "b1a3"}
    assert all(move.promote_to is None for move in moves)


def test_opening_moves_black() -> None:
    assert len(all_legal_moves(Board.initial(), Color.BLACK, CastlingRights())) == 20


def test_all_legal_moves_is_read_only() -> None:
    board = Board.initial()
    all_legal_moves(board, Color.WHITE, CastlingRights())
    assert board == Board.initial()


def test_pinned_piece_cannot_move() -> None:
    board = Board.from_fen("k3r3/8/8/8/8/8/4B3/4K3")
    assert not is_move_legal_and_safe(board, "e2", "d3")
    assert is_move_legal_and_safe(board, "e1", "d1")
    assert all(
        move.from_square.to_algebraic() == "e1"
        for move in all_legal_moves(board, Color.WHITE)
    )


def test_must_answer_check() -> None:
    """In check, only moves that get the king out of it are legal"""
    board = Board.initial()
    relocate(board, "e2", "e4")
    relocate(board, "f7", "f6")
    relocate(board, "d1", "h5")
    moves = {move.to_uci() for move in all_legal_moves(board, Color.BLACK)}
    assert moves == {"g7g6"}


def test_empty_source_is_never_legal() -> None:
    assert not is_move_legal_and_safe(Board.initial(), "e4", "e5")


def test_castling_needs_rights(castling_board: Board) -> None:
    assert not is_move_legal_and_safe(castling_board, "e1", "g1")
    assert is_move_legal_and_safe(castling_board, "e1", "g1", CastlingRights())
    revoked = CastlingRights().update("h1", "h2")
    assert not is_move_legal_and_safe(castling_board, "e1", "g1", revoked)
    assert is_move_legal_and_safe(castling_board, "e1", "c1", revoked)


def test_castling_moves_are_listed(castling_board: Board) -> None:
    moves = {move.to_uci() for move in all_legal_moves(castling_board, Color.WHITE, CastlingRights())}
    assert {"e1g1", "e1c1"} <= moves
    moves = {move.to_uci() for move in all_legal_moves(castling_board, Color.WHITE)}
    assert not {"e1g1", "e1c1"} & moves


# --- GAME ENDING POSITIONS ---
def test_fools_mate() -> None:
    board = fools_mate_board()
    assert is_checkmate(board, Color.WHITE)
    assert not is_checkmate(board, Color.BLACK)
    assert all_legal_moves(board, Color.WHITE) == []
    assert not is_stalemate(board, Color.WHITE)


def test_stalemate() -> None:
    board = Board.from_fen("k7/8/1QK5/8/8/8/8/8")
    assert is_stalemate(board, Color.BLACK)
    assert not is_checkmate(board, Color.BLACK)
    assert not is_stalemate(board, Color.WHITE)


def test_initial_position_is_neither() -> None:
    board = Board.initial()
    for color in (Color.WHITE, Color.BLACK):
        assert not is_checkmate(board, color)
        assert not is_stalemate(board, color)


def test_has_legal_move_stops_early() -> None:
    """Only the first legal move is needed"""
    with patch.object(lg, "is_move_legal_and_safe", return_value=True) as mock_check:
        assert has_legal_move(Board.initial(), Color.WHITE)
    mock_check.assert_called_once()


@pytest.mark.parametrize("color", [Color.WHITE, Color.BLACK])
def test_no_pieces_no_moves(color: Color) -> None:
    assert not has_legal_move(Board.empty(), color)
