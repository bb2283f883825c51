"""Unit tests for /src/engine/castling.py"""

from itertools import product

import pytest

from src.engine.board import Board, relocate
from src.engine.castling import (
    CASTLING_RULES,
    CastlingRights,
    CastlingSide,
    can_castle,
    execute_castling,
    is_castling_move,
    resolve_castling_side,
    squares_between_on_rank,
)
from src.engine.pieces import Color, Piece
from src.engine.square import Square

ALL_CASTLING_MOVES = list(product([Color.WHITE, Color.BLACK], CastlingSide))


def algebraic(squares: list[Square]) -> list[str]:
    return [square.to_algebraic() for square in squares]


# --- GEOMETRY ---
def test_squares_between_on_rank() -> None:
    e1 = Square.from_algebraic("e1")
    assert algebraic(squares_between_on_rank(e1, Square.from_algebraic("h1"))) == ["f1", "g1"]
    assert algebraic(squares_between_on_rank(e1, Square.from_algebraic("a1"))) == ["d1", "c1", "b1"]
    assert squares_between_on_rank(e1, Square.from_algebraic("f1")) == []


def test_squares_between_on_rank_different_ranks() -> None:
    with pytest.raises(ValueError):
        squares_between_on_rank(Square.from_algebraic("e1"), Square.from_algebraic("e8"))


@pytest.mark.parametrize(
    "color, side, king_path",
    [
        (Color.WHITE, CastlingSide.KING_SIDE, ["e1", "f1", "g1"]),
        (Color.WHITE, CastlingSide.QUEEN_SIDE, ["e1", "d1", "c1"]),
        (Color.BLACK, CastlingSide.KING_SIDE, ["e8", "f8", "g8"]),
        (Color.BLACK, CastlingSide.QUEEN_SIDE, ["e8", "d8", "c8"]),
    ],
)
def test_king_path(color: Color, side: CastlingSide, king_path: list[str]) -> None:
    """The b-file square on the queen side has to be empty but may be attacked"""
    assert algebraic(CASTLING_RULES[(color, side)].king_path()) == king_path


# --- RIGHTS ---
def test_initial_castling_rights() -> None:
    rights = CastlingRights()
    for color, side in ALL_CASTLING_MOVES:
        assert not rights.king_moved(color)
        assert not rights.rook_moved(color, side)


def test_king_move_revokes_both_sides() -> None:
    rights = CastlingRights().update("e1", "e2")
    assert rights.king_moved(Color.WHITE)
    assert not rights.king_moved(Color.BLACK)
    assert not rights.rook_moved(Color.WHITE, CastlingSide.KING_SIDE)


@pytest.mark.parametrize(
    "from_sq, to_sq, color, side",
    [
        ("h1", "h5", Color.WHITE, CastlingSide.KING_SIDE),
        ("a1", "a3", Color.WHITE, CastlingSide.QUEEN_SIDE),
        ("h8", "g8", Color.BLACK, CastlingSide.KING_SIDE),
        ("a8", "b8", Color.BLACK, CastlingSide.QUEEN_SIDE),
    ],
)
def test_rook_move_revokes_one_side(
    from_sq: str, to_sq: str, color: Color, side: CastlingSide
) -> None:
    rights = CastlingRights().update(from_sq, to_sq)
    assert rights.rook_moved(color, side)
    assert not rights.king_moved(color)
    other_side = next(s for s in CastlingSide if s != side)
    assert not rights.rook_moved(color, other_side)


def test_capture_on_rook_square_revokes_rights() -> None:
    """A rook taken on its home square can no longer castle"""
    rights = CastlingRights().update("a8", "a1")
    assert rights.rook_moved(Color.WHITE, CastlingSide.QUEEN_SIDE)
    assert rights.rook_moved(Color.BLACK, CastlingSide.QUEEN_SIDE)
    assert not rights.rook_moved(Color.WHITE, CastlingSide.KING_SIDE)


def test_rights_are_monotonic() -> None:
    rights = CastlingRights().update("e1", "e2").update("e2", "e1")
    assert rights.king_moved(Color.WHITE)


def test_unrelated_move_keeps_rights() -> None:
    rights = CastlingRights()
    assert rights.update("g1", "f3") == rights


# --- DETECTION ---
@pytest.mark.parametrize(
    "from_sq, to_sq, expected",
    [
        ("e1", "g1", True),
        ("e1", "c1", True),
        ("e8", "c8", True),
        ("e8", "g8", True),
        ("e1", "f1", False),  # regular king move
        ("a1", "c1", False),  # not a king
        ("d1", "f1", False),  # not a king
    ],
)
def test_is_castling_move(from_sq: str, to_sq: str, expected: bool) -> None:
    assert is_castling_move(Board.initial(), from_sq, to_sq) is expected


def test_is_castling_move_king_off_home_square() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/4K3/8")
    assert not is_castling_move(board, "e2", "g2")


@pytest.mark.parametrize(
    "from_sq, to_sq, color, side",
    [
        ("e1", "g1", Color.WHITE, CastlingSide.KING_SIDE),
        ("e1", "c1", Color.WHITE, CastlingSide.QUEEN_SIDE),
        ("e8", "g8", Color.BLACK, CastlingSide.KING_SIDE),
        ("e8", "c8", Color.BLACK, CastlingSide.QUEEN_SIDE),
    ],
)
def test_resolve_castling_side(
    from_sq: str, to_sq: str, color: Color, side: CastlingSide
) -> None:
    assert resolve_castling_side(from_sq, to_sq) == (color, side)


# --- CAN CASTLE ---
def test_cannot_castle_through_own_pieces() -> None:
    board = Board.initial()
    for color, side in ALL_CASTLING_MOVES:
        assert not can_castle(board, color, side, CastlingRights())


def test_can_castle_once_path_is_clear() -> None:
    board = Board.initial()
    relocate(board, "f1", "f3")
    relocate(board, "g1", "g3")
    assert can_castle(board, Color.WHITE, CastlingSide.KING_SIDE, CastlingRights())
    assert not can_castle(board, Color.WHITE, CastlingSide.QUEEN_SIDE, CastlingRights())


@pytest.mark.parametrize("color, side", ALL_CASTLING_MOVES)
def test_can_castle_all_sides(
    castling_board: Board, color: Color, side: CastlingSide
) -> None:
    assert can_castle(castling_board, color, side, CastlingRights())


@pytest.mark.parametrize("color, side", ALL_CASTLING_MOVES)
def test_cannot_castle_after_king_moved(
    castling_board: Board, color: Color, side: CastlingSide
) -> None:
    king_home = CASTLING_RULES[(color, side)].king_from
    rights = CastlingRights().update(king_home, king_home.offset(0, 1))
    assert not can_castle(castling_board, color, side, rights)


@pytest.mark.parametrize("color, side", ALL_CASTLING_MOVES)
def test_cannot_castle_after_rook_moved(
    castling_board: Board, color: Color, side: CastlingSide
) -> None:
    rook_home = CASTLING_RULES[(color, side)].rook_from
    rights = CastlingRights().update(rook_home, "d4")
    assert not can_castle(castling_board, color, side, rights)


def test_cannot_castle_out_of_check() -> None:
    board = Board.from_fen("r3k2r/8/8/8/4r3/8/8/R3K2R")
    assert not can_castle(board, Color.WHITE, CastlingSide.KING_SIDE, CastlingRights())
    assert not can_castle(board, Color.WHITE, CastlingSide.QUEEN_SIDE, CastlingRights())


def test_cannot_castle_through_attacked_square() -> None:
    board = Board.from_fen("r3k2r/8/8/5r2/8/8/8/R3K2R")
    assert not can_castle(board, Color.WHITE, CastlingSide.KING_SIDE, CastlingRights())
    assert can_castle(board, Color.WHITE, CastlingSide.QUEEN_SIDE, CastlingRights())


def test_attacked_rook_side_square_does_not_matter() -> None:
    """The king never crosses b1"""
    board = Board.from_fen("r3k2r/8/8/1r6/8/8/8/R3K2R")
    assert can_castle(board, Color.WHITE, CastlingSide.QUEEN_SIDE, CastlingRights())


def test_cannot_castle_into_pawn_attack() -> None:
    """A pawn controls the squares diagonally in front of it, even when they are empty"""
    board = Board.from_fen("r3k2r/8/8/8/8/8/4p3/R3K2R")
    assert not can_castle(board, Color.WHITE, CastlingSide.KING_SIDE, CastlingRights())
    assert not can_castle(board, Color.WHITE, CastlingSide.QUEEN_SIDE, CastlingRights())


def test_cannot_castle_without_rook() -> None:
    board = Board.from_fen("r3k2r/8/8/8/8/8/8/R3K3")
    assert not can_castle(board, Color.WHITE, CastlingSide.KING_SIDE, CastlingRights())
    assert can_castle(board, Color.WHITE, CastlingSide.QUEEN_SIDE, CastlingRights())


# --- EXECUTION ---
@pytest.mark.parametrize("color, side", ALL_CASTLING_MOVES)
def test_execute_castling(castling_board: Board, color: Color, side: CastlingSide) -> None:
    squares = CASTLING_RULES[(color, side)]
    king = castling_board.piece(squares.king_from)
    rook = castling_board.piece(squares.rook_from)

    execute_castling(castling_board, color, side)

    assert castling_board.piece(squares.king_to) == king
    assert castling_board.piece(squares.rook_to) == rook
    assert castling_board.piece(squares.king_from).is_empty
    assert castling_board.piece(squares.rook_from).is_empty


def test_execute_white_king_side_castling() -> None:
    board = Board.initial()
    relocate(board, "f1", "f3")
    relocate(board, "g1", "g3")
    execute_castling(board, Color.WHITE, CastlingSide.KING_SIDE)
    assert board.piece("g1") == Piece.from_fen("K")
    assert board.piece("f1") == Piece.from_fen("R")
