"""
Full legality: movement pattern + king safety + castling rules.

Everything here is read-only with respect to the board that is passed in.
"""

from typing import Iterator, Optional

from src.engine.attacks import is_in_check, would_expose_own_king
from src.engine.board import Board
from src.engine.castling import (
    CastlingRights,
    can_castle,
    is_castling_move,
    resolve_castling_side,
)
from src.engine.move_log import GameRecord
from src.engine.moves import Move, is_move_legal
from src.engine.pieces import Color
from src.engine.square import SquareLike, all_squares


def is_move_legal_and_safe(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    castling_rights: Optional[CastlingRights] = None,
    game: Optional[GameRecord] = None,
) -> bool:
    """
    The authoritative legality gate
    ----

    * Castling moves skip the generic checks and are decided by `can_castle()` alone
      (so without castling rights to consult, castling is never legal).
    * Any other move must match its piece's pattern and must not leave the own king in check.
    """
    piece = board.piece(from_square)
    if piece.is_empty:
        return False

    if is_castling_move(board, from_square, to_square):
        if castling_rights is None:
            return False
        color, side = resolve_castling_side(from_square, to_square)
        return can_castle(board, color, side, castling_rights)

    if not is_move_legal(board, from_square, to_square, game):
        return False
    return not would_expose_own_king(board, from_square, to_square, piece.color, game)


def all_legal_moves(
    board: Board,
    color: Color,
    castling_rights: Optional[CastlingRights] = None,
    game: Optional[GameRecord] = None,
) -> list[Move]:
    """
    List of legal moves for the player with the `color` pieces
    ----

    Brute force: every square holding one of your pieces x every square on the board (at most 64 x 64 checks).
    Pawn moves to the last rank appear once, without a promotion choice.
    """
    return list(_iter_legal_moves(board, color, castling_rights, game))


def _iter_legal_moves(
    board: Board,
    color: Color,
    castling_rights: Optional[CastlingRights],
    game: Optional[GameRecord],
) -> Iterator[Move]:
    for from_square in board.locate_color(color):
        for to_square in all_squares():
            if from_square == to_square:
                continue
            if is_move_legal_and_safe(
                board, from_square, to_square, castling_rights, game
            ):
                yield Move(from_square, to_square)


def has_legal_move(
    board: Board,
    color: Color,
    castling_rights: Optional[CastlingRights] = None,
    game: Optional[GameRecord] = None,
) -> bool:
    """Stops at the first legal move found"""
    return any(True for _ in _iter_legal_moves(board, color, castling_rights, game))


def is_checkmate(
    board: Board,
    color: Color,
    castling_rights: Optional[CastlingRights] = None,
    game: Optional[GameRecord] = None,
) -> bool:
    return is_in_check(board, color) and not has_legal_move(
        board, color, castling_rights, game
    )


def is_stalemate(
    board: Board,
    color: Color,
    castling_rights: Optional[CastlingRights] = None,
    game: Optional[GameRecord] = None,
) -> bool:
    return not is_in_check(board, color) and not has_legal_move(
        board, color, castling_rights, game
    )
