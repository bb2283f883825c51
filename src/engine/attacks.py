"""
Attack and check analysis

Attacks are one level of pseudo-legality: "could a piece of that color move there, ignoring its own king's safety?".
That keeps check detection free of any recursion into the full legality test.
"""

from typing import Optional

from src.engine.board import Board, can_land_on, relocate
from src.engine.en_passant import FORWARD, execute_en_passant, is_en_passant_possible
from src.engine.move_log import GameRecord
from src.engine.moves import is_move_legal
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import Square, SquareLike, as_square


def find_king(board: Board, color: Color) -> Optional[Square]:
    """None only when the board was set up without that king."""
    return board.locate_piece(Piece(PieceType.KING, color))


def _pawn_attacks(board: Board, pawn_square: Square, target: Square) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: The pawn's movement rule only allows the diagonal step when there is something to take.
    An empty square in front of a pawn is still controlled by it (matters for the squares a castling king crosses).
    """
    pawn = board.piece(pawn_square)
    d_row = target.row - pawn_square.row
    d_col = target.col - pawn_square.col
    return (
        d_row == FORWARD[pawn.color]
        and abs(d_col) == 1
        and can_land_on(board.piece(target), pawn.color)
    )


def is_square_attacked(board: Board, square: SquareLike, by_color: Color) -> bool:
    """True if any piece of `by_color` could move to (or take on) the square."""
    target = as_square(square)
    for attacker_square in board.locate_color(by_color):
        if board.piece(attacker_square).type == PieceType.PAWN:
            if _pawn_attacks(board, attacker_square, target):
                return True
            continue
        if is_move_legal(board, attacker_square, target):
            return True
    return False


def is_in_check(board: Board, color: Color) -> bool:
    king_square = find_king(board, color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, color.opponent)


def would_expose_own_king(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    mover_color: Color,
    game: Optional[GameRecord] = None,
) -> bool:
    """Return True if the move puts (or leaves) your own king in check

    plan:
    1. Copy the board
    2. make the candidate move on the copy (en passant removes a second pawn)
    3. determine if king is in check on the new board

    The copy is thrown away afterwards; the real board is never touched.
    """
    scratch = board.copy()
    if game is not None and is_en_passant_possible(
        game, from_square, to_square, board
    ):
        execute_en_passant(scratch, from_square, to_square)
    else:
        relocate(scratch, from_square, to_square)
    return is_in_check(scratch, mover_color)
