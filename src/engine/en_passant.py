"""
En passant rule

Unlike the other moves, en passant depends on history: it is only available right after the
opponent's pawn jumped two squares past one of your pawns. The log of the game is the source of truth.
"""

from typing import Optional

from src.engine.board import Board, relocate
from src.engine.move_log import GameRecord
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import SquareLike, as_square

# Row (grid index) a pawn has to stand on to capture en passant: the 5th rank for white, the 4th for black
EN_PASSANT_ROW: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}

# White moves UP the board (towards row 0), black moves DOWN
FORWARD: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}


def is_en_passant_possible(
    game: GameRecord,
    from_square: SquareLike,
    to_square: SquareLike,
    board: Optional[Board] = None,
) -> bool:
    """
    Can the pawn on `from_square` capture en passant by moving to `to_square`?
    ----

    The pieces are read from `board` (default: the game's own board), the history from the game log.

    * there must be a previous move
    * the mover is a pawn on its en passant rank
    * the move is a single diagonal step forward onto an empty square
    * the previous move was a two square advance of an opponent pawn
    * ... which landed right next to the mover: same rank as `from_square`, same file as `to_square`
    """
    if not game.move_log:
        return False

    start = as_square(from_square)
    end = as_square(to_square)
    board = board if board is not None else game.board
    mover = board.piece(start)
    if mover.type != PieceType.PAWN:
        return False

    if start.row != EN_PASSANT_ROW[mover.color]:
        return False

    is_diagonal_step = (end.row - start.row == FORWARD[mover.color]) and abs(
        end.col - start.col
    ) == 1
    if not is_diagonal_step or not board.piece(end).is_empty:
        return False

    last_move = game.move_log[-1]
    if last_move.piece != Piece(PieceType.PAWN, mover.color.opponent):
        return False
    if not last_move.is_double_pawn_push:
        return False

    jumped_past = as_square(last_move.to_square)
    return jumped_past.row == start.row and jumped_past.col == end.col


def execute_en_passant(
    board: Board, from_square: SquareLike, to_square: SquareLike
) -> Optional[Piece]:
    """
    Update the board with the en passant capture
    ---

    1. Move the pawn diagonally
    2. Remove the opponent's pawn that gets taken. It stands on the rank the capturing pawn started on,
       in the file it moves to (so NOT on the destination square).

    Returns the captured piece (None when the square was already empty).
    """
    start = as_square(from_square)
    end = as_square(to_square)
    relocate(board, start, end)

    take_square = start.offset(0, end.col - start.col)
    captured = board.piece(take_square)
    board.remove_piece(take_square)
    return None if captured.is_empty else captured
