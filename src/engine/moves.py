"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define one legality predicate per piece type.
A predicate only answers "does this match the piece's movement pattern on this board" (pseudo-legality).

King safety is checked later (see legality.py)
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.engine.board import Board, can_land_on, path_clear
from src.engine.en_passant import FORWARD, is_en_passant_possible
from src.engine.move_log import GameRecord
from src.engine.pieces import PIECE_TO_FEN, Color, Piece, PieceType
from src.engine.square import Square, SquareLike, as_square

# Row (grid index) pawns start on, from where they may advance by two
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None

    def to_uci(self) -> str:
        """
        Universal Chess Interface notation: <from_square><to_square>[promotion letter]

        examples: "e2e4", "e7e8q", "e1g1" (the king castles king side)
        """
        piece_char = PIECE_TO_FEN[self.promote_to] if self.promote_to else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"


@dataclass(frozen=True)
class _Displacement:
    """What every predicate needs to know about a candidate move"""

    start: Square
    end: Square
    mover: Piece
    target: Piece

    @property
    def d_row(self) -> int:
        return self.end.row - self.start.row

    @property
    def d_col(self) -> int:
        return self.end.col - self.start.col


def _displacement(
    board: Board, from_square: SquareLike, to_square: SquareLike, piece_type: PieceType
) -> Optional[_Displacement]:
    """None when the source square does not hold a piece of the expected type"""
    start = as_square(from_square)
    end = as_square(to_square)
    mover = board.piece(start)
    if mover.type != piece_type:
        return None
    return _Displacement(start, end, mover, board.piece(end))


def _is_straight_line(move: _Displacement) -> bool:
    """same row xor same column"""
    return (move.d_row == 0) != (move.d_col == 0)


def _is_diagonal_line(move: _Displacement) -> bool:
    return abs(move.d_row) == abs(move.d_col) and move.d_row != 0


def _is_path_clear(board: Board, move: _Displacement) -> bool:
    return path_clear(
        board, move.start.row, move.start.col, move.end.row, move.end.col
    )


# --- MOVEMENT RULES ---
def is_pawn_move_legal(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    game: Optional[GameRecord] = None,
) -> bool:
    """
    A pawn:
    - moves by a single square forward (onto an empty square)
    - can move by two on its first move (so when on its starting rank), both squares must be empty
    - takes diagonally
    - takes en passant: diagonally onto an empty square. Only possible when the game is supplied,
      because it depends on the previous move.
    """
    move = _displacement(board, from_square, to_square, PieceType.PAWN)
    if move is None:
        return False

    color = move.mover.color
    forward = FORWARD[color]

    # pawn push
    if move.d_col == 0 and move.d_row == forward:
        return move.target.is_empty

    # pawn push by two
    if move.d_col == 0 and move.d_row == 2 * forward:
        in_between = move.start.offset(forward, 0)
        return (
            move.start.row == PAWN_HOME_ROW[color]
            and board.piece(in_between).is_empty
            and move.target.is_empty
        )

    if abs(move.d_col) == 1 and move.d_row == forward:
        # regular capture
        if not move.target.is_empty:
            return move.target.color == color.opponent
        # en passant
        return game is not None and is_en_passant_possible(
            game, move.start, move.end, board
        )

    return False


def is_rook_move_legal(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    game: Optional[GameRecord] = None,
) -> bool:
    """Rooks move either horizontally or vertically"""
    move = _displacement(board, from_square, to_square, PieceType.ROOK)
    if move is None or not _is_straight_line(move):
        return False
    if not _is_path_clear(board, move):
        return False
    return can_land_on(move.target, move.mover.color)


def is_bishop_move_legal(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    game: Optional[GameRecord] = None,
) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    move = _displacement(board, from_square, to_square, PieceType.BISHOP)
    if move is None or not _is_diagonal_line(move):
        return False
    if not _is_path_clear(board, move):
        return False
    return can_land_on(move.target, move.mover.color)


def is_queen_move_legal(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    game: Optional[GameRecord] = None,
) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    move = _displacement(board, from_square, to_square, PieceType.QUEEN)
    if move is None:
        return False
    if not (_is_straight_line(move) or _is_diagonal_line(move)):
        return False
    if not _is_path_clear(board, move):
        return False
    return can_land_on(move.target, move.mover.color)


def is_knight_move_legal(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    game: Optional[GameRecord] = None,
) -> bool:
    """Knights always move such that |delta_row| + |delta_col| = 3 (and jump over everything)"""
    move = _displacement(board, from_square, to_square, PieceType.KNIGHT)
    if move is None:
        return False
    if {abs(move.d_row), abs(move.d_col)} != {1, 2}:
        return False
    return can_land_on(move.target, move.mover.color)


def is_king_move_legal(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    game: Optional[GameRecord] = None,
) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a separate kind of move (see castling.py), never through this predicate.
    """
    move = _displacement(board, from_square, to_square, PieceType.KING)
    if move is None:
        return False
    if max(abs(move.d_row), abs(move.d_col)) != 1:
        return False
    return can_land_on(move.target, move.mover.color)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MoveRuleFn = Callable[[Board, SquareLike, SquareLike, Optional[GameRecord]], bool]
MOVEMENT_RULES: dict[PieceType, MoveRuleFn] = {
    PieceType.PAWN: is_pawn_move_legal,
    PieceType.KNIGHT: is_knight_move_legal,
    PieceType.BISHOP: is_bishop_move_legal,
    PieceType.ROOK: is_rook_move_legal,
    PieceType.QUEEN: is_queen_move_legal,
    PieceType.KING: is_king_move_legal,
}


def is_move_legal(
    board: Board,
    from_square: SquareLike,
    to_square: SquareLike,
    game: Optional[GameRecord] = None,
) -> bool:
    """Single entry point: route to the rule of whatever piece stands on `from_square` (pseudo-legality only)."""
    piece = board.piece(from_square)
    movement_rule = MOVEMENT_RULES.get(piece.type)
    if movement_rule is None:
        # empty square
        return False
    return movement_rule(board, from_square, to_square, game)
