"""Castling rules: which rights remain, whether castling is possible right now, and how it moves the pieces."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Self

from src.engine.attacks import is_in_check, is_square_attacked
from src.engine.board import Board, relocate
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import Square, SquareLike, as_square


class CastlingSide(Enum):
    KING_SIDE = "kingside"
    QUEEN_SIDE = "queenside"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, we already know the king / rook are still at their starting squares.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    def squares_between(self) -> list[Square]:
        """Squares between king and rook: these must all be empty"""
        return squares_between_on_rank(self.king_from, self.rook_from)

    def king_path(self) -> list[Square]:
        """Start, intermediate, and destination square of the king: none of these may be attacked"""
        return [self.king_from, *squares_between_on_rank(self.king_from, self.king_to), self.king_to]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.WHITE, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    (Color.WHITE, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    (Color.BLACK, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    (Color.BLACK, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}

KING_HOME: dict[Color, Square] = {
    Color.WHITE: Square.from_algebraic("e1"),
    Color.BLACK: Square.from_algebraic("e8"),
}


def squares_between_on_rank(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares in between the two squares specified that are on the same rank
    """
    if from_square.row != to_square.row:
        raise ValueError(
            f"squares_between_on_rank requires both squares to lie on the same rank. \n from: {from_square}\n to:{to_square}"
        )
    step = 1 if to_square.col > from_square.col else -1
    return [
        Square(from_square.row, col)
        for col in range(from_square.col + step, to_square.col, step)
    ]


@dataclass(frozen=True)
class CastlingRights:
    """
    Per color: has the king moved, has the king side rook moved, has the queen side rook moved.

    Monotonic: flags only ever go from False to True. Use `update()` after every move.
    """

    white_king_moved: bool = False
    white_kingside_rook_moved: bool = False
    white_queenside_rook_moved: bool = False
    black_king_moved: bool = False
    black_kingside_rook_moved: bool = False
    black_queenside_rook_moved: bool = False

    def king_moved(self, color: Color) -> bool:
        return getattr(self, f"{color.name.lower()}_king_moved")

    def rook_moved(self, color: Color, side: CastlingSide) -> bool:
        return getattr(self, _rook_flag(color, side))

    def update(self, from_square: SquareLike, to_square: SquareLike) -> Self:
        """
        Revoke rights after a move
        ----

        1. A move starting on a king's home square --> that king has moved
        2. A move starting on a rook's home square --> that rook has moved
        3. A move ending on a rook's home square --> the rook got captured (or was gone already). Revoke as well.

        NOTE: triggered by every move, not only by castling moves.
        """
        start = as_square(from_square)
        end = as_square(to_square)
        flags: dict[str, bool] = {}
        for color, home in KING_HOME.items():
            if start == home:
                flags[f"{color.name.lower()}_king_moved"] = True
        for (color, side), squares in CASTLING_RULES.items():
            if squares.rook_from in (start, end):
                flags[_rook_flag(color, side)] = True
        return replace(self, **flags)


def _rook_flag(color: Color, side: CastlingSide) -> str:
    side_name = "kingside" if side == CastlingSide.KING_SIDE else "queenside"
    return f"{color.name.lower()}_{side_name}_rook_moved"


def is_castling_move(board: Board, from_square: SquareLike, to_square: SquareLike) -> bool:
    """A king on its home square moving two files along its rank"""
    start = as_square(from_square)
    end = as_square(to_square)
    piece = board.piece(start)
    if piece.type != PieceType.KING:
        return False
    if start != KING_HOME[piece.color]:
        return False
    return start.row == end.row and abs(end.col - start.col) == 2


def resolve_castling_side(
    from_square: SquareLike, to_square: SquareLike
) -> tuple[Color, CastlingSide]:
    """Color follows from the rank the king starts on, the side from the direction it moves"""
    start = as_square(from_square)
    end = as_square(to_square)
    color = Color.WHITE if start.row == KING_HOME[Color.WHITE].row else Color.BLACK
    side = CastlingSide.KING_SIDE if end.col > start.col else CastlingSide.QUEEN_SIDE
    return color, side


def can_castle(
    board: Board, color: Color, side: CastlingSide, rights: CastlingRights
) -> bool:
    """
    You are allowed to castle if
    ---

    * Castling rights are not yet revoked (neither the king nor that rook moved).
    * The king and rook still stand on their home squares.
    * You are not currently in check (you cannot castle out of check).
    * There is no piece in between the king and the rook.
    * None of the squares the king crosses (start and destination included) is under attack.
    """
    if rights.king_moved(color) or rights.rook_moved(color, side):
        return False

    squares = CASTLING_RULES[(color, side)]
    if board.piece(squares.king_from) != Piece(PieceType.KING, color):
        return False
    if board.piece(squares.rook_from) != Piece(PieceType.ROOK, color):
        return False

    if is_in_check(board, color):
        return False

    if any(not board.piece(square).is_empty for square in squares.squares_between()):
        return False

    return not any(
        is_square_attacked(board, square, color.opponent)
        for square in squares.king_path()
    )


def execute_castling(board: Board, color: Color, side: CastlingSide) -> None:
    """Move both the King and the Rook"""
    squares = CASTLING_RULES[(color, side)]
    relocate(board, squares.king_from, squares.king_to)
    relocate(board, squares.rook_from, squares.rook_to)
