"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Internally a square is addressed by (row, col): row 0 is the 8th rank (black's home side),
row 7 the 1st rank, col 0 the a-file. Callers talk algebraic ('e2'), so both are accepted everywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from src.core.exceptions import InvalidCoordinateError

# Chess board is always 8x8 (rows, cols)
BOARD_DIMENSIONS = (8, 8)

FILES = "abcdefgh"
RANKS = "12345678"


def to_index(square: str) -> tuple[int, int]:
    """Algebraic notation: 'a8' - 'h1' get converted to (0, 0) - (7, 7)"""
    if not isinstance(square, str) or len(square) != 2:
        raise InvalidCoordinateError(
            f"Square must be exactly two characters, got {square!r}"
        )
    file_char, rank_char = square[0], square[1]
    if file_char not in FILES or rank_char not in RANKS:
        raise InvalidCoordinateError(f"Square {square!r} is outside a1-h8")

    col = FILES.index(file_char)
    row = BOARD_DIMENSIONS[0] - int(rank_char)
    return row, col


def to_algebraic(row: int, col: int) -> str:
    """Inverse of `to_index()`"""
    if not (0 <= row < BOARD_DIMENSIONS[0] and 0 <= col < BOARD_DIMENSIONS[1]):
        raise InvalidCoordinateError(f"Index ({row}, {col}) is outside the board")
    return f"{FILES[col]}{BOARD_DIMENSIONS[0] - row}"


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        row, col = to_index(sq)
        return cls(row, col)

    def to_algebraic(self) -> str:
        return to_algebraic(self.row, self.col)

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """Neighbouring square. May fall off the board; check with `is_within_bounds()`."""
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return self.to_algebraic()


SquareLike = Union[Square, str]


def as_square(square: SquareLike) -> Square:
    """Accept either a Square or its algebraic name."""
    if isinstance(square, Square):
        if not square.is_within_bounds():
            raise InvalidCoordinateError(f"{square!r} is outside the board")
        return square
    return Square.from_algebraic(square)


def all_squares() -> list[Square]:
    """Row-major order, a8 first."""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
