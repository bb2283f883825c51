"""The 8x8 grid and the raw primitives every piece rule builds on. No legality checking happens here."""

from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import EmptySourceError, InvalidPositionError
from src.engine.pieces import EMPTY, FEN_TO_PIECE, Color, Piece
from src.engine.square import BOARD_DIMENSIONS, Square, SquareLike, all_squares, as_square

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_POSITION = "/".join(["8"] * BOARD_DIMENSIONS[0])


def is_valid_position(position: str) -> bool:
    """Piece placement field of a FEN string: 8 ranks, each adding up to 8 files."""
    num_ranks, num_files = BOARD_DIMENSIONS
    if not isinstance(position, str):
        return False
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            if character in "12345678":
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                return False

        if file_count != num_files:
            return False
    return True


@dataclass
class Board:
    grid: list[list[Piece]]

    @classmethod
    def initial(cls) -> Self:
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def empty(cls) -> Self:
        return cls.from_fen(EMPTY_POSITION)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board from the piece placement field of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0 of the grid), starting with the rook on a8
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces, read a1-h1.
        """
        if not is_valid_position(fen_str):
            raise InvalidPositionError(
                f"{fen_str!r} is not a valid piece placement. Expected 8 ranks of 8 files each."
            )
        grid: list[list[Piece]] = []
        for fen_one_rank in fen_str.split("/"):
            row: list[Piece] = []
            for character in fen_one_rank:
                if character.isalpha():
                    row.append(Piece.from_fen(character))
                else:
                    # A number denotes the amount of empty squares after each other
                    row.extend([EMPTY] * int(character))
            grid.append(row)
        return cls(grid)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    @staticmethod
    def _row_to_fen(row: list[Piece]) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if not piece.is_empty:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def to_codes(self) -> list[list[Optional[str]]]:
        """Grid of FEN letters (None for empty squares). Formatting is up to the caller."""
        return [
            [None if piece.is_empty else piece.to_fen() for piece in row]
            for row in self.grid
        ]

    def piece(self, square: SquareLike) -> Piece:
        sq = as_square(square)
        return self.grid[sq.row][sq.col]

    def place_piece(self, piece: Piece, square: SquareLike) -> None:
        sq = as_square(square)
        self.grid[sq.row][sq.col] = piece

    def remove_piece(self, square: SquareLike) -> None:
        self.place_piece(EMPTY, square)

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square in all_squares() if self.piece(square).color == color]

    def locate_piece(self, piece: Piece) -> Optional[Square]:
        """First square (row-major) holding exactly this piece."""
        return next(
            (square for square in all_squares() if self.piece(square) == piece), None
        )

    def pieces(self, color: Color) -> list[Piece]:
        return [piece for row in self.grid for piece in row if piece.color == color]

    def copy(self) -> Self:
        """Scratch board for simulating a move."""
        return deepcopy(self)


# --- PRIMITIVES SHARED BY THE PIECE RULES ---
def relocate(board: Board, from_square: SquareLike, to_square: SquareLike) -> None:
    """Overwrite the destination with the source piece and empty the source."""
    piece_that_moved = board.piece(from_square)
    if piece_that_moved.is_empty:
        raise EmptySourceError(f"No piece on {as_square(from_square)} to move")
    board.place_piece(EMPTY, from_square)
    board.place_piece(piece_that_moved, to_square)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def path_clear(
    board: Board, from_row: int, from_col: int, to_row: int, to_col: int
) -> bool:
    """
    Walk the straight/diagonal line between two squares (both ends excluded).

    NOTE: the caller guarantees the squares share a row, column, or diagonal.
    """
    step_row = _sign(to_row - from_row)
    step_col = _sign(to_col - from_col)
    row, col = from_row + step_row, from_col + step_col
    while (row, col) != (to_row, to_col):
        if not board.grid[row][col].is_empty:
            return False
        row += step_row
        col += step_col
    return True


def can_land_on(target: Piece, mover_color: Color) -> bool:
    """Empty squares and opponent pieces are fine, your own pieces are not."""
    return target.is_empty or target.color != mover_color
