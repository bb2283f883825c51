"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    EMPTY = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    NONE = auto()
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        if self == Color.WHITE:
            return Color.BLACK
        if self == Color.BLACK:
            return Color.WHITE
        return Color.NONE


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# A pawn may only turn into one of these
PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

MINOR_PIECES: frozenset[PieceType] = frozenset({PieceType.BISHOP, PieceType.KNIGHT})


@dataclass(frozen=True)
class Piece:
    """Content of a square: a (type, color) pair. Empty squares hold EMPTY."""

    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    @property
    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY

    def promoted_to(self, new_type: PieceType) -> Self:
        """Same color, new type. Pieces are values, so this returns a new one."""
        return type(self)(new_type, self.color)


EMPTY = Piece(PieceType.EMPTY, Color.NONE)
