"""Pawn promotion: detecting it, interpreting the player's choice, and swapping the piece."""

from typing import Optional, Union

from src.engine.board import Board
from src.engine.pieces import FEN_TO_PIECE, PROMOTION_OPTIONS, Color, Piece, PieceType
from src.engine.square import SquareLike, as_square

# Row (grid index) where each color's pawns promote
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}

PromotionChoice = Union[PieceType, str]


def is_promotion(from_square: SquareLike, to_square: SquareLike, piece: Piece) -> bool:
    """A pawn reaching the far rank"""
    if piece.type != PieceType.PAWN:
        return False
    return as_square(to_square).row == PROMOTION_ROW[piece.color]


def parse_promotion_choice(choice: PromotionChoice) -> Optional[PieceType]:
    """
    Accepts PieceType.QUEEN, "queen", "QUEEN", "q" or "Q".
    Returns None when the choice does not name a piece type at all.
    """
    if isinstance(choice, PieceType):
        return choice
    if not isinstance(choice, str):
        return None
    if len(choice) == 1:
        return FEN_TO_PIECE.get(choice.lower())
    return PieceType.__members__.get(choice.upper())


def is_valid_promotion_choice(choice: PromotionChoice) -> bool:
    """Only queen, rook, bishop, or knight (no kings, no staying a pawn)"""
    return parse_promotion_choice(choice) in PROMOTION_OPTIONS


def execute_promotion(board: Board, to_square: SquareLike, chosen: PromotionChoice) -> None:
    """
    Promote the pawn that already stands on `to_square`.

    NOTE: An unrecognized choice silently becomes a queen. Validate explicit player input first
    (the Game does, see `is_valid_promotion_choice`).
    """
    piece_type = parse_promotion_choice(chosen)
    if piece_type not in PROMOTION_OPTIONS:
        piece_type = PieceType.QUEEN
    pawn = board.piece(to_square)
    board.place_piece(pawn.promoted_to(piece_type), to_square)
