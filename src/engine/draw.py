"""
Draw detection

A game is drawn by stalemate, insufficient material, the fifty-move rule, or threefold repetition.
The conditions can overlap; `evaluate_draw()` reports the first one found, in that order.
"""

from typing import Optional, Protocol

from src.core.shared_types import DrawReason
from src.engine.board import Board
from src.engine.castling import CastlingRights
from src.engine.legality import is_stalemate
from src.engine.move_log import MoveLogEntry
from src.engine.pieces import MINOR_PIECES, Color, PieceType
from src.engine.square import Square

# 50 moves by each player = 100 entries in the log
FIFTY_MOVE_HALF_MOVES = 100
REPETITION_COUNT = 3
# Three occurrences need at least this many recorded positions
MIN_REPETITION_HISTORY = 6


class DrawRecord(Protocol):
    """Just the parts of a game the draw rules need"""

    board: Board
    move_log: list[MoveLogEntry]
    color_to_move: Color
    castling_rights: CastlingRights
    position_history: list[str]


def position_fingerprint(board: Board) -> str:
    """
    Piece placement only, read row by row (the placement field of a FEN string).

    NOTE: side to move, castling rights, and en passant availability are not part of it. Two positions that
    only differ in those count as a repetition.
    """
    return board.to_fen()


def _square_shade(square: Square) -> int:
    return (square.row + square.col) % 2


def insufficient_material(board: Board) -> bool:
    """
    Neither side can ever deliver mate
    ----

    * king vs king
    * king + bishop/knight vs king (either side)
    * king + bishop vs king + bishop, with both bishops on the same colored squares

    Anything else (a single pawn, rook, or queen included) is considered enough material.
    """
    remaining: dict[Color, list[tuple[PieceType, Square]]] = {
        Color.WHITE: [],
        Color.BLACK: [],
    }
    for color, pieces in remaining.items():
        for square in board.locate_color(color):
            piece_type = board.piece(square).type
            if piece_type != PieceType.KING:
                pieces.append((piece_type, square))

    white, black = remaining[Color.WHITE], remaining[Color.BLACK]
    if not white and not black:
        return True

    if len(white) + len(black) == 1:
        only_piece_type, _ = (white + black)[0]
        return only_piece_type in MINOR_PIECES

    if len(white) == 1 and len(black) == 1:
        white_type, white_square = white[0]
        black_type, black_square = black[0]
        return (
            white_type == PieceType.BISHOP
            and black_type == PieceType.BISHOP
            and _square_shade(white_square) == _square_shade(black_square)
        )

    return False


def fifty_move_rule(game: DrawRecord) -> bool:
    """No pawn move and no capture during the last 100 half-moves"""
    if len(game.move_log) < FIFTY_MOVE_HALF_MOVES:
        return False
    recent = game.move_log[-FIFTY_MOVE_HALF_MOVES:]
    return not any(entry.is_pawn_move or entry.is_capture for entry in recent)


def threefold_repetition(game: DrawRecord) -> bool:
    """Check if the current position occurs (at least) 3 times in the history"""
    if len(game.position_history) < MIN_REPETITION_HISTORY:
        return False
    current = position_fingerprint(game.board)
    return game.position_history.count(current) >= REPETITION_COUNT


def evaluate_draw(game: DrawRecord) -> Optional[DrawReason]:
    """First draw reason that applies to the side to move, or None."""
    if is_stalemate(game.board, game.color_to_move, game.castling_rights, game):
        return DrawReason.STALEMATE
    if insufficient_material(game.board):
        return DrawReason.INSUFFICIENT_MATERIAL
    if fifty_move_rule(game):
        return DrawReason.FIFTY_MOVE_RULE
    if threefold_repetition(game):
        return DrawReason.THREEFOLD_REPETITION
    return None
