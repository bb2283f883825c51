"""
Record of the moves played, plus the minimal interface the rule modules need from a game.

The log is what en passant detection and the fifty-move rule look back on.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from src.core.shared_types import MoveKind
from src.engine.board import Board
from src.engine.pieces import PIECE_TO_FEN, Color, Piece, PieceType
from src.engine.square import Square


@dataclass(frozen=True)
class MoveLogEntry:
    """Snapshot of a move after it has been accepted and played."""

    move_number: int
    from_square: str
    to_square: str
    piece: Piece
    captured: Optional[Piece]
    color: Color
    kind: MoveKind = MoveKind.NORMAL
    promoted_to: Optional[PieceType] = None

    @property
    def is_pawn_move(self) -> bool:
        return self.piece.type == PieceType.PAWN

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_double_pawn_push(self) -> bool:
        """Pawn advanced two squares along its file"""
        if not self.is_pawn_move:
            return False
        start = Square.from_algebraic(self.from_square)
        end = Square.from_algebraic(self.to_square)
        return start.col == end.col and abs(start.row - end.row) == 2

    @property
    def notation(self) -> str:
        """
        Long algebraic notation for the log
        ---

        * e2-e4, Ng1-f3        normal moves
        * e4xd5, Bf1xb5        captures
        * e5xd6 e.p.           en passant
        * e7-e8=Q, d7xe8=N     promotion
        * 0-0, 0-0-0           castling (king side / queen side)
        """
        if self.kind == MoveKind.CASTLING:
            king_side = self.to_square[0] > self.from_square[0]
            return "0-0" if king_side else "0-0-0"

        piece_letter = "" if self.is_pawn_move else PIECE_TO_FEN[self.piece.type].upper()
        separator = "x" if self.is_capture else "-"
        notation = f"{piece_letter}{self.from_square}{separator}{self.to_square}"

        if self.kind == MoveKind.EN_PASSANT:
            notation += " e.p."
        if self.promoted_to is not None:
            notation += f"={PIECE_TO_FEN[self.promoted_to].upper()}"
        return notation


class GameRecord(Protocol):
    """Just the parts of a game the rule modules need"""

    board: Board
    move_log: list[MoveLogEntry]
