"""
The Game class is the entrypoint into the rules engine.
It owns the authoritative game state and is responsible for orchestrating all the rules required to play a turn:
turn validation -> special move detection -> legality -> execution -> bookkeeping -> status update.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    GameOverError,
    IllegalCastlingError,
    IllegalEnPassantError,
    IllegalMoveError,
    InvalidPromotionChoiceError,
    NoPieceAtSourceError,
    WrongTurnError,
)
from src.core.shared_types import (
    FINISHED_STATUSES,
    DrawReason,
    MoveKind,
    Status,
    Winner,
)
from src.engine.attacks import is_in_check
from src.engine.board import Board, relocate
from src.engine.castling import (
    CastlingRights,
    can_castle,
    execute_castling,
    is_castling_move,
    resolve_castling_side,
)
from src.engine.draw import evaluate_draw, position_fingerprint
from src.engine.en_passant import execute_en_passant, is_en_passant_possible
from src.engine.legality import all_legal_moves, is_checkmate, is_move_legal_and_safe
from src.engine.move_log import MoveLogEntry
from src.engine.moves import Move
from src.engine.pieces import Color, Piece, PieceType
from src.engine.promotion import (
    PromotionChoice,
    execute_promotion,
    is_promotion,
    is_valid_promotion_choice,
    parse_promotion_choice,
)
from src.engine.square import Square, SquareLike, as_square

_LOGGER = logging.getLogger(__name__)

WINNER_BY_COLOR: dict[Color, Winner] = {
    Color.WHITE: Winner.WHITE,
    Color.BLACK: Winner.BLACK,
}


@dataclass
class Game:
    board: Board
    color_to_move: Color = Color.WHITE
    move_log: list[MoveLogEntry] = field(default_factory=list)
    move_count: int = 0
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    status: Status = Status.ACTIVE
    winner: Optional[Winner] = None
    draw_reason: Optional[DrawReason] = None
    # fingerprint of every position reached, the starting one included
    position_history: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.position_history:
            self.position_history.append(position_fingerprint(self.board))

    @classmethod
    def new_game(
        cls,
        starting_position: Optional[str] = None,
        color_to_move: Color = Color.WHITE,
    ) -> Self:
        """
        Standard starting position, white to move, full castling rights.
        A custom piece placement (FEN placement field) can be supplied to start from elsewhere.
        """
        board = (
            Board.from_fen(starting_position) if starting_position else Board.initial()
        )
        return cls(board=board, color_to_move=color_to_move)

    # --- QUERIES ---
    @property
    def current_player(self) -> Color:
        return self.color_to_move

    @property
    def last_move(self) -> Optional[MoveLogEntry]:
        return self.move_log[-1] if self.move_log else None

    @property
    def is_game_over(self) -> bool:
        return self.status in FINISHED_STATUSES

    def is_in_check(self, color: Optional[Color] = None) -> bool:
        return is_in_check(self.board, color or self.color_to_move)

    def legal_moves(self, color: Optional[Color] = None) -> list[Move]:
        """Move hints: every legal move for `color` (default: the side to move)."""
        return all_legal_moves(
            self.board, color or self.color_to_move, self.castling_rights, self
        )

    def is_legal(self, from_square: SquareLike, to_square: SquareLike) -> bool:
        return is_move_legal_and_safe(
            self.board, from_square, to_square, self.castling_rights, self
        )

    # --- THE ONLY WAY TO ADVANCE THE GAME ---
    def make_move(
        self,
        from_square: SquareLike,
        to_square: SquareLike,
        promotion: Optional[PromotionChoice] = None,
    ) -> MoveLogEntry:
        """
        Attempt to make a move
        -----

        1. there must be a piece to move
        2. it must be that piece's turn
        3. classify: castling, en passant, or a regular move (possibly a promotion)
        4. validate the move according to its class
        5. update the board (castling moves king + rook, en passant removes the passed pawn, promotion swaps the pawn)
        6. update the log of moves
        7. update castling rights
        8. switch the side to move
        9. update the history of positions
        10. update game status (draw, checkmate, check)

        Nothing is changed before all validation passed: a rejected move leaves the game as it was.
        """
        if self.is_game_over:
            raise GameOverError(f"Game is over. status: {self.status}")

        start = as_square(from_square)
        end = as_square(to_square)

        # 1 + 2
        piece = self.board.piece(start)
        if piece.is_empty:
            raise NoPieceAtSourceError(f"There is no piece on {start}")
        if piece.color != self.color_to_move:
            raise WrongTurnError(
                f"It is not {piece.color.name.lower()}'s turn. Waiting for {self.color_to_move.name.lower()} to move first."
            )

        # 3 + 4
        kind = self._classify_move(start, end, piece)
        self._validate_move(start, end, kind)
        promote_to = self._resolve_promotion(kind, promotion)

        # 5 + 6
        entry = self._execute_move(start, end, piece, kind, promote_to)
        self.move_log.append(entry)

        # 7 + 8 + 9
        self.castling_rights = self.castling_rights.update(start, end)
        self.color_to_move = self.color_to_move.opponent
        self.move_count += 1
        self.position_history.append(position_fingerprint(self.board))

        _LOGGER.debug("Move %d played: %s", entry.move_number, entry.notation)

        # 10
        self._update_game_status(mover=piece.color)
        return entry

    # -- PRIVATE HELPERS ---
    def _classify_move(self, start: Square, end: Square, piece: Piece) -> MoveKind:
        if is_castling_move(self.board, start, end):
            return MoveKind.CASTLING
        if is_en_passant_possible(self, start, end, self.board):
            return MoveKind.EN_PASSANT
        if is_promotion(start, end, piece):
            return MoveKind.PROMOTION
        return MoveKind.NORMAL

    def _validate_move(self, start: Square, end: Square, kind: MoveKind) -> None:
        if kind == MoveKind.CASTLING:
            color, side = resolve_castling_side(start, end)
            if not can_castle(self.board, color, side, self.castling_rights):
                _LOGGER.debug("Rejected castling %s-%s", start, end)
                raise IllegalCastlingError(
                    f"Cannot castle {side.value} from {start} to {end}"
                )
            return

        if not is_move_legal_and_safe(
            self.board, start, end, self.castling_rights, self
        ):
            _LOGGER.debug("Rejected %s move %s-%s", kind, start, end)
            if kind == MoveKind.EN_PASSANT:
                raise IllegalEnPassantError(f"En passant not allowed: {start}-{end}")
            raise IllegalMoveError(f"Move not allowed: {start}-{end}", kind)

    def _resolve_promotion(
        self, kind: MoveKind, promotion: Optional[PromotionChoice]
    ) -> Optional[PieceType]:
        """Promote to a queen unless told otherwise. A choice only matters for a promotion move."""
        if kind != MoveKind.PROMOTION:
            return None
        if promotion is None:
            return PieceType.QUEEN
        if not is_valid_promotion_choice(promotion):
            raise InvalidPromotionChoiceError(
                f"Cannot promote to {promotion!r}. Pick a queen, rook, bishop or knight."
            )
        return parse_promotion_choice(promotion)

    def _execute_move(
        self,
        start: Square,
        end: Square,
        piece: Piece,
        kind: MoveKind,
        promote_to: Optional[PieceType],
    ) -> MoveLogEntry:
        """Update the board and return the log entry describing what happened"""
        target = self.board.piece(end)
        captured = None if target.is_empty else target

        if kind == MoveKind.CASTLING:
            color, side = resolve_castling_side(start, end)
            execute_castling(self.board, color, side)
        elif kind == MoveKind.EN_PASSANT:
            captured = execute_en_passant(self.board, start, end)
        else:
            relocate(self.board, start, end)
            if promote_to is not None:
                execute_promotion(self.board, end, promote_to)

        return MoveLogEntry(
            move_number=len(self.move_log) + 1,
            from_square=start.to_algebraic(),
            to_square=end.to_algebraic(),
            piece=piece,
            captured=captured,
            color=piece.color,
            kind=kind,
            promoted_to=promote_to,
        )

    def _update_game_status(self, mover: Color) -> None:
        """Performs checks to see if game has ended and changes status accordingly.

        NOTE the side to move has already switched. We judge the position of the opponent of the player that just moved.
        """
        self.winner = None
        self.draw_reason = None

        draw_reason = evaluate_draw(self)
        if draw_reason is not None:
            self.status = (
                Status.STALEMATE
                if draw_reason == DrawReason.STALEMATE
                else Status.DRAW
            )
            self.winner = Winner.DRAW
            self.draw_reason = draw_reason
            _LOGGER.info("Game drawn: %s", draw_reason)
        elif is_checkmate(self.board, self.color_to_move, self.castling_rights, self):
            self.status = Status.CHECKMATE
            self.winner = WINNER_BY_COLOR[mover]
            _LOGGER.info("Checkmate, %s wins", self.winner)
        elif is_in_check(self.board, self.color_to_move):
            self.status = Status.CHECK
        else:
            self.status = Status.ACTIVE
