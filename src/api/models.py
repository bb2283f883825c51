"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidCoordinateError, InvalidRequestError
from src.core.shared_types import DrawReason, PromotionPiece, Side, Status, Winner
from src.engine.square import to_index

# FEN letter of a piece ('P', 'n', ...); None for an empty square
PieceCode = Optional[str]


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    from_square: str
    to_square: str
    promote_to: Optional[PromotionPiece] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        try:
            to_index(value)
        except InvalidCoordinateError as exc:
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            ) from exc
        return value


# --- RESPONSE MODELS ---
class MoveLogEntryResponse(BaseModel):
    move_number: int
    from_square: str
    to_square: str
    piece: str
    captured: PieceCode
    color: Side
    notation: str


class GameStateResponse(BaseModel):
    board: list[list[PieceCode]]
    side_to_move: Side
    status: Status
    winner: Optional[Winner]
    draw_reason: Optional[DrawReason]
    in_check: bool
    move_count: int
    move_log: list[MoveLogEntryResponse]


class LegalMovesResponse(BaseModel):
    side_to_move: Side
    legal_moves: list[str]
