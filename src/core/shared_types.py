"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    ACTIVE = "active"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


# --- Statuses after which no further move is accepted
FINISHED_STATUSES: frozenset[Status] = frozenset(
    {Status.CHECKMATE, Status.STALEMATE, Status.DRAW}
)


class Winner(StrEnum):
    WHITE = "white"
    BLACK = "black"
    DRAW = "draw"


class DrawReason(StrEnum):
    STALEMATE = "stalemate"
    INSUFFICIENT_MATERIAL = "insufficient material"
    FIFTY_MOVE_RULE = "fifty-move rule"
    THREEFOLD_REPETITION = "threefold repetition"


class MoveKind(StrEnum):
    """How the orchestrator classified a move before validating it."""

    NORMAL = "normal"
    CASTLING = "castling"
    EN_PASSANT = "en passant"
    PROMOTION = "promotion"


# --- Boundary-layer spelling of colors / promotion targets. The engine has its own enums (src/engine/pieces.py)
class Side(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PromotionPiece(StrEnum):
    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"
