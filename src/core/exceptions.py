"""
Error taxonomy of the rules engine.

Every failure is a rejected operation: it is raised to the immediate caller and the game it was
attempted on is left untouched.
"""

from typing import Optional

from src.core.shared_types import MoveKind


class ChessEngineError(Exception):
    """Base class for everything the engine raises on purpose."""


class InvalidCoordinateError(ChessEngineError, ValueError):
    """Malformed or out-of-range square reference."""


class InvalidPositionError(ChessEngineError, ValueError):
    """Piece placement string that does not describe an 8x8 board."""


class EmptySourceError(ChessEngineError):
    """Raw board operation on a square that holds no piece."""


class NoPieceAtSourceError(EmptySourceError):
    """A move was requested from an empty square."""


class GameStateError(ChessEngineError):
    """The request does not fit the current state of the game."""


class WrongTurnError(GameStateError):
    """Move attempted by the side that is not to move."""


class GameOverError(GameStateError):
    """Move attempted after checkmate, stalemate, or a draw."""


class IllegalMoveError(ChessEngineError):
    """Move fails pattern, path, capture, or king-safety rules."""

    def __init__(self, message: str, move_kind: Optional[MoveKind] = None) -> None:
        super().__init__(message)
        self.move_kind = move_kind if move_kind is not None else MoveKind.NORMAL


class IllegalCastlingError(IllegalMoveError):
    def __init__(self, message: str) -> None:
        super().__init__(message, MoveKind.CASTLING)


class IllegalEnPassantError(IllegalMoveError):
    def __init__(self, message: str) -> None:
        super().__init__(message, MoveKind.EN_PASSANT)


class InvalidPromotionChoiceError(ChessEngineError, ValueError):
    """Explicit promotion target is not a queen, rook, bishop or knight."""


class InvalidRequestError(ChessEngineError, ValueError):
    """Boundary-layer input that cannot be interpreted."""
