"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.engine.board import Board
from src.engine.game import Game
from src.engine.move_log import MoveLogEntry
from src.engine.pieces import Piece


@pytest.fixture
def kings_only_board() -> Board:
    """
    Create a board with only kings on their canonical starting squares.
    Because making a move involves inferring if a king is under attack, moves cannot be played on a board without one of the kings.
    """
    return Board.from_fen("4k3/8/8/8/8/8/8/4K3")


@pytest.fixture
def castling_board() -> Board:
    """Create a board with only the Kings and the Rooks. Ready to perform any castling move (if allowed)."""
    return Board.from_fen("r3k2r/8/8/8/8/8/8/R3K2R")


@pytest.fixture
def log_entry() -> Callable[..., MoveLogEntry]:
    """Call the inner function to create a log entry. Only the fields that matter for the test need to be given."""

    def _create_entry(
        from_square: str,
        to_square: str,
        fen_char: str = "N",
        captured: str | None = None,
        move_number: int = 1,
    ) -> MoveLogEntry:
        piece = Piece.from_fen(fen_char)
        return MoveLogEntry(
            move_number=move_number,
            from_square=from_square,
            to_square=to_square,
            piece=piece,
            captured=Piece.from_fen(captured) if captured else None,
            color=piece.color,
        )

    return _create_entry


@pytest.fixture
def play() -> Callable[[Game, list[str]], Game]:
    """Play a list of UCI-like moves ('e2e4', 'a7a8n') on the game"""

    def _play(game: Game, moves: list[str]) -> Game:
        for move in moves:
            promotion = move[4] if len(move) == 5 else None
            game.make_move(move[:2], move[2:4], promotion)
        return game

    return _play

