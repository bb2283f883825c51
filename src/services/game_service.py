"""Orchestration of communication from a caller (UI, AI) to the rules engine and back."""

import logging
from typing import Optional

from src.api.models import (
    GameStateResponse,
    LegalMovesResponse,
    MoveLogEntryResponse,
    MoveRequest,
)
from src.core.shared_types import Side
from src.engine.game import Game
from src.engine.move_log import MoveLogEntry
from src.engine.pieces import Color

_LOGGER = logging.getLogger(__name__)


class GameService:
    """Owns a single game. Engine errors are passed on to the caller unchanged."""

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game if game is not None else Game.new_game()

    def new_game(self, starting_position: Optional[str] = None) -> GameStateResponse:
        """Throw away the current game and start over."""
        self.game = Game.new_game(starting_position)
        _LOGGER.info("New game started")
        return self.get_game_state()

    def get_game_state(self) -> GameStateResponse:
        game = self.game
        return GameStateResponse(
            board=game.board.to_codes(),
            side_to_move=_side(game.color_to_move),
            status=game.status,
            winner=game.winner,
            draw_reason=game.draw_reason,
            in_check=game.is_in_check(),
            move_count=game.move_count,
            move_log=[_log_entry_response(entry) for entry in game.move_log],
        )

    def legal_moves(self) -> LegalMovesResponse:
        """Legal moves of the side to move, UCI encoded. Empty once the game is over."""
        moves = [] if self.game.is_game_over else self.game.legal_moves()
        return LegalMovesResponse(
            side_to_move=_side(self.game.color_to_move),
            legal_moves=[move.to_uci() for move in moves],
        )

    def make_move(self, request: MoveRequest) -> GameStateResponse:
        """Make a move attempt."""
        promotion = request.promote_to.value if request.promote_to else None
        self.game.make_move(request.from_square, request.to_square, promotion)
        return self.get_game_state()


# -- Internal helpers --
def _side(color: Color) -> Side:
    return Side[color.name]


def _log_entry_response(entry: MoveLogEntry) -> MoveLogEntryResponse:
    return MoveLogEntryResponse(
        move_number=entry.move_number,
        from_square=entry.from_square,
        to_square=entry.to_square,
        piece=entry.piece.to_fen(),
        captured=entry.captured.to_fen() if entry.captured is not None else None,
        color=_side(entry.color),
        notation=entry.notation,
    )
