"""Orchestration of communication from the console to the chess engine (and the reverse direction)."""

from random import Random
from typing import Optional

from loguru import logger

from src.chess.game import Game
from src.chess.pieces import PROMOTION_OPTIONS, Color
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import GameStateError
from src.core.models import (
    GameResponse,
    MoveRequest,
    PlacementRequest,
    PromotionRequest,
)
from src.core.shared_types import MoveResult, Status

FINISHED = (Status.CHECKMATE, Status.STALEMATE)


class ChessService:
    """
    Orchestration of a single game for the console.

    The random generator is handed in from outside, so a game against the computer can be replayed with a fixed seed.
    """

    def __init__(self, game: Game, rng: Optional[Random] = None) -> None:
        self.game = game
        self.rng = rng if rng is not None else Random()
        self._last_move: Optional[str] = None

    # -- PLAYING ---
    def submit_move(self, request: MoveRequest) -> GameResponse:
        """A human player typed a move."""
        self._assert_in_progress()
        result = self.game.attempt_move(request.notation)
        if result != MoveResult.INVALID:
            self._last_move = request.notation
        return self.snapshot(result)

    def promote(self, request: PromotionRequest) -> GameResponse:
        """The player picked the piece for the pawn waiting on the far rank."""
        square = Square.from_algebraic(request.square)
        self.game.finalize_promotion(square, request.piece_type)
        return self.snapshot(MoveResult.VALID)

    def play_random_move(self) -> GameResponse:
        """
        The computer's turn: a uniformly random legal move.
        A pawn reaching the far rank is promoted to a random piece straight away.
        """
        self._assert_in_progress()
        notation = self.game.legal_move_sample(self.rng)
        if notation is None:
            raise GameStateError("No legal moves left to play.")

        result = self.game.attempt_move(notation)
        if result == MoveResult.PROMOTION_PENDING:
            promotion_square = self.game.pending_promotion
            self.game.finalize_promotion(promotion_square, self.rng.choice(PROMOTION_OPTIONS))
            result = MoveResult.VALID

        self._last_move = notation
        logger.info(f"Computer played {notation}")
        return self.snapshot(result)

    # -- MANUAL SETUP ---
    def clear_board(self) -> GameResponse:
        self.game.reset_to_empty()
        self._last_move = None
        return self.snapshot()

    def place_piece(self, request: PlacementRequest) -> bool:
        return self.game.place_piece(request.placement)

    def set_side_to_move(self, color: Color) -> None:
        self.game.set_side_to_move(color)

    def start_from_setup(self) -> GameResponse:
        """Both kings must be on the board before anyone can move."""
        missing = [
            color.name.lower()
            for color in Color
            if not self.game.board.has_king(color)
        ]
        if missing:
            raise GameStateError(
                f"Cannot start the game: no {' and no '.join(missing)} king on the board."
            )
        return self.snapshot()

    # -- GAME STATE ---
    def status(self) -> Status:
        """
        * no legal moves and in check --> checkmate
        * no legal moves, not in check --> stalemate

        A board without both kings is still being set up, and has no status beyond that.
        """
        if not all(self.game.board.has_king(color) for color in Color):
            return Status.SETTING_UP

        color = self.game.side_to_move()
        in_check = self.game.is_in_check(color)
        has_legal_move = self.game.legal_move_sample() is not None
        if not has_legal_move:
            return Status.CHECKMATE if in_check else Status.STALEMATE
        return Status.CHECK if in_check else Status.IN_PROGRESS

    def snapshot(self, result: Optional[MoveResult] = None) -> GameResponse:
        pending = self.game.pending_promotion
        return GameResponse(
            board=self._board_rows(),
            side_to_move=self.game.side_to_move(),
            status=self.status(),
            result=result,
            last_move=self._last_move,
            pending_promotion=pending.to_algebraic() if pending else None,
        )

    # -- Internal helpers --
    def _assert_in_progress(self) -> None:
        status = self.status()
        if status == Status.SETTING_UP:
            raise GameStateError("Both kings must be on the board before playing.")
        if self.game.pending_promotion is None and status in FINISHED:
            raise GameStateError("The game is over.")

    def _board_rows(self) -> list[str]:
        rows: list[str] = []
        for row in range(BOARD_DIMENSIONS[0]):
            characters = []
            for col in range(BOARD_DIMENSIONS[1]):
                piece = self.game.piece_at(Square(row, col))
                characters.append(piece.to_char() if piece else ".")
            rows.append("".join(characters))
        return rows
