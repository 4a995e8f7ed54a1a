"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a single move:
parse the notation, check legality, and update the board.
"""

from dataclasses import dataclass, field
from random import Random
from typing import Optional, Self

from loguru import logger

from src.chess import setup
from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, find_castling_direction
from src.chess.check import is_in_check
from src.chess.moves import (
    PAWN_DIRECTION,
    Move,
    en_passant_capture_square,
    is_double_pawn_push,
    is_en_passant,
    is_pawn_push_to_promotion_square,
)
from src.chess.notation import parse_move
from src.chess.pieces import PROMOTION_OPTIONS, Color, Piece, PieceType
from src.chess.square import Square
from src.chess.validation import generate_legal_moves, is_legal_move
from src.core.exceptions import NotationError, PromotionError
from src.core.shared_types import MoveResult


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    moves: list[Move] = field(default_factory=list)
    pending_promotion: Optional[Square] = None

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, White to move."""
        return cls(board=Board.starting_position())

    def attempt_move(self, notation: str) -> MoveResult:
        """
        Attempt to make a move written in one of the supported notations
        -----

        Anything that cannot be parsed, or is not legal, is INVALID and leaves the board untouched.
        """
        if self.pending_promotion is not None:
            logger.info(
                f"Promotion on {self.pending_promotion.to_algebraic()} is pending. Choose a piece first."
            )
            return MoveResult.INVALID

        try:
            move = parse_move(notation, self.board)
        except NotationError as exc:
            logger.info(f"Invalid move {notation!r}: {exc}")
            return MoveResult.INVALID

        return self.make_move(move)

    def make_move(self, move: Move) -> MoveResult:
        """Check legality of an already parsed move, and if legal, play it."""
        if self.pending_promotion is not None:
            return MoveResult.INVALID

        if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
            logger.info(f"Move leaves the board: {move}")
            return MoveResult.INVALID

        if not is_legal_move(self.board, move):
            logger.info(f"Illegal move: {move.to_notation()}")
            return MoveResult.INVALID

        return self._execute(move)

    def finalize_promotion(self, square: Square, piece_type: PieceType) -> None:
        """
        Replace the pawn waiting on the far rank with the chosen piece. Only now does the turn pass to the opponent.
        """
        if self.pending_promotion is None:
            raise PromotionError("There is no promotion pending.")
        if square != self.pending_promotion:
            raise PromotionError(
                f"The pending promotion is on {self.pending_promotion.to_algebraic()}, not on {square.to_algebraic()}."
            )
        if piece_type not in PROMOTION_OPTIONS:
            raise PromotionError(f"Cannot promote to a {piece_type.name.lower()}.")

        self._promote_pawn(square, piece_type)
        self.pending_promotion = None
        self.board.switch_turn()

    def legal_moves(self) -> list[str]:
        """All legal moves of the side to move, as notation strings."""
        return [move.to_notation() for move in generate_legal_moves(self.board)]

    def legal_move_sample(self, rng: Optional[Random] = None) -> Optional[str]:
        """
        One legal move for the side to move (None if there is none).
        The first one found, unless a random generator is given to pick with.
        """
        legal_moves = self.legal_moves()
        if not legal_moves:
            logger.info(f"No legal moves found for {self.board.color_to_move.name.lower()}.")
            return None
        if rng is None:
            return legal_moves[0]
        return rng.choice(legal_moves)

    def is_in_check(self, color: Color) -> bool:
        return is_in_check(self.board, color)

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.board.piece(square)

    def side_to_move(self) -> Color:
        return self.board.color_to_move

    # -- MANUAL SETUP ---
    def reset_to_empty(self) -> None:
        setup.reset_to_empty(self.board)
        self.moves.clear()
        self.pending_promotion = None

    def place_piece(self, notation: str) -> bool:
        return setup.place_piece(self.board, notation)

    def set_side_to_move(self, color: Color) -> None:
        setup.set_side_to_move(self.board, color)

    # -- PRIVATE HELPERS ---
    def _execute(self, move: Move) -> MoveResult:
        """
        Update the board with a move that is known to be legal
        -----

        1. remove the captured piece (en passant: the pawn next to you, not the one on the target square)
        2. move the piece (if castling, move the rook as well)
        3. revoke castling rights if needed
        4. set the en passant square for the next turn
        5. promotion: either promote right away, or wait for the choice of piece
        6. switch turn (unless promotion is pending)
        """
        board = self.board
        moving_piece = board.piece(move.from_square)
        color = moving_piece.color

        # NOTE: ask all questions about the move BEFORE the board changes
        en_passant = is_en_passant(move, board)
        double_push = is_double_pawn_push(move, board)
        promotion = is_pawn_push_to_promotion_square(move, board)
        castling = find_castling_direction(color, move.from_square, move.to_square)
        is_castling = moving_piece.type == PieceType.KING and castling is not None

        if en_passant:
            captured = board.remove_piece(en_passant_capture_square(move))
            logger.info(f"En passant capture on {move.to_square.to_algebraic()}!")
        else:
            captured = board.piece(move.to_square)

        board.move_piece(move.from_square, move.to_square)

        if is_castling:
            rook_squares = CASTLING_RULES[castling]
            board.move_piece(rook_squares.rook_from, rook_squares.rook_to)
            logger.info(f"Castling performed ({castling.name.lower()}).")

        board.castling_rights.record_move(moving_piece, move.from_square)
        board.castling_rights.record_capture(captured, move.to_square)

        board.en_passant_square = (
            move.from_square.offset(PAWN_DIRECTION[color], 0) if double_push else None
        )

        self.moves.append(move)
        logger.info(f"{color.name.lower()} played {move.to_notation()}")

        if promotion:
            if move.promote_to is None:
                self.pending_promotion = move.to_square
                logger.info(
                    f"{color.name.lower()} pawn reached promotion square {move.to_square.to_algebraic()}!"
                )
                return MoveResult.PROMOTION_PENDING
            self._promote_pawn(move.to_square, move.promote_to)

        board.switch_turn()
        return MoveResult.VALID

    def _promote_pawn(self, square: Square, piece_type: PieceType) -> None:
        """Swap the pawn for a brand new piece of the same color"""
        pawn = self.board.piece(square)
        self.board.place_piece(Piece(piece_type, pawn.color), square)
        logger.info(
            f"{pawn.color.name.lower()} pawn promoted to {piece_type.name.lower()} on {square.to_algebraic()}!"
        )
