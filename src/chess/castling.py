"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square


class CastlingDirection(Enum):
    """The four castling directions. Values are the letters classically used for them (K/Q for White, k/q for Black)."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"

    @property
    def color(self) -> Color:
        return Color.WHITE if self.value.isupper() else Color.BLACK


KING_SIDE_TOKEN = "O-O"
QUEEN_SIDE_TOKEN = "O-O-O"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: Whether the king / rook are actually still there is checked by the validator.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    def king_path(self) -> tuple[Square, Square]:
        """The square the king passes through and the square it lands on. Neither may be under attack."""
        step = 1 if self.king_to.col > self.king_from.col else -1
        return self.king_from.offset(0, step), self.king_to

    def squares_between(self) -> list[Square]:
        """Squares strictly between king and rook. All of them must be empty to castle."""
        low, high = sorted([self.king_from.col, self.rook_from.col])
        return [Square(self.king_from.row, col) for col in range(low + 1, high)]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}

def castling_direction(color: Color, king_side: bool) -> CastlingDirection:
    if color == Color.WHITE:
        return (
            CastlingDirection.WHITE_KING_SIDE
            if king_side
            else CastlingDirection.WHITE_QUEEN_SIDE
        )
    return (
        CastlingDirection.BLACK_KING_SIDE
        if king_side
        else CastlingDirection.BLACK_QUEEN_SIDE
    )


def find_castling_direction(
    color: Color, from_square: Square, to_square: Square
) -> Optional[CastlingDirection]:
    """Which castling move (if any) has the king of `color` travelling between the given squares."""
    for direction, squares in CASTLING_RULES.items():
        if direction.color != color:
            continue
        if squares.king_from == from_square and squares.king_to == to_square:
            return direction
    return None


def _no_king_moved() -> dict[Color, bool]:
    return {Color.WHITE: False, Color.BLACK: False}


def _no_rook_moved() -> dict[CastlingDirection, bool]:
    return {direction: False for direction in CastlingDirection}


@dataclass
class CastlingRights:
    """
    Six independent 'has moved' flags: one per king, one per rook (each rook is tracked on its own).
    Castling in a direction is only possible while neither the king nor the rook of that direction has moved.
    """

    king_moved: dict[Color, bool] = field(default_factory=_no_king_moved)
    rook_moved: dict[CastlingDirection, bool] = field(default_factory=_no_rook_moved)

    def allows(self, direction: CastlingDirection) -> bool:
        return not (self.king_moved[direction.color] or self.rook_moved[direction])

    def record_move(self, piece: Piece, from_square: Square) -> None:
        """Revoke rights when a king moves, or a rook leaves its corner."""
        if piece.type == PieceType.KING:
            self.king_moved[piece.color] = True
        elif piece.type == PieceType.ROOK:
            self._mark_rook_on(from_square, piece.color)

    def record_capture(self, captured: Optional[Piece], square: Square) -> None:
        """A rook taken on its starting corner can no longer castle (even if another rook later lands there)."""
        if captured is not None and captured.type == PieceType.ROOK:
            self._mark_rook_on(square, captured.color)

    def reset(self) -> None:
        self.king_moved = _no_king_moved()
        self.rook_moved = _no_rook_moved()

    def _mark_rook_on(self, square: Square, color: Color) -> None:
        for direction, squares in CASTLING_RULES.items():
            if direction.color == color and squares.rook_from == square:
                self.rook_moved[direction] = True
