"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()


CHAR_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_CHAR: dict[PieceType, str] = {
    value: key for key, value in CHAR_TO_PIECE.items()
}

# Pieces a pawn may turn into on the far rank
PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
]


def opponent(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


@dataclass(frozen=True)
class Piece:
    """
    Immutable: a promoted pawn is replaced by a brand new Piece, never changed in place.
    """

    type: PieceType
    color: Color

    @classmethod
    def from_char(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = CHAR_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_char(self) -> str:
        """Display glyph, e.g. 'K' for the white king and 'k' for the black one."""
        return (
            PIECE_TO_CHAR[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_CHAR[self.type].lower()
        )
