"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
The console (higher) sends requests and receives responses in these formats, and never touches the Game directly.
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.pieces import PROMOTION_OPTIONS, Color, PieceType
from src.chess.setup import PLACEMENT_PATTERN
from src.chess.square import BOARD_DIMENSIONS, FILE_NAMES
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import MoveResult, Status


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False
    file_char, rank_char = value[0], value[1]
    if file_char not in FILE_NAMES:
        return False
    return rank_char.isdigit() and 1 <= int(rank_char) <= BOARD_DIMENSIONS[0]


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    notation: str

    @field_validator("notation")
    @classmethod
    def validate_notation(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InvalidRequestError("A move cannot be empty.")
        return value


class PromotionRequest(BaseModel):
    square: str
    piece_type: PieceType

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value

    @field_validator("piece_type")
    @classmethod
    def validate_piece_type(cls, value: PieceType) -> PieceType:
        if value not in PROMOTION_OPTIONS:
            raise InvalidRequestError(
                f"A pawn cannot promote to a {value.name.lower()}. Pick one from {', '.join(p.name.lower() for p in PROMOTION_OPTIONS)}."
            )
        return value


class PlacementRequest(BaseModel):
    placement: str

    @field_validator("placement")
    @classmethod
    def validate_placement(cls, value: str) -> str:
        value = value.strip()
        if not PLACEMENT_PATTERN.match(value):
            raise InvalidRequestError(
                f"Invalid placement format: {value!r}. Expected e.g. 'Nf3' (white knight on f3) or 'ke8' (black king on e8)."
            )
        return value


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    """
    Snapshot of the game after a request.
    `board` holds one string per rank (8th rank first), one character per file: the piece letter or '.' when empty.
    """

    board: list[str]
    side_to_move: Color
    status: Status
    result: Optional[MoveResult] = None
    last_move: Optional[str] = None
    pending_promotion: Optional[str] = None
