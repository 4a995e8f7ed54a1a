"""
Manual board setup: start from an empty board and place pieces one by one.

Only here do we limit how many pieces of each kind a side may have (during play, promotion can exceed these).
"""

import re

from loguru import logger

from src.chess.board import Board
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

PIECE_LIMITS: dict[PieceType, int] = {
    PieceType.KING: 1,
    PieceType.QUEEN: 1,
    PieceType.ROOK: 2,
    PieceType.KNIGHT: 2,
    PieceType.BISHOP: 2,
    PieceType.PAWN: 8,
}

# piece letter (upper case: White, lower case: Black) + square, ex. "Nf3" or "ke8"
PLACEMENT_PATTERN = re.compile(r"^([PNBRQKpnbrqk])([a-h][1-8])$")


def reset_to_empty(board: Board) -> None:
    board.clear()
    logger.info("Board cleared to a blank state.")


def place_piece(board: Board, notation: str) -> bool:
    """
    Place a single piece. Returns False (and leaves the board alone) when the notation cannot be read,
    or when the side already has the maximum number of pieces of that type.
    """
    match = PLACEMENT_PATTERN.match(notation.strip())
    if not match:
        logger.warning(
            f"Invalid placement format: {notation!r}. Expected e.g. 'Nf3' (white knight on f3) or 'ke8' (black king on e8)."
        )
        return False

    piece_char, square_name = match.groups()
    piece = Piece.from_char(piece_char)
    square = Square.from_algebraic(square_name)

    if not _can_place(board, piece, square):
        return False

    board.place_piece(piece, square)
    logger.info(
        f"Placed {piece.color.name.lower()} {piece.type.name.lower()} on {square_name}."
    )
    return True


def set_side_to_move(board: Board, color: Color) -> None:
    board.color_to_move = color


def _can_place(board: Board, piece: Piece, square: Square) -> bool:
    # placing the same piece on top of itself changes nothing
    if board.piece(square) == piece:
        return True

    limit = PIECE_LIMITS[piece.type]
    if board.count_pieces(piece.type, piece.color) >= limit:
        logger.warning(
            f"Cannot place more than {limit} {piece.color.name.lower()} {piece.type.name.lower()}(s)."
        )
        return False
    return True
