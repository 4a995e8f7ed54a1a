"""
Notation parsing: turn what the player typed into a Move.

Recognized forms, tried in this order:

1. castling:                      "O-O", "0-0", "O-O-O", "0-0-0"
2. coordinates + promotion piece: "e7e8q"
3. pawn capture:                  "exd5"
4. pawn push:                     "e4"
5. coordinates:                   "e2e4"
6. piece + file/rank + square:    "Nbd7", "R1a3"
7. piece + square:                "Nf3"

The short forms need the current position to find out which piece is meant:
the candidates are run through the legality check, and exactly one of them must remain.
"""

import re
from typing import Optional

from loguru import logger

from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, castling_direction
from src.chess.moves import PAWN_DIRECTION, PROMOTION_ROW, Move
from src.chess.pieces import CHAR_TO_PIECE, Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, FILE_NAMES, Square
from src.chess.validation import is_legal_move
from src.core.exceptions import NotationError

CASTLE_KING_SIDE_PATTERN = re.compile(r"^(O-O|0-0)$")
CASTLE_QUEEN_SIDE_PATTERN = re.compile(r"^(O-O-O|0-0-0)$")
PROMOTION_PATTERN = re.compile(r"^([a-h][1-8])([a-h][1-8])([qrbnQRBN])$")
PAWN_CAPTURE_PATTERN = re.compile(r"^([a-h])x([a-h][1-8])$")
PAWN_PUSH_PATTERN = re.compile(r"^([a-h][1-8])$")
COORDINATE_PATTERN = re.compile(r"^([a-h][1-8])([a-h][1-8])$")
DISAMBIGUATED_PIECE_PATTERN = re.compile(r"^([NBRQK])([a-h1-8])([a-h][1-8])$")
PIECE_PATTERN = re.compile(r"^([NBRQK])([a-h][1-8])$")


def parse_move(notation: str, board: Board) -> Move:
    """
    Parse a move for the side to move.
    ---

    Raises NotationError when the text matches none of the forms, or when the short forms
    do not point at exactly one piece. Never changes the board.
    """
    text = notation.strip()
    if not text:
        raise NotationError("Empty move.")

    if CASTLE_KING_SIDE_PATTERN.match(text):
        return _castling_move(board.color_to_move, king_side=True)

    if CASTLE_QUEEN_SIDE_PATTERN.match(text):
        return _castling_move(board.color_to_move, king_side=False)

    match = PROMOTION_PATTERN.match(text)
    if match:
        return _promotion_move(board, *match.groups())

    match = PAWN_CAPTURE_PATTERN.match(text)
    if match:
        return _pawn_capture_move(board, *match.groups())

    match = PAWN_PUSH_PATTERN.match(text)
    if match:
        return _pawn_push_move(board, match.group(1))

    if COORDINATE_PATTERN.match(text):
        return Move.from_uci(text)

    match = DISAMBIGUATED_PIECE_PATTERN.match(text)
    if match:
        piece_char, disambiguator, destination = match.groups()
        return _piece_move(board, piece_char, destination, disambiguator)

    match = PIECE_PATTERN.match(text)
    if match:
        piece_char, destination = match.groups()
        return _piece_move(board, piece_char, destination)

    raise NotationError(
        f"Invalid move format: {text!r}. Use e.g. 'e2e4', 'e4', 'exd5', 'Nf3', 'Nbd7', 'N1d7', 'e7e8q' or 'O-O'."
    )


# -- ONE HELPER PER FORM ---
def _castling_move(color: Color, king_side: bool) -> Move:
    """Only the king's squares are part of the move, the rook's squares follow from the direction."""
    squares = CASTLING_RULES[castling_direction(color, king_side)]
    return Move(
        squares.king_from,
        squares.king_to,
        kingside_castle=king_side,
        queenside_castle=not king_side,
    )


def _promotion_move(
    board: Board, source: str, destination: str, piece_char: str
) -> Move:
    from_square = Square.from_algebraic(source)
    to_square = Square.from_algebraic(destination)
    color = board.color_to_move

    if board.piece(from_square) != Piece(PieceType.PAWN, color):
        raise NotationError(f"No {color.name.lower()} pawn on {source} to promote.")
    if to_square.row != PROMOTION_ROW[color]:
        raise NotationError(f"{destination} is not a promotion square for {color.name.lower()}.")

    return Move(from_square, to_square, promote_to=CHAR_TO_PIECE[piece_char.lower()])


def _pawn_capture_move(board: Board, source_file: str, destination: str) -> Move:
    """The pawn came from one rank behind the destination (behind = seen from the side to move)."""
    to_square = Square.from_algebraic(destination)
    color = board.color_to_move
    from_square = Square(to_square.row - PAWN_DIRECTION[color], FILE_NAMES.index(source_file))

    if not from_square.is_within_bounds() or board.piece(from_square) != Piece(
        PieceType.PAWN, color
    ):
        raise NotationError(
            f"No {color.name.lower()} pawn on the {source_file}-file can capture on {destination}."
        )
    return Move(from_square, to_square)


def _pawn_push_move(board: Board, destination: str) -> Move:
    """Try the squares one and two behind the destination."""
    to_square = Square.from_algebraic(destination)
    color = board.color_to_move
    backwards = -PAWN_DIRECTION[color]

    candidates: list[Move] = []
    for distance in (1, 2):
        from_square = to_square.offset(distance * backwards, 0)
        if not from_square.is_within_bounds():
            continue
        if board.piece(from_square) != Piece(PieceType.PAWN, color):
            continue
        move = Move(from_square, to_square)
        if is_legal_move(board, move):
            candidates.append(move)

    if not candidates:
        raise NotationError(f"No {color.name.lower()} pawn can move to {destination}.")
    if len(candidates) > 1:
        raise NotationError(f"Ambiguous pawn move to {destination}.")
    return candidates[0]


def _piece_move(
    board: Board,
    piece_char: str,
    destination: str,
    disambiguator: Optional[str] = None,
) -> Move:
    """Find the one piece of the named type that can legally go to the destination."""
    piece_type = CHAR_TO_PIECE[piece_char.lower()]
    to_square = Square.from_algebraic(destination)
    color = board.color_to_move

    candidates: list[Move] = []
    for from_square in board.locate_pieces(piece_type, color):
        if disambiguator is not None and not _matches_disambiguator(
            from_square, disambiguator
        ):
            continue
        move = Move(from_square, to_square)
        if is_legal_move(board, move):
            candidates.append(move)

    name = piece_type.name.lower()
    if not candidates:
        origin = f" from {disambiguator}" if disambiguator else ""
        raise NotationError(f"No {name}{origin} can legally move to {destination}.")

    if len(candidates) > 1:
        if disambiguator:
            raise NotationError(
                f"Still ambiguous {name} move to {destination} even with disambiguator {disambiguator}."
            )
        raise NotationError(
            f"Ambiguous {name} move to {destination}. Specify the starting file or rank (e.g. 'Nbd7' or 'N1d7')."
        )

    logger.debug(f"{piece_char}{disambiguator or ''}{destination} resolved to {candidates[0].to_uci()}")
    return candidates[0]


def _matches_disambiguator(square: Square, disambiguator: str) -> bool:
    """A letter names the file the piece stands on, a digit its rank."""
    if disambiguator.isdigit():
        return BOARD_DIMENSIONS[0] - int(disambiguator) == square.row
    return FILE_NAMES.index(disambiguator) == square.col
