"""
Legality of a single move, and the list of all legal moves.

A move is legal when, in this order:
1. both squares are on the board
2. a piece of the side to move stands on the source square
3. the destination is a different square, not occupied by your own piece
4. the piece can travel that way (geometry + nothing in the way, see moves.py)
5. pawns: straight ahead only onto an empty square, diagonally only to capture (or en passant)
6. afterwards, your own king is not in check

Castling counts as a two-square king move and has its own set of conditions (see `can_castle()`).
"""

from loguru import logger

from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, find_castling_direction
from src.chess.check import is_in_check, is_square_attacked
from src.chess.moves import (
    EN_PASSANT_ROW,
    GEOMETRY_RULES,
    Move,
    en_passant_capture_square,
    is_en_passant,
    is_pawn_push_to_promotion_square,
)
from src.chess.pieces import PROMOTION_OPTIONS, Piece, PieceType, opponent
from src.chess.square import all_squares


def is_legal_move(board: Board, move: Move) -> bool:
    """
    Decide if the move can be played in the current position.
    The board is left exactly as it was found.
    """
    # 1. bounds
    if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
        return False

    # 2. your own piece on the source square
    piece = board.piece(move.from_square)
    if piece is None or piece.color != board.color_to_move:
        return False

    # 3. cannot stay in place, and cannot capture your own piece
    if move.from_square == move.to_square:
        return False
    target = board.piece(move.to_square)
    if target is not None and target.color == piece.color:
        return False

    if not _matches_special_flags(board, move, piece):
        return False

    # 4. geometry (castling is the special king move of two squares)
    if _is_castling_attempt(move, piece):
        if not can_castle(board, move):
            return False
    elif not GEOMETRY_RULES[piece.type](move, board):
        return False

    # 5. pawns take diagonally, but push only onto empty squares
    if piece.type == PieceType.PAWN and not _pawn_occupation_allowed(board, move, piece):
        return False

    # 6. do not leave your own king in check
    return not leaves_king_in_check(board, move)


def leaves_king_in_check(board: Board, move: Move) -> bool:
    """
    Simulate the move, look at your own king, undo the move.
    ---

    Captures (including en passant) and the rook of a castling move are part of the simulation.
    """
    piece = board.piece(move.from_square)
    with board.simulate() as patch:
        if is_en_passant(move, board):
            patch.set(en_passant_capture_square(move), None)

        direction = (
            find_castling_direction(piece.color, move.from_square, move.to_square)
            if _is_castling_attempt(move, piece)
            else None
        )
        if direction is not None:
            rook_squares = CASTLING_RULES[direction]
            patch.move(rook_squares.rook_from, rook_squares.rook_to)

        patch.move(move.from_square, move.to_square)
        return is_in_check(board, piece.color)


def can_castle(board: Board, move: Move) -> bool:
    """
    Castling
    ---

    **you are allowed to castle if**

    * The king stands on its home square and moves two squares towards one of the corners.
    * Neither the king, nor the rook in that corner, has moved before.
    * That rook is actually there.
    * All squares in between king and rook are empty.
    * You are not currently in check (you cannot castle out of check).
    * The king does not pass through, or land on, a square that is under attack.
    """
    color = board.color_to_move
    direction = find_castling_direction(color, move.from_square, move.to_square)
    if direction is None:
        logger.debug(f"Invalid castling: {move.to_uci()} is not a castling move.")
        return False

    squares = CASTLING_RULES[direction]
    rook = board.piece(squares.rook_from)
    if rook != Piece(PieceType.ROOK, color):
        logger.debug(
            f"Invalid castling: no {color.name.lower()} rook on {squares.rook_from.to_algebraic()}."
        )
        return False

    if not board.castling_rights.allows(direction):
        logger.debug(
            f"Invalid castling: the {color.name.lower()} king or the rook on {squares.rook_from.to_algebraic()} has moved."
        )
        return False

    if any(not board.is_empty(square) for square in squares.squares_between()):
        logger.debug("Invalid castling: path between king and rook is blocked.")
        return False

    if is_in_check(board, color):
        logger.debug("Invalid castling: king is currently in check.")
        return False

    # Place the king on every square of its path in turn, and see if it would be in check there.
    king = board.piece(squares.king_from)
    for square in squares.king_path():
        with board.simulate() as patch:
            patch.set(squares.king_from, None)
            patch.set(square, king)
            attacked = is_square_attacked(board, square, opponent(color))
        if attacked:
            logger.debug(
                f"Invalid castling: king would cross or land on attacked square {square.to_algebraic()}."
            )
            return False

    return True


def generate_legal_moves(board: Board) -> list[Move]:
    """
    List of legal moves for the side to move
    ----

    Brute force: every own piece, every square of the board, ask the validator.
    Castling moves are flagged, so that they render as 'O-O' / 'O-O-O'.
    """
    legal_moves: list[Move] = []
    for from_square in board.locate_color(board.color_to_move):
        piece = board.piece(from_square)
        for to_square in all_squares():
            move = Move(from_square, to_square)
            if not is_legal_move(board, move):
                continue
            if _is_castling_attempt(move, piece):
                king_side = to_square.col > from_square.col
                move = Move(
                    from_square,
                    to_square,
                    kingside_castle=king_side,
                    queenside_castle=not king_side,
                )
            legal_moves.append(move)
    return legal_moves


# -- HELPERS ---
def _is_castling_attempt(move: Move, piece: Piece) -> bool:
    """The king moving two files along its rank"""
    d_row, d_col = move.delta
    return piece.type == PieceType.KING and d_row == 0 and abs(d_col) == 2


def _matches_special_flags(board: Board, move: Move, piece: Piece) -> bool:
    """Castling flags / promotion piece in the move must agree with what the move actually does."""
    if move.is_castling:
        if not _is_castling_attempt(move, piece):
            return False
        king_side = move.to_square.col > move.from_square.col
        if move.kingside_castle != king_side or move.queenside_castle == king_side:
            return False

    if move.promote_to is not None:
        if move.promote_to not in PROMOTION_OPTIONS:
            return False
        if not is_pawn_push_to_promotion_square(move, board):
            return False
    return True


def _pawn_occupation_allowed(board: Board, move: Move, piece: Piece) -> bool:
    """
    Pawn moves depend on what stands on the destination square:
    * straight ahead: the square must be empty (pawns cannot capture forwards)
    * diagonally: there must be an opponent's piece, or it must be the en passant square
      (and the pawn must stand on the rank next to it)
    """
    target = board.piece(move.to_square)
    if move.from_square.col == move.to_square.col:
        return target is None

    if target is not None:
        return target.color != piece.color

    if board.en_passant_square is None or move.to_square != board.en_passant_square:
        return False
    return move.from_square.row == EN_PASSANT_ROW[piece.color]
