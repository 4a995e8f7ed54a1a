"""
Check detection: is a king under attack?

Scans every opposing piece and asks the attacking rules (see moves.py) whether it hits the king's square.
"""

from src.chess.board import Board
from src.chess.moves import attacks
from src.chess.pieces import Color, opponent
from src.chess.square import Square


def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Is `square` in the line-of-sight of any piece of `by_color`?"""
    return any(
        attacks(attacker_square, square, board)
        for attacker_square in board.locate_color(by_color)
    )


def is_in_check(board: Board, color: Color) -> bool:
    """
    Is the king of `color` attacked by any of the opponent's pieces?

    NOTE: Raises BoardInvariantError when that king is missing.
    """
    king_square = board.locate_king(color)
    return is_square_attacked(board, king_square, opponent(color))
