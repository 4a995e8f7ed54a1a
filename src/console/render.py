"""Plain text drawing of the board, White at the bottom."""

from src.chess.square import BOARD_DIMENSIONS, FILE_NAMES
from src.core.models import GameResponse

FILE_HEADER = "   " + "   ".join(FILE_NAMES.upper())
SEPARATOR = " +" + "---+" * BOARD_DIMENSIONS[1]


def render_board(response: GameResponse) -> str:
    """
       A   B   C   D   E   F   G   H
     +---+---+---+---+---+---+---+---+
    8| r | n | b | q | k | b | n | r |8
     +---+---+---+---+---+---+---+---+
    ...
    """
    lines = [FILE_HEADER, SEPARATOR]
    for index, row in enumerate(response.board):
        rank = BOARD_DIMENSIONS[0] - index
        cells = "".join(f" {' ' if char == '.' else char} |" for char in row)
        lines.append(f"{rank}|{cells}{rank}")
        lines.append(SEPARATOR)
    lines.append(FILE_HEADER)
    lines.append(f"Current Turn: {response.side_to_move.name}")
    return "\n".join(lines)
