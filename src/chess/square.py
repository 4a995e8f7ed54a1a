"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8: (rows, columns)
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = "abcdefgh"


@dataclass(frozen=True)
class Square:
    """
    Row 0 is the far rank seen from White (the 8th rank), column 0 is the a-file.
    So 'a8' is (0, 0) and 'h1' is (7, 7).
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        col = FILE_NAMES.index(sq[0])
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.col]}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """Neighbouring square. NOTE: may fall off the board, check `is_within_bounds()`"""
        return Square(self.row + d_row, self.col + d_col)


def all_squares() -> list[Square]:
    """Every cell of the grid, row by row starting from the 8th rank."""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
