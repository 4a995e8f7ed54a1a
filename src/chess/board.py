"""
The Board owns the position (in chess: the configuration of pieces on the board) plus the bits of state
that the rules need besides the pieces: whose turn it is, castling rights and the en passant square.

All mutation of the position goes through this class.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.castling import CastlingRights
from src.chess.pieces import Color, Piece, PieceType, opponent
from src.chess.square import Square, all_squares
from src.core.exceptions import BoardInvariantError

BACK_RANK: list[PieceType] = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


def _empty_position() -> dict[Square, Optional[Piece]]:
    return {square: None for square in all_squares()}


@dataclass
class Board:
    position: dict[Square, Optional[Piece]] = field(default_factory=_empty_position)
    color_to_move: Color = Color.WHITE
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant_square: Optional[Square] = None

    @classmethod
    def starting_position(cls) -> Self:
        """Standard starting position, White to move."""
        board = cls()
        for col, piece_type in enumerate(BACK_RANK):
            board.place_piece(Piece(piece_type, Color.BLACK), Square(0, col))
            board.place_piece(Piece(PieceType.PAWN, Color.BLACK), Square(1, col))
            board.place_piece(Piece(PieceType.PAWN, Color.WHITE), Square(6, col))
            board.place_piece(Piece(piece_type, Color.WHITE), Square(7, col))
        return board

    @classmethod
    def from_placements(
        cls, placements: list[str], color_to_move: Color = Color.WHITE
    ) -> Self:
        """
        Construct a board from a list of placements: piece letter + square
        ex. ["Ke1", "Rh1", "ke8"] --> white king on e1, white rook on h1, black king on e8.

        NOTE: No piece count limits are enforced here (that is the job of the manual setup).
        """
        board = cls(color_to_move=color_to_move)
        for placement in placements:
            piece = Piece.from_char(placement[0])
            board.place_piece(piece, Square.from_algebraic(placement[1:]))
        return board

    # -- QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.position[square]

    def is_empty(self, square: Square) -> bool:
        return self.position[square] is None

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square, piece in self.position.items()
            if piece is not None and piece.color == color
        ]

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            square
            for square in self.locate_color(color)
            if self.position[square].type == piece_type
        ]

    def count_pieces(self, piece_type: PieceType, color: Color) -> int:
        return len(self.locate_pieces(piece_type, color))

    def locate_king(self, color: Color) -> Square:
        """
        Every position we play in has exactly one king per side.
        Not finding one means the board was set up wrongly, which is a programming error rather than a bad move.
        """
        kings = self.locate_pieces(PieceType.KING, color)
        if not kings:
            raise BoardInvariantError(f"No {color.name.lower()} king on the board.")
        return kings[0]

    def has_king(self, color: Color) -> bool:
        return bool(self.locate_pieces(PieceType.KING, color))

    # -- MUTATION ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        removed = self.position[square]
        self.position[square] = None
        return removed

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Update the position on the board. Returns whatever stood on the target square."""
        captured = self.position[to_square]
        self.position[to_square] = self.position[from_square]
        self.position[from_square] = None
        return captured

    def switch_turn(self) -> None:
        self.color_to_move = opponent(self.color_to_move)

    def clear(self) -> None:
        """Empty board: no pieces, fresh castling flags, no en passant square."""
        self.position = _empty_position()
        self.castling_rights.reset()
        self.en_passant_square = None

    @contextmanager
    def simulate(self) -> Iterator["BoardPatch"]:
        """
        Provisional changes to the position
        ----

        Every change made through the yielded patch gets reverted when leaving the block,
        regardless of how the block is left.

        with board.simulate() as patch:
            patch.move(e2, e4)
            in_check = is_in_check(board, Color.WHITE)
        """
        patch = BoardPatch(self)
        try:
            yield patch
        finally:
            patch.revert()


@dataclass
class BoardPatch:
    """
    A small diff on the position: the (square, prior content) pairs of every cell touched.
    Reverting walks the diff backwards, so touching the same square twice still restores the original piece.
    """

    board: Board
    changes: list[tuple[Square, Optional[Piece]]] = field(default_factory=list)

    def set(self, square: Square, piece: Optional[Piece]) -> None:
        self.changes.append((square, self.board.position[square]))
        self.board.position[square] = piece

    def move(self, from_square: Square, to_square: Square) -> None:
        moving_piece = self.board.position[from_square]
        self.set(from_square, None)
        self.set(to_square, moving_piece)

    def revert(self) -> None:
        for square, prior in reversed(self.changes):
            self.board.position[square] = prior
        self.changes.clear()
