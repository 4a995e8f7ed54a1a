"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the movement shape of each piece type.
Every rule answers "can this piece go from the move's source to its destination", looking only at
the shape of the move and at the squares it has to travel through.

Legality (occupation of the destination, castling conditions, self-check) is checked later by the validator.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.castling import KING_SIDE_TOKEN, QUEEN_SIDE_TOKEN
from src.chess.pieces import CHAR_TO_PIECE, PIECE_TO_CHAR, Color, Piece, PieceType
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    en_passant_square: Optional[Square]

    def piece(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]

# White moves UP the board (towards row 0), Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
# a pawn can only take en passant from its 5th rank (seen from its own side)
EN_PASSANT_ROW: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None
    kingside_castle: bool = False
    queenside_castle: bool = False

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Coordinate notation
        ---

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        promote_to = CHAR_TO_PIECE[uci[4].lower()] if len(uci) == 5 else None
        return cls(from_sq, to_sq, promote_to=promote_to)

    def to_uci(self) -> str:
        """Convert into coordinate notation"""
        piece_char = PIECE_TO_CHAR[self.promote_to] if self.promote_to else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"

    def to_notation(self) -> str:
        """Castling moves use their dedicated tokens, everything else the coordinate form."""
        if self.kingside_castle:
            return KING_SIDE_TOKEN
        if self.queenside_castle:
            return QUEEN_SIDE_TOKEN
        return self.to_uci()

    @property
    def is_castling(self) -> bool:
        return self.kingside_castle or self.queenside_castle

    @property
    def delta(self) -> Vector:
        return (
            self.to_square.row - self.from_square.row,
            self.to_square.col - self.from_square.col,
        )


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- PATH OBSTRUCTION ---
def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Raycasting along a straight line or diagonal
    -----

    Walk from the source towards the destination one square at a time.
    Every square strictly in between must be empty. The destination itself is never inspected,
    so whatever stands there (e.g. a king under attack) does not block the line.
    """
    d_row = _sign(to_square.row - from_square.row)
    d_col = _sign(to_square.col - from_square.col)
    square = from_square.offset(d_row, d_col)
    while square != to_square:
        if board.piece(square) is not None:
            return False
        square = square.offset(d_row, d_col)
    return True


# --- MOVEMENT RULES ---
def pawn_geometry(move: Move, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two from its starting rank, if the square it skips is empty
    - takes diagonally (whether something can be taken there is up to the validator)
    """
    color = board.piece(move.from_square).color
    forward = PAWN_DIRECTION[color]
    d_row, d_col = move.delta

    if d_col == 0:
        if d_row == forward:
            return True
        if d_row == 2 * forward and move.from_square.row == PAWN_HOME_ROW[color]:
            return board.piece(move.from_square.offset(forward, 0)) is None
        return False

    return abs(d_col) == 1 and d_row == forward


def knight_geometry(move: Move, board: Board) -> bool:
    """Knights always move such that |delta_row| + |delta_col| = 3 (an L-shape)"""
    d_row, d_col = move.delta
    return (abs(d_row), abs(d_col)) in {(1, 2), (2, 1)}


def bishop_geometry(move: Move, board: Board) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    d_row, d_col = move.delta
    if abs(d_row) != abs(d_col) or d_row == 0:
        return False
    return is_path_clear(move.from_square, move.to_square, board)


def rook_geometry(move: Move, board: Board) -> bool:
    """Rooks move either horizontally or vertically"""
    d_row, d_col = move.delta
    if (d_row == 0) == (d_col == 0):
        return False
    return is_path_clear(move.from_square, move.to_square, board)


def queen_geometry(move: Move, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return bishop_geometry(move, board) or rook_geometry(move, board)


def king_geometry(move: Move, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled by the validator).
    """
    d_row, d_col = move.delta
    return max(abs(d_row), abs(d_col)) == 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
GeometryFn = Callable[[Move, Board], bool]
GEOMETRY_RULES: dict[PieceType, GeometryFn] = {
    PieceType.PAWN: pawn_geometry,
    PieceType.KNIGHT: knight_geometry,
    PieceType.BISHOP: bishop_geometry,
    PieceType.ROOK: rook_geometry,
    PieceType.QUEEN: queen_geometry,
    PieceType.KING: king_geometry,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def pawn_attacks(move: Move, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: A pawn does not attack the square straight in front of it, even though it can move there.
    Hence the pawn gets its own attack rule, instead of reusing its movement rule.
    """
    color = board.piece(move.from_square).color
    d_row, d_col = move.delta
    return d_row == PAWN_DIRECTION[color] and abs(d_col) == 1


# --- STRATEGY PATTERN: ATTACKING RULES ---
# Apart from the pawn, a piece attacks exactly the squares it could move to.
ATTACK_RULES: dict[PieceType, GeometryFn] = {
    **GEOMETRY_RULES,
    PieceType.PAWN: pawn_attacks,
}


def attacks(from_square: Square, target: Square, board: Board) -> bool:
    """Does the piece standing on `from_square` attack `target`?"""
    piece = board.piece(from_square)
    if piece is None or from_square == target:
        return False
    attack_rule = ATTACK_RULES[piece.type]
    return attack_rule(Move(from_square, target), board)


# -- EN PASSANT MOVES ---
def en_passant_capture_square(move: Move) -> Square:
    """The pawn taken en passant stands next to the capturing pawn: the source rank, on the destination file."""
    return Square(move.from_square.row, move.to_square.col)


def is_en_passant(move: Move, board: Board) -> bool:
    """A pawn moving diagonally onto the en passant square (which is empty by construction)."""
    piece = board.piece(move.from_square)
    if piece is None or piece.type != PieceType.PAWN:
        return False
    _, d_col = move.delta
    return (
        d_col != 0
        and board.en_passant_square is not None
        and move.to_square == board.en_passant_square
        and board.piece(move.to_square) is None
    )


def is_double_pawn_push(move: Move, board: Board) -> bool:
    piece = board.piece(move.from_square)
    d_row, _ = move.delta
    return piece is not None and piece.type == PieceType.PAWN and abs(d_row) == 2


# -- PAWN PROMOTION MOVES --
def is_pawn_push_to_promotion_square(move: Move, board: Board) -> bool:
    """check if the move is a pawn move that reaches the far rank (seen from the pawn's side)"""
    moving_piece = board.piece(move.from_square)
    if moving_piece is None or moving_piece.type != PieceType.PAWN:
        return False
    return move.to_square.row == PROMOTION_ROW[moving_piece.color]
