"""Unit tests for src/chess/board.py"""

import pytest

from src.chess.board import Board
from src.chess.castling import CastlingDirection
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import BoardInvariantError


def test_starting_position() -> None:
    board = Board.starting_position()

    assert board.color_to_move == Color.WHITE
    assert board.en_passant_square is None
    assert len(board.locate_color(Color.WHITE)) == 16
    assert len(board.locate_color(Color.BLACK)) == 16
    assert board.piece(Square.from_algebraic("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(Square.from_algebraic("d8")) == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.piece(Square.from_algebraic("b7")) == Piece(PieceType.PAWN, Color.BLACK)
    assert board.is_empty(Square.from_algebraic("e4"))


def test_from_placements() -> None:
    board = Board.from_placements(["Ka3", "Rb3", "ka1"], Color.BLACK)

    assert board.color_to_move == Color.BLACK
    assert board.piece(Square.from_algebraic("b3")) == Piece(PieceType.ROOK, Color.WHITE)
    assert board.locate_king(Color.BLACK) == Square.from_algebraic("a1")
    assert board.count_pieces(PieceType.ROOK, Color.WHITE) == 1
    assert board.count_pieces(PieceType.ROOK, Color.BLACK) == 0


def test_locate_king_missing_raises() -> None:
    board = Board.from_placements(["Ke1"])

    assert board.has_king(Color.WHITE)
    assert not board.has_king(Color.BLACK)
    with pytest.raises(BoardInvariantError):
        board.locate_king(Color.BLACK)


def test_move_piece_returns_captured_piece(kings_only_board: Board) -> None:
    board = kings_only_board
    board.place_piece(Piece(PieceType.ROOK, Color.WHITE), Square.from_algebraic("a1"))
    board.place_piece(Piece(PieceType.KNIGHT, Color.BLACK), Square.from_algebraic("a7"))

    captured = board.move_piece(Square.from_algebraic("a1"), Square.from_algebraic("a7"))

    assert captured == Piece(PieceType.KNIGHT, Color.BLACK)
    assert board.is_empty(Square.from_algebraic("a1"))
    assert board.piece(Square.from_algebraic("a7")) == Piece(PieceType.ROOK, Color.WHITE)


def test_remove_piece(kings_only_board: Board) -> None:
    e1 = Square.from_algebraic("e1")
    assert kings_only_board.remove_piece(e1) == Piece(PieceType.KING, Color.WHITE)
    assert kings_only_board.remove_piece(e1) is None


def test_switch_turn(kings_only_board: Board) -> None:
    kings_only_board.switch_turn()
    assert kings_only_board.color_to_move == Color.BLACK
    kings_only_board.switch_turn()
    assert kings_only_board.color_to_move == Color.WHITE


def test_clear() -> None:
    board = Board.starting_position()
    board.castling_rights.king_moved[Color.WHITE] = True
    board.en_passant_square = Square.from_algebraic("e3")

    board.clear()

    assert board.locate_color(Color.WHITE) == []
    assert board.locate_color(Color.BLACK) == []
    assert board.en_passant_square is None
    assert board.castling_rights.allows(CastlingDirection.WHITE_KING_SIDE)


# --- SIMULATE / UNDO ---
def test_simulate_reverts_changes() -> None:
    board = Board.starting_position()
    before = dict(board.position)
    e2 = Square.from_algebraic("e2")
    e4 = Square.from_algebraic("e4")

    with board.simulate() as patch:
        patch.move(e2, e4)
        assert board.is_empty(e2)
        assert board.piece(e4) == Piece(PieceType.PAWN, Color.WHITE)

    assert board.position == before


def test_simulate_same_square_twice() -> None:
    """Changing one square twice must still restore the very first piece"""
    board = Board.from_placements(["Ke1", "ke8", "Qd4"])
    d4 = Square.from_algebraic("d4")

    with board.simulate() as patch:
        patch.set(d4, Piece(PieceType.KNIGHT, Color.BLACK))
        patch.set(d4, None)

    assert board.piece(d4) == Piece(PieceType.QUEEN, Color.WHITE)


def test_simulate_reverts_on_exception() -> None:
    board = Board.from_placements(["Ke1", "ke8"])
    e1 = Square.from_algebraic("e1")

    with pytest.raises(RuntimeError):
        with board.simulate() as patch:
            patch.set(e1, None)
            raise RuntimeError("boom")

    assert board.piece(e1) == Piece(PieceType.KING, Color.WHITE)
