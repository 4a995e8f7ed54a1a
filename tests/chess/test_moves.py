"""Unit tests for src/chess/moves.py"""

import pytest

from src.chess.board import Board
from src.chess.moves import (
    Move,
    attacks,
    bishop_geometry,
    en_passant_capture_square,
    is_double_pawn_push,
    is_en_passant,
    is_path_clear,
    is_pawn_push_to_promotion_square,
    king_geometry,
    knight_geometry,
    pawn_geometry,
    queen_geometry,
    rook_geometry,
)
from src.chess.pieces import PieceType
from src.chess.square import Square


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


# -- MOVE CREATION, ENCODING/DECODING COORDINATE NOTATION ---
@pytest.mark.parametrize(
    "uci_move, from_uci, to_uci",
    [
        ("e2e4", "e2", "e4"),
        ("a1a5", "a1", "a5"),
        ("g3a7", "g3", "a7"),
    ],
)
def test_creating_move_from_uci(uci_move: str, from_uci: str, to_uci: str) -> None:
    """Coordinate notation is <from_square><to_square>"""
    move = Move.from_uci(uci_move)
    assert move.from_square == sq(from_uci)
    assert move.to_square == sq(to_uci)
    assert move.promote_to is None
    assert move.to_uci() == uci_move


@pytest.mark.parametrize(
    "uci_move, piece_type",
    [
        ("e7e8q", PieceType.QUEEN),
        ("b2b1N", PieceType.KNIGHT),
    ],
)
def test_creating_move_incl_promotion(uci_move: str, piece_type: PieceType) -> None:
    move = Move.from_uci(uci_move)
    assert move.promote_to == piece_type
    assert move.to_uci() == uci_move.lower()


def test_castling_moves_render_as_tokens() -> None:
    assert Move(sq("e1"), sq("g1"), kingside_castle=True).to_notation() == "O-O"
    assert Move(sq("e8"), sq("c8"), queenside_castle=True).to_notation() == "O-O-O"
    assert Move(sq("e1"), sq("g1")).to_notation() == "e1g1"


# --- PATH OBSTRUCTION ---
def test_path_clear_ignores_destination() -> None:
    board = Board.from_placements(["Ra1", "ka8"])
    assert is_path_clear(sq("a1"), sq("a8"), board)


def test_path_blocked() -> None:
    board = Board.from_placements(["Ra1", "Pa4", "ka8"])
    assert not is_path_clear(sq("a1"), sq("a8"), board)
    assert is_path_clear(sq("a1"), sq("a4"), board)


# --- MOVEMENT RULES ---
def test_knight_geometry() -> None:
    """Knights jump: whatever stands in between is irrelevant"""
    board = Board.starting_position()
    assert knight_geometry(Move(sq("g1"), sq("f3")), board)
    assert knight_geometry(Move(sq("g1"), sq("e2")), board)
    assert not knight_geometry(Move(sq("g1"), sq("g3")), board)


def test_bishop_geometry() -> None:
    board = Board.from_placements(["Bc1", "Pd2"])
    assert not bishop_geometry(Move(sq("c1"), sq("e3")), board)
    assert bishop_geometry(Move(sq("c1"), sq("b2")), board)
    assert not bishop_geometry(Move(sq("c1"), sq("c4")), board)


def test_rook_geometry() -> None:
    board = Board.from_placements(["Rd4"])
    assert rook_geometry(Move(sq("d4"), sq("d8")), board)
    assert rook_geometry(Move(sq("d4"), sq("a4")), board)
    assert not rook_geometry(Move(sq("d4"), sq("e5")), board)


def test_queen_geometry() -> None:
    board = Board.from_placements(["Qd4"])
    assert queen_geometry(Move(sq("d4"), sq("h8")), board)
    assert queen_geometry(Move(sq("d4"), sq("d1")), board)
    assert not queen_geometry(Move(sq("d4"), sq("e6")), board)


def test_king_geometry() -> None:
    """Single steps only: castling is not part of the king's geometry"""
    board = Board.from_placements(["Ke1"])
    assert king_geometry(Move(sq("e1"), sq("f2")), board)
    assert not king_geometry(Move(sq("e1"), sq("g1")), board)


def test_white_pawn_geometry() -> None:
    board = Board.starting_position()
    assert pawn_geometry(Move(sq("e2"), sq("e3")), board)
    assert pawn_geometry(Move(sq("e2"), sq("e4")), board)
    assert pawn_geometry(Move(sq("e2"), sq("d3")), board)
    assert not pawn_geometry(Move(sq("e2"), sq("e5")), board)
    assert not pawn_geometry(Move(sq("e2"), sq("e1")), board)


def test_black_pawn_geometry() -> None:
    board = Board.starting_position()
    assert pawn_geometry(Move(sq("d7"), sq("d5")), board)
    assert not pawn_geometry(Move(sq("d7"), sq("d8")), board)


def test_pawn_double_push_needs_empty_skipped_square() -> None:
    board = Board.from_placements(["Pe2", "ne3"])
    assert not pawn_geometry(Move(sq("e2"), sq("e4")), board)


def test_double_push_only_from_home_row() -> None:
    board = Board.from_placements(["Pe3"])
    assert not pawn_geometry(Move(sq("e3"), sq("e5")), board)


# --- ATTACKS ---
def test_pawn_attacks_diagonally_only() -> None:
    board = Board.from_placements(["Pe4", "pd5", "pe5"])
    assert attacks(sq("e4"), sq("d5"), board)
    assert attacks(sq("e4"), sq("f5"), board)
    assert not attacks(sq("e4"), sq("e5"), board)
    # black pawns attack downwards
    assert attacks(sq("d5"), sq("e4"), board)
    assert not attacks(sq("d5"), sq("c6"), board)


def test_sliding_attack_blocked() -> None:
    board = Board.from_placements(["Ra1", "Nc1", "ke1"])
    assert not attacks(sq("a1"), sq("e1"), board)
    assert attacks(sq("a1"), sq("c1"), board)


def test_attack_from_empty_or_own_square() -> None:
    board = Board.from_placements(["Qd1"])
    assert not attacks(sq("e4"), sq("d1"), board)
    assert not attacks(sq("d1"), sq("d1"), board)


# --- SPECIAL PAWN MOVES ---
def test_en_passant_detection() -> None:
    board = Board.from_placements(["Pe5", "pd5"])
    board.en_passant_square = sq("d6")
    capture = Move(sq("e5"), sq("d6"))

    assert is_en_passant(capture, board)
    assert en_passant_capture_square(capture) == sq("d5")
    assert not is_en_passant(Move(sq("e5"), sq("e6")), board)

    board.en_passant_square = None
    assert not is_en_passant(capture, board)


def test_double_pawn_push_detection() -> None:
    board = Board.starting_position()
    assert is_double_pawn_push(Move(sq("e2"), sq("e4")), board)
    assert not is_double_pawn_push(Move(sq("e2"), sq("e3")), board)
    assert not is_double_pawn_push(Move(sq("b1"), sq("c3")), board)


def test_promotion_square_detection() -> None:
    board = Board.from_placements(["Pa7", "pb2", "Rh7"])
    assert is_pawn_push_to_promotion_square(Move(sq("a7"), sq("a8")), board)
    assert is_pawn_push_to_promotion_square(Move(sq("b2"), sq("b1")), board)
    assert not is_pawn_push_to_promotion_square(Move(sq("h7"), sq("h8")), board)
